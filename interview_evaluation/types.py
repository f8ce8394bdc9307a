"""Shared evaluation result types."""
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Feedback(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    strengths: List[str] = Field(min_length=1)
    improvements: List[str] = Field(min_length=1)
    overall: str = Field(min_length=1)
