"""Logging and timing helpers for interview sessions."""
from .logger import log_event
from .tracing import span

__all__ = ["log_event", "span"]
