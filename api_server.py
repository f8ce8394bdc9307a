from __future__ import annotations  # FastAPI server exposing the interview session

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import get_holder, router


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:  # Report the evaluation mode at boot, tear down on exit
    holder = get_holder()
    service = holder.service
    if service.offline:
        logger.warning("Starting without an API key: evaluation runs in offline mode")
    else:
        logger.info("Evaluation route %s model=%s", service.route.name, service.route.model)
    yield
    holder.replace(None)


app = FastAPI(title="Mock Interview Coach API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api_server:app", host="127.0.0.1", port=8000)
