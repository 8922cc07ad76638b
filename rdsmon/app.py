from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from .api import router as api_router
from .config import AppConfig
from .session import DecoderSession

logger = logging.getLogger(__name__)


def create_app(config: AppConfig | None = None, session: DecoderSession | None = None) -> FastAPI:
    """Build the read-only status API around a decoding session."""
    config = config or AppConfig()
    session = session or DecoderSession(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Status API started")
        try:
            yield
        finally:
            session.stop()
            logger.info("Status API stopped")

    app = FastAPI(title="rdsmon", lifespan=lifespan)
    app.state.session = session
    app.include_router(api_router, prefix="/api/v1")
    return app
