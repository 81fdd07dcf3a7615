import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import ApplicationConfig
from src.api.app import create_app
from src.depends import credential_discovery, init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info(
        f"Hybrid auth API ready (SSO {'enabled' if credential_discovery.is_sso_enabled() else 'disabled'})"
    )
    yield


app = create_app(ApplicationConfig, lifespan=lifespan)

if __name__ == "__main__":
    uvicorn.run(
        "api:app",
        host=ApplicationConfig.API_HOST,
        port=ApplicationConfig.API_PORT,
        reload=ApplicationConfig.ENVIRONMENT == "development",
        log_level=ApplicationConfig.LOG_LEVEL.lower(),
    )
