"""FastAPI application entry point."""

import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from dotenv import load_dotenv

# Must run before anything reads settings
load_dotenv()

from api.errors import hide_unused_validation_responses, register_exception_handlers
from api.middleware.request_logging import RequestLoggingMiddleware
from api.routes import auth, health, profile
from adapter.mongodb.connection import get_mongodb_client, get_database_name
from adapter.mongodb.indexes import ensure_all_indexes
from utils.config import get_settings
from utils.logging import setup_structured_logging

settings = get_settings()

setup_structured_logging(settings.log_level)

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = Path(__file__).resolve().parent.parent.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Activity Tracker"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic."""
    client = get_mongodb_client()
    if client:
        if ensure_all_indexes(client[get_database_name()]):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")
    else:
        logger.warning("MongoDB unavailable, skipping index creation")

    yield


app = FastAPI(
    title=SERVICE_NAME,
    description="Sign up, log in and keep a personal list of named, dated activities.",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/api-docs",
    openapi_url="/api-docs/openapi.json",
    redoc_url=None,
)

app.add_middleware(RequestLoggingMiddleware)
register_exception_handlers(app)
hide_unused_validation_responses(app)

app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(health.router)


@app.get("/", response_class=PlainTextResponse, tags=["meta"])
def root():
    """Root endpoint."""
    return "Hello World"


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        access_log=False  # RequestLoggingMiddleware logs every request
    )
