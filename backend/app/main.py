import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.middleware import CORS_HEADERS, CORSHeadersMiddleware
from app.api.router import api_router
from app.config import get_settings
from app.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    setup_logging(get_settings().log_level)
    logger.info("Gemini chat relay starting up...")
    yield
    logger.info("Gemini chat relay shutting down...")


app = FastAPI(
    title="Gemini Chat Relay",
    description="Relays chat turns to the Gemini API",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS: fixed permissive headers on every response
app.add_middleware(CORSHeadersMiddleware)

# Include API routes
app.include_router(api_router)


@app.exception_handler(500)
async def internal_error_handler(request: Request, exc):
    logger.exception("Internal server error")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
        headers=CORS_HEADERS,
    )
