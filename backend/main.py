"""
Wellness Platform - Backend
FastAPI application serving the AI health assistant relay.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from wellness import __version__
from wellness.api.endpoints.chat import RELAY_PATH
from wellness.api.routers import api_router
from wellness.config.settings import get_settings
from wellness.controllers.chat_controller import CORS_HEADERS
from wellness.middleware.cors import SelectiveCORSMiddleware
from wellness.middleware.error_handling import ErrorHandlingMiddleware
from wellness.middleware.request_logging import RequestLoggingMiddleware

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager."""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} ({settings.environment})")

    if not settings.supabase_url or not settings.supabase_service_role_key:
        logger.error("Supabase configuration missing! Check SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY")

    if not settings.ai_gateway_configured:
        logger.warning("AI_GATEWAY_API_KEY is not set; chat requests will fail with 500")
    else:
        logger.info(f"AI gateway model: {settings.ai_gateway_model}")

    yield

    logger.info("Shutting down...")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="AI health assistant relay for the wellness platform",
        version=__version__,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    # The chat relay answers CORS itself, preflight included
    app.add_middleware(
        SelectiveCORSMiddleware,
        exclude_paths=(f"{API_PREFIX}{RELAY_PATH}",),
        allow_origins=settings.allowed_origins or ["*"],
        allow_methods=["*"],
        allow_headers=[h.strip() for h in CORS_HEADERS["Access-Control-Allow-Headers"].split(",")],
    )

    app.add_middleware(ErrorHandlingMiddleware)
    if settings.enable_request_logging:
        app.add_middleware(RequestLoggingMiddleware)

    app.include_router(api_router, prefix=API_PREFIX)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
