from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
from pathlib import Path
import logging

ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')

from core.config import get_settings
from core.exceptions import setup_exception_handlers
from database import client, init_indexes
from routers import create_api_router
from services.rate_limiter import RateLimiter

settings = get_settings()

# Logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the FastAPI application with its own rate limiters."""
    app = FastAPI(title="EcoRoute API")

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_credentials=True,
        allow_origins=settings.cors_origins.split(','),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Suggestions and search keep separate quotas
    app.state.suggestions_limiter = RateLimiter(
        max_requests=settings.suggestions_rate_limit,
        window_seconds=settings.rate_limit_window_seconds,
        name="search-suggestions"
    )
    app.state.search_limiter = RateLimiter(
        max_requests=settings.search_rate_limit,
        window_seconds=settings.rate_limit_window_seconds,
        name="search"
    )

    setup_exception_handlers(app)
    app.include_router(create_api_router())

    @app.on_event("startup")
    async def startup_event():
        try:
            await init_indexes()
        except Exception as e:
            # Suggestions still work from the gazetteer and provider without the store
            logger.warning(f"Could not create database indexes: {e}")
        if not settings.has_ai_credentials:
            logger.info("OPENAI_API_KEY not configured, AI suggestions use the static fallback")
        logger.info("EcoRoute API started successfully")

    @app.on_event("shutdown")
    async def shutdown_event():
        client.close()
        logger.info("EcoRoute API shutting down")

    return app


app = create_app()
