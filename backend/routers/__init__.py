"""API Routers for EcoRoute application."""
from fastapi import APIRouter

from .suggestions import router as suggestions_router
from .trips import router as trips_router


def create_api_router() -> APIRouter:
    """Create and configure the main API router."""
    api_router = APIRouter(prefix="/api")

    @api_router.get("/health")
    async def health():
        return {"status": "healthy", "service": "EcoRoute API"}

    # Register all routers
    api_router.include_router(suggestions_router, tags=["Suggestions"])
    api_router.include_router(trips_router, prefix="/trips", tags=["Trips"])

    return api_router
