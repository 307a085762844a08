"""Custom exception handlers for FastAPI."""
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from bson.errors import InvalidId
import logging

logger = logging.getLogger(__name__)


class EcoRouteException(Exception):
    """Base exception for EcoRoute application."""
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(EcoRouteException):
    """Resource not found."""
    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found", status_code=404)


def setup_exception_handlers(app: FastAPI):
    """Register custom exception handlers."""

    @app.exception_handler(EcoRouteException)
    async def ecoroute_exception_handler(request: Request, exc: EcoRouteException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "error_type": exc.__class__.__name__}
        )

    @app.exception_handler(InvalidId)
    async def invalid_id_handler(request: Request, exc: InvalidId):
        return JSONResponse(
            status_code=400,
            content={"detail": "Invalid ID", "error_type": "InvalidId"}
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        # Don't override HTTPException
        if isinstance(exc, HTTPException):
            raise exc

        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "error_type": "InternalError"}
        )
