"""API routes package."""

from fastapi import APIRouter

from app.api.routes.health import router as health_router
from app.api.routes.settings import router as settings_router

# Create API router with all sub-routers
api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(settings_router)


__all__ = [
    "api_router",
    "health_router",
    "settings_router",
]
