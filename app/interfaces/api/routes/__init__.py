from fastapi import APIRouter, FastAPI

from .auth import router as auth_router
from .blogs import router as blogs_router
from .contests import router as contests_router
from .notifications import router as notifications_router
from .payments import router as payments_router
from .users import router as users_router

API_PREFIX = "/api"


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    api_router = APIRouter(prefix=API_PREFIX)
    api_router.include_router(auth_router)
    api_router.include_router(users_router)
    api_router.include_router(blogs_router)
    api_router.include_router(contests_router)
    api_router.include_router(payments_router)
    api_router.include_router(notifications_router)
    app.include_router(api_router)
