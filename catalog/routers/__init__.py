"""
FastAPI routers grouped by concern (auth, products).

Each module exposes an APIRouter included by catalog.app.create_app. Shared
objects (CatalogService, SessionManager, Settings) live on app.state.
"""

from fastapi import HTTPException, Request

from catalog.core.config import Settings
from catalog.services.catalog_service import CatalogService
from catalog.services.session_service import SessionManager


def get_catalog(request: Request) -> CatalogService:
    svc = getattr(getattr(request.app, "state", None), "catalog", None)
    if not svc:
        raise RuntimeError("CatalogService not configured")
    return svc


def get_sessions(request: Request) -> SessionManager:
    sessions = getattr(getattr(request.app, "state", None), "sessions", None)
    if not sessions:
        raise RuntimeError("SessionManager not configured")
    return sessions


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_user(request: Request):
    user = get_sessions(request).current_user(request)
    if not user:
        raise HTTPException(401, "Not logged in")
    return user
