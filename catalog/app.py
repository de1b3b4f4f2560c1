"""FastAPI application factory for the catalog web surface."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware

from catalog.core.config import Settings, get_settings
from catalog.core.logging import configure_logging
from catalog.repositories.document_store import DocumentStore, build_document_store
from catalog.routers import auth as auth_router
from catalog.routers import products as products_router
from catalog.services.catalog_service import CatalogService
from catalog.services.session_service import SessionManager

logger = logging.getLogger(__name__)

# Product images are arbitrary URLs or inline data URIs; styles come from unpkg.
CATALOG_CSP = (
    "default-src 'self'; "
    "img-src * data:; "
    "style-src 'self' 'unsafe-inline' https://unpkg.com; "
    "script-src 'self' 'unsafe-inline'; "
    "form-action 'self'; "
    "frame-ancestors 'none'"
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, *, csp: str = CATALOG_CSP, enforce_hsts: bool = False) -> None:
        super().__init__(app)
        self._csp = csp
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("Content-Security-Policy", self._csp)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "same-origin")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def create_app(settings: Optional[Settings] = None, store: Optional[DocumentStore] = None) -> FastAPI:
    """Factory compatible with `uvicorn --factory catalog.app:create_app`."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    store = store or build_document_store(settings)

    app = FastAPI(title="Product Catalog")
    app.state.settings = settings
    app.state.catalog = CatalogService(store)
    app.state.sessions = SessionManager()
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    @app.get("/healthz")
    def healthz():
        return {"ok": True}

    app.include_router(auth_router.router)
    app.include_router(products_router.router)
    logger.info("Catalog app ready (storage backend: %s)", settings.storage_backend)
    return app


def main() -> None:
    import uvicorn

    uvicorn.run("catalog.app:create_app", factory=True, host="127.0.0.1", port=8000)


if __name__ == "__main__":
    main()
