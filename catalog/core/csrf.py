"""Double-submit CSRF protection for the HTML forms."""
from __future__ import annotations

import html
import secrets
from urllib import parse as urlparse

from fastapi import HTTPException, Request, Response

from catalog.core.config import get_settings

CSRF_COOKIE_NAME = "catalog_csrf"
CSRF_FIELD_NAME = "csrf_token"
CSRF_HEADER_NAME = "x-csrf-token"
CSRF_COOKIE_MAX_AGE = 7 * 24 * 60 * 60


def ensure_csrf_token(request: Request) -> str:
    """Reuse the cookie token when present, otherwise mint a new one."""
    token = request.cookies.get(CSRF_COOKIE_NAME)
    if not token or len(token) < 16:
        token = secrets.token_urlsafe(32)
    return token


def set_csrf_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        CSRF_COOKIE_NAME,
        token,
        max_age=CSRF_COOKIE_MAX_AGE,
        httponly=False,
        secure=settings.app_env == "prod",
        samesite="strict",
        path="/",
    )


def csrf_input(token: str) -> str:
    return f"<input type='hidden' name='{CSRF_FIELD_NAME}' value='{html.escape(token)}'>"


def _validate_origin(request: Request) -> None:
    source = request.headers.get("origin") or request.headers.get("referer") or ""
    if not source:
        return
    try:
        parsed = urlparse.urlparse(source)
    except ValueError:
        raise HTTPException(403, "Invalid origin.")
    host = (request.headers.get("host") or "").split(":", 1)[0].lower()
    parsed_host = (parsed.hostname or "").lower()
    if parsed_host and host and parsed_host != host:
        raise HTTPException(403, "Invalid origin.")
    if parsed.scheme and parsed.scheme != request.url.scheme:
        raise HTTPException(403, "Invalid origin.")


def validate_csrf(request: Request, supplied_token: str | None) -> None:
    cookie_token = request.cookies.get(CSRF_COOKIE_NAME)
    token = (supplied_token or "").strip() or (request.headers.get(CSRF_HEADER_NAME) or "").strip()
    if not cookie_token or not token:
        raise HTTPException(403, "Missing CSRF token.")
    if not secrets.compare_digest(cookie_token, token):
        raise HTTPException(403, "Invalid CSRF token.")
    _validate_origin(request)
