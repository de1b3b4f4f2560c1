"""Login sessions for the web layer (LoggedOut -> LoggedIn(role) -> LoggedOut)."""
from __future__ import annotations

import secrets
import threading
from dataclasses import dataclass
from typing import Optional

from fastapi import Request, Response

from catalog.core.config import get_settings
from catalog.domain.document import ROLE_ADMIN, User, as_text

SESSION_COOKIE_NAME = "catalog_session"


@dataclass(frozen=True)
class SessionUser:
    user_id: str
    username: str
    role: str
    name: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


class SessionManager:
    """In-memory session registry. Sessions never expire; logout ends them."""

    def __init__(self) -> None:
        self._sessions: dict[str, SessionUser] = {}
        self._lock = threading.Lock()

    def login(self, user: User) -> str:
        token = secrets.token_urlsafe(32)
        entry = SessionUser(
            user_id=as_text(user.id),
            username=as_text(user.username),
            role=as_text(user.role),
            name=user.display_name,
        )
        with self._lock:
            self._sessions[token] = entry
        return token

    def get(self, token: Optional[str]) -> Optional[SessionUser]:
        if not token:
            return None
        with self._lock:
            return self._sessions.get(token)

    def logout(self, token: Optional[str]) -> None:
        if not token:
            return
        with self._lock:
            self._sessions.pop(token, None)

    def current_user(self, request: Request) -> Optional[SessionUser]:
        return self.get(request.cookies.get(SESSION_COOKIE_NAME))


def set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        httponly=True,
        secure=settings.app_env == "prod",
        samesite="strict",
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")
