from __future__ import annotations

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from catalog.routers import get_catalog, get_sessions
from catalog.services.catalog_display import login_page
from catalog.services.catalog_service import InvalidCredentialsError
from catalog.services.session_service import (
    SESSION_COOKIE_NAME,
    clear_session_cookie,
    set_session_cookie,
)

router = APIRouter(tags=["auth"])


@router.get("/login", response_class=HTMLResponse)
def login_form(request: Request, error: str = ""):
    if get_sessions(request).current_user(request):
        return RedirectResponse("/", status_code=303)
    return login_page(error)


@router.post("/login")
def do_login(request: Request, username: str = Form(""), password: str = Form("")):
    try:
        user = get_catalog(request).authenticate(username, password)
    except InvalidCredentialsError:
        return RedirectResponse("/login?error=credentials", status_code=303)
    token = get_sessions(request).login(user)
    resp = RedirectResponse("/", status_code=303)
    set_session_cookie(resp, token)
    return resp


@router.get("/logout")
def logout(request: Request):
    get_sessions(request).logout(request.cookies.get(SESSION_COOKIE_NAME))
    resp = RedirectResponse("/login", status_code=303)
    clear_session_cookie(resp)
    return resp
