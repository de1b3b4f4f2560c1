from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse

from catalog.core import csrf
from catalog.routers import get_app_settings, get_catalog, get_sessions, require_user
from catalog.services.catalog_display import catalog_page, product_form_page
from catalog.services.catalog_service import ProductNotFoundError, ProductValidationError
from catalog.services.image_service import ImageUploadError, resolve_image, to_data_uri
from catalog.services.session_service import SessionUser
from catalog.services.share_service import share_url

router = APIRouter(tags=["products"])

NOTICES = {
    "created": "Product created.",
    "updated": "Product updated.",
    "deleted": "Product deleted.",
    "reset": "Catalog reset to defaults.",
}


def _page_user(request: Request) -> Optional[SessionUser]:
    return get_sessions(request).current_user(request)


def _login_redirect() -> RedirectResponse:
    return RedirectResponse("/login", status_code=303)


def _ensure_admin(user: SessionUser) -> None:
    if not user.is_admin:
        raise HTTPException(403, "Admin role required")


def _with_csrf(response: HTMLResponse, token: str) -> HTMLResponse:
    csrf.set_csrf_cookie(response, token)
    return response


def _read_upload(request: Request, image_file: Optional[UploadFile]) -> str:
    if not image_file or not image_file.filename:
        return ""
    max_bytes = get_app_settings(request).max_image_bytes
    # one byte past the cap is enough to reject an oversized file
    content = image_file.file.read(max_bytes + 1) if max_bytes > 0 else image_file.file.read()
    if not content:
        return ""
    return to_data_uri(content, image_file.content_type, max_bytes=max_bytes)


def _form_values(name: str, price: str, description: str, image_url: str) -> dict:
    return {"name": name, "price": price, "description": description, "image": image_url}


@router.get("/", response_class=HTMLResponse)
def catalog_home(request: Request, q: str = "", ok: str = ""):
    user = _page_user(request)
    if not user:
        return _login_redirect()
    token = csrf.ensure_csrf_token(request)
    products = get_catalog(request).search(q)
    return _with_csrf(catalog_page(user, products, query=q, csrf_token=token, notice=NOTICES.get(ok, "")), token)


@router.get("/products/new", response_class=HTMLResponse)
def new_product_form(request: Request):
    user = _page_user(request)
    if not user:
        return _login_redirect()
    _ensure_admin(user)
    token = csrf.ensure_csrf_token(request)
    return _with_csrf(product_form_page(user, csrf_token=token), token)


@router.post("/products")
def create_product(
    request: Request,
    name: str = Form(""),
    price: str = Form(""),
    description: str = Form(""),
    image_url: str = Form(""),
    image_file: Optional[UploadFile] = File(None),
    csrf_token: str = Form(""),
):
    user = _page_user(request)
    if not user:
        return _login_redirect()
    _ensure_admin(user)
    csrf.validate_csrf(request, csrf_token)
    try:
        image = resolve_image(_read_upload(request, image_file), image_url)
        get_catalog(request).create_product(name, price, description, image)
    except (ProductValidationError, ImageUploadError) as exc:
        token = csrf.ensure_csrf_token(request)
        page = product_form_page(
            user,
            csrf_token=token,
            values=_form_values(name, price, description, image_url),
            error=exc.message,
            status_code=400,
        )
        return _with_csrf(page, token)
    return RedirectResponse("/?ok=created", status_code=303)


@router.get("/products/{product_id}/edit", response_class=HTMLResponse)
def edit_product_form(product_id: str, request: Request):
    user = _page_user(request)
    if not user:
        return _login_redirect()
    _ensure_admin(user)
    try:
        product = get_catalog(request).get_product(product_id)
    except ProductNotFoundError:
        raise HTTPException(404, "Product not found")
    token = csrf.ensure_csrf_token(request)
    return _with_csrf(product_form_page(user, csrf_token=token, product=product), token)


@router.post("/products/{product_id}")
def update_product(
    product_id: str,
    request: Request,
    name: str = Form(""),
    price: str = Form(""),
    description: str = Form(""),
    image_url: str = Form(""),
    keep_image: str = Form(""),
    remove_image: str = Form(""),
    image_file: Optional[UploadFile] = File(None),
    csrf_token: str = Form(""),
):
    user = _page_user(request)
    if not user:
        return _login_redirect()
    _ensure_admin(user)
    csrf.validate_csrf(request, csrf_token)
    svc = get_catalog(request)
    try:
        current = svc.get_product(product_id)
    except ProductNotFoundError:
        raise HTTPException(404, "Product not found")
    try:
        # "Remove image" clears both the inline upload and the URL; a new file still wins
        remove = remove_image == "1"
        image = resolve_image(
            _read_upload(request, image_file),
            "" if remove else image_url,
            current.text("image"),
            keep_current=keep_image == "1" and not remove,
        )
        svc.update_product(product_id, {"name": name, "price": price, "description": description, "image": image})
    except ProductNotFoundError:
        raise HTTPException(404, "Product not found")
    except (ProductValidationError, ImageUploadError) as exc:
        token = csrf.ensure_csrf_token(request)
        page = product_form_page(
            user,
            csrf_token=token,
            product=current,
            values=_form_values(name, price, description, image_url),
            error=exc.message,
            status_code=400,
        )
        return _with_csrf(page, token)
    return RedirectResponse("/?ok=updated", status_code=303)


@router.post("/products/{product_id}/delete")
def delete_product(product_id: str, request: Request, csrf_token: str = Form("")):
    user = _page_user(request)
    if not user:
        return _login_redirect()
    _ensure_admin(user)
    csrf.validate_csrf(request, csrf_token)
    try:
        get_catalog(request).delete_product(product_id)
    except ProductNotFoundError:
        raise HTTPException(404, "Product not found")
    return RedirectResponse("/?ok=deleted", status_code=303)


@router.post("/reset")
def reset_catalog(request: Request, csrf_token: str = Form("")):
    user = _page_user(request)
    if not user:
        return _login_redirect()
    _ensure_admin(user)
    csrf.validate_csrf(request, csrf_token)
    get_catalog(request).reset_all()
    return RedirectResponse("/?ok=reset", status_code=303)


@router.get("/products/{product_id}/share")
def share_product(product_id: str, request: Request):
    user = _page_user(request)
    if not user:
        return _login_redirect()
    try:
        product = get_catalog(request).get_product(product_id)
    except ProductNotFoundError:
        raise HTTPException(404, "Product not found")
    return RedirectResponse(share_url(product, get_app_settings(request).share_base_url), status_code=303)


@router.get("/api/products")
def list_products(request: Request, q: str = ""):
    require_user(request)
    return [p.to_dict() for p in get_catalog(request).search(q)]
