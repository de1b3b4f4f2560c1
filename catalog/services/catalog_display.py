"""HTML fragments for the catalog pages (login, top bar, grid, product form)."""
from __future__ import annotations

import html
import json
from typing import Iterable, Optional

from fastapi.responses import HTMLResponse

from catalog.core.csrf import csrf_input
from catalog.domain.document import Product
from catalog.services.session_service import SessionUser
from catalog.services.share_service import share_text

PICO_CSS = "https://unpkg.com/@picocss/pico@2.0.6/css/pico.min.css"

LOGIN_ERRORS = {
    "credentials": "Invalid username or password. Please try again.",
}


def layout(title: str, body: str, *, user: Optional[SessionUser] = None, status_code: int = 200) -> HTMLResponse:
    nav = top_bar(user) if user else ""
    return HTMLResponse(
        f"""
        <!doctype html><html lang='en'><head>
        <meta charset='utf-8'><meta name='viewport' content='width=device-width,initial-scale=1'>
        <link rel="stylesheet" href="{PICO_CSS}">
        <title>{html.escape(title)}</title>
        <style>
          .grid-cards {{display:grid;grid-template-columns:repeat(auto-fill,minmax(260px,1fr));gap:1rem}}
          .grid-cards img {{width:100%;height:12rem;object-fit:cover}}
          .price {{white-space:nowrap}}
          .actions form {{display:inline}}
          .desc {{white-space:pre-wrap}}
        </style>
        </head><body>
        {nav}
        <main class="container">
          {body}
        </main>
        <footer class="container"><small>Catalog data is kept in a single local storage slot.</small></footer>
        </body></html>
        """,
        status_code=status_code,
    )


def top_bar(user: SessionUser) -> str:
    return f"""
    <nav class="container">
      <ul><li><strong>Catalog</strong></li><li><mark>{html.escape(user.role.upper())}</mark></li></ul>
      <ul><li>Welcome, <b>{html.escape(user.name)}</b></li><li><a href="/logout" role="button" class="secondary">Logout</a></li></ul>
    </nav>
    """


def login_page(error: str = "") -> HTMLResponse:
    msg = LOGIN_ERRORS.get(error, "")
    body = f"""
      <article>
        <h1>Product Catalog | Login</h1>
        <p>Sign in as admin or agent.</p>
        {('<mark role="alert">' + html.escape(msg) + '</mark>') if msg else ''}
        <form method='post' action='/login'>
          <label>Username</label><input name='username' autocomplete='username' required>
          <label>Password</label><input name='password' type='password' autocomplete='current-password' required>
          <button style='margin-top:12px'>Login</button>
        </form>
      </article>
    """
    return layout("Catalog | Login", body)


def product_card(product: Product, *, can_edit: bool, csrf_token: str) -> str:
    pid = html.escape(product.text("id"))
    name = html.escape(product.text("name"))
    image = f"<img src='{html.escape(product.text('image'))}' alt='{name}'>" if product.image else ""
    description = f"<p class='desc'>{html.escape(product.text('description'))}</p>" if product.description else ""
    copy_js = html.escape(f"navigator.clipboard.writeText({json.dumps(share_text(product))})")
    actions = [
        f"<a href='/products/{pid}/share' target='_blank' rel='noreferrer' role='button' class='outline'>Share on WhatsApp</a>",
        f"<button type='button' class='outline' onclick=\"{copy_js}\">Copy details</button>",
    ]
    if can_edit:
        actions.append(f"<a href='/products/{pid}/edit' role='button' class='secondary'>Edit</a>")
        actions.append(
            f"<form method='post' action='/products/{pid}/delete' onsubmit=\"return confirm('Delete this product?');\">"
            f"{csrf_input(csrf_token)}"
            "<button class='secondary'>Delete</button>"
            "</form>"
        )
    return f"""
    <article>
      {image}
      <header><strong>{name}</strong> <span class='price'>{html.escape(product.text('price'))}</span></header>
      {description}
      <footer class='actions'>{' '.join(actions)}</footer>
    </article>
    """


def catalog_page(user: SessionUser, products: Iterable[Product], *, query: str, csrf_token: str, notice: str = "") -> HTMLResponse:
    items = list(products)
    cards = "\n".join(product_card(p, can_edit=user.is_admin, csrf_token=csrf_token) for p in items)
    admin_tools = ""
    if user.is_admin:
        admin_tools = f"""
        <a href='/products/new' role='button'>+ Add Product</a>
        <form method='post' action='/reset' style='display:inline' onsubmit="return confirm('Reset users and remove all products?');">
          {csrf_input(csrf_token)}
          <button class='secondary' title='Reset users &amp; empty products'>Reset App</button>
        </form>
        """
    if items:
        listing = f"<div class='grid-cards'>{cards}</div>"
    elif user.is_admin:
        listing = "<article>No products yet. Click \"Add Product\" to create one.</article>"
    else:
        listing = "<article>No products to show. Ask an admin to add some.</article>"
    alert = f"<mark role='status' style='display:block'>{html.escape(notice)}</mark>" if notice else ""
    body = f"""
      {alert}
      <form method='get' action='/' role='search'>
        <input name='q' placeholder='Search products...' value='{html.escape(query)}'>
        <button>Search</button>
      </form>
      <p>{admin_tools}</p>
      {listing}
    """
    return layout("Catalog", body, user=user)


def product_form_page(
    user: SessionUser,
    *,
    csrf_token: str,
    product: Optional[Product] = None,
    values: Optional[dict] = None,
    error: str = "",
    status_code: int = 200,
) -> HTMLResponse:
    fields = ("name", "price", "description", "image")
    data = {field: product.text(field) if product else "" for field in fields}
    data.update(values or {})
    action = f"/products/{html.escape(product.text('id'))}" if product else "/products"
    heading = "Edit Product" if product else "Add New Product"
    uploaded = data["image"].startswith("data:")
    image_value = "" if uploaded else data["image"]
    remove_box = "<label><input type='checkbox' name='remove_image' value='1'> Remove image</label>" if data["image"] else ""
    preview = f"<img src='{html.escape(data['image'])}' alt='preview' style='max-height:12rem'>" if data["image"] else "<small>No image</small>"
    alert = f"<mark role='alert' style='display:block'>{html.escape(error)}</mark>" if error else ""
    body = f"""
      <article>
        <h2>{heading}</h2>
        {alert}
        <form method='post' action='{action}' enctype='multipart/form-data'>
          {csrf_input(csrf_token)}
          <div class='grid'>
            <label>Product Name<input name='name' value='{html.escape(data['name'])}' placeholder='Item name'></label>
            <label>Price<input name='price' value='{html.escape(data['price'])}' placeholder='Rs 1200 / $10'></label>
          </div>
          <label>Description<textarea name='description' placeholder='Short description'>{html.escape(data['description'])}</textarea></label>
          <div class='grid'>
            <div>
              <label>Image (upload or URL)<input type='file' name='image_file' accept='image/*'></label>
              <input name='image_url' value='{html.escape(image_value)}' placeholder='https://... (optional)'>
              <input type='hidden' name='keep_image' value='{'1' if uploaded else ''}'>
              {remove_box}
            </div>
            <figure>{preview}<figcaption>Preview</figcaption></figure>
          </div>
          <button>Save</button> <a href='/' role='button' class='secondary'>Cancel</a>
        </form>
      </article>
    """
    return layout(heading, body, user=user, status_code=status_code)
