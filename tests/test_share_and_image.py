from __future__ import annotations

import base64
import sys
from pathlib import Path
from urllib.parse import parse_qs, urlparse

import pytest

# Make the catalog package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog.domain.document import Product  # noqa: E402
from catalog.services.image_service import ImageUploadError, resolve_image, to_data_uri  # noqa: E402
from catalog.services.share_service import share_text, share_url  # noqa: E402


def _product(**kw) -> Product:
    data = {"id": "p1", "name": "Pen", "price": "Rs 100", "description": "Blue & smooth"}
    data.update(kw)
    return Product(**data)


def test_share_text_template():
    assert share_text(_product()) == "Pen\nPrice: Rs 100\nBlue & smooth"


def test_share_text_without_description_keeps_trailing_newline():
    assert share_text(_product(description="")) == "Pen\nPrice: Rs 100\n"
    assert share_text(_product(description=None)) == "Pen\nPrice: Rs 100\n"


def test_share_text_reads_stored_numbers_and_nulls_as_text():
    assert share_text(_product(price=100, description=None)) == "Pen\nPrice: 100\n"
    assert share_text(_product(price=None)) == "Pen\nPrice: \nBlue & smooth"


def test_share_url_encodes_like_encode_uri_component():
    url = share_url(_product(name="Pen (blue)!"), base="https://wa.me/")
    assert url == "https://wa.me/?text=Pen%20(blue)!%0APrice%3A%20Rs%20100%0ABlue%20%26%20smooth"
    assert parse_qs(urlparse(url).query)["text"] == ["Pen (blue)!\nPrice: Rs 100\nBlue & smooth"]


def test_share_url_uses_configured_base(monkeypatch):
    from catalog.core import config as core_config

    monkeypatch.setenv("SHARE_BASE_URL", "https://share.example/send")
    core_config.get_settings.cache_clear()
    try:
        assert share_url(_product()).startswith("https://share.example/send?text=Pen")
    finally:
        core_config.get_settings.cache_clear()


def test_to_data_uri():
    uri = to_data_uri(b"\x89PNG\r\n", "image/png")
    assert uri == "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n").decode("ascii")


def test_to_data_uri_strips_content_type_params():
    assert to_data_uri(b"x", "Image/SVG+XML; charset=utf-8").startswith("data:image/svg+xml;base64,")


@pytest.mark.parametrize(
    "content,content_type",
    [(b"hello", "text/plain"), (b"", "image/png"), (b"x", None), (b"x" * 11, "image/gif")],
)
def test_to_data_uri_rejects(content, content_type):
    with pytest.raises(ImageUploadError):
        to_data_uri(content, content_type, max_bytes=10)


def test_resolve_image_precedence():
    assert resolve_image("data:image/png;base64,AA", "https://x/y.png") == "data:image/png;base64,AA"
    assert resolve_image("", " https://x/y.png ") == "https://x/y.png"
    assert resolve_image("", "", current="data:image/png;base64,AA", keep_current=True) == "data:image/png;base64,AA"
    assert resolve_image("", "", current="data:image/png;base64,AA") == ""
