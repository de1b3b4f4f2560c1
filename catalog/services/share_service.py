"""Plain-text share template and the external messaging link built from it."""
from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from catalog.core.config import get_settings
from catalog.domain.document import Product

# Characters encodeURIComponent leaves alone besides alphanumerics.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def share_text(product: Product) -> str:
    return f"{product.text('name')}\nPrice: {product.text('price')}\n{product.text('description')}"


def share_url(product: Product, base: Optional[str] = None) -> str:
    """Link that opens the messaging app with the product text prefilled."""
    base_url = base or get_settings().share_base_url
    return f"{base_url}?text={quote(share_text(product), safe=_URI_COMPONENT_SAFE)}"
