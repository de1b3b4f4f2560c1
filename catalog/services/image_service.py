"""Turn uploaded image files into inline data URIs stored on the product."""
from __future__ import annotations

import base64
from typing import Optional

from catalog.services.catalog_service import CatalogError


class ImageUploadError(CatalogError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def to_data_uri(content: bytes, content_type: Optional[str], *, max_bytes: int = 0) -> str:
    mime = (content_type or "").split(";", 1)[0].strip().lower()
    if not mime.startswith("image/"):
        raise ImageUploadError("Only image files can be uploaded")
    if not content:
        raise ImageUploadError("Uploaded image is empty")
    if max_bytes and len(content) > max_bytes:
        raise ImageUploadError(f"Image is larger than {max_bytes} bytes")
    payload = base64.b64encode(content).decode("ascii")
    return f"data:{mime};base64,{payload}"


def resolve_image(upload_uri: str, image_url: str, current: str = "", keep_current: bool = False) -> str:
    """
    An uploaded file wins over the URL field. Inline images are not echoed back
    into the URL field, so `keep_current` preserves them when nothing new was
    given; otherwise an empty URL field clears the image.
    """
    if upload_uri:
        return upload_uri
    url = (image_url or "").strip()
    if url:
        return url
    return current if keep_current else ""
