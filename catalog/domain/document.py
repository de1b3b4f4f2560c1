"""
The persisted Document: users, products and the seed used on first run.

Decoding is explicit: `decode_document` either yields a Document or raises
`DocumentDecodeError`. Only the shape is checked (`users` and `products` are
lists of objects); record fields are taken as stored, so a stored value
survives a load/save cycle unchanged. Code that reads a field goes through
`as_text`, which maps null to "" and anything else to its string form.
"""
from __future__ import annotations

import copy
import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

ROLE_ADMIN = "admin"
ROLE_AGENT = "agent"

SEED_DOCUMENT: dict[str, Any] = {
    "users": [
        {"id": "u1", "role": ROLE_ADMIN, "username": "admin", "password": "admin123", "name": "Admin"},
        {"id": "u2", "role": ROLE_AGENT, "username": "agent", "password": "agent123", "name": "Agent"},
    ],
    "products": [],
}


class DocumentDecodeError(Exception):
    """Raised when a stored value is not a usable Document."""


def as_text(value: Any) -> str:
    return "" if value is None else str(value)


class _Record(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


class User(_Record):
    id: Any = None
    role: Any = None
    username: Any = None
    password: Any = None
    name: Any = None

    @property
    def display_name(self) -> str:
        return as_text(self.name) or as_text(self.username)


class Product(_Record):
    id: Any = None
    name: Any = None
    price: Any = None
    description: Any = None
    image: Any = None
    created_at: Any = Field(default=None, alias="createdAt")

    def text(self, field: str) -> str:
        return as_text(getattr(self, field))

    def searchable_fields(self) -> tuple[str, str, str]:
        return self.text("name"), self.text("price"), self.text("description")


class Document(_Record):
    users: list[User]
    products: list[Product]


def seed_document() -> Document:
    """Fresh copy of the default Document (default users, no products)."""
    return Document.model_validate(copy.deepcopy(SEED_DOCUMENT))


def decode_document(raw: str | bytes) -> Document:
    try:
        return Document.model_validate_json(raw)
    except ValidationError as exc:
        raise DocumentDecodeError(f"{exc.error_count()} problem(s) decoding stored document") from exc


def encode_document(doc: Document) -> str:
    return json.dumps(doc.to_dict(), ensure_ascii=False, separators=(",", ":"))
