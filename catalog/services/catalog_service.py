"""
Catalog use cases: product CRUD, search, reset and login checks.

CatalogService owns the live Document. Every mutation builds a new Document,
saves it through the DocumentStore and only then swaps it in, so a failed
save leaves the in-memory state untouched.
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from typing import Any, Mapping

from catalog.domain.document import Document, Product, User, as_text, seed_document
from catalog.repositories.document_store import DocumentStore

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "price", "description", "image")
REQUIRED_FIELDS = ("name", "price")


class CatalogError(Exception):
    """Base class for catalog-related exceptions."""


class ProductValidationError(CatalogError):
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class ProductNotFoundError(CatalogError):
    def __init__(self, product_id: str):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class AuthError(Exception):
    """Base class for authentication-related exceptions."""


class InvalidCredentialsError(AuthError):
    pass


def _now_ms() -> int:
    return int(time.time() * 1000)


def _require(field: str, value: Any) -> str:
    text = "" if value is None else str(value).strip()
    if not text:
        raise ProductValidationError(f"{field.capitalize()} is required", field=field)
    return text


class CatalogService:
    """Single writer of the catalog Document."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store
        self._lock = threading.RLock()
        self._doc: Document = store.load()

    # -------------------------------------- helpers --------------------------------------
    def _commit(self, doc: Document) -> None:
        self.store.save(doc)
        self._doc = doc

    def _with_products(self, products: list[Product]) -> Document:
        return self._doc.model_copy(update={"products": products})

    def _index_of(self, product_id: str) -> int:
        for idx, product in enumerate(self._doc.products):
            if as_text(product.id) == product_id:
                return idx
        raise ProductNotFoundError(product_id)

    def _fresh_id(self) -> str:
        taken = {as_text(p.id) for p in self._doc.products}
        while True:
            candidate = str(uuid.uuid4())
            if candidate not in taken:
                return candidate

    # -------------------------------------- reads --------------------------------------
    def document(self) -> Document:
        with self._lock:
            return self._doc.model_copy(deep=True)

    def get_product(self, product_id: str) -> Product:
        with self._lock:
            return self._doc.products[self._index_of(product_id)].model_copy(deep=True)

    def search(self, query: str = "") -> list[Product]:
        """Case-insensitive substring match over name, price and description."""
        needle = (query or "").strip().lower()
        with self._lock:
            products = self._doc.products
            if needle:
                products = [p for p in products if any(needle in field.lower() for field in p.searchable_fields())]
            return [p.model_copy(deep=True) for p in products]

    # -------------------------------------- mutations --------------------------------------
    def create_product(self, name: str, price: str, description: str = "", image: str = "") -> Product:
        clean_name = _require("name", name)
        clean_price = _require("price", price)
        with self._lock:
            product = Product(
                id=self._fresh_id(),
                name=clean_name,
                price=clean_price,
                description=description or "",
                image=image or "",
                created_at=_now_ms(),
            )
            self._commit(self._with_products([product, *self._doc.products]))
            logger.info("Created product %s (%s)", product.id, product.name)
            return product.model_copy(deep=True)

    def update_product(self, product_id: str, patch: Mapping[str, Any]) -> Product:
        with self._lock:
            idx = self._index_of(product_id)
            unknown = sorted(set(patch) - set(EDITABLE_FIELDS))
            if unknown:
                raise ProductValidationError(f"Cannot update field(s): {', '.join(unknown)}", field=unknown[0])
            changes: dict[str, Any] = {}
            for key, value in patch.items():
                if key in REQUIRED_FIELDS:
                    changes[key] = _require(key, value)
                else:
                    changes[key] = value or ""
            current = self._doc.products[idx]
            updated = Product.model_validate({**current.to_dict(), **changes})
            products = list(self._doc.products)
            products[idx] = updated
            self._commit(self._with_products(products))
            logger.info("Updated product %s (%s)", product_id, ", ".join(sorted(changes)) or "no fields")
            return updated.model_copy(deep=True)

    def delete_product(self, product_id: str) -> None:
        with self._lock:
            idx = self._index_of(product_id)
            products = list(self._doc.products)
            del products[idx]
            self._commit(self._with_products(products))
            logger.info("Deleted product %s", product_id)

    def reset_all(self) -> None:
        with self._lock:
            self._commit(seed_document())
            logger.info("Catalog reset to seed document")

    # -------------------------------------- login --------------------------------------
    def authenticate(self, username: str, password: str) -> User:
        """Match credentials against the stored users, not the in-memory copy."""
        doc = self.store.load()
        for user in doc.users:
            if as_text(user.username) == username and as_text(user.password) == password:
                logger.info("User %s logged in as %s", user.username, user.role)
                return user
        logger.warning("Failed login for username %r", username)
        raise InvalidCredentialsError("Invalid username or password")

