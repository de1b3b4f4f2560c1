"""
Persistent store adapter: the Document under one fixed slot key.

`load` never raises. An empty slot, an unreadable slot or a value that does
not decode as a Document all yield the seed Document, and loading never
writes back to the slot. `save` overwrites the slot in full; write failures
propagate to the caller as StorageError.
"""
from __future__ import annotations

import logging
from typing import Optional

from catalog.core.config import Settings, get_settings
from catalog.domain.document import (
    Document,
    DocumentDecodeError,
    decode_document,
    encode_document,
    seed_document,
)
from catalog.repositories.base import SlotStorage, StorageError

STORAGE_KEY = "catalogAppDataV1"

logger = logging.getLogger(__name__)


class DocumentStore:
    def __init__(self, storage: SlotStorage, key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> Document:
        try:
            raw = self.storage.get_item(self.key)
        except StorageError as exc:
            logger.warning("Could not read slot %s, using seed document: %s", self.key, exc)
            return seed_document()
        if raw is None:
            return seed_document()
        try:
            return decode_document(raw)
        except DocumentDecodeError as exc:
            logger.warning("Stored document in slot %s is not usable, using seed document: %s", self.key, exc)
            return seed_document()

    def save(self, doc: Document) -> None:
        self.storage.set_item(self.key, encode_document(doc))

    def raw(self) -> Optional[str]:
        """Current slot value, undecoded."""
        return self.storage.get_item(self.key)

    def clear(self) -> None:
        self.storage.remove_item(self.key)


def build_slot_storage(settings: Optional[Settings] = None) -> SlotStorage:
    settings = settings or get_settings()
    if settings.storage_backend == "json":
        from catalog.repositories.json_storage import JsonFileSlotStorage

        return JsonFileSlotStorage(settings.data_file)

    from catalog.db.create_tables import create_all
    from catalog.repositories.sql_storage import SQLSlotStorage

    create_all()
    return SQLSlotStorage()


def build_document_store(settings: Optional[Settings] = None) -> DocumentStore:
    return DocumentStore(build_slot_storage(settings))
