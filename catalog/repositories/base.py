"""Common contract for the key/value slot backends."""
from __future__ import annotations

from typing import Optional, Protocol


class StorageError(Exception):
    """The underlying medium failed to read or write a slot."""


class SlotStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemorySlotStorage:
    """In-process slots; nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._slots: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._slots[key] = value

    def remove_item(self, key: str) -> None:
        self._slots.pop(key, None)
