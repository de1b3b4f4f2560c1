"""
Key/value slots kept in a single JSON file.

The file holds one JSON object mapping slot keys to string values. Writes go
to a temporary sibling first and replace the file, so readers never see a
half-written file. A file that cannot be parsed is moved aside to a
`.corrupt` sibling before the next write, never silently overwritten.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from catalog.repositories.base import StorageError

logger = logging.getLogger(__name__)


class JsonFileSlotStorage:
    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise StorageError(f"could not read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return data

    def _write_all(self, slots: dict[str, str]) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(slots, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as exc:
            raise StorageError(f"could not write {self.path}: {exc}") from exc

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        try:
            slots = self._read_all()
        except StorageError as exc:
            backup = self.path.with_name(self.path.name + ".corrupt")
            try:
                os.replace(self.path, backup)
            except OSError as move_exc:
                raise StorageError(f"could not move aside {self.path}: {move_exc}") from exc
            logger.warning("Slot file %s unreadable (%s); moved to %s and starting fresh", self.path, exc, backup)
            slots = {}
        slots[key] = value
        self._write_all(slots)

    def remove_item(self, key: str) -> None:
        slots = self._read_all()
        if key in slots:
            del slots[key]
            self._write_all(slots)
