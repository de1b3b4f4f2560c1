"""Key/value slots backed by the `storage_slots` table."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError

from catalog.db.models import StorageSlot
from catalog.db.session import get_session
from catalog.repositories.base import StorageError


class SQLSlotStorage:
    """localStorage-like helpers wrapping the SQLAlchemy session."""

    def get_item(self, key: str) -> Optional[str]:
        try:
            with get_session() as session:
                slot = session.get(StorageSlot, key)
                return slot.value if slot else None
        except SQLAlchemyError as exc:
            raise StorageError(f"could not read slot {key!r}: {exc}") from exc

    def set_item(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc)
        try:
            with get_session() as session:
                slot = session.get(StorageSlot, key)
                if not slot:
                    session.add(StorageSlot(key=key, value=value, updated_at=now))
                else:
                    slot.value = value
                    slot.updated_at = now
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"could not write slot {key!r}: {exc}") from exc

    def remove_item(self, key: str) -> None:
        try:
            with get_session() as session:
                session.execute(delete(StorageSlot).where(StorageSlot.key == key))
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"could not remove slot {key!r}: {exc}") from exc
