"""SQLAlchemy model for the durable key/value slots."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, String, Text, func

from .session import Base


class StorageSlot(Base):
    __tablename__ = "storage_slots"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
