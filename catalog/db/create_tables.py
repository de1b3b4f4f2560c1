"""Create the slot table on the configured database (`python -m catalog.db.create_tables`)."""
from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from catalog.core.config import get_settings
from catalog.core.logging import configure_logging

from .session import Base, get_engine
from . import models  # noqa: F401  # register StorageSlot on Base.metadata

logger = logging.getLogger(__name__)


def create_all() -> list[str]:
    """Create missing tables and return the table names now present."""
    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    return sorted(inspect(engine).get_table_names())


if __name__ == "__main__":
    configure_logging(get_settings().log_level)
    try:
        tables = create_all()
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    logger.info("Tables ready: %s", ", ".join(tables))
