"""Database utility helpers."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.engine import Engine

from device_registry.core.logging import get_logger
from device_registry.db.models import Base

logger = get_logger(__name__)


def create_tables(bind: Engine) -> None:
    """Create missing tables (safe to call repeatedly)."""
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ensured", extra={"tables": sorted(Base.metadata.tables)})


def ping(bind: Engine) -> None:
    """Run a trivial query; raises if the database is unreachable."""
    with bind.connect() as connection:
        connection.execute(text("SELECT 1"))
