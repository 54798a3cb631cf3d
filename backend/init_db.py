"""Database initialization entrypoint."""

from device_registry.core import setup_logging
from device_registry.db import create_tables, engine


def init_db() -> None:
    """Create the device tables on the configured database."""
    setup_logging()
    create_tables(engine)


if __name__ == "__main__":
    init_db()
