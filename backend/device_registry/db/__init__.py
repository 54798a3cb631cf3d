"""Database module initialization."""

from .models import Base, Device
from .session import SessionLocal, engine, get_db
from .utils import create_tables, ping

__all__ = [
    "Base",
    "Device",
    "get_db",
    "engine",
    "SessionLocal",
    "create_tables",
    "ping",
]
