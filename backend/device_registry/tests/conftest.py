"""Test configuration and fixtures."""

import os
from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from device_registry.db import Base, get_db  # noqa: E402
from device_registry.db.models import Device  # noqa: E402
from device_registry.dependencies import get_clock  # noqa: E402
from device_registry.main import app  # noqa: E402 - must set env vars before importing
from device_registry.repositories import SqlDeviceStore  # noqa: E402
from device_registry.services import DeviceRegistry  # noqa: E402

# Use in-memory SQLite for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

FIXED_NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=UTC)


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """Create a test client with overridden database and clock dependencies."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: fixed_clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def store(db_session):
    return SqlDeviceStore(db_session)


@pytest.fixture
def registry(store):
    """Registry over the SQLite store with a frozen clock."""
    return DeviceRegistry(store, clock=fixed_clock)


@pytest.fixture
def test_device(db_session):
    """Create a test device."""
    device = Device(
        name="Router 1",
        brand="Acme",
        creation_time=datetime(2024, 1, 15, 9, 30, 0),
    )
    db_session.add(device)
    db_session.commit()
    db_session.refresh(device)
    return device


@pytest.fixture
def branded_devices(db_session):
    """Three devices whose brands differ only by case."""
    devices = [
        Device(name="Phone A", brand="Acme", creation_time=datetime(2024, 2, 1)),
        Device(name="Phone B", brand="acme", creation_time=datetime(2024, 2, 2)),
        Device(name="Phone C", brand="Acme", creation_time=datetime(2024, 2, 3)),
    ]
    db_session.add_all(devices)
    db_session.commit()
    for device in devices:
        db_session.refresh(device)
    return devices
