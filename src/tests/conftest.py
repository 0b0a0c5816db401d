"""Pytest configuration and fixtures for service layer tests."""

import os
from datetime import datetime, timedelta, timezone

# Must be set before anything builds the global config
os.environ.setdefault("PRODUCT_TRACKER_ENV", "test")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, scoped_session

import src.models  # noqa: F401  (registers all tables)
from src.models.base import Base


MANUFACTURER = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
OTHER_PARTY = "ST1SJ3DTE5DN7X54YDH5D64R3BCB6A2AG2ZQ8YPD5"


@pytest.fixture(scope="function")
def test_db():
    """Provide a clean test database for each test function.

    This fixture:
    1. Creates an in-memory SQLite database
    2. Creates all tables
    3. Provides the database to the test
    4. Drops all tables after the test completes
    """
    engine = create_engine("sqlite:///:memory:", echo=False)

    Base.metadata.create_all(engine)

    session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    Session = scoped_session(session_factory)

    # Monkey-patch the global session factory for tests
    import src.services.database as db_module

    original_get_session = db_module.get_session_factory
    db_module.get_session_factory = lambda: Session

    yield Session

    Session.remove()
    Base.metadata.drop_all(engine)
    engine.dispose()

    db_module.get_session_factory = original_get_session


@pytest.fixture
def manufacturer():
    """Identity of the registering party."""
    return MANUFACTURER


@pytest.fixture
def other_party():
    """An identity that did not register anything."""
    return OTHER_PARTY


@pytest.fixture
def clock():
    """Deterministic clock: each call returns one minute later than the last."""

    class Clock:
        def __init__(self):
            self.current = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)

        def __call__(self) -> datetime:
            self.current = self.current + timedelta(minutes=1)
            return self.current

    return Clock()


@pytest.fixture
def registered_product(test_db, manufacturer):
    """Register "Test Product" and return its ID."""
    from src.services.ledger_service import register_product

    return register_product("Test Product", manufacturer)
