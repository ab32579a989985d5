"""
Pytest configuration and shared fixtures for AquaWise tests.
"""

import os
from datetime import datetime, timedelta

import pytest

# Set test environment variables before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ORDER_LOCK_ENABLED", "false")
os.environ.setdefault("SCHEDULER_ENABLED", "false")
os.environ.setdefault("NOTIFICATION_WEBHOOK_URL", "")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient  # noqa: E402

from aquawise.database import Base, SessionLocal, engine, get_db  # noqa: E402
from aquawise.main import app  # noqa: E402
from aquawise.models import AvailabilityWindow, Tenant, TenantMember, WaterOrder  # noqa: E402

D0 = datetime(2026, 6, 1, 0, 0, 0)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def tenant(db_session):
    """A tenant with an admin, a manager and two customers."""
    t = Tenant(name="Canal Company", default_unit="gallons", water_orders_enabled=True)
    db_session.add(t)
    db_session.flush()
    db_session.add_all([
        TenantMember(tenant_id=t.id, user_id="admin-1", name="Ada Admin", role="admin"),
        TenantMember(tenant_id=t.id, user_id="mgr-1", name="Max Manager", role="manager"),
        TenantMember(tenant_id=t.id, user_id="cust-1", name="Casey Grower", role="customer"),
        TenantMember(tenant_id=t.id, user_id="cust-2", name="Robin Rancher", role="Customer"),
    ])
    db_session.commit()
    db_session.refresh(t)
    return t


@pytest.fixture
def add_window(db_session):
    def _add(tenant, start=D0, hours=24, gallons=240_000.0):
        window = AvailabilityWindow(
            tenant_id=tenant.id,
            start_time=start,
            end_time=start + timedelta(hours=hours),
            gallons=gallons,
        )
        db_session.add(window)
        db_session.commit()
        return window
    return _add


@pytest.fixture
def add_order(db_session):
    def _add(tenant, status, start=D0, hours=24, gallons=216_000.0, user_id="cust-2"):
        order = WaterOrder(
            tenant_id=tenant.id,
            user_id=user_id,
            start_time=start,
            end_time=start + timedelta(hours=hours),
            amount=gallons,
            unit="gallons",
            total_gallons=gallons,
            status=status,
        )
        db_session.add(order)
        db_session.commit()
        return order
    return _add
