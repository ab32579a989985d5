"""Tests for tasks/order_completion.py: completing expired approved orders."""

from datetime import datetime, timedelta

from aquawise.models import Notification, UsageEntry, WaterOrder
from aquawise.tasks.order_completion import SYSTEM_REVIEWER, complete_expired_orders

D0 = datetime(2026, 6, 1, 0, 0, 0)


def test_completes_only_expired_approved_orders(db_session, tenant, add_order):
    expired = add_order(tenant, "approved", start=D0, hours=24, gallons=1_000, user_id="cust-1")
    running = add_order(tenant, "approved", start=D0 + timedelta(days=1), hours=48, gallons=1_000)
    pending = add_order(tenant, "pending", start=D0, hours=24, gallons=1_000)

    completed = complete_expired_orders(db_session, now=D0 + timedelta(days=1, hours=1))

    assert completed == 1
    assert db_session.get(WaterOrder, expired.id).status == "completed"
    assert db_session.get(WaterOrder, expired.id).reviewed_by == SYSTEM_REVIEWER
    assert db_session.get(WaterOrder, running.id).status == "approved"
    assert db_session.get(WaterOrder, pending.id).status == "pending"


def test_completion_notifies_and_books_usage(db_session, tenant, add_order):
    add_order(tenant, "approved", start=D0, hours=24, gallons=1_000, user_id="cust-1")

    complete_expired_orders(db_session, now=D0 + timedelta(days=2))

    n = db_session.query(Notification).filter(Notification.user_id == "cust-1").one()
    assert n.message == "Your water order has been completed."
    usage = db_session.query(UsageEntry).filter(UsageEntry.user_id == "cust-1").one()
    assert usage.gallons == 1_000


def test_nothing_to_do(db_session, tenant):
    assert complete_expired_orders(db_session, now=D0) == 0
