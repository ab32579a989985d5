import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from aquawise.exceptions import Forbidden, InvalidStatusTransition, InvalidTimeRange, NotFound
from aquawise.models import AvailabilityWindow, Tenant, TenantMember, UsageEntry, WaterOrder, OrderStatus
from aquawise.models.water_order import ALLOWED_TRANSITIONS, COMMITTED_STATUSES
from aquawise.services.capacity_ledger import CapacityResult, check_capacity
from aquawise.services.interval_rate import daily_rate, daily_slices
from aquawise.services.membership import MANAGER, get_member, has_at_least
from aquawise.services.notification_service import Notifier
from aquawise.services.tenant_lock import tenant_order_lock
from aquawise.services.units import to_gallons
from aquawise.timeutil import parse_iso, utcnow

logger = logging.getLogger(__name__)

ORDERS_LINK = "/water-orders"


@dataclass
class SubmissionResult:
    ok: bool
    capacity: CapacityResult
    order: Optional[WaterOrder] = None


def load_availability_windows(db: Session, tenant_id: int) -> List[AvailabilityWindow]:
    return db.query(AvailabilityWindow).filter(
        AvailabilityWindow.tenant_id == tenant_id
    ).order_by(AvailabilityWindow.start_time).all()


def load_committed_orders(db: Session, tenant_id: int) -> List[WaterOrder]:
    return db.query(WaterOrder).filter(
        WaterOrder.tenant_id == tenant_id,
        WaterOrder.status.in_(COMMITTED_STATUSES)
    ).all()


def check_order_availability(
    db: Session,
    tenant_id: int,
    start_iso: str,
    end_iso: str,
    total_gallons: float,
) -> CapacityResult:
    """Capacity check for a candidate order against the tenant's current data."""
    start = parse_iso(start_iso)
    end = parse_iso(end_iso)
    return check_capacity(
        start,
        end,
        total_gallons,
        load_availability_windows(db, tenant_id),
        load_committed_orders(db, tenant_id),
    )


def status_message(status: str, notes: Optional[str] = None) -> str:
    if status == OrderStatus.APPROVED.value:
        return "Your water order was approved."
    if status == OrderStatus.REJECTED.value:
        return f"Your water order was rejected: {notes}" if notes else "Your water order was rejected"
    return "Your water order has been completed."


class OrderSubmissionService:
    """Submits water orders and applies administrative status changes."""

    def __init__(
        self,
        db: Session,
        notifier: Optional[Notifier] = None,
        lock_factory: Optional[Callable] = None,
    ):
        self.db = db
        self.notifier = notifier or Notifier(db)
        self.lock_factory = lock_factory or tenant_order_lock

    def submit_order(
        self,
        tenant_id: int,
        user_id: str,
        start: datetime,
        end: datetime,
        amount: float,
        unit: str,
    ) -> SubmissionResult:
        """
        Validate, capacity-check and persist a customer's order as pending.

        A capacity rejection is returned as ``ok=False`` and nothing is stored.
        """
        member = get_member(self.db, tenant_id, user_id)
        if member is None:
            raise Forbidden("User is not a member of this tenant")

        tenant = self.db.query(Tenant).filter(Tenant.id == tenant_id).first()
        if tenant is not None and not tenant.water_orders_enabled:
            raise Forbidden("Water orders are disabled for this tenant")

        if start >= end:
            raise InvalidTimeRange("Order must start before it ends")

        hours = (end - start).total_seconds() / 3600
        total_gallons = to_gallons(amount, unit, hours)

        with self.lock_factory(tenant_id):
            capacity = check_capacity(
                start,
                end,
                total_gallons,
                load_availability_windows(self.db, tenant_id),
                load_committed_orders(self.db, tenant_id),
            )
            order = None
            if capacity.ok:
                order = WaterOrder(
                    tenant_id=tenant_id,
                    user_id=user_id,
                    start_time=start,
                    end_time=end,
                    amount=amount,
                    unit=unit,
                    total_gallons=total_gallons,
                    status=OrderStatus.PENDING.value,
                    created_at=utcnow(),
                )
                self.db.add(order)
                self.db.flush()

                self._notify_reviewers(tenant_id, member)
                self._commit()

        if order is None:
            logger.info(
                f"Rejected order from {user_id} in tenant {tenant_id}: "
                f"{total_gallons:.2f} gal exceeds availability at {capacity.infeasible_hour}"
            )
            return SubmissionResult(ok=False, capacity=capacity)

        self.notifier.dispatch_pending()
        self.db.refresh(order)
        logger.info(f"Order {order.id} submitted by {user_id} in tenant {tenant_id} ({total_gallons:.2f} gal)")
        return SubmissionResult(ok=True, capacity=capacity, order=order)

    def _commit(self):
        """Commit, dropping queued webhooks if the transaction is lost."""
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            self.notifier.discard_pending()
            raise

    def _notify_reviewers(self, tenant_id: int, submitter: TenantMember):
        members = self.db.query(TenantMember).filter(TenantMember.tenant_id == tenant_id).all()
        for reviewer in members:
            if reviewer.user_id == submitter.user_id or not has_at_least(reviewer.role, MANAGER):
                continue
            self.notifier.notify(
                tenant_id,
                reviewer.user_id,
                f"New water order submitted by {submitter.name}.",
                link=ORDERS_LINK,
            )

    def update_status(
        self,
        tenant_id: int,
        order_id: int,
        new_status: str,
        reviewer_id: str,
        notes: Optional[str] = None,
    ) -> WaterOrder:
        """Move an order through pending -> approved -> completed, or to rejected."""
        order = self.db.query(WaterOrder).filter(
            WaterOrder.id == order_id,
            WaterOrder.tenant_id == tenant_id
        ).first()
        if not order:
            raise NotFound("Order not found")

        if isinstance(new_status, OrderStatus):
            new_status = new_status.value
        if new_status not in ALLOWED_TRANSITIONS.get(order.status, set()):
            raise InvalidStatusTransition(order.status, new_status)

        previous = order.status
        order.status = new_status
        order.reviewed_by = reviewer_id
        order.reviewed_at = utcnow()
        order.admin_notes = notes

        if new_status == OrderStatus.COMPLETED.value:
            self._book_usage(order)

        self.notifier.notify(
            tenant_id,
            order.user_id,
            status_message(new_status, notes),
            details=notes,
            link=ORDERS_LINK,
        )

        self._commit()
        self.notifier.dispatch_pending()
        self.db.refresh(order)
        logger.info(f"Order {order.id} in tenant {tenant_id}: {previous} -> {new_status} by {reviewer_id}")
        return order

    def _book_usage(self, order: WaterOrder):
        """Spread a completed order's gallons over the days it ran."""
        per_day = daily_rate(order.start_time, order.end_time, order.total_gallons)
        for day in daily_slices(order.start_time, order.end_time):
            entry = self.db.query(UsageEntry).filter(
                UsageEntry.tenant_id == order.tenant_id,
                UsageEntry.user_id == order.user_id,
                UsageEntry.date == day
            ).first()
            if entry is None:
                entry = UsageEntry(tenant_id=order.tenant_id, user_id=order.user_id, date=day, gallons=0.0)
                self.db.add(entry)
            entry.gallons = (entry.gallons or 0.0) + per_day
