import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session

from aquawise.database import SessionLocal
from aquawise.models import WaterOrder, OrderStatus
from aquawise.services.order_service import OrderSubmissionService
from aquawise.timeutil import utcnow

logger = logging.getLogger(__name__)

SYSTEM_REVIEWER = "system"


def complete_expired_orders(db: Session, now: Optional[datetime] = None) -> int:
    """
    Mark approved orders whose window has ended as completed.

    Goes through the normal status change so the owner is notified and the
    usage is booked. Returns the number of orders completed.
    """
    now = now or utcnow()
    expired = db.query(WaterOrder).filter(
        WaterOrder.status == OrderStatus.APPROVED.value,
        WaterOrder.end_time <= now
    ).order_by(WaterOrder.end_time).all()

    service = OrderSubmissionService(db)
    completed = 0
    for order in expired:
        try:
            service.update_status(order.tenant_id, order.id, OrderStatus.COMPLETED.value, SYSTEM_REVIEWER)
            completed += 1
        except Exception as e:
            logger.error(f"Error completing order {order.id} for tenant {order.tenant_id}: {e}")
            db.rollback()

    return completed


def complete_expired_orders_job():
    """Scheduled job: complete every tenant's expired approved orders."""
    logger.info("Starting expired order completion")
    session = SessionLocal()
    try:
        completed = complete_expired_orders(session)
        logger.info(f"Expired order completion finished, {completed} orders completed")
    except Exception as e:
        logger.error(f"Expired order completion failed: {e}")
        session.rollback()
    finally:
        session.close()
