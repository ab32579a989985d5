import logging
from fastapi import APIRouter, Depends, HTTPException
from redis.exceptions import LockError
from sqlalchemy import desc
from sqlalchemy.orm import Session
from typing import List, Optional

from aquawise.api.dependencies import get_actor_id, get_tenant
from aquawise.database import get_db
from aquawise.models import Tenant, WaterOrder, OrderStatus
from aquawise.schemas import (
    WaterOrderCreate, WaterOrderResponse, WaterOrderStatusUpdate,
    AvailabilityCheckRequest, AvailabilityCheckResponse,
)
from aquawise.services.membership import CUSTOMER, MANAGER, has_at_least, require_role
from aquawise.services.order_service import OrderSubmissionService, check_order_availability

router = APIRouter()
logger = logging.getLogger(__name__)


def _get_order(db: Session, tenant_id: int, order_id: int) -> WaterOrder:
    order = db.query(WaterOrder).filter(
        WaterOrder.id == order_id,
        WaterOrder.tenant_id == tenant_id
    ).first()
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.post("/check-availability", response_model=AvailabilityCheckResponse)
async def check_availability(
    request: AvailabilityCheckRequest,
    tenant: Tenant = Depends(get_tenant),
    actor_id: str = Depends(get_actor_id),
    db: Session = Depends(get_db)
):
    """Would an order for this span and volume fit within declared availability?"""
    require_role(db, tenant.id, actor_id, CUSTOMER)
    return check_order_availability(db, tenant.id, request.start, request.end, request.total_gallons)


# Plain def: waiting on the tenant lock blocks, so this runs in the threadpool
@router.post("", response_model=WaterOrderResponse, status_code=201)
def submit_order(
    order: WaterOrderCreate,
    tenant: Tenant = Depends(get_tenant),
    actor_id: str = Depends(get_actor_id),
    db: Session = Depends(get_db)
):
    """Submit a water order. It is stored as pending if availability allows."""
    service = OrderSubmissionService(db)
    try:
        result = service.submit_order(
            tenant.id, actor_id, order.start_time, order.end_time, order.amount, order.unit
        )
    except LockError:
        logger.warning(f"Order lock busy for tenant {tenant.id}")
        raise HTTPException(status_code=503, detail="Another order is being processed, please retry")

    if not result.ok:
        capacity = AvailabilityCheckResponse.model_validate(result.capacity)
        raise HTTPException(
            status_code=409,
            detail={
                "message": "Requested volume exceeds water availability for this time range",
                "capacity_check": capacity.model_dump(mode="json"),
            }
        )
    return result.order


@router.get("", response_model=List[WaterOrderResponse])
async def list_orders(
    status: Optional[OrderStatus] = None,
    skip: int = 0,
    limit: int = 100,
    tenant: Tenant = Depends(get_tenant),
    actor_id: str = Depends(get_actor_id),
    db: Session = Depends(get_db)
):
    """Managers see every order; customers only their own."""
    member = require_role(db, tenant.id, actor_id, CUSTOMER)
    query = db.query(WaterOrder).filter(WaterOrder.tenant_id == tenant.id)

    if not has_at_least(member.role, MANAGER):
        query = query.filter(WaterOrder.user_id == actor_id)
    if status:
        query = query.filter(WaterOrder.status == status.value)

    return query.order_by(desc(WaterOrder.created_at), desc(WaterOrder.id)).offset(skip).limit(limit).all()


@router.get("/{order_id}", response_model=WaterOrderResponse)
async def get_order(
    order_id: int,
    tenant: Tenant = Depends(get_tenant),
    actor_id: str = Depends(get_actor_id),
    db: Session = Depends(get_db)
):
    member = require_role(db, tenant.id, actor_id, CUSTOMER)
    order = _get_order(db, tenant.id, order_id)
    if order.user_id != actor_id and not has_at_least(member.role, MANAGER):
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.patch("/{order_id}/status", response_model=WaterOrderResponse)
async def update_order_status(
    order_id: int,
    update: WaterOrderStatusUpdate,
    tenant: Tenant = Depends(get_tenant),
    actor_id: str = Depends(get_actor_id),
    db: Session = Depends(get_db)
):
    """Approve, reject or complete an order."""
    require_role(db, tenant.id, actor_id, MANAGER)
    _get_order(db, tenant.id, order_id)
    service = OrderSubmissionService(db)
    return service.update_status(tenant.id, order_id, update.status.value, actor_id, update.notes)
