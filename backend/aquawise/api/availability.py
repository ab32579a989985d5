import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional

from aquawise.api.dependencies import get_actor_id, get_tenant
from aquawise.database import get_db
from aquawise.models import AvailabilityWindow, Tenant
from aquawise.schemas import AvailabilityWindowCreate, AvailabilityWindowUpdate, AvailabilityWindowResponse
from aquawise.services.membership import ADMIN, CUSTOMER, MANAGER, require_role
from aquawise.services.units import from_gallons, is_rate_unit, to_gallons
from aquawise.exceptions import InvalidTimeRange

router = APIRouter()
logger = logging.getLogger(__name__)


def _window_gallons(amount: float, unit: str, start_time, end_time) -> float:
    """Rate units run for the whole window."""
    hours = (end_time - start_time).total_seconds() / 3600
    return to_gallons(amount, unit, hours if is_rate_unit(unit) else None)


def _to_response(window: AvailabilityWindow, unit: Optional[str] = None) -> dict:
    return {
        "id": window.id,
        "tenant_id": window.tenant_id,
        "start_time": window.start_time,
        "end_time": window.end_time,
        "gallons": window.gallons,
        "gallons_per_hour": window.gallons_per_hour,
        "display_amount": from_gallons(window.gallons, unit) if unit else None,
        "display_unit": unit,
        "created_at": window.created_at,
        "updated_at": window.updated_at,
    }


def _get_window(db: Session, tenant_id: int, window_id: int) -> AvailabilityWindow:
    window = db.query(AvailabilityWindow).filter(
        AvailabilityWindow.id == window_id,
        AvailabilityWindow.tenant_id == tenant_id
    ).first()
    if not window:
        raise HTTPException(status_code=404, detail="Availability window not found")
    return window


@router.get("", response_model=List[AvailabilityWindowResponse])
async def list_availability(
    unit: Optional[str] = None,
    tenant: Tenant = Depends(get_tenant),
    actor_id: str = Depends(get_actor_id),
    db: Session = Depends(get_db)
):
    """List the tenant's availability windows, optionally expressed in a volume unit."""
    require_role(db, tenant.id, actor_id, CUSTOMER)
    windows = db.query(AvailabilityWindow).filter(
        AvailabilityWindow.tenant_id == tenant.id
    ).order_by(AvailabilityWindow.start_time).all()
    return [_to_response(w, unit) for w in windows]


@router.post("", response_model=AvailabilityWindowResponse, status_code=201)
async def create_availability(
    window: AvailabilityWindowCreate,
    tenant: Tenant = Depends(get_tenant),
    actor_id: str = Depends(get_actor_id),
    db: Session = Depends(get_db)
):
    """Declare a new availability window."""
    require_role(db, tenant.id, actor_id, MANAGER)

    db_window = AvailabilityWindow(
        tenant_id=tenant.id,
        start_time=window.start_time,
        end_time=window.end_time,
        gallons=_window_gallons(window.amount, window.unit, window.start_time, window.end_time),
    )
    db.add(db_window)
    db.commit()
    db.refresh(db_window)
    logger.info(f"Availability window {db_window.id} created in tenant {tenant.id} ({db_window.gallons:.2f} gal)")
    return _to_response(db_window)


@router.get("/{window_id}", response_model=AvailabilityWindowResponse)
async def get_availability(
    window_id: int,
    unit: Optional[str] = None,
    tenant: Tenant = Depends(get_tenant),
    actor_id: str = Depends(get_actor_id),
    db: Session = Depends(get_db)
):
    require_role(db, tenant.id, actor_id, CUSTOMER)
    return _to_response(_get_window(db, tenant.id, window_id), unit)


@router.put("/{window_id}", response_model=AvailabilityWindowResponse)
async def update_availability(
    window_id: int,
    window_update: AvailabilityWindowUpdate,
    tenant: Tenant = Depends(get_tenant),
    actor_id: str = Depends(get_actor_id),
    db: Session = Depends(get_db)
):
    """Update an availability window. A new amount needs its unit."""
    require_role(db, tenant.id, actor_id, MANAGER)
    window = _get_window(db, tenant.id, window_id)

    update_data = window_update.model_dump(exclude_unset=True)
    start_time = update_data.get('start_time') or window.start_time
    end_time = update_data.get('end_time') or window.end_time
    if start_time >= end_time:
        raise InvalidTimeRange("Availability window must start before it ends")

    if update_data.get('amount') is not None:
        window.gallons = _window_gallons(
            update_data['amount'], update_data['unit'], start_time, end_time
        )
    window.start_time = start_time
    window.end_time = end_time

    db.commit()
    db.refresh(window)
    return _to_response(window)


@router.delete("/{window_id}")
async def delete_availability(
    window_id: int,
    tenant: Tenant = Depends(get_tenant),
    actor_id: str = Depends(get_actor_id),
    db: Session = Depends(get_db)
):
    """Delete an availability window."""
    require_role(db, tenant.id, actor_id, ADMIN)
    window = _get_window(db, tenant.id, window_id)

    db.delete(window)
    db.commit()
    return {"message": "Availability window deleted"}
