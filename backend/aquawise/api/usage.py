from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from aquawise.api.dependencies import get_actor_id, get_tenant
from aquawise.database import get_db
from aquawise.exceptions import InvalidTimeRange
from aquawise.models import Tenant, UsageEntry
from aquawise.schemas import UsageEntryResponse
from aquawise.services.membership import CUSTOMER, MANAGER, has_at_least, require_role

router = APIRouter()


@router.get("", response_model=List[UsageEntryResponse])
async def list_usage(
    user_id: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    tenant: Tenant = Depends(get_tenant),
    actor_id: str = Depends(get_actor_id),
    db: Session = Depends(get_db)
):
    """
    Daily usage booked from completed water orders, oldest day first.

    ``start`` and ``end`` are inclusive dates. Managers may read any member's
    usage; customers always get their own.
    """
    member = require_role(db, tenant.id, actor_id, CUSTOMER)
    if start and end and start > end:
        raise InvalidTimeRange("start must be on or before end")

    query = db.query(UsageEntry).filter(UsageEntry.tenant_id == tenant.id)

    if not has_at_least(member.role, MANAGER):
        query = query.filter(UsageEntry.user_id == actor_id)
    elif user_id:
        query = query.filter(UsageEntry.user_id == user_id)
    if start:
        query = query.filter(UsageEntry.date >= start)
    if end:
        query = query.filter(UsageEntry.date <= end)

    return query.order_by(UsageEntry.date, UsageEntry.user_id).all()
