from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from aquawise.api.dependencies import get_actor_id, get_tenant
from aquawise.database import get_db
from aquawise.models import Tenant
from aquawise.schemas import NotificationResponse
from aquawise.services.membership import require_role
from aquawise.services.notification_service import Notifier

router = APIRouter()


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    unread_only: bool = False,
    tenant: Tenant = Depends(get_tenant),
    actor_id: str = Depends(get_actor_id),
    db: Session = Depends(get_db)
):
    """Notifications for the calling user, newest first."""
    require_role(db, tenant.id, actor_id)
    return Notifier(db).list_for_user(tenant.id, actor_id, unread_only=unread_only)


@router.post("/read-all")
async def mark_all_notifications_read(
    tenant: Tenant = Depends(get_tenant),
    actor_id: str = Depends(get_actor_id),
    db: Session = Depends(get_db)
):
    require_role(db, tenant.id, actor_id)
    updated = Notifier(db).mark_all_read(tenant.id, actor_id)
    return {"updated": updated}


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(
    notification_id: int,
    tenant: Tenant = Depends(get_tenant),
    actor_id: str = Depends(get_actor_id),
    db: Session = Depends(get_db)
):
    require_role(db, tenant.id, actor_id)
    notification = Notifier(db).mark_read(tenant.id, actor_id, notification_id)
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")
    return notification
