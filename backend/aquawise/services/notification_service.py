import logging
from typing import List, Optional
import httpx
from sqlalchemy.orm import Session

from aquawise.config import settings
from aquawise.models import Notification

logger = logging.getLogger(__name__)


class Notifier:
    """
    Stores in-app notifications and forwards them to an optional webhook.

    Webhook payloads are queued by ``notify`` and only leave the process when
    the caller runs ``dispatch_pending`` after its commit, so a rolled-back
    order never produces an outside notification.
    """

    def __init__(self, db: Session, webhook_url: Optional[str] = None):
        self.db = db
        self.webhook_url = webhook_url if webhook_url is not None else settings.notification_webhook_url
        self._pending: List[dict] = []

    def notify(
        self,
        tenant_id: int,
        user_id: str,
        message: str,
        details: Optional[str] = None,
        link: Optional[str] = None,
    ) -> Notification:
        notification = Notification(
            tenant_id=tenant_id,
            user_id=user_id,
            message=message,
            details=details,
            link=link,
            is_read=False,
        )
        self.db.add(notification)
        self.db.flush()

        if self.webhook_url:
            self._pending.append({
                "tenant_id": notification.tenant_id,
                "user_id": notification.user_id,
                "message": notification.message,
                "details": notification.details,
                "link": notification.link,
            })

        return notification

    def dispatch_pending(self) -> int:
        """Send the queued webhooks. Returns how many were delivered."""
        pending, self._pending = self._pending, []
        return sum(1 for payload in pending if self._send_webhook(payload))

    def discard_pending(self):
        self._pending = []

    def _send_webhook(self, payload: dict) -> bool:
        """Best effort: delivery failures are logged, never raised."""
        try:
            response = httpx.post(
                self.webhook_url,
                json=payload,
                timeout=settings.notification_webhook_timeout_seconds,
            )
            response.raise_for_status()
            return True
        except httpx.HTTPError as e:
            logger.warning(f"Notification webhook delivery failed for user {payload['user_id']}: {e}")
            return False

    def list_for_user(self, tenant_id: int, user_id: str, unread_only: bool = False) -> List[Notification]:
        query = self.db.query(Notification).filter(
            Notification.tenant_id == tenant_id,
            Notification.user_id == user_id
        )
        if unread_only:
            query = query.filter(Notification.is_read == False)  # noqa: E712
        return query.order_by(Notification.created_at.desc(), Notification.id.desc()).all()

    def mark_read(self, tenant_id: int, user_id: str, notification_id: int) -> Optional[Notification]:
        notification = self.db.query(Notification).filter(
            Notification.id == notification_id,
            Notification.tenant_id == tenant_id,
            Notification.user_id == user_id
        ).first()
        if notification:
            notification.is_read = True
            self.db.commit()
        return notification

    def mark_all_read(self, tenant_id: int, user_id: str) -> int:
        updated = self.db.query(Notification).filter(
            Notification.tenant_id == tenant_id,
            Notification.user_id == user_id,
            Notification.is_read == False  # noqa: E712
        ).update({Notification.is_read: True}, synchronize_session=False)
        self.db.commit()
        return updated
