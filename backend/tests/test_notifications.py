"""Tests for services/notification_service.py."""

import httpx
import pytest

from aquawise.models import Notification
from aquawise.services import notification_service
from aquawise.services.notification_service import Notifier


class TestNotifier:
    def test_notify_persists_unread(self, db_session, tenant):
        n = Notifier(db_session, webhook_url="").notify(tenant.id, "cust-1", "Hello", details="d", link="/x")
        db_session.commit()

        stored = db_session.get(Notification, n.id)
        assert stored.message == "Hello"
        assert stored.details == "d"
        assert stored.link == "/x"
        assert stored.is_read is False

    def test_list_newest_first_and_unread_filter(self, db_session, tenant):
        notifier = Notifier(db_session, webhook_url="")
        first = notifier.notify(tenant.id, "cust-1", "first")
        second = notifier.notify(tenant.id, "cust-1", "second")
        notifier.notify(tenant.id, "cust-2", "someone else")
        db_session.commit()

        assert [n.message for n in notifier.list_for_user(tenant.id, "cust-1")] == ["second", "first"]

        notifier.mark_read(tenant.id, "cust-1", first.id)
        assert [n.id for n in notifier.list_for_user(tenant.id, "cust-1", unread_only=True)] == [second.id]

    def test_mark_read_is_scoped_to_owner(self, db_session, tenant):
        notifier = Notifier(db_session, webhook_url="")
        n = notifier.notify(tenant.id, "cust-1", "mine")
        db_session.commit()
        assert notifier.mark_read(tenant.id, "cust-2", n.id) is None

    def test_mark_all_read(self, db_session, tenant):
        notifier = Notifier(db_session, webhook_url="")
        for i in range(3):
            notifier.notify(tenant.id, "cust-1", f"n{i}")
        db_session.commit()

        assert notifier.mark_all_read(tenant.id, "cust-1") == 3
        assert notifier.list_for_user(tenant.id, "cust-1", unread_only=True) == []


class TestWebhook:
    URL = "https://hooks.example.com/aquawise"

    def test_posts_payload_on_dispatch(self, db_session, tenant, monkeypatch):
        calls = []

        def fake_post(url, json=None, timeout=None):
            calls.append((url, json))
            return httpx.Response(200, request=httpx.Request("POST", url))

        monkeypatch.setattr(notification_service.httpx, "post", fake_post)
        notifier = Notifier(db_session, webhook_url=self.URL)
        notifier.notify(tenant.id, "cust-1", "Your water order was approved.", link="/water-orders")

        # Nothing leaves the process until the caller dispatches
        assert calls == []
        assert notifier.dispatch_pending() == 1
        assert calls == [(
            self.URL,
            {
                "tenant_id": tenant.id,
                "user_id": "cust-1",
                "message": "Your water order was approved.",
                "details": None,
                "link": "/water-orders",
            },
        )]
        assert notifier.dispatch_pending() == 0

    def test_discarded_payloads_are_never_sent(self, db_session, tenant, monkeypatch):
        calls = []
        monkeypatch.setattr(notification_service.httpx, "post", lambda url, **kwargs: calls.append(url))
        notifier = Notifier(db_session, webhook_url=self.URL)
        notifier.notify(tenant.id, "cust-1", "rolled back")

        notifier.discard_pending()

        assert notifier.dispatch_pending() == 0
        assert calls == []

    @pytest.mark.parametrize("failure", ["connect", "status"])
    def test_failures_are_swallowed(self, db_session, tenant, monkeypatch, failure):
        def fake_post(url, json=None, timeout=None):
            request = httpx.Request("POST", url)
            if failure == "connect":
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(502, request=request)

        monkeypatch.setattr(notification_service.httpx, "post", fake_post)
        notifier = Notifier(db_session, webhook_url=self.URL)
        n = notifier.notify(tenant.id, "cust-1", "still stored")
        db_session.commit()

        assert notifier.dispatch_pending() == 0
        assert db_session.get(Notification, n.id) is not None
