"""
Per-tenant lock around the order read-check-write sequence.

Without it two concurrent submissions can read the same committed demand,
both pass the capacity check and together overcommit a window.
"""

import logging
from contextlib import contextmanager
import redis
from redis.exceptions import LockError, LockNotOwnedError

from aquawise.config import settings

logger = logging.getLogger(__name__)

_redis_client = None


def get_redis_client() -> redis.Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(settings.redis_url)
    return _redis_client


def lock_name(tenant_id: int) -> str:
    return f"aquawise:order-lock:{tenant_id}"


@contextmanager
def tenant_order_lock(tenant_id: int):
    """Hold the tenant's order lock for the duration of the block.

    Raises redis.exceptions.LockError only when the lock can't be acquired in
    ``order_lock_wait_seconds``. A lock that expired while held is logged on
    release; the work done under it has already been committed.
    """
    if not settings.order_lock_enabled:
        yield
        return

    lock = get_redis_client().lock(
        lock_name(tenant_id),
        timeout=settings.order_lock_timeout_seconds,
        blocking_timeout=settings.order_lock_wait_seconds,
    )
    if not lock.acquire():
        raise LockError(f"Could not acquire order lock for tenant {tenant_id}")
    try:
        yield
    finally:
        try:
            lock.release()
        except LockNotOwnedError:
            logger.warning(
                f"Order lock for tenant {tenant_id} expired after "
                f"{settings.order_lock_timeout_seconds}s before it was released"
            )
