"""
Tenant membership and role checks.

Roles, least to most privileged: customer < manager < admin < super_admin.
"""

import logging
from typing import Optional
from sqlalchemy.orm import Session

from aquawise.exceptions import Forbidden
from aquawise.models import TenantMember

logger = logging.getLogger(__name__)

CUSTOMER = "customer"
MANAGER = "manager"
ADMIN = "admin"
SUPER_ADMIN = "super_admin"

ROLE_RANK = {
    CUSTOMER: 0,
    MANAGER: 1,
    ADMIN: 2,
    SUPER_ADMIN: 3,
}


def normalize_role(raw: Optional[str]) -> str:
    """Map free-form role labels ("Admin & Customer", "Super Admin") to a canonical role."""
    r = (raw or "").lower()
    if "super" in r:
        return SUPER_ADMIN
    if "admin" in r:
        return ADMIN
    if "manager" in r:
        return MANAGER
    return CUSTOMER


def has_at_least(role: Optional[str], minimum: str) -> bool:
    return ROLE_RANK[normalize_role(role)] >= ROLE_RANK[minimum]


def get_member(db: Session, tenant_id: int, user_id: str) -> Optional[TenantMember]:
    return db.query(TenantMember).filter(
        TenantMember.tenant_id == tenant_id,
        TenantMember.user_id == user_id
    ).first()


def verify_membership(db: Session, tenant_id: int, user_id: str) -> bool:
    return get_member(db, tenant_id, user_id) is not None


def require_role(db: Session, tenant_id: int, user_id: str, minimum: str = CUSTOMER) -> TenantMember:
    """Return the actor's membership or raise Forbidden."""
    member = get_member(db, tenant_id, user_id)
    if member is None:
        logger.warning(f"User {user_id} is not a member of tenant {tenant_id}")
        raise Forbidden("User is not a member of this tenant")
    if not has_at_least(member.role, minimum):
        logger.warning(f"User {user_id} ({member.role}) lacks {minimum} role in tenant {tenant_id}")
        raise Forbidden(f"Requires {minimum} role")
    return member
