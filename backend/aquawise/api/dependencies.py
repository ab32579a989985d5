"""
Request-scoped dependencies shared by the routers.

Authentication is handled upstream; the caller's identity arrives in the
X-User-Id header and is only checked against tenant membership here.
"""

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session
from typing import Annotated, Optional

from aquawise.database import get_db
from aquawise.models import Tenant


async def get_actor_id(x_user_id: Annotated[Optional[str], Header()] = None) -> str:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="X-User-Id header is missing")
    return x_user_id


async def get_tenant(tenant_id: int, db: Session = Depends(get_db)) -> Tenant:
    tenant = db.query(Tenant).filter(Tenant.id == tenant_id).first()
    if not tenant:
        raise HTTPException(status_code=404, detail="Tenant not found")
    return tenant
