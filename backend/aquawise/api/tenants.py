import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from aquawise.api.dependencies import get_actor_id, get_tenant
from aquawise.database import get_db
from aquawise.exceptions import Forbidden
from aquawise.models import Tenant, TenantMember
from aquawise.schemas import TenantCreate, TenantResponse, TenantMemberCreate, TenantMemberResponse
from aquawise.services.membership import ADMIN, MANAGER, normalize_role, require_role

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=TenantResponse, status_code=201)
async def create_tenant(tenant: TenantCreate, db: Session = Depends(get_db)):
    """Create a new tenant (irrigation company)."""
    existing = db.query(Tenant).filter(Tenant.name == tenant.name).first()
    if existing:
        raise HTTPException(status_code=400, detail="Tenant already exists")

    db_tenant = Tenant(**tenant.model_dump())
    db.add(db_tenant)
    db.commit()
    db.refresh(db_tenant)
    return db_tenant


@router.get("/{tenant_id}", response_model=TenantResponse)
async def get_tenant_details(tenant: Tenant = Depends(get_tenant)):
    return tenant


@router.post("/{tenant_id}/members", response_model=TenantMemberResponse, status_code=201)
async def add_member(
    member: TenantMemberCreate,
    tenant: Tenant = Depends(get_tenant),
    actor_id: str = Depends(get_actor_id),
    db: Session = Depends(get_db)
):
    """Add a user to a tenant. The first member must be the caller and becomes the tenant's admin."""
    has_members = db.query(TenantMember).filter(TenantMember.tenant_id == tenant.id).first() is not None
    role = normalize_role(member.role)
    if has_members:
        require_role(db, tenant.id, actor_id, ADMIN)
    elif member.user_id != actor_id:
        logger.warning(f"User {actor_id} tried to make {member.user_id} the first admin of tenant {tenant.id}")
        raise Forbidden("The first member of a tenant must be the caller")
    else:
        role = ADMIN

    existing = db.query(TenantMember).filter(
        TenantMember.tenant_id == tenant.id,
        TenantMember.user_id == member.user_id
    ).first()
    if existing:
        raise HTTPException(status_code=400, detail="User is already a member of this tenant")

    db_member = TenantMember(
        tenant_id=tenant.id,
        user_id=member.user_id,
        name=member.name,
        email=member.email,
        role=role,
    )
    db.add(db_member)
    db.commit()
    db.refresh(db_member)
    return db_member


@router.get("/{tenant_id}/members", response_model=List[TenantMemberResponse])
async def list_members(
    tenant: Tenant = Depends(get_tenant),
    actor_id: str = Depends(get_actor_id),
    db: Session = Depends(get_db)
):
    require_role(db, tenant.id, actor_id, MANAGER)
    return db.query(TenantMember).filter(TenantMember.tenant_id == tenant.id).order_by(TenantMember.id).all()
