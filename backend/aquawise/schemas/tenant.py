from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional

from aquawise.services.units import SUPPORTED_UNITS


class TenantBase(BaseModel):
    name: str
    default_unit: str = "gallons"
    water_orders_enabled: bool = True

    @field_validator('default_unit')
    @classmethod
    def known_unit(cls, v):
        if v not in SUPPORTED_UNITS:
            raise ValueError(f"Unknown unit '{v}'")
        return v


class TenantCreate(TenantBase):
    pass


class TenantResponse(TenantBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TenantMemberBase(BaseModel):
    user_id: str
    name: str
    email: Optional[str] = None
    role: str = "customer"


class TenantMemberCreate(TenantMemberBase):
    pass


class TenantMemberResponse(TenantMemberBase):
    id: int
    tenant_id: int
    created_at: datetime

    class Config:
        from_attributes = True
