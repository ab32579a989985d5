from pydantic import BaseModel, field_serializer, field_validator
from datetime import datetime
from typing import Optional

from aquawise.models.water_order import OrderStatus
from aquawise.schemas._validators import serialize_utc, utc_naive
from aquawise.services.units import SUPPORTED_UNITS


class WaterOrderCreate(BaseModel):
    start_time: datetime
    end_time: datetime
    amount: float
    unit: str

    @field_validator('start_time', 'end_time')
    @classmethod
    def normalize_timestamp(cls, v):
        return utc_naive(v)

    @field_validator('unit')
    @classmethod
    def known_unit(cls, v):
        if v not in SUPPORTED_UNITS:
            raise ValueError(f"Unknown unit '{v}'")
        return v


class AvailabilityCheckRequest(BaseModel):
    start: str  # ISO 8601
    end: str  # ISO 8601
    total_gallons: float


class AvailabilityCheckResponse(BaseModel):
    ok: bool
    requested_per_hour: float
    infeasible_hour: Optional[datetime] = None
    capacity: Optional[float] = None
    demand: Optional[float] = None

    @field_serializer('infeasible_hour')
    def serialize_dt(self, dt: datetime, _info):
        return serialize_utc(dt)

    class Config:
        from_attributes = True


class WaterOrderStatusUpdate(BaseModel):
    status: OrderStatus
    notes: Optional[str] = None


class WaterOrderResponse(BaseModel):
    id: int
    tenant_id: int
    user_id: str
    start_time: datetime
    end_time: datetime
    amount: float
    unit: str
    total_gallons: float
    gallons_per_hour: float
    status: OrderStatus
    created_at: datetime
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    admin_notes: Optional[str] = None

    @field_serializer('start_time', 'end_time', 'created_at', 'reviewed_at')
    def serialize_dt(self, dt: datetime, _info):
        return serialize_utc(dt)

    class Config:
        from_attributes = True
