from pydantic import BaseModel, field_serializer, field_validator, model_validator
from datetime import datetime
from typing import Optional

from aquawise.schemas._validators import serialize_utc, utc_naive
from aquawise.services.units import SUPPORTED_UNITS


class AvailabilityWindowBase(BaseModel):
    start_time: datetime
    end_time: datetime

    @field_validator('start_time', 'end_time')
    @classmethod
    def normalize_timestamp(cls, v):
        return utc_naive(v)

    @field_validator('end_time')
    @classmethod
    def end_after_start(cls, v, info):
        if 'start_time' in info.data and v <= info.data['start_time']:
            raise ValueError('end_time must be after start_time')
        return v


class AvailabilityWindowCreate(AvailabilityWindowBase):
    amount: float
    unit: str = "gallons"

    @field_validator('unit')
    @classmethod
    def known_unit(cls, v):
        if v not in SUPPORTED_UNITS:
            raise ValueError(f"Unknown unit '{v}'")
        return v


class AvailabilityWindowUpdate(BaseModel):
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    amount: Optional[float] = None
    unit: Optional[str] = None

    @field_validator('start_time', 'end_time')
    @classmethod
    def normalize_timestamp(cls, v):
        return utc_naive(v)

    @field_validator('unit')
    @classmethod
    def known_unit(cls, v):
        if v is not None and v not in SUPPORTED_UNITS:
            raise ValueError(f"Unknown unit '{v}'")
        return v

    @model_validator(mode='after')
    def amount_needs_unit(self):
        if self.amount is not None and self.unit is None:
            raise ValueError('unit is required when amount is given')
        return self


class AvailabilityWindowResponse(AvailabilityWindowBase):
    id: int
    tenant_id: int
    gallons: float
    gallons_per_hour: float
    display_amount: Optional[float] = None
    display_unit: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_serializer('start_time', 'end_time', 'created_at', 'updated_at')
    def serialize_dt(self, dt: datetime, _info):
        return serialize_utc(dt)

    class Config:
        from_attributes = True
