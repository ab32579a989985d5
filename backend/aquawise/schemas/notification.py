from pydantic import BaseModel, field_serializer
from datetime import datetime
from typing import Optional

from aquawise.schemas._validators import serialize_utc


class NotificationResponse(BaseModel):
    id: int
    user_id: str
    message: str
    details: Optional[str] = None
    link: Optional[str] = None
    is_read: bool
    created_at: datetime

    @field_serializer('created_at')
    def serialize_dt(self, dt: datetime, _info):
        return serialize_utc(dt)

    class Config:
        from_attributes = True
