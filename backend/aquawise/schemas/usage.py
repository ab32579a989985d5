import datetime
from pydantic import BaseModel


class UsageEntryResponse(BaseModel):
    id: int
    tenant_id: int
    user_id: str
    date: datetime.date
    gallons: float

    class Config:
        from_attributes = True
