from aquawise.schemas.tenant import TenantCreate, TenantResponse, TenantMemberCreate, TenantMemberResponse
from aquawise.schemas.availability import AvailabilityWindowCreate, AvailabilityWindowUpdate, AvailabilityWindowResponse
from aquawise.schemas.water_order import (
    WaterOrderCreate, WaterOrderResponse, WaterOrderStatusUpdate,
    AvailabilityCheckRequest, AvailabilityCheckResponse,
)
from aquawise.schemas.notification import NotificationResponse
from aquawise.schemas.usage import UsageEntryResponse

__all__ = [
    "TenantCreate", "TenantResponse", "TenantMemberCreate", "TenantMemberResponse",
    "AvailabilityWindowCreate", "AvailabilityWindowUpdate", "AvailabilityWindowResponse",
    "WaterOrderCreate", "WaterOrderResponse", "WaterOrderStatusUpdate",
    "AvailabilityCheckRequest", "AvailabilityCheckResponse",
    "NotificationResponse",
    "UsageEntryResponse",
]
