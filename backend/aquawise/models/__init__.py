from aquawise.models.tenant import Tenant, TenantMember
from aquawise.models.availability import AvailabilityWindow
from aquawise.models.water_order import WaterOrder, OrderStatus
from aquawise.models.notification import Notification
from aquawise.models.usage_entry import UsageEntry

__all__ = [
    "Tenant",
    "TenantMember",
    "AvailabilityWindow",
    "WaterOrder",
    "OrderStatus",
    "Notification",
    "UsageEntry",
]
