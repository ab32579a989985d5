from sqlalchemy import Column, Integer, String, Float, DateTime, Text, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
import enum
from aquawise.database import Base
from aquawise.timeutil import utcnow


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


# Only these statuses reserve capacity
COMMITTED_STATUSES = (OrderStatus.APPROVED.value, OrderStatus.COMPLETED.value)

ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING.value: {OrderStatus.APPROVED.value, OrderStatus.REJECTED.value},
    OrderStatus.APPROVED.value: {OrderStatus.COMPLETED.value, OrderStatus.REJECTED.value},
    OrderStatus.REJECTED.value: set(),
    OrderStatus.COMPLETED.value: set(),
}


class WaterOrder(Base):
    __tablename__ = "water_orders"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False, index=True)
    user_id = Column(String(128), nullable=False, index=True)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False, index=True)
    amount = Column(Float, nullable=False)  # As entered
    unit = Column(String(20), nullable=False)  # As entered
    total_gallons = Column(Float, nullable=False)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)
    created_at = Column(DateTime, default=utcnow)
    reviewed_by = Column(String(128), nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    admin_notes = Column(Text, nullable=True)

    # Constraints
    __table_args__ = (
        CheckConstraint('end_time > start_time', name='check_order_times'),
        CheckConstraint('total_gallons >= 0', name='check_order_gallons_non_negative'),
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'completed')",
            name='check_order_status',
        ),
    )

    tenant = relationship("Tenant", back_populates="water_orders")

    @property
    def gallons_per_hour(self):
        from aquawise.services.interval_rate import hourly_rate
        return hourly_rate(self.start_time, self.end_time, self.total_gallons)

    def __repr__(self):
        return f"<WaterOrder(id={self.id}, tenant_id={self.tenant_id}, status='{self.status}')>"
