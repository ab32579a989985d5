from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from aquawise.database import Base
from aquawise.timeutil import utcnow


class AvailabilityWindow(Base):
    __tablename__ = "availability_windows"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False, index=True)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False, index=True)
    gallons = Column(Float, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Constraints
    __table_args__ = (
        CheckConstraint('end_time > start_time', name='check_window_times'),
        CheckConstraint('gallons >= 0', name='check_window_gallons_non_negative'),
    )

    tenant = relationship("Tenant", back_populates="availability_windows")

    @property
    def gallons_per_hour(self):
        """Uniform draw rate across the window."""
        from aquawise.services.interval_rate import hourly_rate
        return hourly_rate(self.start_time, self.end_time, self.gallons)

    def __repr__(self):
        return f"<AvailabilityWindow(id={self.id}, tenant_id={self.tenant_id}, gallons={self.gallons})>"
