from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey, UniqueConstraint
from aquawise.database import Base
from aquawise.timeutil import utcnow


class UsageEntry(Base):
    """Daily water usage booked against a customer."""
    __tablename__ = "usage_entries"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False, index=True)
    user_id = Column(String(128), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    gallons = Column(Float, nullable=False, default=0.0)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint('tenant_id', 'user_id', 'date', name='uq_usage_user_day'),
    )

    def __repr__(self):
        return f"<UsageEntry(user_id='{self.user_id}', date={self.date}, gallons={self.gallons})>"
