from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, ForeignKey
from aquawise.database import Base
from aquawise.timeutil import utcnow


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False, index=True)
    user_id = Column(String(128), nullable=False, index=True)
    message = Column(String(500), nullable=False)
    details = Column(Text, nullable=True)
    link = Column(String(500), nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow, index=True)

    def __repr__(self):
        return f"<Notification(id={self.id}, user_id='{self.user_id}', is_read={self.is_read})>"
