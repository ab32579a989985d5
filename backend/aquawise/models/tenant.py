from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from aquawise.database import Base
from aquawise.timeutil import utcnow


class Tenant(Base):
    """An irrigation company. All water data is scoped to a tenant."""
    __tablename__ = "tenants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False, index=True)
    default_unit = Column(String(20), nullable=False, default="gallons")
    water_orders_enabled = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    members = relationship("TenantMember", back_populates="tenant", cascade="all, delete-orphan")
    availability_windows = relationship("AvailabilityWindow", back_populates="tenant", cascade="all, delete-orphan")
    water_orders = relationship("WaterOrder", back_populates="tenant", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Tenant(id={self.id}, name='{self.name}')>"


class TenantMember(Base):
    __tablename__ = "tenant_members"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False, index=True)
    user_id = Column(String(128), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    role = Column(String(50), nullable=False, default="customer")  # customer, manager, admin, super_admin
    created_at = Column(DateTime, default=utcnow)

    __table_args__ = (
        UniqueConstraint('tenant_id', 'user_id', name='uq_tenant_member'),
    )

    tenant = relationship("Tenant", back_populates="members")

    def __repr__(self):
        return f"<TenantMember(tenant_id={self.tenant_id}, user_id='{self.user_id}', role='{self.role}')>"
