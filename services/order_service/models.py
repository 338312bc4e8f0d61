import enum
from sqlalchemy import Column, Integer, String, Float, JSON, DateTime, func
from shared.config.database import Base

class OrderStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    # Opaque payload, stored as given and never interpreted
    product_name = Column(String, nullable=True)
    quantity = Column(Integer, nullable=True)
    total_amount = Column(Float, nullable=True)
    items = Column(JSON, nullable=False, default=list)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
