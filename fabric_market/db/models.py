from sqlmodel import SQLModel, Field, Column, Relationship
import sqlalchemy.dialects.postgresql as pg
from sqlalchemy import Numeric, ForeignKey
from datetime import datetime
from typing import Optional, List
from enum import Enum
import uuid


class OrderStatus(str, Enum):
    pending_approval = "pending_approval"  # placed, waiting for the seller
    approved = "approved"
    rejected = "rejected"
    paid_deposit = "paid_deposit"  # pickup orders only
    paid_full = "paid_full"
    processing = "processing"
    shipped = "shipped"
    delivered = "delivered"
    cancelled = "cancelled"
    completed = "completed"


class DeliveryMethod(str, Enum):
    pickup = "pickup"
    shipping = "shipping"


def generate_order_uid():
    return f"ORD-{uuid.uuid4().hex[:6].upper()}"  # Example: ORD-3F9D1A


class Order(SQLModel, table=True):
    __tablename__ = "orders"

    uid: str = Field(default_factory=generate_order_uid, primary_key=True, index=True, unique=True)
    customer_id: Optional[str] = Field(default=None, index=True)
    seller_id: Optional[str] = Field(default=None, index=True)
    shipping_company_id: Optional[str] = Field(default=None, index=True)
    status: OrderStatus = Field(default=OrderStatus.pending_approval)
    delivery_method: Optional[DeliveryMethod] = None
    total: float = Field(sa_column=Column(Numeric(10, 2), nullable=False))
    deposit_amount: Optional[float] = Field(default=None, sa_column=Column(Numeric(10, 2), nullable=True))
    paid_amount: float = Field(default=0.0, sa_column=Column(Numeric(10, 2), default=0.0))
    remaining_amount: float = Field(default=0.0, sa_column=Column(Numeric(10, 2), default=0.0))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(pg.TIMESTAMP(timezone=True), default=datetime.now))

    items: List["OrderItem"] = Relationship(back_populates="order", sa_relationship_kwargs={'lazy': 'selectin', 'cascade': 'all, delete-orphan'})

    def __repr__(self):
        return f"<Order {self.uid} {self.status}>"


class OrderItem(SQLModel, table=True):
    __tablename__ = "order_items"

    uid: uuid.UUID = Field(
        sa_column=Column(
            pg.UUID,
            nullable=False,
            primary_key=True,
            default=uuid.uuid4
        )
    )
    order_uid: str = Field(sa_column=Column("order_uid", ForeignKey("orders.uid"), nullable=False, index=True))
    product_id: Optional[str] = None
    name: Optional[str] = None
    # Older orders were stored without a category
    category: Optional[str] = Field(default=None, nullable=True)
    quantity: int
    price: float = Field(sa_column=Column(Numeric(10, 2), nullable=False))

    order: Order = Relationship(back_populates="items")
