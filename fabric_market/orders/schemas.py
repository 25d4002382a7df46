from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional
from datetime import datetime
from enum import Enum

from fabric_market.db.models import OrderStatus, DeliveryMethod


class Role(str, Enum):
    admin = "admin"
    seller = "seller"
    buyer = "buyer"
    shipping = "shipping"


class RecordModel(BaseModel):
    """Accepts both snake_case and the camelCase keys of marketplace documents."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class LineItem(RecordModel):
    id: Optional[str] = None
    name: Optional[str] = None
    price: float
    quantity: int
    category: Optional[str] = None


class OrderRecord(RecordModel):
    id: str
    status: OrderStatus
    created_at: datetime
    total: float
    paid_amount: float = 0.0
    remaining_amount: Optional[float] = None
    deposit_amount: Optional[float] = None
    delivery_method: Optional[DeliveryMethod] = None
    customer_id: Optional[str] = None
    seller_id: Optional[str] = None
    shipping_company_id: Optional[str] = None
    products: List[LineItem] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _flatten_customer(cls, data: Any) -> Any:
        # Stored documents nest the buyer as {"customer": {"id": ..., "name": ...}}
        if isinstance(data, dict) and isinstance(data.get("customer"), dict):
            data = dict(data)
            customer = data.pop("customer")
            if "customerId" not in data and "customer_id" not in data:
                data["customer_id"] = customer.get("id")
        return data

    @model_validator(mode="after")
    def _default_remaining_amount(self) -> "OrderRecord":
        if self.remaining_amount is None:
            self.remaining_amount = self.total - self.paid_amount
        return self


class OrderDocuments(BaseModel):
    orders: List[Dict[str, Any]] = Field(default_factory=list)
