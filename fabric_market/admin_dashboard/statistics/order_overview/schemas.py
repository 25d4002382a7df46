from pydantic import BaseModel
from typing import List, Optional

class ProductSales(BaseModel):
    product_id: str
    name: Optional[str] = None
    quantity: int
    revenue: float

class RevenueByDate(BaseModel):
    date: str
    value: float

class StatusBreakdown(BaseModel):
    status: str
    count: int

class OrderOverview(BaseModel):
    total_orders: int
    total_revenue: float
    pending_approval: int
    in_progress: int
    completed: int
    pending_payment: int
    shipping_orders: int
    pickup_orders: int
    cancelled_orders: int
    top_selling_products: List[ProductSales]
    revenue_by_date: List[RevenueByDate]
    status_breakdown: List[StatusBreakdown]
