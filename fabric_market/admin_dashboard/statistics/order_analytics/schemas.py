from pydantic import BaseModel
from typing import List
from datetime import date

class StatusCount(BaseModel):
    status: str
    count: int

class DailyOrders(BaseModel):
    date: date
    count: int
    amount: float

class CategorySales(BaseModel):
    category: str
    sales: float
    percentage: float

class OrderAnalytics(BaseModel):
    order_status_counts: List[StatusCount]
    orders_by_day: List[DailyOrders]
    total_sales_amount: float
    average_order_value: float
    top_selling_categories: List[CategorySales]
