import logging
from datetime import timezone
from typing import Dict, List, Sequence

from fabric_market.db.models import OrderStatus, DeliveryMethod
from fabric_market.orders.schemas import OrderRecord
from .schemas import OrderOverview, ProductSales, RevenueByDate, StatusBreakdown

logger = logging.getLogger(__name__)

TOP_PRODUCTS_LIMIT = 5

IN_PROGRESS_STATUSES = {
    OrderStatus.approved,
    OrderStatus.paid_deposit,
    OrderStatus.paid_full,
    OrderStatus.processing,
    OrderStatus.shipped,
}
COMPLETED_STATUSES = {OrderStatus.delivered, OrderStatus.completed}
AWAITING_PAYMENT_STATUSES = {OrderStatus.approved, OrderStatus.paid_deposit}
CANCELLED_STATUSES = {OrderStatus.rejected, OrderStatus.cancelled}


def get_top_selling_products(orders: Sequence[OrderRecord], limit: int = TOP_PRODUCTS_LIMIT) -> List[ProductSales]:
    """Get top selling products by revenue"""
    product_sales: Dict[str, Dict] = {}

    for order in orders:
        for item in order.products:
            product_id = item.id or item.name or ""
            if product_id not in product_sales:
                product_sales[product_id] = {'name': item.name, 'quantity': 0, 'revenue': 0.0}
            product_sales[product_id]['quantity'] += item.quantity
            product_sales[product_id]['revenue'] += item.price * item.quantity

    sorted_products = sorted(product_sales.items(), key=lambda x: x[1]['revenue'], reverse=True)[:limit]

    return [
        ProductSales(
            product_id=product_id,
            name=data['name'],
            quantity=data['quantity'],
            revenue=data['revenue'],
        )
        for product_id, data in sorted_products
    ]


def get_revenue_by_date(orders: Sequence[OrderRecord]) -> List[RevenueByDate]:
    """Collected revenue per UTC calendar date, oldest first"""
    revenue: Dict[str, float] = {}

    for order in orders:
        created_at = order.created_at
        if created_at.tzinfo is not None:
            created_at = created_at.astimezone(timezone.utc)
        day = created_at.date().isoformat()
        revenue[day] = revenue.get(day, 0.0) + order.paid_amount

    return [RevenueByDate(date=day, value=value) for day, value in sorted(revenue.items())]


def get_status_breakdown(orders: Sequence[OrderRecord]) -> List[StatusBreakdown]:
    status_counts: Dict[str, int] = {}
    for order in orders:
        status_counts[order.status.value] = status_counts.get(order.status.value, 0) + 1

    return [
        StatusBreakdown(status=status, count=count)
        for status, count in sorted(status_counts.items(), key=lambda x: x[1], reverse=True)
    ]


def get_order_overview(orders: Sequence[OrderRecord], top_products: int = TOP_PRODUCTS_LIMIT) -> OrderOverview:
    orders = list(orders)
    logger.info(f"Building order overview for {len(orders)} orders")

    return OrderOverview(
        total_orders=len(orders),
        total_revenue=sum((order.paid_amount for order in orders), 0.0),
        pending_approval=sum(1 for o in orders if o.status == OrderStatus.pending_approval),
        in_progress=sum(1 for o in orders if o.status in IN_PROGRESS_STATUSES),
        completed=sum(1 for o in orders if o.status in COMPLETED_STATUSES),
        pending_payment=sum(
            1 for o in orders
            if o.status in AWAITING_PAYMENT_STATUSES and (o.remaining_amount or 0) > 0
        ),
        shipping_orders=sum(1 for o in orders if o.delivery_method == DeliveryMethod.shipping),
        pickup_orders=sum(1 for o in orders if o.delivery_method == DeliveryMethod.pickup),
        cancelled_orders=sum(1 for o in orders if o.status in CANCELLED_STATUSES),
        top_selling_products=get_top_selling_products(orders, limit=top_products),
        revenue_by_date=get_revenue_by_date(orders),
        status_breakdown=get_status_breakdown(orders),
    )
