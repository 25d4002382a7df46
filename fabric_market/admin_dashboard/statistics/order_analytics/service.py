import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Dict, List, Optional, Sequence
from zoneinfo import ZoneInfo

from fabric_market.config import Config
from fabric_market.orders.schemas import OrderRecord
from .schemas import StatusCount, DailyOrders, CategorySales, OrderAnalytics

logger = logging.getLogger(__name__)

DAILY_WINDOW_DAYS = 7
TOP_CATEGORIES_LIMIT = 5
DEFAULT_CATEGORY = "other"


def report_today(tz: Optional[tzinfo] = None) -> date:
    """Current calendar date in the report timezone"""
    return datetime.now(tz or ZoneInfo(Config.REPORT_TIMEZONE)).date()


def order_date(created_at: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar date an order falls on; aware timestamps are moved to `tz` first"""
    if tz is not None and created_at.tzinfo is not None:
        created_at = created_at.astimezone(tz)
    return created_at.date()


def count_orders_by_status(orders: Sequence[OrderRecord]) -> List[StatusCount]:
    """Count orders per status, in the order each status is first seen"""
    status_counts: Dict[str, int] = {}
    for order in orders:
        status = order.status.value
        status_counts[status] = status_counts.get(status, 0) + 1

    return [StatusCount(status=status, count=count) for status, count in status_counts.items()]


def build_daily_series(
    orders: Sequence[OrderRecord],
    today: date,
    days: int = DAILY_WINDOW_DAYS,
    tz: Optional[tzinfo] = None,
) -> List[DailyOrders]:
    """Get order count and billed amount for each of the last `days` days, `today` included"""
    # Every day of the window is present even when no order falls on it
    daily_data = {
        today - timedelta(days=offset): {'count': 0, 'amount': 0.0}
        for offset in range(days - 1, -1, -1)
    }

    for order in orders:
        bucket = daily_data.get(order_date(order.created_at, tz))
        if bucket is None:
            continue
        bucket['count'] += 1
        bucket['amount'] += order.total

    return [
        DailyOrders(date=day, count=data['count'], amount=data['amount'])
        for day, data in daily_data.items()
    ]


def total_sales_amount(orders: Sequence[OrderRecord]) -> float:
    """Collected revenue: sum of paid amounts, not billed totals"""
    return sum((order.paid_amount for order in orders), 0.0)


def average_order_value(orders: Sequence[OrderRecord]) -> float:
    if not orders:
        return 0.0
    return total_sales_amount(orders) / len(orders)


def top_category_sales(
    orders: Sequence[OrderRecord],
    limit: int = TOP_CATEGORIES_LIMIT,
    default_category: str = DEFAULT_CATEGORY,
) -> List[CategorySales]:
    """Get the best selling categories by line item sales (price * quantity)"""
    category_sales: Dict[str, float] = {}
    for order in orders:
        for item in order.products:
            category = item.category or default_category
            category_sales[category] = category_sales.get(category, 0.0) + item.price * item.quantity

    grand_total = sum(category_sales.values())

    # sorted() is stable, ties keep first-seen order
    ranked = sorted(category_sales.items(), key=lambda entry: entry[1], reverse=True)[:limit]

    return [
        CategorySales(
            category=category,
            sales=sales,
            percentage=(sales / grand_total * 100) if grand_total else 0.0,
        )
        for category, sales in ranked
    ]


def get_order_analytics(
    orders: Sequence[OrderRecord],
    today: Optional[date] = None,
    days: int = DAILY_WINDOW_DAYS,
    top_categories: int = TOP_CATEGORIES_LIMIT,
    default_category: str = DEFAULT_CATEGORY,
    tz: Optional[tzinfo] = None,
) -> OrderAnalytics:
    """Build the admin dashboard analytics for a list of orders.

    Nothing is cached: every call recomputes all views from `orders`. The
    daily series ends at `today`, which defaults to the current date in the
    configured report timezone.
    """
    orders = list(orders)
    if today is None:
        today = report_today(tz)

    logger.info(f"Aggregating analytics for {len(orders)} orders up to {today.isoformat()}")

    return OrderAnalytics(
        order_status_counts=count_orders_by_status(orders),
        orders_by_day=build_daily_series(orders, today, days=days, tz=tz),
        total_sales_amount=total_sales_amount(orders),
        average_order_value=average_order_value(orders),
        top_selling_categories=top_category_sales(
            orders, limit=top_categories, default_category=default_category
        ),
    )
