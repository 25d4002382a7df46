from datetime import datetime, timedelta, timezone

import pytest

from fabric_market.admin_dashboard.statistics.order_overview.service import (
    get_order_overview,
    get_revenue_by_date,
    get_status_breakdown,
    get_top_selling_products,
)
from conftest import make_order


def test_overview_counts_orders_by_stage(sample_orders):
    overview = get_order_overview(sample_orders)

    assert overview.total_orders == 4
    assert overview.total_revenue == pytest.approx(89.97 + 159.97 + 15.0)
    assert overview.pending_approval == 1
    assert overview.in_progress == 3
    assert overview.completed == 0
    assert overview.pending_payment == 1
    assert overview.cancelled_orders == 0
    assert overview.shipping_orders == 2
    assert overview.pickup_orders == 2


def test_pending_payment_needs_an_outstanding_balance():
    orders = [
        make_order("a", status="approved", total=100, paid_amount=0),
        make_order("b", status="approved", total=100, paid_amount=100),
        make_order("c", status="paid_deposit", total=100, paid_amount=20, remaining_amount=80),
        make_order("d", status="paid_full", total=100, paid_amount=50),
    ]

    assert get_order_overview(orders).pending_payment == 2


def test_completed_and_cancelled_group_equivalent_statuses():
    orders = [
        make_order("a", status="delivered"),
        make_order("b", status="completed"),
        make_order("c", status="rejected"),
        make_order("d", status="cancelled"),
    ]

    overview = get_order_overview(orders)

    assert overview.completed == 2
    assert overview.cancelled_orders == 2
    assert overview.in_progress == 0


def test_top_selling_products_rank_by_revenue():
    orders = [
        make_order("a", products=[
            {"id": "P1", "name": "Cotton", "price": 10, "quantity": 3},
            {"id": "P2", "name": "Silk", "price": 40, "quantity": 1},
        ]),
        make_order("b", products=[{"id": "P1", "name": "Cotton", "price": 10, "quantity": 2}]),
    ]

    products = get_top_selling_products(orders)

    assert [(p.product_id, p.quantity, p.revenue) for p in products] == [("P1", 5, 50), ("P2", 1, 40)]


def test_top_selling_products_are_limited():
    orders = [
        make_order(products=[{"id": f"P{i}", "price": i, "quantity": 1} for i in range(1, 9)])
    ]

    products = get_top_selling_products(orders, limit=5)

    assert [p.product_id for p in products] == ["P8", "P7", "P6", "P5", "P4"]


def test_revenue_by_date_uses_utc_days_in_ascending_order():
    plus_three = timezone(timedelta(hours=3))
    orders = [
        make_order("a", created_at=datetime(2024, 6, 10, 1, 0, tzinfo=plus_three), paid_amount=30),
        make_order("b", created_at=datetime(2024, 6, 8, 12, 0), paid_amount=10),
        make_order("c", created_at=datetime(2024, 6, 9, 20, 0, tzinfo=timezone.utc), paid_amount=5),
    ]

    revenue = get_revenue_by_date(orders)

    assert [(entry.date, entry.value) for entry in revenue] == [("2024-06-08", 10), ("2024-06-09", 35)]


def test_status_breakdown_is_sorted_by_count():
    orders = [
        make_order("a", status="shipped"),
        make_order("b", status="approved"),
        make_order("c", status="approved"),
    ]

    breakdown = get_status_breakdown(orders)

    assert [(entry.status, entry.count) for entry in breakdown] == [("approved", 2), ("shipped", 1)]


def test_overview_of_no_orders():
    overview = get_order_overview([])

    assert overview.total_orders == 0
    assert overview.total_revenue == 0
    assert overview.top_selling_products == []
    assert overview.revenue_by_date == []
    assert overview.status_breakdown == []
