from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from fabric_market import app
from fabric_market.orders.dependencies import get_stored_orders
from fabric_market.orders.schemas import LineItem, OrderRecord


def make_order(order_id="ORD-001", status="approved", created_at=None, total=0.0, paid_amount=0.0,
               products=None, **fields):
    return OrderRecord(
        id=order_id,
        status=status,
        created_at=created_at or datetime(2024, 6, 10, 12, 0),
        total=total,
        paid_amount=paid_amount,
        products=[LineItem(**item) for item in (products or [])],
        **fields,
    )


@pytest.fixture
def sample_orders():
    """Four orders modelled on the marketplace's demo data"""
    return [
        make_order(
            "ORD-001",
            status="pending_approval",
            created_at=datetime(2024, 6, 5, 9, 0),
            total=129.97,
            paid_amount=0.0,
            deposit_amount=30.0,
            delivery_method="pickup",
            customer_id="3",
            seller_id="2",
            products=[
                {"id": "P1", "name": "Blue Cotton Fabric", "price": 24.99, "quantity": 2, "category": "cotton"},
                {"id": "P2", "name": "Sewing Kit", "price": 79.99, "quantity": 1, "category": "tools"},
            ],
        ),
        make_order(
            "ORD-002",
            status="processing",
            created_at=datetime(2024, 6, 8, 15, 30),
            total=89.97,
            paid_amount=89.97,
            delivery_method="shipping",
            customer_id="3",
            seller_id="2",
            shipping_company_id="4",
            products=[
                {"id": "P3", "name": "Silk Fabric", "price": 29.99, "quantity": 3, "category": "silk"},
            ],
        ),
        make_order(
            "ORD-003",
            status="shipped",
            created_at=datetime(2024, 6, 10, 8, 0),
            total=159.97,
            paid_amount=159.97,
            delivery_method="shipping",
            customer_id="5",
            seller_id="6",
            shipping_company_id="4",
            products=[
                {"id": "P4", "name": "Professional Scissors", "price": 59.99, "quantity": 1, "category": "tools"},
                {"id": "P5", "name": "Wool Yarn Set", "price": 49.99, "quantity": 2},
            ],
        ),
        make_order(
            "ORD-004",
            status="paid_deposit",
            created_at=datetime(2024, 6, 10, 17, 45),
            total=44.98,
            paid_amount=15.0,
            deposit_amount=15.0,
            delivery_method="pickup",
            customer_id="5",
            seller_id="6",
            products=[
                {"id": "P6", "name": "Leather Thread", "price": 24.99, "quantity": 1, "category": "notions"},
                {"id": "P7", "name": "Measuring Tape Set", "price": 19.99, "quantity": 1, "category": "tools"},
            ],
        ),
    ]


@pytest.fixture
def client(sample_orders):
    app.dependency_overrides[get_stored_orders] = lambda: sample_orders
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
