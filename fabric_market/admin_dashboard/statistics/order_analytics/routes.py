from datetime import date
from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional

from fabric_market.config import Config
from fabric_market.errors import FabricMarketException
from fabric_market.orders.dependencies import OrderScope, get_report_date, get_stored_orders, report_timezone
from fabric_market.orders.schemas import OrderDocuments, OrderRecord
from fabric_market.orders.service import order_records_from_documents, scope_orders
from .service import get_order_analytics
from .schemas import OrderAnalytics

order_analytics_router = APIRouter()


def build_dashboard(orders: List[OrderRecord], report_date: Optional[date], scope: OrderScope) -> OrderAnalytics:
    return get_order_analytics(
        scope_orders(orders, scope.role, scope.user_id),
        today=report_date,
        days=Config.ANALYTICS_WINDOW_DAYS,
        top_categories=Config.TOP_CATEGORIES_LIMIT,
        default_category=Config.DEFAULT_CATEGORY,
        tz=report_timezone(),
    )


@order_analytics_router.get("/dashboard", response_model=OrderAnalytics)
async def get_dashboard_analytics(
    report_date: Optional[date] = Depends(get_report_date),
    scope: OrderScope = Depends(),
    orders: List[OrderRecord] = Depends(get_stored_orders),
) -> OrderAnalytics:
    """
    Get dashboard analytics for stored orders:
    - Order count per status
    - Orders and billed amount for each of the last 7 days
    - Total sales (collected) and average order value
    - Top 5 categories by sales
    """
    try:
        return build_dashboard(orders, report_date, scope)
    except FabricMarketException:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error building order analytics: {str(e)}"
        )


@order_analytics_router.post("/dashboard", response_model=OrderAnalytics)
async def post_dashboard_analytics(
    payload: OrderDocuments,
    report_date: Optional[date] = Depends(get_report_date),
    scope: OrderScope = Depends(),
) -> OrderAnalytics:
    """Same analytics as GET /dashboard, computed over the orders sent in the body."""
    try:
        orders = order_records_from_documents(payload.orders)
        return build_dashboard(orders, report_date, scope)
    except FabricMarketException:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error building order analytics: {str(e)}"
        )
