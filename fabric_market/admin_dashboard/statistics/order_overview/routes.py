from fastapi import APIRouter, Depends, HTTPException
from typing import List

from fabric_market.config import Config
from fabric_market.errors import FabricMarketException
from fabric_market.orders.dependencies import OrderScope, get_stored_orders
from fabric_market.orders.schemas import OrderDocuments, OrderRecord
from fabric_market.orders.service import order_records_from_documents, scope_orders
from .service import get_order_overview
from .schemas import OrderOverview

order_overview_router = APIRouter()


@order_overview_router.get("/overview", response_model=OrderOverview)
async def get_overview(
    scope: OrderScope = Depends(),
    orders: List[OrderRecord] = Depends(get_stored_orders),
) -> OrderOverview:
    try:
        return get_order_overview(
            scope_orders(orders, scope.role, scope.user_id),
            top_products=Config.TOP_PRODUCTS_LIMIT,
        )
    except FabricMarketException:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"An error occurred while building the order overview: {str(e)}"
        )


@order_overview_router.post("/overview", response_model=OrderOverview)
async def post_overview(
    payload: OrderDocuments,
    scope: OrderScope = Depends(),
) -> OrderOverview:
    try:
        orders = order_records_from_documents(payload.orders)
        return get_order_overview(
            scope_orders(orders, scope.role, scope.user_id),
            top_products=Config.TOP_PRODUCTS_LIMIT,
        )
    except FabricMarketException:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"An error occurred while building the order overview: {str(e)}"
        )
