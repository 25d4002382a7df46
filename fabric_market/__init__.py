from fastapi import FastAPI
import logging

from fabric_market.config import Config
from fabric_market.admin_dashboard.statistics.order_analytics.routes import order_analytics_router
from fabric_market.admin_dashboard.statistics.order_overview.routes import order_overview_router

from .errors import register_all_errors
from .middleware import register_middleware

version = "v1"

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title = "Fabric Market",
    description = "Order analytics for the fabric marketplace dashboards",
    version = version,
)


register_all_errors(app)
register_middleware(app)


@app.get("/health", tags=["health"])
async def health() -> dict:
    return {"status": "ok"}


app.include_router(order_analytics_router, prefix=f"/admin/order-analytics", tags=["admin order analytics"])
app.include_router(order_overview_router, prefix=f"/admin/order-analytics", tags=["admin order overview"])
