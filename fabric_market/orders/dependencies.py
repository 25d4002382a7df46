from datetime import date
from fastapi import Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession
from typing import List, Optional
from zoneinfo import ZoneInfo

from fabric_market.config import Config
from fabric_market.db.main import get_session
from fabric_market.errors import InvalidReportDate
from .schemas import OrderRecord, Role
from .service import OrderRecordService

order_record_service = OrderRecordService()


def report_timezone() -> ZoneInfo:
    return ZoneInfo(Config.REPORT_TIMEZONE)


async def get_stored_orders(session: AsyncSession = Depends(get_session)) -> List[OrderRecord]:
    return await order_record_service.list_orders(session)


def get_report_date(
    today: Optional[str] = Query(None, description="Last day of the daily series (YYYY-MM-DD), defaults to the current date")
) -> Optional[date]:
    if today is None:
        return None
    try:
        return date.fromisoformat(today)
    except ValueError:
        raise InvalidReportDate(today)


class OrderScope:
    """Which user's orders a dashboard is built from"""

    def __init__(
        self,
        role: Role = Query(Role.admin, description="Dashboard role: admin, seller, buyer or shipping"),
        user_id: Optional[str] = Query(None, description="User whose orders are aggregated (not needed for admin)"),
    ):
        self.role = role
        self.user_id = user_id
