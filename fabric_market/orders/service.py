import logging
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from typing import Any, Iterable, List, Mapping, Optional

from fabric_market.db.models import Order, DeliveryMethod
from fabric_market.errors import InvalidOrderRecord, OrdersUnavailable
from .schemas import LineItem, OrderRecord, Role


def order_record_from_document(document: Mapping[str, Any]) -> OrderRecord:
    """Validate a raw order document (as stored by the marketplace) into an OrderRecord."""
    try:
        return OrderRecord.model_validate(dict(document))
    except ValidationError as e:
        order_id = document.get("id") if isinstance(document, Mapping) else None
        reasons = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise InvalidOrderRecord(order_id=order_id, reason=reasons) from e


def order_records_from_documents(documents: Iterable[Mapping[str, Any]]) -> List[OrderRecord]:
    return [order_record_from_document(document) for document in documents]


def scope_orders(orders: Iterable[OrderRecord], role: Role, user_id: Optional[str] = None) -> List[OrderRecord]:
    """Select the orders a user's dashboard is built from.

    Buyers see the orders they placed, sellers the orders placed with them and
    shipping companies the shipping orders assigned to them. Admins see every
    order. Without a user id only admins get any orders back.
    """
    if role == Role.admin:
        return list(orders)
    if not user_id:
        return []

    if role == Role.buyer:
        return [order for order in orders if order.customer_id == user_id]
    if role == Role.seller:
        return [order for order in orders if order.seller_id == user_id]
    if role == Role.shipping:
        return [
            order for order in orders
            if order.shipping_company_id == user_id and order.delivery_method == DeliveryMethod.shipping
        ]
    return []


class OrderRecordService:
    def __init__(self):
        self.logger = logging.getLogger(__name__)

    async def list_orders(self, session: AsyncSession) -> List[OrderRecord]:
        stmt = (
            select(Order)
            .options(selectinload(Order.items))
            .order_by(Order.created_at)
        )
        try:
            result = await session.exec(stmt)
            orders = result.all()
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading orders: {e}", exc_info=True)
            raise OrdersUnavailable("Could not load orders from storage") from e

        self.logger.info(f"Loaded {len(orders)} orders from storage")
        return [self._build_order_record(order) for order in orders]

    def _build_order_record(self, order: Order) -> OrderRecord:
        return OrderRecord(
            id=order.uid,
            status=order.status,
            created_at=order.created_at,
            total=float(order.total or 0),
            paid_amount=float(order.paid_amount or 0),
            remaining_amount=float(order.remaining_amount) if order.remaining_amount is not None else None,
            deposit_amount=float(order.deposit_amount) if order.deposit_amount is not None else None,
            delivery_method=order.delivery_method,
            customer_id=order.customer_id,
            seller_id=order.seller_id,
            shipping_company_id=order.shipping_company_id,
            products=[
                LineItem(
                    id=item.product_id,
                    name=item.name,
                    price=float(item.price or 0),
                    quantity=item.quantity,
                    category=item.category,
                )
                for item in order.items
            ],
        )
