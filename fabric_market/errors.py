from typing import Any, Callable
from fastapi import FastAPI, status
from fastapi.requests import Request
from fastapi.responses import JSONResponse


class FabricMarketException(Exception):
    """This is the base class for all Fabric Market errors"""
    pass


class InvalidOrderRecord(FabricMarketException):
    """An order document could not be converted into an order record."""
    def __init__(self, order_id: Any = None, reason: str = ""):
        self.order_id = order_id
        self.reason = reason
        label = f"Order '{order_id}'" if order_id is not None else "Order"
        super().__init__(f"{label} is not a valid order record: {reason}" if reason else f"{label} is not a valid order record")


class InvalidReportDate(FabricMarketException):
    """The requested report date is not a YYYY-MM-DD calendar date."""
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid report date '{value}', expected YYYY-MM-DD")


class OrdersUnavailable(FabricMarketException):
    """Orders could not be loaded from storage."""
    pass


def create_exception_handler(status_code: int, initial_detail: Any) -> Callable[[Request, Exception], JSONResponse]:
    async def exception_handler(request: Request, exc: FabricMarketException):
        content = dict(initial_detail)
        if str(exc):
            content["detail"] = str(exc)
        return JSONResponse(
            content=content,
            status_code=status_code
        )

    return exception_handler


def register_all_errors(app: FastAPI):
    #  Invalid Order Record
    app.add_exception_handler(
        InvalidOrderRecord,
        create_exception_handler(
            status_code=422,
            initial_detail={
                "message": "One of the supplied orders is malformed",
                "error_code": "invalid_order_record",
                "resolution": "Check the order fields and try again"
            }
        )
    )

    #  Invalid Report Date
    app.add_exception_handler(
        InvalidReportDate,
        create_exception_handler(
            status_code=status.HTTP_400_BAD_REQUEST,
            initial_detail={
                "message": "Invalid report date",
                "error_code": "invalid_report_date",
                "resolution": "Use the YYYY-MM-DD format"
            }
        )
    )

    #  Orders Unavailable
    app.add_exception_handler(
        OrdersUnavailable,
        create_exception_handler(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            initial_detail={
                "message": "Orders are temporarily unavailable",
                "error_code": "orders_unavailable",
                "resolution": "Please try again later"
            }
        )
    )

    @app.exception_handler(500)
    async def internal_server_error(request, exc):
        return JSONResponse(
            content={
                "message": "Oops! Something went wrong",
                "error_code": "server_error",
            },
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
