"""FastAPI routes for the Intake domain: accepting and listing orders."""

import json

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from intake.api.schemas import ErrorResponse, OrderRequest
from intake.order.order import Order
from intake.order.service import OrderService
from intake.utils.logging import order_context

logger = structlog.get_logger(__name__)


class PrettyJSONResponse(JSONResponse):
    """JSON response indented for humans reading it with curl."""

    def render(self, content) -> bytes:
        return json.dumps(content, ensure_ascii=False, indent=2).encode("utf-8")


def get_order_service(request: Request) -> OrderService:
    return request.app.state.order_service


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(message=message).model_dump())


router = APIRouter(tags=["orders"])


@router.post(
    "/add_order",
    response_class=PrettyJSONResponse,
    responses={500: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def add_order(body: OrderRequest, service: OrderService = Depends(get_order_service)):
    with order_context(body.order_uid):
        try:
            order = Order.from_payload(body.model_dump())
            service.accept_order(order)
        except ValidationError as exc:
            logger.warning("Order rejected", errors=exc.messages)
            return _failure(422, json.dumps(exc.messages))
        except SQLAlchemyError as exc:
            logger.error("Failed to store order", error=str(exc))
            return _failure(500, str(exc))

    return PrettyJSONResponse(content=order.to_payload())


@router.get("/get_orders", response_class=PrettyJSONResponse)
async def get_orders(service: OrderService = Depends(get_order_service)):
    return PrettyJSONResponse(content=[order.to_payload() for order in service.list_orders()])
