"""
API router for the pizza shop frontend.

Menu, order and contact endpoints under /api. Orders are scoped by the
X-User-ID header: an opaque client identifier handed out on the first order
and resent by the client on every later request. It is a partition key, not
a credential.

Service exceptions are not caught here; the handlers registered in app.py
turn them into {"error": ...} responses.
"""

import logging
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Body, Depends, Header, Query, Request

from models.contact import ContactFormDTO
from services.contact import ContactService
from services.menu import MenuService
from services.order import OrderService

logger = logging.getLogger(__name__)

api_router = APIRouter(prefix="/api", tags=["api"])


def get_order_service(request: Request) -> OrderService:
    return request.app.state.order_service


def get_menu_service(request: Request) -> MenuService:
    return request.app.state.menu_service


def format_health_time(now: datetime) -> str:
    """US locale style without zero padding, e.g. "10/9/2026, 2:05:09 PM"."""
    hour = now.hour % 12 or 12
    return f"{now.month}/{now.day}/{now.year}, {hour}:{now:%M:%S} {'AM' if now.hour < 12 else 'PM'}"


@api_router.get("/health")
async def health_check():
    """Liveness probe; also the target of the keepalive job."""
    return {"status": "OK", "time": format_health_time(datetime.now())}


@api_router.get("/pizzas")
async def get_pizzas(menu_service: MenuService = Depends(get_menu_service)):
    pizzas = await menu_service.list_pizzas()
    return [pizza.model_dump(mode="json") for pizza in pizzas]


@api_router.get("/pizza-of-the-day")
async def get_pizza_of_the_day(menu_service: MenuService = Depends(get_menu_service)):
    pizza = await menu_service.get_pizza_of_the_day()
    return pizza.model_dump(mode="json")


@api_router.get("/orders")
async def get_orders(
    x_user_id: str | None = Header(default=None, alias="X-User-ID"),
    order_service: OrderService = Depends(get_order_service)
):
    """All orders of the calling client, newest first."""
    orders = await order_service.list_orders(x_user_id)
    return [order.model_dump(mode="json") for order in orders]


@api_router.get("/order")
async def get_order(
    order_id: str | None = Query(default=None, alias="id"),
    x_user_id: str | None = Header(default=None, alias="X-User-ID"),
    order_service: OrderService = Depends(get_order_service)
):
    """
    Priced detail of one order.

    Returns:
        200: {"order": {order_id, date, time, total}, "orderItems": [...]}
        400: User ID / Order ID missing
        404: Order not found or owned by another client
    """
    view = await order_service.get_order(order_id, x_user_id)
    return view.model_dump(mode="json", by_alias=True)


@api_router.post("/order")
async def create_order(
    body: Any = Body(default=None),
    x_user_id: str | None = Header(default=None, alias="X-User-ID"),
    order_service: OrderService = Depends(get_order_service)
):
    """
    Create an order from a cart.

    Request Body:
        {"cart": [{"pizza": {"id": "bbq_ckn"}, "size": "M"}, ...]}

    Returns:
        200: {"orderId": 42, "userId": "<client id, generated if the header was absent>"}
        400: Invalid order data
        500: Failed to create order (nothing was stored)
    """
    cart = body.get("cart") if isinstance(body, dict) else None
    created = await order_service.create_order(cart, x_user_id)
    return created.model_dump(mode="json", by_alias=True)


@api_router.get("/past-orders")
async def get_past_orders(
    page: str | None = None,
    x_user_id: str | None = Header(default=None, alias="X-User-ID"),
    order_service: OrderService = Depends(get_order_service)
):
    """One page (20 orders) of the client's history; no total count."""
    orders = await order_service.list_past_orders(x_user_id, page)
    return [order.model_dump(mode="json") for order in orders]


@api_router.get("/past-order/{order_id}")
async def get_past_order(
    order_id: str,
    x_user_id: str | None = Header(default=None, alias="X-User-ID"),
    order_service: OrderService = Depends(get_order_service)
):
    view = await order_service.get_past_order(order_id, x_user_id)
    return view.model_dump(mode="json", by_alias=True)


@api_router.post("/contact")
async def contact_form(form: ContactFormDTO | None = None):
    ContactService.submit(form or ContactFormDTO())
    return {"success": "Message received"}
