import asyncio
import logging
import uuid
from collections.abc import Callable
from datetime import datetime, date, timedelta
from decimal import Decimal
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

import config
from db import get_db_session
from exceptions.cart import UnknownPizzaVariantException
from exceptions.order import (
    MissingClientIdException,
    MissingOrderIdException,
    OrderNotFoundException,
    OrderPersistenceException,
    OrderIntegrityException
)
from models.order import OrderDTO, OrderSummaryDTO, PricedOrderDTO, CreatedOrderDTO
from models.order_detail import OrderDetailDTO, PricedOrderItemDTO, OrderViewDTO
from models.pizza import PizzaVariantDTO
from models.pizza_type import PizzaTypeDTO
from repositories.order import OrderRepository
from repositories.order_detail import OrderDetailRepository
from repositories.pizza import PizzaRepository
from services.cart import CartService
from utils.transaction_manager import TransactionManager

logger = logging.getLogger(__name__)

# SQLite INTEGER is a signed 64-bit value
MAX_SQLITE_INTEGER = 2 ** 63 - 1


class OrderService:
    """
    Order creation and priced order views, scoped by the caller's client identifier.

    The session maker is injected; every operation opens its own session(s)
    and releases them before returning.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        clock: Callable[[], datetime] = datetime.now
    ):
        self.session_maker = session_maker
        self.clock = clock

    @staticmethod
    def resolve_client_id(client_id: str | None) -> str:
        """
        Return the caller's identifier, or a fresh random one when none was sent.

        The identifier is an opaque partition key, not a credential: any
        non-empty string is accepted unchanged.
        """
        if client_id:
            return client_id
        return str(uuid.uuid4())

    @staticmethod
    def require_client_id(client_id: str | None) -> str:
        if not client_id:
            raise MissingClientIdException()
        return client_id

    @staticmethod
    def parse_order_id(order_id: Any) -> int:
        """
        Raises:
            MissingOrderIdException: no identifier given
            OrderNotFoundException: identifier is not a number, or is too large to be stored,
                so no order can match
        """
        if order_id is None or (isinstance(order_id, str) and not order_id.strip()):
            raise MissingOrderIdException()
        try:
            parsed = int(order_id)
        except (TypeError, ValueError):
            raise OrderNotFoundException(order_id=order_id)
        if not -MAX_SQLITE_INTEGER - 1 <= parsed <= MAX_SQLITE_INTEGER:
            raise OrderNotFoundException(order_id=order_id)
        return parsed

    @staticmethod
    def parse_page(page: Any) -> int:
        """1-indexed page number; anything unparsable or below 1 means the first page."""
        try:
            page = int(page)
        except (TypeError, ValueError):
            return 1
        return page if page >= 1 else 1

    async def create_order(self, cart: Any, client_id: str | None = None) -> CreatedOrderDTO:
        """
        Persist an order and its merged line items in one transaction.

        Flow:
        1. Check the cart shape (no transaction is opened for a hopeless cart)
        2. Insert the order row and obtain its id
        3. Merge duplicate cart entries
        4. Resolve every merged variant key against the catalog
        5. Insert one line item per merged key
        6. Commit; any exception in 2-5 rolls everything back

        Args:
            cart: Raw cart from the request body
            client_id: X-User-ID header value, if the caller sent one

        Returns:
            CreatedOrderDTO with the new order id and the (possibly generated) client id

        Raises:
            InvalidCartException: malformed cart or unknown pizza variant
            OrderPersistenceException: storage failure (rolled back)
        """
        CartService.validate_cart(cart)
        user_id = self.resolve_client_id(client_id)

        now = self.clock()
        order_dto = OrderDTO(
            user_id=user_id,
            date=now.date().isoformat(),
            time=now.strftime("%H:%M:%S")
        )

        try:
            async with TransactionManager.atomic_transaction(self.session_maker) as session:
                order_id = await OrderRepository.create(order_dto, session)

                merged_cart = CartService.merge_cart(cart)

                variants = await PizzaRepository.get_variants_by_ids(list(merged_cart.keys()), session)
                unknown = sorted(pizza_id for pizza_id in merged_cart if pizza_id not in variants)
                if unknown:
                    raise UnknownPizzaVariantException(pizza_ids=unknown)

                await OrderDetailRepository.create_many(
                    [
                        OrderDetailDTO(order_id=order_id, pizza_id=item.pizza_id, quantity=item.quantity)
                        for item in merged_cart.values()
                    ],
                    session
                )
        except SQLAlchemyError as e:
            logger.error(f"Failed to create order for user {user_id}", exc_info=True)
            raise OrderPersistenceException(reason=type(e).__name__) from e

        logger.info(f"Created order {order_id} with {len(merged_cart)} line item(s) for user {user_id}")
        return CreatedOrderDTO(order_id=order_id, user_id=user_id)

    @staticmethod
    def price_items(
        order_id: int,
        rows: list[tuple[OrderDetailDTO, PizzaVariantDTO | None, PizzaTypeDTO | None]]
    ) -> tuple[list[PricedOrderItemDTO], Decimal]:
        """
        Turn joined line item rows into priced items and the order total.

        Raises:
            OrderIntegrityException: a line item's variant or pizza type is missing
        """
        items = []
        total = Decimal("0")
        for detail, variant, pizza_type in rows:
            if variant is None or pizza_type is None:
                raise OrderIntegrityException(order_id=order_id, pizza_id=detail.pizza_id)
            line_total = variant.price * detail.quantity
            total += line_total
            items.append(PricedOrderItemDTO(
                pizza_type_id=pizza_type.id,
                name=pizza_type.name,
                category=pizza_type.category,
                description=pizza_type.description,
                quantity=detail.quantity,
                price=variant.price,
                total=line_total,
                size=variant.size,
                image=config.PIZZA_IMAGE_PATH.format(pizza_type_id=pizza_type.id)
            ))
        return items, total

    @staticmethod
    def build_view(
        order: OrderSummaryDTO,
        rows: list[tuple[OrderDetailDTO, PizzaVariantDTO | None, PizzaTypeDTO | None]]
    ) -> OrderViewDTO:
        items, total = OrderService.price_items(order.order_id, rows)
        return OrderViewDTO(
            order=PricedOrderDTO(order_id=order.order_id, date=order.date, time=order.time, total=total),
            order_items=items
        )

    async def _get_header(self, order_id: int, client_id: str) -> OrderSummaryDTO | None:
        async with get_db_session(self.session_maker) as session:
            return await OrderRepository.get_by_id_and_user_id(order_id, client_id, session)

    async def _get_rows(self, order_id: int):
        async with get_db_session(self.session_maker) as session:
            return await OrderDetailRepository.get_with_catalog(order_id, session)

    async def get_order(self, order_id: Any, client_id: str | None) -> OrderViewDTO:
        """
        Priced order detail; header and line items are queried concurrently.

        Raises:
            MissingClientIdException / MissingOrderIdException: 400
            OrderNotFoundException: no such order for this client
            OrderIntegrityException: line item without catalog entry
        """
        client_id = self.require_client_id(client_id)
        order_id = self.parse_order_id(order_id)

        try:
            order, rows = await asyncio.gather(
                self._get_header(order_id, client_id),
                self._get_rows(order_id)
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch order {order_id}", exc_info=True)
            raise OrderPersistenceException(reason=type(e).__name__, message="Failed to fetch order details") from e

        if order is None:
            raise OrderNotFoundException(order_id=order_id)
        return self.build_view(order, rows)

    async def get_past_order(self, order_id: Any, client_id: str | None) -> OrderViewDTO:
        """Same view as get_order, but line items are only loaded once ownership is confirmed."""
        client_id = self.require_client_id(client_id)
        order_id = self.parse_order_id(order_id)

        try:
            async with get_db_session(self.session_maker) as session:
                order = await OrderRepository.get_by_id_and_user_id(order_id, client_id, session)
                if order is None:
                    raise OrderNotFoundException(order_id=order_id)
                rows = await OrderDetailRepository.get_with_catalog(order_id, session)
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch past order {order_id}", exc_info=True)
            raise OrderPersistenceException(reason=type(e).__name__, message="Failed to fetch order") from e

        return self.build_view(order, rows)

    async def list_orders(self, client_id: str | None) -> list[OrderSummaryDTO]:
        """All orders of the client, newest first."""
        client_id = self.require_client_id(client_id)
        try:
            async with get_db_session(self.session_maker) as session:
                return await OrderRepository.get_by_user_id(client_id, session)
        except SQLAlchemyError as e:
            logger.error("Failed to fetch orders", exc_info=True)
            raise OrderPersistenceException(reason=type(e).__name__, message="Failed to fetch orders") from e

    async def list_past_orders(self, client_id: str | None, page: Any = 1) -> list[OrderSummaryDTO]:
        """
        One page of the client's order history, newest first.

        Page size is fixed; no total count is returned, so an empty or short
        page is the only sign that the history has ended.
        """
        client_id = self.require_client_id(client_id)
        page = self.parse_page(page)
        limit = config.ORDER_PAGE_SIZE
        offset = (page - 1) * limit
        if offset > MAX_SQLITE_INTEGER:
            return []
        try:
            async with get_db_session(self.session_maker) as session:
                return await OrderRepository.get_by_user_id(client_id, session, limit=limit, offset=offset)
        except SQLAlchemyError as e:
            logger.error("Failed to fetch past orders", exc_info=True)
            raise OrderPersistenceException(reason=type(e).__name__, message="Failed to fetch past orders") from e

    async def delete_orders_older_than(self, retention_days: int, today: date | None = None) -> int:
        """
        Delete orders dated more than retention_days before today, with their line items.

        Returns:
            Number of orders deleted
        """
        today = today or self.clock().date()
        cutoff = (today - timedelta(days=retention_days)).isoformat()
        async with TransactionManager.atomic_transaction(self.session_maker) as session:
            return await OrderRepository.delete_older_than(cutoff, session)
