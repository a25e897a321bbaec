import logging

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from models.order import Order, OrderDTO, OrderSummaryDTO
from models.order_detail import OrderDetail

logger = logging.getLogger(__name__)


class OrderRepository:
    @staticmethod
    async def create(order_dto: OrderDTO, session: AsyncSession) -> int:
        """Insert the order row inside the caller's transaction and return its assigned id."""
        order = Order(**order_dto.model_dump(exclude_none=True))
        session.add(order)
        await session.flush()
        return order.order_id

    @staticmethod
    async def get_by_id_and_user_id(order_id: int, user_id: str, session: AsyncSession) -> OrderSummaryDTO | None:
        stmt = select(Order).where(Order.order_id == order_id, Order.user_id == user_id)
        order = await session.execute(stmt)
        order = order.scalar()
        if order is not None:
            return OrderSummaryDTO.model_validate(order, from_attributes=True)
        else:
            return None

    @staticmethod
    async def get_by_user_id(
        user_id: str,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0
    ) -> list[OrderSummaryDTO]:
        """Newest first (highest order_id first)."""
        stmt = select(Order).where(Order.user_id == user_id).order_by(Order.order_id.desc())
        if limit is not None:
            stmt = stmt.limit(limit).offset(offset)
        orders = await session.execute(stmt)
        return [OrderSummaryDTO.model_validate(order, from_attributes=True) for order in orders.scalars().all()]

    @staticmethod
    async def delete_older_than(cutoff_date: str, session: AsyncSession) -> int:
        """
        Delete orders dated strictly before cutoff_date (ISO YYYY-MM-DD) and their line items.

        Line items are deleted explicitly so no orphans remain even when the
        database does not enforce the ON DELETE CASCADE foreign key.

        Returns:
            Number of orders deleted
        """
        old_order_ids = select(Order.order_id).where(Order.date < cutoff_date)
        details_result = await session.execute(
            delete(OrderDetail).where(OrderDetail.order_id.in_(old_order_ids))
        )
        orders_result = await session.execute(
            delete(Order).where(Order.date < cutoff_date)
        )
        logger.debug(
            f"Deleted {orders_result.rowcount} order(s) and {details_result.rowcount} line item(s) "
            f"dated before {cutoff_date}"
        )
        return orders_result.rowcount
