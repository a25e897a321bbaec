from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.order_detail import OrderDetail, OrderDetailDTO
from models.pizza import Pizza, PizzaVariantDTO
from models.pizza_type import PizzaType, PizzaTypeDTO
from repositories.pizza import PizzaRepository


class OrderDetailRepository:
    @staticmethod
    async def create_many(order_details: list[OrderDetailDTO], session: AsyncSession) -> None:
        """Add line items to the caller's transaction; nothing is committed here."""
        for order_detail_dto in order_details:
            session.add(OrderDetail(**order_detail_dto.model_dump(exclude_none=True)))
            await session.flush()

    @staticmethod
    async def get_with_catalog(
        order_id: int,
        session: AsyncSession
    ) -> list[tuple[OrderDetailDTO, PizzaVariantDTO | None, PizzaTypeDTO | None]]:
        """
        Load an order's line items joined with their variant and pizza type.

        Outer joins keep line items whose variant is gone; the variant and
        type are None for those rows so the caller can detect them.
        """
        stmt = (
            select(OrderDetail, Pizza, PizzaType)
            .outerjoin(Pizza, OrderDetail.pizza_id == Pizza.pizza_id)
            .outerjoin(PizzaType, Pizza.pizza_type_id == PizzaType.pizza_type_id)
            .where(OrderDetail.order_id == order_id)
            .order_by(OrderDetail.order_details_id)
        )
        rows = await session.execute(stmt)
        return [
            (
                OrderDetailDTO.model_validate(detail, from_attributes=True),
                PizzaVariantDTO.model_validate(pizza, from_attributes=True) if pizza is not None else None,
                PizzaRepository.to_type_dto(pizza_type) if pizza_type is not None else None
            )
            for detail, pizza, pizza_type in rows.all()
        ]
