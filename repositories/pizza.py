from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.pizza import Pizza, PizzaVariantDTO, variant_key
from models.pizza_type import PizzaType, PizzaTypeDTO


class PizzaRepository:
    """Access to the pizza catalog (types and their size/price variants)."""

    @staticmethod
    def to_type_dto(pizza_type: PizzaType) -> PizzaTypeDTO:
        return PizzaTypeDTO(
            id=pizza_type.pizza_type_id,
            name=pizza_type.name,
            category=pizza_type.category,
            description=pizza_type.ingredients or ""
        )

    @staticmethod
    async def list_pizza_types(session: AsyncSession) -> list[PizzaTypeDTO]:
        # Ordered so that "pizza of the day" indexes a stable sequence
        stmt = select(PizzaType).order_by(PizzaType.pizza_type_id)
        pizza_types = await session.execute(stmt)
        return [PizzaRepository.to_type_dto(pizza_type) for pizza_type in pizza_types.scalars().all()]

    @staticmethod
    async def list_variants(session: AsyncSession) -> list[PizzaVariantDTO]:
        stmt = select(Pizza).order_by(Pizza.pizza_type_id, Pizza.price)
        pizzas = await session.execute(stmt)
        return [PizzaVariantDTO.model_validate(pizza, from_attributes=True) for pizza in pizzas.scalars().all()]

    @staticmethod
    async def list_variants_for_type(pizza_type_id: str, session: AsyncSession) -> list[PizzaVariantDTO]:
        stmt = select(Pizza).where(Pizza.pizza_type_id == pizza_type_id).order_by(Pizza.price)
        pizzas = await session.execute(stmt)
        return [PizzaVariantDTO.model_validate(pizza, from_attributes=True) for pizza in pizzas.scalars().all()]

    @staticmethod
    async def get_variants_by_ids(pizza_ids: list[str], session: AsyncSession) -> dict[str, PizzaVariantDTO]:
        """
        Batch load variants by composite variant key.

        Returns:
            dict mapping pizza_id -> PizzaVariantDTO; unknown keys are absent
        """
        if not pizza_ids:
            return {}
        stmt = select(Pizza).where(Pizza.pizza_id.in_(pizza_ids))
        pizzas = await session.execute(stmt)
        return {
            pizza.pizza_id: PizzaVariantDTO.model_validate(pizza, from_attributes=True)
            for pizza in pizzas.scalars().all()
        }

    @staticmethod
    async def save_pizza_type(pizza_type: PizzaTypeDTO, prices: dict[str, Decimal], session: AsyncSession) -> None:
        """Insert or update a pizza type and one variant per size label; the caller commits."""
        await session.merge(PizzaType(
            pizza_type_id=pizza_type.id,
            name=pizza_type.name,
            category=pizza_type.category,
            ingredients=pizza_type.description
        ))
        for size, price in prices.items():
            await session.merge(Pizza(
                pizza_id=variant_key(pizza_type.id, size),
                pizza_type_id=pizza_type.id,
                size=size,
                price=Decimal(str(price))
            ))
        await session.flush()
