import asyncio
import logging
from datetime import date, datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

import config
from db import get_db_session
from exceptions.menu import EmptyCatalogException
from models.pizza import PizzaMenuEntryDTO, PizzaVariantDTO
from models.pizza_type import PizzaTypeDTO
from repositories.pizza import PizzaRepository

logger = logging.getLogger(__name__)

EPOCH = date(1970, 1, 1)


class MenuService:
    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker

    @staticmethod
    def to_menu_entry(pizza_type: PizzaTypeDTO, variants: list[PizzaVariantDTO]) -> PizzaMenuEntryDTO:
        return PizzaMenuEntryDTO(
            id=pizza_type.id,
            name=pizza_type.name,
            category=pizza_type.category,
            description=pizza_type.description,
            image=config.PIZZA_IMAGE_PATH.format(pizza_type_id=pizza_type.id),
            sizes={variant.size: variant.price for variant in variants if variant.pizza_type_id == pizza_type.id}
        )

    @staticmethod
    def day_index(today: date) -> int:
        """Whole days since 1970-01-01."""
        return (today - EPOCH).days

    @staticmethod
    def pick_pizza_of_the_day(pizza_types: list[PizzaTypeDTO], today: date) -> PizzaTypeDTO:
        if not pizza_types:
            raise EmptyCatalogException()
        return pizza_types[MenuService.day_index(today) % len(pizza_types)]

    async def _list_pizza_types(self) -> list[PizzaTypeDTO]:
        async with get_db_session(self.session_maker) as session:
            return await PizzaRepository.list_pizza_types(session)

    async def _list_variants(self) -> list[PizzaVariantDTO]:
        async with get_db_session(self.session_maker) as session:
            return await PizzaRepository.list_variants(session)

    async def list_pizzas(self) -> list[PizzaMenuEntryDTO]:
        """The whole menu; pizza types and prices are loaded concurrently."""
        pizza_types, variants = await asyncio.gather(
            self._list_pizza_types(),
            self._list_variants()
        )
        return [self.to_menu_entry(pizza_type, variants) for pizza_type in pizza_types]

    async def get_pizza_of_the_day(self, today: date | None = None) -> PizzaMenuEntryDTO:
        """
        Deterministic daily pick: catalog[days_since_epoch mod catalog_size].

        The day is the UTC calendar day, so the pick only changes at UTC midnight.

        Raises:
            EmptyCatalogException: no pizza types on the menu
        """
        today = today or datetime.now(timezone.utc).date()
        pizza_types = await self._list_pizza_types()
        pizza_type = self.pick_pizza_of_the_day(pizza_types, today)
        async with get_db_session(self.session_maker) as session:
            variants = await PizzaRepository.list_variants_for_type(pizza_type.id, session)
        logger.debug(f"Pizza of the day for {today.isoformat()}: {pizza_type.id}")
        return self.to_menu_entry(pizza_type, variants)
