from contextlib import asynccontextmanager
from typing import AsyncIterator
import logging

from sqlalchemy import event, Engine, text
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession, AsyncEngine

import config
from models.base import Base

"""
Imports of these models are needed to correctly create tables in the database.
For more information see https://stackoverflow.com/questions/7478403/sqlalchemy-classes-across-files
"""
from models.pizza_type import PizzaType
from models.pizza import Pizza
from models.order import Order
from models.order_detail import OrderDetail

logger = logging.getLogger(__name__)

# SQL echo stays off; statements would drown the request logs
sql_echo = False


def create_engine(url: str | None = None) -> AsyncEngine:
    """Create the async engine for the configured (or given) database URL."""
    return create_async_engine(url or config.DB_URL, echo=sql_echo)


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@asynccontextmanager
async def get_db_session(session_maker: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    session = None
    try:
        async with session_maker() as async_session:
            session = async_session
            yield session
    finally:
        if session is not None:
            await session.close()


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    # order_details rows are removed with their order only when SQLite enforces foreign keys
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


async def check_all_tables_exist(session: AsyncSession) -> bool:
    for table in Base.metadata.tables.values():
        result = await session.execute(
            text("SELECT name FROM sqlite_master WHERE type='table' AND name=:name"),
            {"name": table.name}
        )
        if result.scalar() is None:
            return False
    return True


async def create_db_and_tables(engine: AsyncEngine) -> None:
    """Create missing tables; existing catalog and order data is left untouched."""
    session_maker = create_session_maker(engine)
    async with get_db_session(session_maker) as session:
        if await check_all_tables_exist(session):
            logger.info("Database schema ready")
            return
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema created")
