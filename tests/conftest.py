"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import sys
import os
from datetime import datetime
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy import create_engine as create_sync_engine
from sqlalchemy.orm import Session

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from db import create_engine, create_session_maker
from models.base import Base
from models.pizza import Pizza, variant_key
from models.pizza_type import PizzaType, PizzaTypeDTO
from repositories.pizza import PizzaRepository
from services.order import OrderService
from utils.transaction_manager import TransactionManager

FIXED_NOW = datetime(2026, 10, 19, 14, 5, 9)

# pizza_type_id -> (name, category, ingredients, {size: price})
TEST_CATALOG = {
    "hawaiian": ("The Hawaiian Pizza", "Classic", "Sliced Ham, Pineapple, Mozzarella Cheese",
                 {"S": Decimal("10.50"), "M": Decimal("13.25"), "L": Decimal("16.50")}),
    "pepperoni": ("The Pepperoni Pizza", "Classic", "Mozzarella Cheese, Pepperoni",
                  {"S": Decimal("9.75"), "M": Decimal("12.50"), "L": Decimal("15.25")}),
    "veggie_veg": ("The Vegetables + Vegetables Pizza", "Veggie", "Mushrooms, Tomatoes, Red Peppers",
                   {"S": Decimal("12.00"), "M": Decimal("16.00"), "L": Decimal("20.25")}),
}


def seed_catalog_sync(db_file) -> None:
    """Load TEST_CATALOG with a plain synchronous engine (for TestClient based tests)."""
    engine = create_sync_engine(f"sqlite:///{db_file}", echo=False)
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        for pizza_type_id, (name, category, ingredients, sizes) in TEST_CATALOG.items():
            session.add(PizzaType(pizza_type_id=pizza_type_id, name=name, category=category, ingredients=ingredients))
            for size, price in sizes.items():
                session.add(Pizza(
                    pizza_id=variant_key(pizza_type_id, size),
                    pizza_type_id=pizza_type_id,
                    size=size,
                    price=price
                ))
        session.commit()
    engine.dispose()


def cart_entry(pizza_type_id, size):
    return {"pizza": {"id": pizza_type_id}, "size": size}


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def db_url(tmp_path):
    """On-disk SQLite so that concurrent sessions see the same database."""
    return f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite'}"


@pytest_asyncio.fixture
async def test_engine(db_url):
    """Create test database engine with all tables."""
    engine = create_engine(db_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(test_engine):
    return create_session_maker(test_engine)


@pytest_asyncio.fixture
async def catalog(session_maker):
    """Seed TEST_CATALOG through the repository."""
    async with TransactionManager.atomic_transaction(session_maker) as session:
        for pizza_type_id, (name, category, ingredients, sizes) in TEST_CATALOG.items():
            await PizzaRepository.save_pizza_type(
                PizzaTypeDTO(id=pizza_type_id, name=name, category=category, description=ingredients),
                sizes,
                session
            )
    return TEST_CATALOG


@pytest_asyncio.fixture
async def order_service(session_maker, catalog):
    return OrderService(session_maker, clock=lambda: FIXED_NOW)
