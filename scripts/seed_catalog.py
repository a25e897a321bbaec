#!/usr/bin/env python3
"""
Script to load the pizza catalog into the database

Creates missing tables, then inserts or updates every pizza type and its
size/price variants from a JSON file. Existing orders are not touched.

JSON format:
    [{"id": "hawaiian", "name": "...", "category": "Classic",
      "description": "...", "sizes": {"S": 10.5, "M": 13.25}}]

Usage:
    python scripts/seed_catalog.py [path/to/catalog.json]
"""

import asyncio
import json
import sys
from decimal import Decimal
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from db import create_engine, create_session_maker, create_db_and_tables
from models.pizza_type import PizzaTypeDTO
from repositories.pizza import PizzaRepository
from utils.transaction_manager import TransactionManager

DEFAULT_CATALOG = Path(__file__).parent / "catalog.json"


async def seed_catalog(catalog_path: Path):
    print(f"🍕 Loading catalog from {catalog_path}...")
    entries = json.loads(catalog_path.read_text(encoding="utf-8"))

    engine = create_engine()
    try:
        await create_db_and_tables(engine)
        session_maker = create_session_maker(engine)

        async with TransactionManager.atomic_transaction(session_maker) as session:
            for entry in entries:
                pizza_type = PizzaTypeDTO(
                    id=entry["id"],
                    name=entry["name"],
                    category=entry["category"],
                    description=entry.get("description", "")
                )
                prices = {size: Decimal(str(price)) for size, price in entry["sizes"].items()}
                await PizzaRepository.save_pizza_type(pizza_type, prices, session)

        async with session_maker() as session:
            variants = await PizzaRepository.list_variants(session)
        print(f"✅ Catalog loaded: {len(entries)} pizza types, {len(variants)} variants in database")
    finally:
        await engine.dispose()


async def main():
    catalog_path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_CATALOG
    try:
        await seed_catalog(catalog_path)
    except Exception as e:
        print(f"❌ Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
