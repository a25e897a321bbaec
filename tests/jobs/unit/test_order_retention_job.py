"""
Unit Tests: order retention sweep

The sweep deletes orders dated before (today - retention days) together with
their line items and leaves everything newer untouched.
"""

from datetime import date, datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select, func

from conftest import cart_entry
from jobs.order_retention_job import run_retention_sweep, seconds_until_next_midnight
from models.order import Order
from models.order_detail import OrderDetail
from services.order import OrderService


async def place_order_on(session_maker, day: date, client_id="client-a"):
    service = OrderService(session_maker, clock=lambda: datetime.combine(day, datetime.min.time()))
    created = await service.create_order([cart_entry("hawaiian", "S"), cart_entry("pepperoni", "M")], client_id)
    return created.order_id


async def remaining_rows(session_maker):
    async with session_maker() as session:
        order_ids = (await session.execute(select(Order.order_id).order_by(Order.order_id))).scalars().all()
        detail_count = (await session.execute(select(func.count()).select_from(OrderDetail))).scalar()
    return list(order_ids), detail_count


class TestRetentionSweep:

    @pytest.mark.asyncio
    async def test_deletes_old_orders_with_line_items(self, session_maker, catalog):
        today = date(2026, 10, 19)
        old = await place_order_on(session_maker, today - timedelta(days=45))
        boundary = await place_order_on(session_maker, today - timedelta(days=30))
        recent = await place_order_on(session_maker, today)

        service = OrderService(session_maker, clock=lambda: datetime(2026, 10, 19, 0, 0, 5))
        deleted = await run_retention_sweep(service, retention_days=30)

        order_ids, detail_count = await remaining_rows(session_maker)
        assert deleted == 1
        assert old not in order_ids
        assert order_ids == [boundary, recent]
        assert detail_count == 4

    @pytest.mark.asyncio
    async def test_nothing_to_delete(self, session_maker, catalog):
        await place_order_on(session_maker, date(2026, 10, 18))

        service = OrderService(session_maker, clock=lambda: datetime(2026, 10, 19))
        deleted = await service.delete_orders_older_than(30)

        assert deleted == 0
        order_ids, detail_count = await remaining_rows(session_maker)
        assert len(order_ids) == 1
        assert detail_count == 2

    @pytest.mark.asyncio
    async def test_failure_is_logged_and_reported_as_zero(self):
        service = AsyncMock()
        service.delete_orders_older_than.side_effect = RuntimeError("database is locked")

        assert await run_retention_sweep(service, retention_days=30) == 0
        service.delete_orders_older_than.assert_awaited_once_with(30)


class TestSchedule:

    def test_seconds_until_next_midnight(self):
        assert seconds_until_next_midnight(datetime(2026, 10, 19, 23, 59, 0)) == 60
        assert seconds_until_next_midnight(datetime(2026, 10, 19, 0, 0, 0)) == 24 * 3600

    def test_crosses_month_end(self):
        assert seconds_until_next_midnight(datetime(2026, 10, 31, 12, 0, 0)) == 12 * 3600
