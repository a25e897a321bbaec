"""Order Retention Job

Deletes orders (and their line items) older than DATA_RETENTION_DAYS once a
day, right after local midnight.

Failures are logged and the scheduler keeps running; the next sweep picks up
whatever the failed one left behind.
"""

import asyncio
import logging
from datetime import datetime, timedelta

import config
from services.order import OrderService


logger = logging.getLogger(__name__)


def seconds_until_next_midnight(now: datetime) -> float:
    next_midnight = (now + timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)
    return (next_midnight - now).total_seconds()


async def run_retention_sweep(order_service: OrderService, retention_days: int | None = None) -> int:
    """Delete orders past the retention window.

    Returns:
        Number of orders deleted, or 0 if the sweep failed
    """
    retention_days = retention_days or config.DATA_RETENTION_DAYS
    logger.info(f"[Order Retention] Deleting orders older than {retention_days} days")
    try:
        deleted = await order_service.delete_orders_older_than(retention_days)
        logger.info(f"[Order Retention] ✅ Deleted {deleted} order(s) older than {retention_days} days")
        return deleted
    except Exception as e:
        logger.error(f"[Order Retention] ❌ Failed to delete old orders: {e}", exc_info=True)
        return 0


async def order_retention_scheduler(order_service: OrderService):
    """Scheduler that runs the retention sweep every day at midnight.

    This function runs indefinitely and should be started as a background task.
    """
    logger.info(f"[Order Retention] Scheduler started (retention: {config.DATA_RETENTION_DAYS} days)")

    while True:
        try:
            delay = seconds_until_next_midnight(datetime.now())
            logger.info(
                f"[Order Retention] Next sweep at "
                f"{(datetime.now() + timedelta(seconds=delay)).strftime('%Y-%m-%d %H:%M:%S')}"
            )
            await asyncio.sleep(delay)
            await run_retention_sweep(order_service)

        except asyncio.CancelledError:
            logger.info("[Order Retention] Scheduler stopped")
            break
        except Exception as e:
            logger.error(f"[Order Retention] Scheduler error: {e}", exc_info=True)
            # Wait before retrying on error
            await asyncio.sleep(60)
