"""Keepalive Job

Pings the service's own health endpoint at a fixed interval so that hosts
which idle inactive services (free-tier PaaS) keep it warm.

The result of a ping is only logged; nothing consumes it.
"""

import asyncio
import logging

import aiohttp

import config


logger = logging.getLogger(__name__)


async def ping_once(session: aiohttp.ClientSession, url: str) -> bool:
    """Send one keepalive request.

    Returns:
        True if the endpoint answered with a 2xx status, False otherwise
    """
    try:
        async with session.get(url) as response:
            if response.status >= 400:
                logger.warning(f"[Keepalive] Ping to {url} answered with HTTP {response.status}")
                return False
        logger.info("[Keepalive] Pinged API to prevent cold start")
        return True
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.error(f"[Keepalive] Failed to ping API: {e!r}")
        return False


async def keepalive_scheduler(url: str | None = None, interval_minutes: int | None = None):
    """Scheduler that pings the keepalive URL at configured intervals.

    This function runs indefinitely and should be started as a background task.
    """
    url = url if url is not None else config.KEEPALIVE_URL
    interval_minutes = interval_minutes or config.KEEPALIVE_INTERVAL_MINUTES

    if not url:
        logger.info("[Keepalive] Scheduler disabled (KEEPALIVE_URL not set)")
        return

    logger.info(f"[Keepalive] Scheduler started (interval: {interval_minutes} min, url: {url})")

    timeout = aiohttp.ClientTimeout(total=config.KEEPALIVE_TIMEOUT_SECONDS)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        while True:
            try:
                await asyncio.sleep(interval_minutes * 60)
                await ping_once(session, url)
            except asyncio.CancelledError:
                logger.info("[Keepalive] Scheduler stopped")
                break
            except Exception as e:
                logger.error(f"[Keepalive] Scheduler error: {e}", exc_info=True)
