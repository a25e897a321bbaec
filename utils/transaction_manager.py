import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from db import get_db_session

logger = logging.getLogger(__name__)


class TransactionManager:
    """
    Unit-of-work helper: one session, one transaction, commit on success and
    rollback on any exception raised inside the block.

    No row-level locking is taken; isolation between concurrent writers is
    whatever the storage engine's transactions provide.
    """

    @staticmethod
    @asynccontextmanager
    async def atomic_transaction(
        session_maker: async_sessionmaker[AsyncSession]
    ) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for atomic database transactions.

        Usage:
            async with TransactionManager.atomic_transaction(session_maker) as session:
                # Database operations here
                session.add(...)
                await session.flush()
            # committed here, or rolled back if the block raised
        """
        async with get_db_session(session_maker) as session:
            transaction_start = datetime.now()
            logger.debug(f"Transaction started at {transaction_start}")
            try:
                yield session
                await session.commit()
            except BaseException as e:
                try:
                    await session.rollback()
                    logger.info(f"Transaction rolled back due to error: {type(e).__name__}: {e}")
                except Exception as rollback_error:
                    logger.critical(f"Failed to rollback transaction: {str(rollback_error)}")
                raise

            duration = (datetime.now() - transaction_start).total_seconds()
            logger.debug(f"Transaction committed successfully in {duration:.2f}s")
