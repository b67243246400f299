"""Callback worker: scans Redis for pending callbacks and processes them in batches."""
from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import Awaitable, Callable

from pydantic import ValidationError
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncEngine

from callback_worker.application.ports.store import CallbackStore
from callback_worker.config import Settings
from callback_worker.domain.value_objects.keys import CallbackKeys
from callback_worker.infrastructure.db.session import (
    check_connection,
    create_engine,
    create_sessionmaker,
)
from callback_worker.infrastructure.db.uow import SqlAlchemyUoWFactory
from callback_worker.infrastructure.http.dn_notifier import HttpDnNotifier
from callback_worker.infrastructure.store.redis_store import RedisCallbackStore, create_redis
from callback_worker.services.callback_processor import CallbackProcessor

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class CallbackDispatcher:
    """Drives the SCAN cursor and runs one processor task per fetched key.

    Each iteration is a full barrier: the next page is not requested until
    every task of the current page has finished.
    """

    def __init__(
        self,
        store: CallbackStore,
        processor: CallbackProcessor,
        *,
        pattern: str,
        batch_size: int = 100,
        wait_interval: float = 17.0,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._store = store
        self._processor = processor
        self._pattern = pattern
        self._batch_size = batch_size
        self._wait_interval = wait_interval
        self._sleep = sleep
        self.cursor = 0

    async def run_forever(self) -> None:
        logger.info(
            "Callback worker running (pattern=%s, batch=%d, wait=%.1fs)",
            self._pattern,
            self._batch_size,
            self._wait_interval,
        )
        while True:
            await self.run_once()

    async def run_once(self) -> int:
        """Process one scan page. Returns the number of records dispatched."""
        try:
            keys, next_cursor = await self._store.scan(self.cursor, self._pattern, self._batch_size)
        except Exception as e:
            logger.error("Scan failed at cursor %d: %r, retrying in %.1fs", self.cursor, e, self._wait_interval)
            await self._sleep(self._wait_interval)
            return 0

        if keys:
            logger.info("Found %d keys to process in this batch", len(keys))

        dispatched = 0
        async with asyncio.TaskGroup() as tg:
            for worker_id, key in enumerate(keys):
                try:
                    raw = await self._store.get(key)
                except Exception as e:
                    logger.warning("Could not fetch key %s: %r, skipping", key, e)
                    continue
                tg.create_task(
                    self._processor.process(key, raw, worker_id),
                    name=f"callback-{worker_id}",
                )
                dispatched += 1

            self.cursor = next_cursor
            if self.cursor == 0:
                # Full keyspace pass done; pause runs alongside the batch.
                await self._sleep(self._wait_interval)

        return dispatched


async def run_callback_worker(settings: Settings) -> None:
    redis: Redis | None = None
    engine: AsyncEngine | None = None
    notifier = HttpDnNotifier(timeout=settings.NOTIFY_TIMEOUT)

    try:
        try:
            redis = create_redis(settings.redis_url, settings.REDIS_POOL_SIZE)
            engine = create_engine(settings)
            await check_connection(engine)
        except Exception:
            logger.critical("Failed to set up store connections", exc_info=True)
            raise SystemExit(1)

        keys = CallbackKeys(settings.KEY_PREFIX)
        store = RedisCallbackStore(redis)
        processor = CallbackProcessor(
            store,
            SqlAlchemyUoWFactory(create_sessionmaker(engine)),
            notifier,
            keys,
            confirmation_ttl=timedelta(hours=settings.CONFIRMATION_TTL_HOURS),
        )
        dispatcher = CallbackDispatcher(
            store,
            processor,
            pattern=keys.pending_pattern,
            batch_size=settings.SCAN_BATCH_SIZE,
            wait_interval=settings.WAIT_INTERVAL,
        )
        logger.info("Application started, background worker is running")
        await dispatcher.run_forever()
    finally:
        await notifier.close()
        if redis is not None:
            await redis.aclose()
        if engine is not None:
            await engine.dispose()


def load_settings() -> Settings:
    try:
        return Settings()  # type: ignore[call-arg]
    except ValidationError as e:
        logger.critical("BN_REDIS_URL and BN_DB_URL must be set: %s", e)
        raise SystemExit(1) from e


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = load_settings()
    logging.getLogger().setLevel(settings.LOG_LEVEL.upper())
    try:
        asyncio.run(run_callback_worker(settings))
    except KeyboardInterrupt:
        logger.info("Callback worker stopped")


if __name__ == "__main__":
    main()
