from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from callback_worker.domain.entities.transaction_log import TransactionLog
from callback_worker.infrastructure.db.mappers import transaction_log as mapper


class TransactionLogWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(self, entry: TransactionLog) -> None:
        self._session.add(mapper.entity_to_model(entry))
        await self._session.flush()
