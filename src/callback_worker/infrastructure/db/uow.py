from __future__ import annotations

from contextlib import asynccontextmanager
from types import TracebackType
from typing import AsyncIterator, Self

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from callback_worker.infrastructure.db.repositories.partner_route import PartnerRouteReaderRepo
from callback_worker.infrastructure.db.repositories.transaction_log import TransactionLogWriterRepo


class SqlAlchemyUoW:
    """Concrete Unit-of-Work backed by a single AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self.transaction_logs = TransactionLogWriterRepo(session)
        self.partner_routes = PartnerRouteReaderRepo(session)

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            await self.rollback()


class SqlAlchemyUoWFactory:
    """Opens one session per unit of work so concurrent workers never share one."""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self._sessionmaker = sessionmaker

    @asynccontextmanager
    async def __call__(self) -> AsyncIterator[SqlAlchemyUoW]:
        async with self._sessionmaker() as session:
            async with SqlAlchemyUoW(session) as uow:
                yield uow
