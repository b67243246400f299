from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from callback_worker.application.repositories.partner_route import PartnerRouteReader
from callback_worker.application.repositories.transaction_log import TransactionLogWriter


class UnitOfWork(Protocol):
    transaction_logs: TransactionLogWriter
    partner_routes: PartnerRouteReader

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Opens a fresh unit of work; one per scope, never shared across tasks."""

    def __call__(self) -> AbstractAsyncContextManager[UnitOfWork]: ...
