from __future__ import annotations

from typing import Protocol

from callback_worker.domain.entities.transaction_log import TransactionLog


class TransactionLogWriter(Protocol):
    async def insert(self, entry: TransactionLog) -> None: ...
