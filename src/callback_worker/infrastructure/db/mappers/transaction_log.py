from __future__ import annotations

from callback_worker.domain.entities.transaction_log import TransactionLog
from callback_worker.infrastructure.db.models.transaction_log import TransactionLogModel


def entity_to_model(entity: TransactionLog) -> TransactionLogModel:
    return TransactionLogModel(
        id=entity.id,
        code=entity.code,
        description=entity.description,
        msisdn=entity.msisdn,
        operator=entity.operator,
        short_code=entity.short_code,
        tran_ref=entity.tran_ref,
        timestamp=entity.timestamp,
        cyberus_return=entity.cyberus_return,
    )
