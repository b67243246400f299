from __future__ import annotations

import uuid
from dataclasses import dataclass

from callback_worker.domain.entities.transaction import TransactionPayload


@dataclass(frozen=True, slots=True)
class TransactionLog:
    id: str
    code: str
    description: str
    msisdn: str
    operator: str
    short_code: str
    tran_ref: str
    timestamp: int
    cyberus_return: str

    @classmethod
    def from_payload(cls, payload: TransactionPayload) -> TransactionLog:
        """Build a log row under a fresh id.

        The id is never the transaction reference, so reprocessing the same
        reference appends a second row instead of colliding.
        """
        return cls(
            id=str(uuid.uuid4()),
            code=payload.code,
            description=payload.desc,
            msisdn=payload.msisdn,
            operator=payload.operator,
            short_code=payload.short_code,
            tran_ref=payload.tran_ref,
            timestamp=payload.timestamp,
            cyberus_return=payload.cyberus_return,
        )
