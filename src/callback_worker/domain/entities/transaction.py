from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TransactionPayload:
    """Decoded body of a pending callback record."""

    code: str
    desc: str
    msisdn: str
    operator: str
    short_code: str
    tran_ref: str
    timestamp: int
    cyberus_return: str

    def notification_params(self) -> dict[str, str]:
        return {
            "msisdn": self.msisdn,
            "operator": self.operator,
            "tran_ref": self.tran_ref,
            "short_code": self.short_code,
            "code": self.code,
            "desc": self.desc,
            "timestamp": str(self.timestamp),
        }
