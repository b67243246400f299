from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CallbackKeys:
    """Key layout of the callback namespace for a given prefix."""

    prefix: str

    @property
    def pending_pattern(self) -> str:
        return f"{self.prefix}-transaction-callback-api:*"

    def pending(self, ref: str) -> str:
        return f"{self.prefix}-transaction-callback-api:{ref}"

    def confirmation(self, tran_ref: str) -> str:
        return f"{self.prefix}-transaction-log-worker:{tran_ref}"
