from __future__ import annotations

from enum import StrEnum


class TelcoId(StrEnum):
    """Routing code of a mobile operator in the partner routing table."""

    UNKNOWN = "0"
    TRUEMOVE = "1"
    DTAC = "2"
    AIS = "3"

    @classmethod
    def from_operator(cls, operator: str) -> TelcoId:
        if operator in ("TRUEMOVE", "DTAC", "AIS"):
            return cls[operator]
        return cls.UNKNOWN
