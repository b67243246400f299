from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PartnerRoute:
    id: int
    dn_url: str
    postback_url: str
    postback_counter: int
