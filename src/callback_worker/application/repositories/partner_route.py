from __future__ import annotations

from typing import Protocol

from callback_worker.domain.entities.partner_route import PartnerRoute


class PartnerRouteReader(Protocol):
    async def find_by_shortcode(
        self, short_code: str, telco_id: str
    ) -> PartnerRoute | None: ...
