from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from callback_worker.domain.entities.partner_route import PartnerRoute
from callback_worker.infrastructure.db.mappers import partner_route as mapper
from callback_worker.infrastructure.db.models.client_service import ClientServiceModel


class PartnerRouteReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_shortcode(self, short_code: str, telco_id: str) -> PartnerRoute | None:
        stmt = (
            select(ClientServiceModel)
            .where(
                ClientServiceModel.shortcode == short_code,
                ClientServiceModel.telcoid == telco_id,
            )
            .order_by(ClientServiceModel.id.asc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return mapper.model_to_entity(model)
