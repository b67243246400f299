from __future__ import annotations

from callback_worker.domain.entities.partner_route import PartnerRoute
from callback_worker.infrastructure.db.models.client_service import ClientServiceModel


def model_to_entity(model: ClientServiceModel) -> PartnerRoute:
    return PartnerRoute(
        id=model.id,
        dn_url=model.dn_url or "",
        postback_url=model.postback_url or "",
        postback_counter=model.postback_counter or 0,
    )
