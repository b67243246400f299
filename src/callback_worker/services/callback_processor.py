"""Processing of a single pending callback record."""
from __future__ import annotations

import logging
from datetime import timedelta

from callback_worker.application.exceptions import NotificationError, PayloadDecodeError
from callback_worker.application.ports.notifier import DnNotifier
from callback_worker.application.ports.store import CallbackStore
from callback_worker.application.uow import UnitOfWorkFactory
from callback_worker.domain.entities.partner_route import PartnerRoute
from callback_worker.domain.entities.transaction import TransactionPayload
from callback_worker.domain.entities.transaction_log import TransactionLog
from callback_worker.domain.value_objects.enums import TelcoId
from callback_worker.domain.value_objects.keys import CallbackKeys
from callback_worker.infrastructure.store.serializer import decode_payload

logger = logging.getLogger(__name__)


class CallbackProcessor:
    """Decode, notify, log and acknowledge one callback record.

    The store key is deleted only when the payload is undecodable or once its
    log row has been committed. Any other failure leaves the key in place so
    the next scan picks it up again.
    """

    def __init__(
        self,
        store: CallbackStore,
        uow_factory: UnitOfWorkFactory,
        notifier: DnNotifier,
        keys: CallbackKeys,
        *,
        confirmation_ttl: timedelta = timedelta(hours=240),
    ) -> None:
        self._store = store
        self._uow_factory = uow_factory
        self._notifier = notifier
        self._keys = keys
        self._confirmation_ttl = confirmation_ttl

    async def process(self, key: str, raw: str, worker_id: int = 0) -> bool:
        """Returns True when the record was logged and acknowledged. Never raises."""
        try:
            return await self._process(key, raw, worker_id)
        except Exception:
            logger.exception("Worker %d: unexpected error processing key %s", worker_id, key)
            return False

    async def _process(self, key: str, raw: str, worker_id: int) -> bool:
        logger.info("Worker %d: started processing key %s", worker_id, key)

        try:
            payload = decode_payload(raw)
        except PayloadDecodeError as e:
            logger.error("Worker %d: undecodable payload at key %s, discarding: %s", worker_id, key, e.detail)
            await self._delete(key, worker_id)
            return False

        route = await self._find_route(payload, key, worker_id)
        if route is not None and route.dn_url:
            await self._notify(route.dn_url, payload, key, worker_id)

        entry = TransactionLog.from_payload(payload)
        try:
            async with self._uow_factory() as uow:
                await uow.transaction_logs.insert(entry)
                await uow.commit()
        except Exception:
            logger.exception(
                "Worker %d: log insert failed for key %s, will be retried on a later scan",
                worker_id,
                key,
            )
            return False

        marker = self._keys.confirmation(payload.tran_ref)
        try:
            await self._store.set_with_expiry(marker, raw, self._confirmation_ttl)
        except Exception as e:
            logger.warning("Worker %d: confirmation marker %s not written for key %s: %r", worker_id, marker, key, e)

        await self._delete(key, worker_id)
        logger.info("Worker %d: finished key %s (log id %s)", worker_id, key, entry.id)
        return True

    async def _find_route(
        self, payload: TransactionPayload, key: str, worker_id: int
    ) -> PartnerRoute | None:
        telco_id = TelcoId.from_operator(payload.operator)
        try:
            async with self._uow_factory() as uow:
                route = await uow.partner_routes.find_by_shortcode(payload.short_code, telco_id.value)
        except Exception as e:
            logger.warning("Worker %d: partner lookup failed for key %s: %r, skipping DN", worker_id, key, e)
            return None
        if route is None:
            logger.info(
                "Worker %d: no partner for short code %s / telco %s (key %s), skipping DN",
                worker_id,
                payload.short_code,
                telco_id.value,
                key,
            )
        return route

    async def _notify(self, url: str, payload: TransactionPayload, key: str, worker_id: int) -> None:
        try:
            await self._notifier.notify(url, payload.notification_params())
        except NotificationError as e:
            logger.warning("Worker %d: DN ping failed for key %s: %s", worker_id, key, e.detail)
        else:
            logger.info("Worker %d: DN ping sent for key %s", worker_id, key)

    async def _delete(self, key: str, worker_id: int) -> None:
        try:
            await self._store.delete(key)
        except Exception as e:
            logger.warning("Worker %d: failed to delete key %s: %r", worker_id, key, e)
