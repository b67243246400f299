"""Delivery-notification (DN) ping to partner endpoints."""
from __future__ import annotations

import logging

import httpx

from callback_worker.application.exceptions import NotificationError

logger = logging.getLogger(__name__)


class HttpDnNotifier:
    """Implements application.ports.notifier.DnNotifier.

    Issues a GET with the callback fields as query parameters. Only the status
    code is inspected; the body is ignored.
    """

    def __init__(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        if client is None:
            self._client = httpx.AsyncClient(timeout=timeout)
            self._owns_client = True
        else:
            self._client = client
            self._owns_client = False

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpDnNotifier:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def notify(self, url: str, params: dict[str, str]) -> None:
        try:
            # Keep any query string the partner URL already carries.
            target = httpx.URL(url).copy_merge_params(params)
            response = await self._client.get(target)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NotificationError(f"GET {url} failed: {exc!r}") from exc

        if not response.is_success:
            raise NotificationError(
                f"GET {url} returned HTTP {response.status_code} {response.reason_phrase}"
            )
        logger.debug("DN ping to %s answered HTTP %s", url, response.status_code)
