from __future__ import annotations

from typing import Protocol


class DnNotifier(Protocol):
    async def notify(self, url: str, params: dict[str, str]) -> None: ...
