from __future__ import annotations

from datetime import timedelta
from typing import Protocol


class CallbackStore(Protocol):
    """Key-value namespace holding pending callback records."""

    async def scan(self, cursor: int, pattern: str, count: int) -> tuple[list[str], int]: ...

    async def get(self, key: str) -> str: ...

    async def set_with_expiry(self, key: str, value: str, ttl: timedelta) -> None: ...

    async def delete(self, key: str) -> None: ...
