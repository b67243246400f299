"""Shared test fakes and factories."""
from __future__ import annotations

import fnmatch
import json
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, AsyncIterator

import pytest

from callback_worker.application.exceptions import RecordNotFoundError
from callback_worker.domain.entities.partner_route import PartnerRoute
from callback_worker.domain.entities.transaction_log import TransactionLog
from callback_worker.domain.value_objects.keys import CallbackKeys
from callback_worker.services.callback_processor import CallbackProcessor


def make_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "code": "00",
        "desc": "ok",
        "msisdn": "0812345678",
        "operator": "AIS",
        "short-code": "1234",
        "tran-ref": "TX1",
        "timestamp": 1700000000,
        "cyberus-return": "SUCCESS",
    }
    payload.update(overrides)
    return payload


def make_raw(**overrides: Any) -> str:
    return json.dumps(make_payload(**overrides))


@dataclass
class FakeCallbackStore:
    """In-memory stand-in for the Redis store with SCAN-like paging."""

    data: dict[str, str] = field(default_factory=dict)
    expiries: dict[str, timedelta] = field(default_factory=dict)
    scan_failures: int = 0
    fail_get: set[str] = field(default_factory=set)
    fail_set: bool = False
    fail_delete: bool = False
    scan_calls: list[int] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)

    async def scan(self, cursor: int, pattern: str, count: int) -> tuple[list[str], int]:
        self.scan_calls.append(cursor)
        if self.scan_failures:
            self.scan_failures -= 1
            raise ConnectionError("store unavailable")
        matching = sorted(k for k in self.data if fnmatch.fnmatchcase(k, pattern))
        page = matching[cursor:cursor + count]
        next_cursor = cursor + count if cursor + count < len(matching) else 0
        return page, next_cursor

    async def get(self, key: str) -> str:
        if key in self.fail_get:
            raise ConnectionError("get failed")
        if key not in self.data:
            raise RecordNotFoundError(key)
        return self.data[key]

    async def set_with_expiry(self, key: str, value: str, ttl: timedelta) -> None:
        if self.fail_set:
            raise ConnectionError("set failed")
        self.data[key] = value
        self.expiries[key] = ttl

    async def delete(self, key: str) -> None:
        if self.fail_delete:
            raise ConnectionError("delete failed")
        self.deleted.append(key)
        self.data.pop(key, None)


@dataclass
class FakeDatabase:
    logs: list[TransactionLog] = field(default_factory=list)
    routes: dict[tuple[str, str], PartnerRoute] = field(default_factory=dict)
    fail_insert: bool = False
    fail_lookup: bool = False
    lookups: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class FakeTransactionLogWriter:
    _db: FakeDatabase
    _pending: list[TransactionLog] = field(default_factory=list)

    async def insert(self, entry: TransactionLog) -> None:
        if self._db.fail_insert:
            raise RuntimeError("insert failed")
        if any(row.id == entry.id for row in self._db.logs):
            raise RuntimeError("duplicate primary key")
        self._pending.append(entry)


@dataclass
class FakePartnerRouteReader:
    _db: FakeDatabase

    async def find_by_shortcode(self, short_code: str, telco_id: str) -> PartnerRoute | None:
        self._db.lookups.append((short_code, telco_id))
        if self._db.fail_lookup:
            raise RuntimeError("lookup failed")
        return self._db.routes.get((short_code, telco_id))


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    _db: FakeDatabase
    transaction_logs: FakeTransactionLogWriter | None = None
    partner_routes: FakePartnerRouteReader | None = None
    _committed: bool = False

    def __post_init__(self) -> None:
        self.transaction_logs = FakeTransactionLogWriter(self._db)
        self.partner_routes = FakePartnerRouteReader(self._db)

    async def commit(self) -> None:
        self._db.logs.extend(self.transaction_logs._pending)
        self.transaction_logs._pending.clear()
        self._committed = True

    async def rollback(self) -> None:
        self.transaction_logs._pending.clear()


@dataclass
class FakeUoWFactory:
    db: FakeDatabase = field(default_factory=FakeDatabase)

    @asynccontextmanager
    async def __call__(self) -> AsyncIterator[FakeUoW]:
        uow = FakeUoW(self.db)
        try:
            yield uow
        except BaseException:
            await uow.rollback()
            raise


@dataclass
class FakeNotifier:
    calls: list[tuple[str, dict[str, str]]] = field(default_factory=list)
    error: Exception | None = None

    async def notify(self, url: str, params: dict[str, str]) -> None:
        self.calls.append((url, params))
        if self.error is not None:
            raise self.error


@pytest.fixture
def keys() -> CallbackKeys:
    return CallbackKeys("tmvh")


@pytest.fixture
def store() -> FakeCallbackStore:
    return FakeCallbackStore()


@pytest.fixture
def uow_factory() -> FakeUoWFactory:
    return FakeUoWFactory()


@pytest.fixture
def db(uow_factory: FakeUoWFactory) -> FakeDatabase:
    return uow_factory.db


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def processor(store, uow_factory, notifier, keys) -> CallbackProcessor:
    return CallbackProcessor(store, uow_factory, notifier, keys)
