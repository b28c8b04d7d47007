from collections import defaultdict
from datetime import datetime, timedelta, timezone
from itertools import count
from types import SimpleNamespace
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

TOKENS = {"token-user-1": "user-1", "token-user-2": "user-2"}

TABLE_DEFAULTS = {
    "orders": {"status": "pending", "delivery_type": "direct"},
    "order_destinations": {"delivery_status": "pending", "delivered_at": None},
    "pricing_config": {"is_active": True, "max_distance": None},
    "customers": {"notes": None, "latitude": None, "longitude": None},
}


class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    """Just enough of the postgrest query builder for the persistence layer."""

    def __init__(self, db, table):
        self._db = db
        self._table = table
        self._op = "select"
        self._payload = None
        self._filters = []
        self._order = None
        self._limit = None
        self._count = None

    def select(self, *columns, count=None):
        self._count = count
        return self

    def insert(self, payload):
        self._op = "insert"
        self._payload = payload
        return self

    def update(self, payload):
        self._op = "update"
        self._payload = payload
        return self

    def delete(self):
        self._op = "delete"
        return self

    def eq(self, column, value):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        allowed = list(values)
        self._filters.append(lambda row: row.get(column) in allowed)
        return self

    def gte(self, column, value):
        self._filters.append(lambda row: row.get(column) is not None and row.get(column) >= value)
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, size):
        self._limit = size
        return self

    def _matches(self, row):
        return all(check(row) for check in self._filters)

    def execute(self):
        rows = self._db.tables[self._table]
        if self._op == "insert":
            if self._table in self._db.failing_inserts:
                raise RuntimeError(f"insert into {self._table} failed")
            payload = self._payload if isinstance(self._payload, list) else [self._payload]
            inserted = []
            for record in payload:
                stamp = self._db.timestamp()
                row = {
                    "id": str(uuid4()),
                    "created_at": stamp,
                    "updated_at": stamp,
                    **TABLE_DEFAULTS.get(self._table, {}),
                    **record,
                }
                rows.append(row)
                inserted.append(dict(row))
            return FakeResponse(inserted)

        matched = [row for row in rows if self._matches(row)]
        if self._op == "update":
            for row in matched:
                row.update(self._payload)
            return FakeResponse([dict(row) for row in matched])
        if self._op == "delete":
            self._db.tables[self._table] = [row for row in rows if not self._matches(row)]
            return FakeResponse([dict(row) for row in matched])

        total = len(matched)
        if self._order:
            column, desc = self._order
            matched = sorted(matched, key=lambda row: (row.get(column) is None, row.get(column)), reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]
        return FakeResponse([dict(row) for row in matched], count=total if self._count else None)


class FakeAuth:
    def get_user(self, jwt):
        if jwt not in TOKENS:
            raise RuntimeError("invalid JWT")
        return SimpleNamespace(user=SimpleNamespace(id=TOKENS[jwt]))


class FakeSupabase:
    def __init__(self):
        self.tables = defaultdict(list)
        self.failing_inserts = set()
        self.auth = FakeAuth()
        self._clock = count()
        self._base = datetime.now(timezone.utc)

    def timestamp(self):
        return (self._base + timedelta(milliseconds=next(self._clock))).isoformat()

    def table(self, name):
        return FakeQuery(self, name)


class StubGateway:
    """Stands in for ChatCompletionClient and records every request."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def complete(self, messages, temperature):
        self.calls.append({"messages": messages, "temperature": temperature})
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_db(monkeypatch):
    from src.kurir.db import supabase as supabase_module

    db = FakeSupabase()
    monkeypatch.setattr(supabase_module, "get_supabase_client", lambda: db)
    return db


@pytest.fixture
def stub_gateway(monkeypatch):
    from src.kurir.services.routing import service as routing_service

    stub = StubGateway(reply='{"optimizedRoute": []}')
    monkeypatch.setattr(routing_service, "ChatCompletionClient", lambda: stub)
    return stub


@pytest.fixture
def api_client(fake_db) -> TestClient:
    from src.kurir.main import create_app

    return TestClient(create_app())


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer token-user-1"}


@pytest.fixture
def other_user_headers():
    return {"Authorization": "Bearer token-user-2"}
