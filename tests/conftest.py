"""
Shared fixtures: environment, an in-memory Supabase stand-in and request builders.
"""

import json
import os
import time
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
import azure.functions as func

# Required settings must exist before function_app is imported
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-role-key")
os.environ.setdefault("GROQ_API_KEY", "test-groq-key")
os.environ.setdefault("FRONTEND_URL", "http://localhost:5173")

from shared import supabase_client
from shared.rate_limit import reset_rate_limits


class FakeQuery:
    """Fluent query builder that filters rows held by FakeSupabase."""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.head = False
        self.payload = None
        self.filters = []
        self.calls = []

    def _record(self, name, *args, **kwargs):
        self.calls.append((name, args, kwargs))
        return self

    def select(self, *columns, count=None, head=None):
        self.head = bool(head)
        return self._record("select", *columns, count=count, head=head)

    def insert(self, row):
        self.op, self.payload = "insert", row
        return self._record("insert", row)

    def update(self, data):
        self.op, self.payload = "update", data
        return self._record("update", data)

    def delete(self):
        self.op = "delete"
        return self._record("delete")

    def eq(self, column, value):
        self.filters.append(lambda r: r.get(column) == value)
        return self._record("eq", column, value)

    def in_(self, column, values):
        self.filters.append(lambda r: r.get(column) in values)
        return self._record("in_", column, values)

    def gte(self, column, value):
        self.filters.append(lambda r: r.get(column) is not None and r[column] >= value)
        return self._record("gte", column, value)

    def lte(self, column, value):
        self.filters.append(lambda r: r.get(column) is not None and r[column] <= value)
        return self._record("lte", column, value)

    def ilike(self, column, pattern):
        needle = pattern.strip("%").lower()
        self.filters.append(lambda r: needle in str(r.get(column) or "").lower())
        return self._record("ilike", column, pattern)

    def or_(self, filters):
        return self._record("or_", filters)

    def order(self, column, desc=False):
        return self._record("order", column, desc=desc)

    def execute(self):
        if self.db.latency:
            time.sleep(self.db.latency)
        if self.table in self.db.failing_tables:
            raise Exception(f"{self.table} unavailable")

        rows = self.db.tables.setdefault(self.table, [])
        matched = [r for r in rows if all(f(r) for f in self.filters)]

        if self.op == "insert":
            if self.table in self.db.rejecting_inserts:
                raise Exception(f"insert into {self.table} rejected")
            row = {
                "id": str(uuid.uuid4()),
                "created_at": datetime.now(timezone.utc).isoformat(),
                **self.payload,
            }
            rows.append(row)
            return SimpleNamespace(data=[dict(row)], count=None)

        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=[dict(r) for r in matched], count=None)

        if self.op == "delete":
            self.db.tables[self.table] = [r for r in rows if r not in matched]
            return SimpleNamespace(data=[dict(r) for r in matched], count=None)

        data = [] if self.head else [dict(r) for r in matched]
        return SimpleNamespace(data=data, count=len(matched))


class FakeSupabase:
    """Stand-in for the Supabase client: tables in memory, auth and storage mocked."""

    def __init__(self):
        self.tables = {}
        self.queries = []
        self.failing_tables = set()
        self.rejecting_inserts = set()
        self.tokens = {}
        self.latency = 0
        self.auth = MagicMock()
        self.auth.get_user.side_effect = self._get_user
        self.storage = MagicMock()

    def table(self, name):
        query = FakeQuery(self, name)
        self.queries.append(query)
        return query

    def queries_for(self, name):
        return [q for q in self.queries if q.table == name]

    def _get_user(self, token):
        if token not in self.tokens:
            raise Exception("invalid JWT")
        return SimpleNamespace(user=self.tokens[token])

    def add_user(self, token, role="USER", email=None, with_profile=True):
        user_id = str(uuid.uuid4())
        self.tokens[token] = SimpleNamespace(id=user_id, email=email or f"{token}@example.com")
        if with_profile:
            self.tables.setdefault("profiles", []).append(
                {"id": user_id, "full_name": token.title(), "role": role}
            )
        return user_id


@pytest.fixture
def fake_db(monkeypatch):
    fake = FakeSupabase()
    monkeypatch.setattr(supabase_client, "_supabase_client", fake)
    monkeypatch.setattr(supabase_client, "_supabase_auth_client", fake)
    return fake


@pytest.fixture
def users(fake_db):
    """Tokens for one user of each role."""
    return {
        "admin": fake_db.add_user("admin-token", "ADMIN"),
        "staff": fake_db.add_user("staff-token", "STAFF"),
        "user": fake_db.add_user("user-token", "USER"),
    }


@pytest.fixture(autouse=True)
def fresh_rate_limits():
    reset_rate_limits()
    yield
    reset_rate_limits()


def make_request(
    method,
    url,
    body=None,
    token=None,
    params=None,
    route_params=None,
    headers=None,
    raw_body=None,
):
    """Build an HttpRequest the way the Functions host hands it to a handler."""
    request_headers = {"Content-Type": "application/json"}
    if token:
        request_headers["Authorization"] = f"Bearer {token}"
    request_headers.update(headers or {})

    if raw_body is not None:
        data = raw_body
    elif body is not None:
        data = json.dumps(body).encode("utf-8")
    else:
        data = b""

    return func.HttpRequest(
        method=method,
        url=f"http://localhost{url}",
        headers=request_headers,
        params=params or {},
        route_params=route_params or {},
        body=data,
    )


def read_json(response):
    return json.loads(response.get_body())
