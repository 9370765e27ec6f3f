"""In-memory stand-in for the Supabase client used by the service layer."""

from __future__ import annotations

import copy
import itertools
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest


class FakeAPIError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = None
        self.columns = "*"
        self.payload = None
        self.filters: List[tuple] = []
        self.ordering = None

    # --- builders ---
    def select(self, columns: str = "*"):
        self.op, self.columns = "select", columns
        return self

    def insert(self, payload):
        self.op, self.payload = "insert", payload
        return self

    def update(self, payload):
        self.op, self.payload = "update", payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.ordering = (column, desc)
        return self

    # --- execution ---
    def _matches(self, row):
        return all(row.get(c) == v for c, v in self.filters)

    def execute(self):
        if self.table in self.db.failing_tables:
            raise FakeAPIError(f"{self.table} is unavailable")
        self.db.calls.append((self.table, self.op))
        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "insert":
            payloads = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for payload in payloads:
                row = dict(payload)
                if self.table != "profiles":
                    row.setdefault("id", next(self.db.ids))
                if self.table == "profiles":
                    row.setdefault("role", "customer")
                row.setdefault("created_at", f"2025-01-01T00:00:{next(self.db.clock):02d}")
                rows.append(row)
                inserted.append(copy.deepcopy(row))
            return SimpleNamespace(data=inserted)

        matched = [r for r in rows if self._matches(r)]

        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=copy.deepcopy(matched))

        if self.op == "delete":
            self.db.tables[self.table] = [r for r in rows if not self._matches(r)]
            return SimpleNamespace(data=copy.deepcopy(matched))

        result = copy.deepcopy(matched)
        if self.ordering:
            column, desc = self.ordering
            result.sort(key=lambda r: r.get(column) or "", reverse=desc)
        if self.columns.startswith("*, customer:customers"):
            for row in result:
                row["customer"] = self.db.customer_with_profile(row.get("customer_id"))
        elif self.columns != "*":
            wanted = [c.strip() for c in self.columns.split(",")]
            result = [{c: r.get(c) for c in wanted} for r in result]
        return SimpleNamespace(data=result)


class FakeAuth:
    def __init__(self):
        self.accounts: Dict[str, Dict[str, Any]] = {}
        self.session = None
        self._ids = itertools.count(1)

    def sign_up(self, credentials):
        email = credentials["email"]
        if email in self.accounts:
            raise FakeAPIError("User already registered")
        metadata = credentials.get("options", {}).get("data", {})
        user = SimpleNamespace(id=f"user-{next(self._ids)}", email=email, user_metadata=metadata)
        self.accounts[email] = {"password": credentials["password"], "user": user}
        return SimpleNamespace(user=user, session=None)

    def sign_in_with_password(self, credentials):
        account = self.accounts.get(credentials["email"])
        if account is None or account["password"] != credentials["password"]:
            raise FakeAPIError("Invalid login credentials")
        self.session = SimpleNamespace(user=account["user"])
        return SimpleNamespace(user=account["user"], session=self.session)

    def get_session(self):
        return self.session

    def sign_out(self):
        self.session = None


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {"profiles": [], "customers": [], "orders": []}
        self.auth = FakeAuth()
        self.failing_tables = set()
        self.calls: List[tuple] = []
        self.ids = itertools.count(1)
        self.clock = itertools.count(1)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def customer_with_profile(self, customer_id):
        customer = next((c for c in self.tables["customers"] if c["id"] == customer_id), None)
        if customer is None:
            return None
        profile = next((p for p in self.tables["profiles"] if p["id"] == customer["profile_id"]), None)
        return {
            "id": customer["id"],
            "profile": {"name": profile["name"], "email": profile["email"]} if profile else None,
        }


@pytest.fixture
def client():
    return FakeSupabase()


@pytest.fixture
def user():
    return SimpleNamespace(id="user-42", email="ana@example.com", user_metadata={"full_name": "Ana Cruz"})
