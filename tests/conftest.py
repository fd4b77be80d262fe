from types import SimpleNamespace
from typing import Any, List, NamedTuple

import pytest

from edulms.api import DataStore
from edulms.navigation import Navigator
from edulms.profiles import ProfileResolver
from edulms.session_store import SessionStore

STUDENT_ID = "user-student"
ADMIN_ID = "user-admin"


def make_session(user_id: str, email: str, token: str = "token-1"):
    """Shape of a Supabase auth Session as far as the front end reads it."""
    return SimpleNamespace(
        user=SimpleNamespace(id=user_id, email=email),
        access_token=token,
    )


# ---------------------------------------------------------
# FAKE AUTH CLIENT
# ---------------------------------------------------------
class FakeAuthSubscription:
    def __init__(self, auth: "FakeAuth", callback):
        self._auth = auth
        self.callback = callback

    def unsubscribe(self):
        if self in self._auth.subscriptions:
            self._auth.subscriptions.remove(self)


class FakeAuth:
    def __init__(self, session=None):
        self.session = session
        self.subscriptions: List[FakeAuthSubscription] = []
        self.get_session_calls = 0
        self.bootstrap_error = None
        self.sign_out_error = None

    def get_session(self):
        self.get_session_calls += 1
        if self.bootstrap_error:
            raise self.bootstrap_error
        return self.session

    def on_auth_state_change(self, callback):
        subscription = FakeAuthSubscription(self, callback)
        self.subscriptions.append(subscription)
        return subscription

    def sign_out(self):
        if self.sign_out_error:
            raise self.sign_out_error
        self.session = None
        self.emit("SIGNED_OUT", None)

    def emit(self, event: str, session):
        for subscription in list(self.subscriptions):
            subscription.callback(event, session)


# ---------------------------------------------------------
# FAKE POSTGREST TABLE CLIENT
# ---------------------------------------------------------
class FakeResponse(NamedTuple):
    data: Any


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = None
        self.columns = None
        self.payload = None
        self.on_conflict = None
        self.filters = []
        self.order_by = None
        self.limit_to = None

    def select(self, columns="*"):
        self.op, self.columns = "select", columns
        return self

    def insert(self, row):
        self.op, self.payload = "insert", row
        return self

    def update(self, patch):
        self.op, self.payload = "update", patch
        return self

    def upsert(self, row, on_conflict=None):
        self.op, self.payload, self.on_conflict = "upsert", row, on_conflict
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, size):
        self.limit_to = size
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        self.db.calls.append(self)
        if self.db.error is not None:
            raise self.db.error

        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "select":
            result = [dict(row) for row in rows if self._matches(row)]
            if self.order_by:
                column, desc = self.order_by
                result.sort(key=lambda row: str(row.get(column) or ""), reverse=desc)
            if self.limit_to is not None:
                result = result[:self.limit_to]
            return FakeResponse(result)

        if self.op == "insert":
            return FakeResponse([self.db.add(self.table, self.payload)])

        if self.op == "update":
            matched = [row for row in rows if self._matches(row)]
            for row in matched:
                row.update(self.payload)
            return FakeResponse([dict(row) for row in matched])

        if self.op == "upsert":
            keys = self.on_conflict.split(",")
            for row in rows:
                if all(row.get(key) == self.payload.get(key) for key in keys):
                    row.update(self.payload)
                    return FakeResponse([dict(row)])
            return FakeResponse([self.db.add(self.table, self.payload)])

        raise AssertionError(f"execute() without an operation on {self.table}")


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.calls: List[FakeQuery] = []
        self.error = None

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def add(self, table: str, row: dict) -> dict:
        rows = self.tables.setdefault(table, [])
        new_row = dict(row)
        new_row.setdefault("id", f"{table}-{len(rows) + 1}")
        rows.append(new_row)
        return dict(new_row)

    def profile_lookups(self) -> int:
        return sum(1 for q in self.calls if q.table == "profiles" and q.op == "select")


# ---------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------
@pytest.fixture()
def fake_db():
    """In-memory tables seeded with one student and one admin profile."""
    db = FakeSupabase()
    db.add("profiles", {"id": "profile-1", "user_id": STUDENT_ID, "full_name": "Student One", "role": "student"})
    db.add("profiles", {"id": "profile-2", "user_id": ADMIN_ID, "full_name": "Admin One", "role": "admin"})
    return db


@pytest.fixture()
def data_store(fake_db):
    return DataStore(fake_db)


@pytest.fixture()
def resolver(data_store):
    return ProfileResolver(data_store)


@pytest.fixture()
def navigator():
    return Navigator()


@pytest.fixture()
def fake_auth():
    """Signed-out auth client; tests set .session to sign someone in before bootstrap."""
    return FakeAuth()


@pytest.fixture()
def store(fake_auth):
    session_store = SessionStore(fake_auth)
    yield session_store
    session_store.close()


@pytest.fixture()
def student_session():
    return make_session(STUDENT_ID, "student1@example.com")


@pytest.fixture()
def admin_session():
    return make_session(ADMIN_ID, "admin1@example.com")
