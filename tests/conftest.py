import asyncio

import pytest
from fastapi.testclient import TestClient


class FakeDatabase:
    """
    In-memory stand-in for `core.db.Database` that understands the four
    statements issued by `bookmarks.repository`.
    """

    def __init__(self):
        self.rows = {}
        self.calls = []
        self._next_id = 1

    def _record(self, sql, args):
        normalized = " ".join(sql.split())
        self.calls.append((normalized, args))
        return normalized

    async def fetch_all(self, sql, *args):
        normalized = self._record(sql, args)
        assert normalized.startswith("SELECT"), normalized
        return [dict(row) for row in self.rows.values()]

    async def fetch_one(self, sql, *args):
        normalized = self._record(sql, args)
        if normalized.startswith("INSERT"):
            title, url, description, rating = args
            row = {
                "id": self._next_id,
                "title": title,
                "url": url,
                "description": description,
                "rating": rating,
            }
            self.rows[row["id"]] = row
            self._next_id += 1
            return dict(row)
        assert "WHERE id = $1" in normalized, normalized
        row = self.rows.get(args[0])
        return dict(row) if row is not None else None

    async def execute(self, sql, *args):
        normalized = self._record(sql, args)
        assert normalized.startswith("DELETE"), normalized
        removed = self.rows.pop(args[0], None)
        return f"DELETE {0 if removed is None else 1}"

    def seed(self, **fields):
        row = {"description": "", **fields, "id": self._next_id}
        self.rows[row["id"]] = row
        self._next_id += 1
        return row


class FailingDatabase:
    async def fetch_all(self, sql, *args):
        raise OSError("connection refused")

    async def fetch_one(self, sql, *args):
        raise OSError("connection refused")

    async def execute(self, sql, *args):
        raise OSError("connection refused")


@pytest.fixture()
def fake_db():
    return FakeDatabase()


def _client_for(database):
    from core.db import get_db
    from main import app

    app.dependency_overrides[get_db] = lambda: database
    # Unhandled errors must come back as the 500 response, not be re-raised.
    return app, TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def client(fake_db):
    app, test_client = _client_for(fake_db)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def failing_client():
    app, test_client = _client_for(FailingDatabase())
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def run():
    return asyncio.run
