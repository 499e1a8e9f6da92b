import sys
from contextlib import contextmanager
from pathlib import Path

import psycopg2
import pytest

# Ensure project root is on sys.path so the flat modules import under pytest
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self.description = None
        self.rowcount = -1
        self._rows = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql):
        self.conn.executed.append(sql)
        if self.conn.fail:
            raise psycopg2.Error(self.conn.fail)
        if self.conn.columns:
            self.description = [(c, None, None, None, None, None, None) for c in self.conn.columns]
            self._rows = [tuple(r) for r in self.conn.rows]
            self.rowcount = len(self._rows)
        else:
            self.rowcount = self.conn.affected

    def fetchall(self):
        return list(self._rows)


class FakeConnection:
    """psycopg2-shaped connection returning canned rows (or failing)."""

    def __init__(self, columns=None, rows=None, fail=None, affected=0):
        self.columns = columns or []
        self.rows = rows or []
        self.fail = fail
        self.affected = affected
        self.executed = []
        self.autocommit = False
        self.closed = 0

    def cursor(self):
        return FakeCursor(self)


@pytest.fixture
def fake_conn():
    return FakeConnection()


@pytest.fixture
def client(monkeypatch, fake_conn):
    import main

    @contextmanager
    def _connection():
        yield fake_conn

    monkeypatch.setattr(main, "connection", _connection)
    main.app.config["TESTING"] = True
    with main.app.test_client() as c:
        yield c


@pytest.fixture
def make_conn():
    return FakeConnection
