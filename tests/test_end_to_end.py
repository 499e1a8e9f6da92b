# Runs against a real PostgreSQL only when TEST_DATABASE_URL is set.
import os
from contextlib import contextmanager

import psycopg2
import pytest

import main

DB_URL = os.getenv("TEST_DATABASE_URL")

pytestmark = pytest.mark.skipif(not DB_URL, reason="TEST_DATABASE_URL not set")

SCHEMA = "pg_tables_api_test"


@pytest.fixture
def live_client(monkeypatch):
    conn = psycopg2.connect(DB_URL)
    conn.autocommit = True
    with conn.cursor() as cur:
        cur.execute(f"DROP SCHEMA IF EXISTS {SCHEMA} CASCADE")
        cur.execute(f"CREATE SCHEMA {SCHEMA}")
        cur.execute(f"CREATE TABLE {SCHEMA}.people (id integer PRIMARY KEY, name varchar(40))")

    @contextmanager
    def _connection():
        yield conn

    monkeypatch.setattr(main, "connection", _connection)
    with main.app.test_client() as c:
        yield c

    with conn.cursor() as cur:
        cur.execute(f"DROP SCHEMA IF EXISTS {SCHEMA} CASCADE")
    conn.close()


def _rows(client):
    resp = client.post(f"/select/{SCHEMA}/people", data="{}")
    assert resp.status_code == 200
    return resp.get_json()["results"]


def test_schema_filter_only_returns_that_schema(live_client):
    results = live_client.get(f"/tables/{SCHEMA}").get_json()["results"]
    assert results == [{"schema": SCHEMA, "name": "people"}]

    results = live_client.get("/tables/public").get_json()["results"]
    assert all(r["schema"] == "public" for r in results)


def test_structure_marks_primary_key(live_client):
    results = live_client.get(f"/tables/{SCHEMA}/people/structure").get_json()["results"]
    assert [(c["columnName"], c["isPK"], c["fieldLength"]) for c in results] == [
        ("id", True, None),
        ("name", False, 40),
    ]


def test_details(live_client):
    results = live_client.get(f"/tables/{SCHEMA}/PEOPLE").get_json()["results"]
    assert results["tableName"] == "people"
    assert results["hasIndexes"] is True


def test_insert_select_delete_cycle(live_client):
    before = len(_rows(live_client))
    resp = live_client.post(
        f"/insert/{SCHEMA}/people",
        data='{"columns": "id,name", "values": [[1, "ann"], [2, null]]}',
    )
    assert resp.status_code == 200
    assert len(_rows(live_client)) == before + 2
    assert _rows(live_client) == _rows(live_client)

    resp = live_client.post(f"/insert/{SCHEMA}/people", data='{"columns": "id", "values": [[1]]}')
    assert resp.status_code == 500
    assert "duplicate key" in resp.get_json()["error"]

    resp = live_client.post(f"/delete/{SCHEMA}/people", data='{"where": ""}')
    assert resp.status_code == 200
    assert _rows(live_client) == []
