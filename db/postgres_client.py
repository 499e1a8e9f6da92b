# db/postgres_client.py
import logging
import threading
from contextlib import contextmanager

from psycopg2 import pool as pg_pool

import config
from models import QueryResult

logger = logging.getLogger(__name__)

_POOL = None
_POOL_LOCK = threading.Lock()
# getconn() fails instead of waiting when the pool is exhausted, so callers
# queue here for one of the POOL_MAX_CONN slots
_SLOTS = threading.BoundedSemaphore(config.POOL_MAX_CONN)


def _connect_kwargs():
    kwargs = {}
    if config.QUERY_TIMEOUT > 0:
        # applied server side to every statement on the connection
        kwargs["options"] = f"-c statement_timeout={config.QUERY_TIMEOUT * 1000}"
    if config.DATABASE_URL:
        kwargs["dsn"] = config.DATABASE_URL
    else:
        kwargs.update(
            host=config.DB_HOST,
            port=config.DB_PORT,
            dbname=config.DB_NAME,
            user=config.DB_USER,
            password=config.DB_PASSWORD,
        )
    return kwargs


def get_pool():
    """Process-wide pool, created on first use. Raises psycopg2.Error if the DB is unreachable."""
    global _POOL
    with _POOL_LOCK:
        if _POOL is None:
            _POOL = pg_pool.ThreadedConnectionPool(
                config.POOL_MIN_CONN, config.POOL_MAX_CONN, **_connect_kwargs()
            )
            logger.info("connection pool created (min=%s, max=%s)", config.POOL_MIN_CONN, config.POOL_MAX_CONN)
        return _POOL


def close_pool():
    global _POOL
    with _POOL_LOCK:
        if _POOL is not None:
            _POOL.closeall()
            _POOL = None


@contextmanager
def connection():
    # the connection goes back to the pool only once the caller is done with
    # the result, never while a statement is still running on it
    with _SLOTS:
        pool = get_pool()
        conn = pool.getconn()
        try:
            conn.autocommit = True
            yield conn
        finally:
            pool.putconn(conn, close=bool(conn.closed))


def run_statement(conn, sql):
    """
    Execute one statement and fetch everything it returns.
    Driver errors (psycopg2.Error) propagate to the caller.
    """
    with conn.cursor() as cur:
        cur.execute(sql)
        cols = [c[0] for c in cur.description] if cur.description else []
        rows = [list(r) for r in cur.fetchall()] if cur.description else []
        return QueryResult(columns=cols, rows=rows, rowcount=cur.rowcount)


def check_connection():
    with connection() as conn:
        res = run_statement(conn, "SELECT 1")
    return bool(res.rows) and res.rows[0][0] == 1
