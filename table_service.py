# table_service.py
# One function per operation: build the statement, run it on the given
# connection, map the outcome into an envelope. Never raises for bad input or
# driver failures; those come back as error envelopes.
import json
import logging
from typing import Optional

import psycopg2

import config
import messages
import sql_builder
from db.postgres_client import run_statement
from models import Envelope, TableRef
from result_mapper import build_envelope, map_failure, map_result

logger = logging.getLogger(__name__)


def _audit(operation, table, sql):
    if not config.AUDIT_LOG:
        return
    with open(config.AUDIT_LOG, "a") as fh:
        fh.write(json.dumps({
            "operation": operation,
            "table": str(table) if table else None,
            "sql": sql,
        }) + "\n")


def execute(conn, operation: str, sql: Optional[str], table: Optional[TableRef] = None) -> Envelope:
    if sql is None:
        logger.error("%s - %s", operation, messages.INVALID_BODY_ERROR)
        return build_envelope({"error": messages.INVALID_BODY_ERROR})

    logger.info("%s - statement passed to DB:\n%s", operation, sql)
    _audit(operation, table, sql)
    try:
        result = run_statement(conn, sql)
    except psycopg2.Error as e:
        logger.error("%s - %s%s", operation, messages.QUERY_EXECUTION_ERROR, e)
        return build_envelope(map_failure(operation, e))

    logger.info("%s - %s(%d rows)", operation, messages.QUERY_EXECUTION_SUCCESS, len(result.rows))
    return build_envelope(map_result(operation, result))


def list_tables(conn, schema_filter: str = "") -> Envelope:
    return execute(conn, "tables", sql_builder.list_tables(schema_filter))


def table_details(conn, table: TableRef) -> Envelope:
    return execute(conn, "table_details", sql_builder.table_details(table), table)


def table_structure(conn, table: TableRef) -> Envelope:
    return execute(conn, "table_structure", sql_builder.table_structure(table), table)


def select(conn, table: TableRef, body: Optional[str]) -> Envelope:
    return execute(conn, "select", sql_builder.select(table, body), table)


def insert(conn, table: TableRef, body: Optional[str]) -> Envelope:
    return execute(conn, "insert", sql_builder.insert(table, body), table)


def delete(conn, table: TableRef, body: Optional[str]) -> Envelope:
    return execute(conn, "delete", sql_builder.delete(table, body), table)
