# sql_builder.py
# Turns a table reference plus a JSON request body into a SQL statement.
#
# WARNING: values and predicates are inlined into the statement text exactly
# as received (no quoting of embedded quotes, no parameter binding). Anything
# exposed beyond a trusted network needs parameter binding first.
import json
import logging
from typing import Any, List, Optional

from body_validator import parse_body
from models import TableRef
from query_templates import TEMPLATES, CATALOG_COLUMNS

logger = logging.getLogger(__name__)

_MISSING = object()


class _InvalidField(Exception):
    pass


def format_value(val: Any) -> str:
    # strings are quoted but NOT escaped; everything else is emitted as JSON text
    if val is None:
        return "null"
    if isinstance(val, str):
        return f"'{val}'"
    return json.dumps(val, separators=(",", ":"))


def encode_values(rows: List[List[Any]]) -> str:
    """
    Render an array of rows as the body of a VALUES clause:
      [["a", None], ["b", 1]]  ->  "('a',null),\n('b',1)"
    Rows may differ in length; nothing is checked against the column list.
    """
    return ",\n".join(
        "(" + ",".join(format_value(v) for v in row) + ")" for row in rows
    )


def normalize_where(where: Optional[str]) -> str:
    if not where:
        return ";"
    if where.endswith(";"):
        return where
    return f"WHERE {where};"


def _string_field(body: dict, key: str, default=_MISSING):
    val = body.get(key)
    if val is None:
        return default
    if not isinstance(val, str):
        raise _InvalidField(f"'{key}' must be a string")
    return val


def list_tables(schema_filter: Optional[str] = "") -> str:
    schema_clause = ""
    if schema_filter:
        schema_clause = f"AND LOWER(schemaname) = '{schema_filter.lower()}'"
    return TEMPLATES["tables"].format(columns=CATALOG_COLUMNS, schema_clause=schema_clause)


def table_details(table: TableRef) -> str:
    t = table.folded()
    return TEMPLATES["table_details"].format(columns=CATALOG_COLUMNS, schema=t.schema, name=t.name)


def table_structure(table: TableRef) -> str:
    t = table.folded()
    return TEMPLATES["table_structure"].format(schema=t.schema, name=t.name)


def select(table: TableRef, body: Optional[str]) -> Optional[str]:
    """
    body keys (all optional):
      - select: comma separated column list, defaults to *
                ("columns" is read when "select" is absent)
      - where:  condition text, wrapped as WHERE <cond>; unless it already ends in ;
    Returns None if the body is not valid JSON.
    """
    fields = parse_body(body)
    if fields is None:
        logger.error("select on %s - body is not valid JSON", table)
        return None
    try:
        columns = _string_field(fields, "select", default="")
        if not columns:
            columns = _string_field(fields, "columns", default="")
        where = _string_field(fields, "where", default="")
    except _InvalidField as e:
        logger.error("select on %s - %s", table, e)
        return None

    t = table.folded()
    return TEMPLATES["select"].format(
        columns=columns or "*",
        schema=t.schema,
        name=t.name,
        where_clause=normalize_where(where),
    )


def delete(table: TableRef, body: Optional[str]) -> Optional[str]:
    # "where" must be present (an explicit "" deletes every row); a body
    # without it is rejected rather than treated as a full-table delete
    fields = parse_body(body)
    if fields is None:
        logger.error("delete on %s - body is not valid JSON", table)
        return None
    try:
        where = _string_field(fields, "where")
    except _InvalidField as e:
        logger.error("delete on %s - %s", table, e)
        return None
    if where is _MISSING:
        logger.error("delete on %s - body has no 'where' key", table)
        return None

    t = table.folded()
    return TEMPLATES["delete"].format(schema=t.schema, name=t.name, where_clause=normalize_where(where))


def insert(table: TableRef, body: Optional[str]) -> Optional[str]:
    """
    body keys (both required):
      - columns: comma separated column list, e.g. "id,name"
      - values:  array of rows, each an array of JSON scalars
    """
    fields = parse_body(body)
    if not fields:
        logger.error("insert on %s - body is empty or not valid JSON", table)
        return None
    try:
        columns = _string_field(fields, "columns", default="")
    except _InvalidField as e:
        logger.error("insert on %s - %s", table, e)
        return None

    rows = fields.get("values") or []
    if not isinstance(rows, list) or not all(isinstance(r, list) for r in rows):
        logger.error("insert on %s - 'values' must be an array of arrays", table)
        return None
    values = encode_values(rows)

    if not columns or not values:
        logger.error("insert on %s - 'columns' and 'values' are both required", table)
        return None

    t = table.folded()
    return TEMPLATES["insert"].format(schema=t.schema, name=t.name, columns=columns, values=values)
