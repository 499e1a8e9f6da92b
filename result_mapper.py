# result_mapper.py
# Maps raw query results onto response bodies, and bodies onto envelopes.
import datetime
import uuid
from decimal import Decimal
from typing import Any, Dict, List

import messages
from models import Envelope, QueryResult

# Field names by column position, one decoder per catalog query
TABLE_FIELDS = ("schema", "name")
DETAIL_FIELDS = (
    "tableSchema",
    "tableName",
    "tableOwner",
    "tableSpace",
    "hasIndexes",
    "hasRules",
    "hasTriggers",
)
STRUCTURE_FIELDS = (
    "columnName",
    "ordinalPosition",
    "isNullable",
    "dataType",
    "fieldLength",
    "isPK",
)

# absent values for these fields are reported as the string "null"
NULL_AS_TEXT = {"tableSpace"}

CATALOG_OPERATIONS = {"tables", "table_details", "table_structure"}


def json_value(val):
    """
    Convert a driver value into something the JSON encoder emits losslessly.
    dates and times -> ISO 8601, intervals -> str, numeric -> number,
    bytea -> hex text; arrays and json columns are converted element-wise.
    """
    if isinstance(val, (datetime.date, datetime.time)):
        return val.isoformat()
    if isinstance(val, datetime.timedelta):
        return str(val)
    if isinstance(val, Decimal):
        if not val.is_finite():
            return str(val)
        return int(val) if val == val.to_integral_value() else float(val)
    if isinstance(val, (bytes, bytearray, memoryview)):
        return bytes(val).hex()
    if isinstance(val, uuid.UUID):
        return str(val)
    if isinstance(val, (list, tuple)):
        return [json_value(v) for v in val]
    if isinstance(val, dict):
        return {k: json_value(v) for k, v in val.items()}
    return val


def decode_row(fields, row) -> Dict[str, Any]:
    out = {}
    for pos, name in enumerate(fields):
        val = row[pos] if pos < len(row) else None
        if val is None and name in NULL_AS_TEXT:
            val = "null"
        out[name] = json_value(val)
    return out


def _tables(result: QueryResult) -> List[Dict[str, Any]]:
    return [decode_row(TABLE_FIELDS, r) for r in result.rows]


def _table_details(result: QueryResult) -> Dict[str, Any]:
    details = {}
    for r in result.rows:
        details = decode_row(DETAIL_FIELDS, r)
    return details


def _table_structure(result: QueryResult) -> List[Dict[str, Any]]:
    return [decode_row(STRUCTURE_FIELDS, r) for r in result.rows]


def _select(result: QueryResult) -> List[List[Any]]:
    return [[json_value(v) for v in r] for r in result.rows]


def _write(result: QueryResult) -> str:
    return messages.QUERY_EXECUTION_SUCCESS


MAPPERS = {
    "tables": _tables,
    "table_details": _table_details,
    "table_structure": _table_structure,
    "select": _select,
    "insert": _write,
    "delete": _write,
}


def map_result(operation: str, result: QueryResult) -> Dict[str, Any]:
    return {"results": MAPPERS[operation](result)}


def map_failure(operation: str, cause: Any) -> Dict[str, Any]:
    # catalog reads only report the fixed prefix; the driver text goes to the log
    if operation in CATALOG_OPERATIONS:
        return {"error": messages.QUERY_EXECUTION_ERROR}
    return {"error": messages.QUERY_EXECUTION_ERROR + str(cause).strip()}


def build_envelope(mapped: Dict[str, Any]) -> Envelope:
    if "error" in mapped:
        return Envelope(messages.FAILED, mapped)
    return Envelope(messages.SUCCEEDED, mapped)
