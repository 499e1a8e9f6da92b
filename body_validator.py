# body_validator.py
import json
from typing import Any, Dict, Optional


def _reject_constant(name):
    raise ValueError(f"non-standard JSON token {name}")


def _decode(text):
    if not text or not text.strip():
        return None
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return None


def is_valid_json(text: Optional[str]) -> bool:
    # syntactic check only: a JSON object or array, nothing about its keys
    return isinstance(_decode(text), (dict, list))


def parse_body(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Decode a request body into a dict of fields.
    Returns None when the body is not a JSON object/array.
    A JSON array is valid but carries no named fields, so it maps to {}.
    """
    decoded = _decode(text)
    if isinstance(decoded, dict):
        return decoded
    if isinstance(decoded, list):
        return {}
    return None
