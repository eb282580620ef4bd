"""Shared serialization utilities for ledger values."""

import math
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

import orjson

from land_registry.exceptions import CorruptRecordError, InvalidArgumentError

Number = int | float

# Largest magnitude below which every integer is exactly representable as a float
MAX_EXACT_INT = 2**53


def encode_canonical(obj: Any) -> bytes:
    """Encode a JSON-compatible value as canonical JSON bytes.

    Keys are sorted recursively, separators are compact and the output is
    UTF-8, so equal values always produce byte-identical output.

    Parameters
    ----------
    obj : Any
        Dict, list, str, int, float, bool or None (nested).

    Returns
    -------
    bytes
        Canonical JSON.
    """
    return orjson.dumps(serialize_value(obj), option=orjson.OPT_SORT_KEYS)


def decode_json(raw: bytes | str) -> Any:
    """Decode JSON stored in the ledger."""
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise CorruptRecordError(f"Stored value is not valid JSON: {exc}") from exc


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return normalize_number(float(value))
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return format_timestamp(value)
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, float):
        return normalize_number(value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def format_timestamp(value: datetime) -> str:
    """Format a timestamp as UTC ISO-8601 with millisecond precision.

    Naive datetimes are taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse a timestamp written by :func:`format_timestamp`."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError) as exc:
        raise InvalidArgumentError(f"Invalid timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def normalize_number(value: Number) -> Number:
    """Collapse integral floats to int so 1500 and 1500.0 encode the same.

    Only values below :data:`MAX_EXACT_INT` are collapsed; larger ones stay
    float so they remain encodable as JSON numbers.
    """
    if isinstance(value, float) and value.is_integer() and abs(value) < MAX_EXACT_INT:
        return int(value)
    return value


def parse_number(name: str, raw: Any) -> Number:
    """Parse a numeric argument delivered as a string by the transport.

    Parameters
    ----------
    name : str
        Argument name, used in the error message.
    raw : Any
        String or number to parse.

    Returns
    -------
    int | float
        Finite number; integral values below ``MAX_EXACT_INT`` as int.

    Raises
    ------
    InvalidArgumentError
        If the value is empty, not numeric, NaN or infinite.
    """
    if isinstance(raw, bool):
        raise InvalidArgumentError(f"{name} must be a number, got {raw!r}")
    if isinstance(raw, (int, float)):
        number = float(raw)
    else:
        text = str(raw).strip()
        if not text:
            raise InvalidArgumentError(f"{name} must be a number, got an empty value")
        try:
            number = float(text)
        except ValueError as exc:
            raise InvalidArgumentError(f"{name} must be a number, got {raw!r}") from exc
    if math.isnan(number) or math.isinf(number):
        raise InvalidArgumentError(f"{name} must be finite, got {raw!r}")
    return normalize_number(number)
