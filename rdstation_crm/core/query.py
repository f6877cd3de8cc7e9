"""
Query string encoding for filter records.

Filter records are dataclasses whose fields carry the query parameter name
in their metadata:

    @dataclass
    class ListDealsFilter(Record):
        limit: str = field(default="", metadata={"query": "limit"})

Empty text, zero integers, False booleans and empty sequences are left out
of the query string entirely.
"""

import dataclasses
import enum
from typing import Any

import httpx

from .errors import InvalidInput

# A tag with this value falls back to the field name
IGNORE_TAG = "-"

TEXT = "text"
INTEGER = "integer"
BOOLEAN = "boolean"
SEQUENCE = "sequence"
UNSUPPORTED = "unsupported"


def parameter_name(record_field: dataclasses.Field) -> str:
    """
    Resolve the query parameter name for a record field.

    Args:
        record_field: Dataclass field

    Returns:
        The "query" tag from the field metadata, or the field name when the
        tag is missing, empty or "-"
    """
    tag = record_field.metadata.get("query", "")
    if not tag or tag == IGNORE_TAG:
        return record_field.name
    return tag


def field_kind(value: Any) -> str:
    """Classify a field value for encoding."""
    # bool is checked first, it is a subclass of int
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, int):
        return INTEGER
    if isinstance(value, str):
        return TEXT
    if isinstance(value, (list, tuple)):
        return SEQUENCE
    return UNSUPPORTED


def format_query_value(value: Any) -> str:
    """
    Convert a single sequence element to query text.

    Args:
        value: str, bool, int, float or an Enum wrapping one of those

    Returns:
        Text form of the value

    Raises:
        InvalidInput: If the element type has no text conversion
    """
    if isinstance(value, enum.Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    raise InvalidInput(
        f"No query text conversion for element of type {type(value).__name__}; "
        f"set a 'query_format' callable in the field metadata"
    )


def query_pairs(record: Any) -> list[tuple[str, str]]:
    """
    Build the ordered (name, value) pairs for a filter record.

    Args:
        record: Dataclass instance with flat fields

    Returns:
        List of (parameter name, text value) in field declaration order

    Raises:
        InvalidInput: If record is not a dataclass instance, or a sequence
            element has no text conversion
    """
    if not dataclasses.is_dataclass(record) or isinstance(record, type):
        raise InvalidInput(
            f"Expected a record instance, got {type(record).__name__}"
        )

    pairs = []
    for record_field in dataclasses.fields(record):
        name = parameter_name(record_field)
        value = getattr(record, record_field.name)
        kind = field_kind(value)

        if kind == TEXT:
            if value != "":
                pairs.append((name, value))
        elif kind == INTEGER:
            if value != 0:
                pairs.append((name, str(value)))
        elif kind == BOOLEAN:
            if value:
                pairs.append((name, "true"))
        elif kind == SEQUENCE:
            formatter = record_field.metadata.get("query_format", format_query_value)
            for element in value:
                pairs.append((name, formatter(element)))

    return pairs


def encode_query(record: Any) -> str:
    """
    Encode a filter record as a URL query string.

    Args:
        record: Dataclass instance with flat fields

    Returns:
        Percent-encoded query string, empty when no field is set
    """
    return str(httpx.QueryParams(query_pairs(record)))


def build_path(endpoint: str, record: Any) -> str:
    """Append the encoded record to an endpoint path when it is not empty."""
    query = encode_query(record)
    if not query:
        return endpoint
    return f"{endpoint}?{query}"
