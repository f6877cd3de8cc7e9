"""Base class for resource records."""

import dataclasses
import enum
import types
import typing
from typing import Any


def wire_name(record_field: dataclasses.Field) -> str:
    """Return the JSON key of a record field."""
    return record_field.metadata.get("json") or record_field.name


class Record:
    """
    Base class for request and response shapes.

    Subclasses are dataclasses. A field's JSON key is taken from
    ``metadata={"json": ...}`` when present, otherwise the field name is used.

    Fields set to None are treated as absent and left out of ``to_dict()``.
    Empty strings and empty lists are sent as they are, which lets partial
    updates distinguish "not provided" from "cleared".
    """

    def to_dict(self) -> dict[str, Any]:
        """Convert the record to a JSON-ready dictionary."""
        data = {}
        for record_field in dataclasses.fields(self):
            value = getattr(self, record_field.name)
            if value is None:
                continue
            data[wire_name(record_field)] = _dump(value)
        return data

    @classmethod
    def from_dict(cls, data: Any):
        """
        Create a record from a decoded JSON object.

        Missing keys and nulls keep the field default. Values whose JSON type
        does not match the field annotation are rejected.

        Args:
            data: Decoded JSON value

        Returns:
            Instance of the record class

        Raises:
            TypeError: If data is not an object or a value has the wrong type
        """
        if not isinstance(data, dict):
            raise TypeError(
                f"{cls.__name__} expects a JSON object, got {_json_type(data)}"
            )

        hints = typing.get_type_hints(cls)
        kwargs = {}
        for record_field in dataclasses.fields(cls):
            key = wire_name(record_field)
            if key not in data:
                continue

            annotation = hints[record_field.name]
            value = data[key]
            if value is None and not _accepts_none(annotation):
                continue

            kwargs[record_field.name] = _load(
                annotation, value, f"{cls.__name__}.{record_field.name}"
            )

        return cls(**kwargs)


def _dump(value: Any) -> Any:
    if isinstance(value, Record):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_dump(item) for item in value]
    if isinstance(value, dict):
        return {key: _dump(item) for key, item in value.items()}
    if isinstance(value, enum.Enum):
        return value.value
    return value


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _is_union(annotation: Any) -> bool:
    return typing.get_origin(annotation) in (typing.Union, types.UnionType)


def _accepts_none(annotation: Any) -> bool:
    if annotation is Any:
        return True
    return _is_union(annotation) and type(None) in typing.get_args(annotation)


def _load(annotation: Any, value: Any, where: str) -> Any:
    if annotation is Any:
        return value

    if _is_union(annotation):
        if value is None and _accepts_none(annotation):
            return None
        members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        for member in members:
            try:
                return _load(member, value, where)
            except TypeError:
                continue
        raise TypeError(f"{where}: unexpected {_json_type(value)}")

    origin = typing.get_origin(annotation)

    if annotation is list or origin is list:
        if not isinstance(value, list):
            raise TypeError(f"{where}: expected array, got {_json_type(value)}")
        args = typing.get_args(annotation)
        item_type = args[0] if args else Any
        return [_load(item_type, item, f"{where}[{i}]") for i, item in enumerate(value)]

    if annotation is dict or origin is dict:
        if not isinstance(value, dict):
            raise TypeError(f"{where}: expected object, got {_json_type(value)}")
        return value

    if isinstance(annotation, type) and issubclass(annotation, Record):
        return annotation.from_dict(value)

    if annotation is bool:
        if not isinstance(value, bool):
            raise TypeError(f"{where}: expected boolean, got {_json_type(value)}")
        return value

    if annotation is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{where}: expected integer, got {_json_type(value)}")
        return value

    if annotation is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"{where}: expected number, got {_json_type(value)}")
        return float(value)

    if annotation is str:
        if not isinstance(value, str):
            raise TypeError(f"{where}: expected string, got {_json_type(value)}")
        return value

    raise TypeError(f"{where}: unsupported annotation {annotation!r}")
