"""Closed value model for parsed JSON documents."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping, Union


class DocumentModelError(ValueError):
    """Raised when a Python object cannot be narrowed to the JSON value model."""


@dataclass(frozen=True)
class Null:
    """JSON null."""


@dataclass(frozen=True)
class Bool:
    value: bool


@dataclass(frozen=True)
class Number:
    """JSON number; integers are a semantic classification, not a storage kind."""

    value: float

    @property
    def is_integer(self) -> bool:
        return is_integral(self.value)


@dataclass(frozen=True)
class String:
    value: str


@dataclass(frozen=True)
class Array:
    items: tuple["Value", ...] = ()


@dataclass(frozen=True)
class Object:
    """JSON object; member lookup goes through a dict."""

    members: Mapping[str, "Value"] = field(default_factory=dict)

    def get(self, key: str) -> "Value | None":
        return self.members.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self.members

    def __len__(self) -> int:
        return len(self.members)


Value = Union[Null, Bool, Number, String, Array, Object]

NULL = Null()


def is_integral(number: float) -> bool:
    """Return True for finite floats without a fractional part."""
    return math.isfinite(number) and float(number).is_integer()


def from_python(obj: Any) -> Value:
    """Narrow a decoded JSON structure (json.loads output) to the value model."""
    if obj is None:
        return NULL
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, (int, float, Decimal)):
        try:
            return Number(float(obj))
        except OverflowError as exc:
            raise DocumentModelError(f"number {obj!r} does not fit a double") from exc
    if isinstance(obj, str):
        return String(obj)
    if isinstance(obj, (list, tuple)):
        return Array(tuple(from_python(item) for item in obj))
    if isinstance(obj, Mapping):
        members: dict[str, Value] = {}
        for key, item in obj.items():
            if not isinstance(key, str):
                raise DocumentModelError(f"object keys must be strings, got {type(key).__name__}")
            members[key] = from_python(item)
        return Object(members)
    raise DocumentModelError(f"unsupported document type: {type(obj).__name__}")


def to_python(value: Value) -> Any:
    """Convert back to plain Python; integral numbers come back as int."""
    if isinstance(value, Null):
        return None
    if isinstance(value, (Bool, String)):
        return value.value
    if isinstance(value, Number):
        if value.is_integer:
            return int(value.value)
        return value.value
    if isinstance(value, Array):
        return [to_python(item) for item in value.items]
    return {key: to_python(item) for key, item in value.members.items()}


def canonical_json(value: Value) -> str:
    """
    Serialize a value so that equal JSON values produce equal text.

    Keys are sorted and whole numbers are written without a fraction, so
    ``1`` and ``1.0`` compare equal. NaN and infinities raise ValueError.
    """
    return json.dumps(
        to_python(value),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
