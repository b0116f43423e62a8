"""Draft-04 JSON Schema validation over a closed JSON value model."""

from .compiler import SchemaCompileError, SchemaDocument, compile_schema
from .config import LengthUnit, ValidationConfig, ValidationConfigError
from .context import Location
from .dispatcher import ValidationTimeoutError, Validator, validate
from .outcome import ValidationOutcome, Violation
from .schema import (
    DelegateTo,
    JsonType,
    Permission,
    PropertyDependency,
    SchemaDependency,
    SchemaNode,
    SingleItems,
    TupleItems,
)
from .values import (
    Array,
    Bool,
    DocumentModelError,
    Null,
    Number,
    Object,
    String,
    Value,
    canonical_json,
    from_python,
    to_python,
)

__all__ = [
    "Array",
    "Bool",
    "DelegateTo",
    "DocumentModelError",
    "JsonType",
    "LengthUnit",
    "Location",
    "Null",
    "Number",
    "Object",
    "Permission",
    "PropertyDependency",
    "SchemaCompileError",
    "SchemaDependency",
    "SchemaDocument",
    "SchemaNode",
    "SingleItems",
    "String",
    "TupleItems",
    "ValidationConfig",
    "ValidationConfigError",
    "ValidationOutcome",
    "ValidationTimeoutError",
    "Validator",
    "Value",
    "Violation",
    "canonical_json",
    "compile_schema",
    "from_python",
    "to_python",
    "validate",
]
