"""Compiled schema tree consumed by the validation engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import re
from typing import Mapping, Optional, Union

from .values import Value

ROOT_SCHEMA_NAME = "(root)"


class JsonType(str, Enum):
    """Declarable JSON kinds."""

    ARRAY = "array"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NULL = "null"
    NUMBER = "number"
    OBJECT = "object"
    STRING = "string"


class Permission(Enum):
    """Boolean form of additionalProperties / additionalItems."""

    ALLOW = "allow"
    DENY = "deny"


@dataclass(frozen=True)
class DelegateTo:
    """Schema form of additionalProperties / additionalItems."""

    schema: "SchemaNode"


AdditionalRule = Union[Permission, DelegateTo]


@dataclass(frozen=True)
class SingleItems:
    """One schema applied to every array element."""

    schema: "SchemaNode"


@dataclass(frozen=True)
class TupleItems:
    """Positional schemas (tuple typing)."""

    schemas: tuple["SchemaNode", ...]


ItemsRule = Union[SingleItems, TupleItems]


@dataclass(frozen=True)
class PropertyDependency:
    """Sibling names that must be present alongside the trigger key."""

    names: tuple[str, ...]


@dataclass(frozen=True)
class SchemaDependency:
    """Schema the whole object must satisfy when the trigger key is present."""

    schema: "SchemaNode"


Dependency = Union[PropertyDependency, SchemaDependency]


@dataclass(eq=False)
class SchemaNode:
    """
    One node of a compiled schema.

    Nodes compare by identity so that shared sub-trees and recursive
    references can be used as dict keys. When ``reference_target`` is set
    every other field is ignored by the validator.
    """

    property: str = ROOT_SCHEMA_NAME
    declared_types: tuple[JsonType, ...] = ()
    reference_target: Optional["SchemaNode"] = None

    any_of: tuple["SchemaNode", ...] = ()
    one_of: tuple["SchemaNode", ...] = ()
    all_of: tuple["SchemaNode", ...] = ()
    not_: Optional["SchemaNode"] = None
    dependencies: Mapping[str, Dependency] = field(default_factory=dict)

    properties_children: tuple["SchemaNode", ...] = ()
    pattern_properties: tuple[tuple[re.Pattern[str], "SchemaNode"], ...] = ()
    additional_properties: AdditionalRule = Permission.ALLOW
    required: tuple[str, ...] = ()
    min_properties: Optional[int] = None
    max_properties: Optional[int] = None

    items_children: Optional[ItemsRule] = None
    additional_items: AdditionalRule = Permission.ALLOW
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    unique_items: bool = False

    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[re.Pattern[str]] = None

    multiple_of: Optional[float] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    exclusive_minimum: bool = False
    exclusive_maximum: bool = False

    enum: tuple[Value, ...] = ()

    def has_type_constraint(self) -> bool:
        return bool(self.declared_types)

    def has_type(self, json_type: JsonType) -> bool:
        return json_type in self.declared_types

    def types_label(self) -> str:
        """Render declared types for messages: ``string`` or ``[integer,null]``."""
        names = [json_type.value for json_type in self.declared_types]
        if len(names) == 1:
            return names[0]
        return "[" + ",".join(names) + "]"

    def property_names(self) -> frozenset[str]:
        return frozenset(child.property for child in self.properties_children)
