"""Compile parsed draft-04 schema documents into SchemaNode trees."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
import re
from typing import Any, Mapping, Sequence
from urllib.parse import unquote

from .config import ValidationConfig
from .dispatcher import validate
from .outcome import ValidationOutcome
from .schema import (
    ROOT_SCHEMA_NAME,
    AdditionalRule,
    DelegateTo,
    Dependency,
    JsonType,
    Permission,
    PropertyDependency,
    SchemaDependency,
    SchemaNode,
    SingleItems,
    TupleItems,
)
from .values import Array, Bool, DocumentModelError, Null, Number, Object, String, Value, from_python

logger = logging.getLogger(__name__)

_VALUE_TYPES = (Null, Bool, Number, String, Array, Object)


class SchemaCompileError(ValueError):
    """Raised when a schema document cannot be turned into a SchemaNode tree."""


def _escape_token(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _unescape_token(token: str) -> str:
    return unquote(token).replace("~1", "/").replace("~0", "~")


def _ref_to_pointer(ref: str) -> str:
    """Turn ``#/definitions/a`` into the normalized pointer ``/definitions/a``."""
    if ref in ("#", ""):
        return ""
    if not ref.startswith("#/"):
        raise SchemaCompileError(f"only document-local $ref values are supported, got '{ref}'")
    tokens = [_unescape_token(token) for token in ref[2:].split("/")]
    return "".join(f"/{_escape_token(token)}" for token in tokens)


def _display(pointer: str) -> str:
    return f"#{pointer}"


class _SchemaCompiler:
    def __init__(self, document: Mapping[str, Any]) -> None:
        self._document = document
        self._nodes: dict[str, SchemaNode] = {}
        self._pending: list[tuple[SchemaNode, str]] = []
        self._aliases: list[SchemaNode] = []

    def compile(self, root_name: str) -> SchemaNode:
        root = self._compile(self._document, "", root_name)
        while self._pending:
            node, target = self._pending.pop()
            node.reference_target = self._resolve(target)
        self._reject_alias_cycles()
        logger.debug(
            "compiled schema: %d node(s), %d reference(s)",
            len(self._nodes),
            len(self._aliases),
        )
        return root

    def _resolve(self, pointer: str) -> SchemaNode:
        if pointer in self._nodes:
            return self._nodes[pointer]

        raw: Any = self._document
        name = ROOT_SCHEMA_NAME
        for escaped in pointer.split("/")[1:]:
            token = _unescape_token(escaped)
            if isinstance(raw, Mapping) and token in raw:
                raw = raw[token]
            elif isinstance(raw, list) and token.isdigit() and int(token) < len(raw):
                raw = raw[int(token)]
            else:
                raise SchemaCompileError(f"unresolvable $ref '{_display(pointer)}'")
            name = token
        return self._compile(raw, pointer, name)

    def _reject_alias_cycles(self) -> None:
        for alias in self._aliases:
            seen: set[int] = set()
            node: SchemaNode | None = alias
            while node is not None:
                if id(node) in seen:
                    raise SchemaCompileError(f"$ref chain starting at '{alias.property}' never leaves itself")
                seen.add(id(node))
                node = node.reference_target

    def _compile(self, raw: Any, pointer: str, name: str) -> SchemaNode:
        if not isinstance(raw, Mapping):
            raise SchemaCompileError(f"{_display(pointer)}: schema must be an object")
        if pointer in self._nodes:
            return self._nodes[pointer]

        node = SchemaNode(property=name)
        self._nodes[pointer] = node

        if "$ref" in raw:
            ref = raw["$ref"]
            if not isinstance(ref, str):
                raise SchemaCompileError(f"{_display(pointer)}: $ref must be a string")
            self._pending.append((node, _ref_to_pointer(ref)))
            self._aliases.append(node)
            return node

        at = _KeywordReader(raw, pointer)

        node.declared_types = at.types()

        node.any_of = self._schema_list(at, "anyOf")
        node.one_of = self._schema_list(at, "oneOf")
        node.all_of = self._schema_list(at, "allOf")
        if "not" in raw:
            node.not_ = self._compile(raw["not"], f"{pointer}/not", "not")
        node.dependencies = self._dependencies(at)

        properties = at.mapping("properties")
        node.properties_children = tuple(
            self._compile(sub, f"{pointer}/properties/{_escape_token(key)}", key)
            for key, sub in properties.items()
        )
        node.pattern_properties = tuple(
            (
                at.regex(source, "patternProperties"),
                self._compile(sub, f"{pointer}/patternProperties/{_escape_token(source)}", source),
            )
            for source, sub in at.mapping("patternProperties").items()
        )
        node.additional_properties = self._additional(at, "additionalProperties")
        node.required = at.string_list("required")
        node.min_properties = at.non_negative_int("minProperties")
        node.max_properties = at.non_negative_int("maxProperties")

        node.items_children = self._items(at)
        node.additional_items = self._additional(at, "additionalItems")
        node.min_items = at.non_negative_int("minItems")
        node.max_items = at.non_negative_int("maxItems")
        node.unique_items = at.boolean("uniqueItems")

        node.min_length = at.non_negative_int("minLength")
        node.max_length = at.non_negative_int("maxLength")
        if "pattern" in raw:
            node.pattern = at.regex(raw["pattern"], "pattern")

        node.multiple_of = at.number("multipleOf")
        if node.multiple_of is not None and node.multiple_of <= 0:
            raise SchemaCompileError(f"{_display(pointer)}: multipleOf must be > 0")
        node.minimum = at.number("minimum")
        node.maximum = at.number("maximum")
        node.exclusive_minimum = at.boolean("exclusiveMinimum")
        node.exclusive_maximum = at.boolean("exclusiveMaximum")

        node.enum = at.enum()

        for key, sub in at.mapping("definitions").items():
            self._compile(sub, f"{pointer}/definitions/{_escape_token(key)}", key)

        return node

    def _schema_list(self, at: "_KeywordReader", keyword: str) -> tuple[SchemaNode, ...]:
        return tuple(
            self._compile(sub, f"{at.pointer}/{keyword}/{index}", keyword)
            for index, sub in enumerate(at.array(keyword))
        )

    def _additional(self, at: "_KeywordReader", keyword: str) -> AdditionalRule:
        raw = at.raw.get(keyword)
        if raw is None or raw is True:
            return Permission.ALLOW
        if raw is False:
            return Permission.DENY
        return DelegateTo(self._compile(raw, f"{at.pointer}/{keyword}", keyword))

    def _items(self, at: "_KeywordReader") -> SingleItems | TupleItems | None:
        raw = at.raw.get("items")
        if raw is None:
            return None
        if isinstance(raw, list):
            return TupleItems(
                tuple(
                    self._compile(sub, f"{at.pointer}/items/{index}", "items")
                    for index, sub in enumerate(raw)
                )
            )
        return SingleItems(self._compile(raw, f"{at.pointer}/items", "items"))

    def _dependencies(self, at: "_KeywordReader") -> dict[str, Dependency]:
        dependencies: dict[str, Dependency] = {}
        for key, raw in at.mapping("dependencies").items():
            if isinstance(raw, list):
                if not all(isinstance(name, str) for name in raw):
                    raise SchemaCompileError(
                        f"{_display(at.pointer)}: dependencies.{key} must list property names"
                    )
                dependencies[key] = PropertyDependency(tuple(raw))
            else:
                dependencies[key] = SchemaDependency(
                    self._compile(raw, f"{at.pointer}/dependencies/{_escape_token(key)}", key)
                )
        return dependencies


@dataclass(frozen=True)
class _KeywordReader:
    """Typed access to the keywords of one raw schema object."""

    raw: Mapping[str, Any]
    pointer: str

    def _fail(self, keyword: str, expected: str) -> SchemaCompileError:
        return SchemaCompileError(f"{_display(self.pointer)}: {keyword} must be {expected}")

    def types(self) -> tuple[JsonType, ...]:
        raw = self.raw.get("type")
        if raw is None:
            return ()
        names = [raw] if isinstance(raw, str) else raw
        if not isinstance(names, list):
            raise self._fail("type", "a string or a list of strings")

        declared: list[JsonType] = []
        for name in names:
            try:
                json_type = JsonType(name)
            except ValueError as exc:
                raise SchemaCompileError(
                    f"{_display(self.pointer)}: unsupported type '{name}'"
                ) from exc
            if json_type not in declared:
                declared.append(json_type)
        return tuple(declared)

    def mapping(self, keyword: str) -> Mapping[str, Any]:
        raw = self.raw.get(keyword, {})
        if not isinstance(raw, Mapping):
            raise self._fail(keyword, "an object")
        return raw

    def array(self, keyword: str) -> Sequence[Any]:
        raw = self.raw.get(keyword, [])
        if not isinstance(raw, list):
            raise self._fail(keyword, "an array")
        return raw

    def string_list(self, keyword: str) -> tuple[str, ...]:
        raw = self.array(keyword)
        if not all(isinstance(item, str) for item in raw):
            raise self._fail(keyword, "an array of strings")
        return tuple(raw)

    def boolean(self, keyword: str) -> bool:
        raw = self.raw.get(keyword, False)
        if not isinstance(raw, bool):
            raise self._fail(keyword, "a boolean")
        return raw

    def number(self, keyword: str) -> float | None:
        raw = self.raw.get(keyword)
        if raw is None:
            return None
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise self._fail(keyword, "a number")
        return float(raw)

    def non_negative_int(self, keyword: str) -> int | None:
        raw = self.raw.get(keyword)
        if raw is None:
            return None
        if isinstance(raw, float) and raw.is_integer():
            raw = int(raw)
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
            raise self._fail(keyword, "a non-negative integer")
        return raw

    def regex(self, source: Any, keyword: str) -> re.Pattern[str]:
        if not isinstance(source, str):
            raise self._fail(keyword, "a regular expression string")
        try:
            return re.compile(source)
        except re.error as exc:
            raise SchemaCompileError(
                f"{_display(self.pointer)}: {keyword} '{source}' is not a valid regular expression"
            ) from exc

    def enum(self) -> tuple[Value, ...]:
        try:
            return tuple(from_python(candidate) for candidate in self.array("enum"))
        except DocumentModelError as exc:
            raise SchemaCompileError(f"{_display(self.pointer)}: enum holds a non-JSON value") from exc


def compile_schema(document: Mapping[str, Any], *, root_name: str = ROOT_SCHEMA_NAME) -> SchemaNode:
    """Compile a parsed schema mapping, resolving document-local ``$ref`` links."""
    return _SchemaCompiler(document).compile(root_name)


@dataclass(frozen=True)
class SchemaDocument:
    """A compiled schema ready to validate plain Python or Value documents."""

    root: SchemaNode
    config: ValidationConfig = field(default_factory=ValidationConfig)

    @classmethod
    def from_mapping(
        cls,
        document: Mapping[str, Any],
        *,
        config: ValidationConfig | None = None,
    ) -> "SchemaDocument":
        return cls(root=compile_schema(document), config=config or ValidationConfig())

    @classmethod
    def from_json(cls, text: str, *, config: ValidationConfig | None = None) -> "SchemaDocument":
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SchemaCompileError(f"schema is not valid JSON: {exc}") from exc
        if not isinstance(document, Mapping):
            raise SchemaCompileError("schema document must be a JSON object")
        return cls.from_mapping(document, config=config)

    def validate(self, instance: Any) -> ValidationOutcome:
        """Validate ``instance``; plain Python data is narrowed with from_python first."""
        document = instance if isinstance(instance, _VALUE_TYPES) else from_python(instance)
        return validate(self.root, document, self.config)
