"""Array constraints: items, additionalItems, size bounds and uniqueness."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .context import Location
from .outcome import ValidationOutcome
from .schema import DelegateTo, Permission, SchemaNode, SingleItems, TupleItems
from .values import Array, canonical_json

if TYPE_CHECKING:
    from .dispatcher import Validator

logger = logging.getLogger(__name__)


def check_array(
    validator: "Validator",
    schema: SchemaNode,
    value: Array,
    location: Location,
) -> ValidationOutcome:
    result = validator.new_outcome()
    items = value.items

    rule = schema.items_children
    if isinstance(rule, SingleItems):
        for index, item in enumerate(items):
            item_result = validator.validate_node(rule.schema, item, location.child(index))
            result.merge_with_annotation(item_result, schema.property)
    elif isinstance(rule, TupleItems):
        _check_tuple(validator, schema, rule, value, location, result)

    if schema.min_items is not None and len(items) < schema.min_items:
        result.add_error(location, f"{schema.property} must have at least {schema.min_items} items")
    if schema.max_items is not None and len(items) > schema.max_items:
        result.add_error(location, f"{schema.property} must have at the most {schema.max_items} items")

    if schema.unique_items:
        _check_unique(validator, schema, value, location, result)

    result.increment_score()
    return result


def _check_tuple(
    validator: "Validator",
    schema: SchemaNode,
    rule: TupleItems,
    value: Array,
    location: Location,
    result: ValidationOutcome,
) -> None:
    positional = len(rule.schemas)
    for index, (item_schema, item) in enumerate(zip(rule.schemas, value.items)):
        result.merge(validator.validate_node(item_schema, item, location.child(index)))

    if len(value.items) <= positional:
        return

    extra = schema.additional_items
    if extra is Permission.DENY:
        result.add_error(location, f"No additional item allowed on {schema.property}")
    elif isinstance(extra, DelegateTo):
        for index in range(positional, len(value.items)):
            result.merge(validator.validate_node(extra.schema, value.items[index], location.child(index)))


def _check_unique(
    validator: "Validator",
    schema: SchemaNode,
    value: Array,
    location: Location,
    result: ValidationOutcome,
) -> None:
    seen: set[str] = set()
    for index, item in enumerate(value.items):
        try:
            serialized = canonical_json(item)
        except (TypeError, ValueError):
            logger.warning(
                "could not serialize item %d at %s for uniqueness check",
                index,
                location.render(validator.config.path_delimiter),
            )
            result.add_error(location, f"{schema.property} could not be marshalled")
            continue
        if serialized in seen:
            result.add_error(location, f"{schema.property} items must be unique")
        seen.add(serialized)
