"""anyOf / oneOf / allOf / not / dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Optional

from .context import Location
from .outcome import ValidationOutcome
from .schema import PropertyDependency, SchemaDependency, SchemaNode
from .values import Object, Value

if TYPE_CHECKING:
    from .dispatcher import Validator


def check_composition(
    validator: "Validator",
    schema: SchemaNode,
    value: Value,
    location: Location,
) -> ValidationOutcome:
    result = validator.new_outcome()

    if schema.any_of:
        _check_any_of(validator, schema, value, location, result)
    if schema.one_of:
        _check_one_of(validator, schema, value, location, result)
    if schema.all_of:
        _check_all_of(validator, schema, value, location, result)
    if schema.not_ is not None:
        if validator.validate_node(schema.not_, value, location).is_valid():
            result.add_error(location, f"{schema.property} is not allowed to validate the schema")
    if schema.dependencies and isinstance(value, Object):
        _check_dependencies(validator, schema, value, location, result)

    result.increment_score()
    return result


def _best_of(current: Optional[ValidationOutcome], candidate: ValidationOutcome) -> ValidationOutcome:
    """Keep the higher-scoring failure; the earlier one wins ties."""
    if current is None or candidate.score > current.score:
        return candidate
    return current


def _check_any_of(
    validator: "Validator",
    schema: SchemaNode,
    value: Value,
    location: Location,
    result: ValidationOutcome,
) -> None:
    best: Optional[ValidationOutcome] = None
    for branch in schema.any_of:
        branch_result = validator.validate_node(branch, value, location)
        if branch_result.is_valid():
            return
        best = _best_of(best, branch_result)

    if best is not None:
        result.merge(best)
    result.add_error(location, f"{schema.property} failed to validate any of the schema")


def _check_one_of(
    validator: "Validator",
    schema: SchemaNode,
    value: Value,
    location: Location,
    result: ValidationOutcome,
) -> None:
    matched = 0
    best: Optional[ValidationOutcome] = None
    for branch in schema.one_of:
        branch_result = validator.validate_node(branch, value, location)
        if branch_result.is_valid():
            matched += 1
        else:
            best = _best_of(best, branch_result)

    if matched == 1:
        return
    if matched == 0 and best is not None:
        result.merge(best)
    result.add_error(location, f"{schema.property} failed to validate exactly one of the schema")


def _check_all_of(
    validator: "Validator",
    schema: SchemaNode,
    value: Value,
    location: Location,
    result: ValidationOutcome,
) -> None:
    matched = 0
    for branch in schema.all_of:
        branch_result = validator.validate_node(branch, value, location)
        if branch_result.is_valid():
            matched += 1
        result.merge(branch_result)

    if matched != len(schema.all_of):
        result.add_error(location, f"{schema.property} failed to validate all of the schema")


def _check_dependencies(
    validator: "Validator",
    schema: SchemaNode,
    value: Object,
    location: Location,
    result: ValidationOutcome,
) -> None:
    for key in _present_keys(value, schema.dependencies):
        dependency = schema.dependencies[key]
        if isinstance(dependency, PropertyDependency):
            for sibling in dependency.names:
                if sibling in value:
                    result.increment_score()
                else:
                    result.add_error(location, f"{key} has a dependency on {sibling}")
        elif isinstance(dependency, SchemaDependency):
            result.merge(validator.validate_node(dependency.schema, value, location))


def _present_keys(value: Object, triggers: Mapping[str, object]) -> list[str]:
    return [key for key in value.members if key in triggers]
