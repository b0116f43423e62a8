"""Object constraints: property counts, required, additional and pattern properties."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .context import Location
from .outcome import ValidationOutcome
from .schema import DelegateTo, Permission, SchemaNode
from .values import Object

if TYPE_CHECKING:
    from .dispatcher import Validator


def check_object(
    validator: "Validator",
    schema: SchemaNode,
    value: Object,
    location: Location,
) -> ValidationOutcome:
    result = validator.new_outcome()
    count = len(value)

    if schema.min_properties is not None and count < schema.min_properties:
        result.add_error(
            location,
            f"{schema.property} must have at least {schema.min_properties} properties",
        )
    if schema.max_properties is not None and count > schema.max_properties:
        result.add_error(
            location,
            f"{schema.property} must have at the most {schema.max_properties} properties",
        )

    for name in schema.required:
        if name in value:
            result.increment_score()
        else:
            result.add_error(location, f"{name} property is required")

    pattern_results = _validate_pattern_properties(validator, schema, value, location)
    exempt = {key for key, outcome in pattern_results if outcome.is_valid()}
    declared = schema.property_names()
    undeclared = [key for key in value.members if key not in declared and key not in exempt]

    rule = schema.additional_properties
    if rule is Permission.DENY:
        for key in undeclared:
            result.add_error(
                location,
                f"No additional property ( {key} ) is allowed on {schema.property}",
            )
    elif isinstance(rule, DelegateTo):
        for key in undeclared:
            result.merge(validator.validate_node(rule.schema, value.members[key], location))

    for _, outcome in pattern_results:
        result.merge(outcome)
    if schema.pattern_properties:
        result.increment_score()

    result.increment_score()
    return result


def _validate_pattern_properties(
    validator: "Validator",
    schema: SchemaNode,
    value: Object,
    location: Location,
) -> list[tuple[str, ValidationOutcome]]:
    """Validate every member against every pattern its key matches (search, not full match)."""
    results: list[tuple[str, ValidationOutcome]] = []
    for key, member in value.members.items():
        for pattern, sub_schema in schema.pattern_properties:
            if pattern.search(key) is not None:
                results.append((key, validator.validate_node(sub_schema, member, location.child(key))))
    return results
