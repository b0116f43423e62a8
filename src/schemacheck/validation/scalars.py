"""String, number and enum checks."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
import logging
from typing import TYPE_CHECKING

from .context import Location
from .outcome import ValidationOutcome
from .schema import SchemaNode
from .values import Number, String, Value, canonical_json, is_integral

if TYPE_CHECKING:
    from .dispatcher import Validator

logger = logging.getLogger(__name__)


def format_number(number: float) -> str:
    """Render 10.0 as ``10`` and 0.25 as ``0.25``."""
    if is_integral(number):
        return str(int(number))
    return repr(number)


def is_multiple_of(number: float, divisor: float) -> bool:
    """
    Integrality of ``number / divisor``.

    Both operands go through their shortest repr first, so the quotient of
    0.3 and 0.1 is exactly 3 instead of 2.9999999999999996.
    """
    try:
        quotient = Decimal(repr(number)) / Decimal(repr(divisor))
    except (InvalidOperation, ZeroDivisionError):
        return False
    if not quotient.is_finite():
        return False
    return quotient == quotient.to_integral_value()


def check_string(
    validator: "Validator",
    schema: SchemaNode,
    value: Value,
    location: Location,
) -> ValidationOutcome:
    result = validator.new_outcome()
    if not isinstance(value, String):
        return result

    length = validator.config.measure(value.value)
    if schema.min_length is not None and length < schema.min_length:
        result.add_error(
            location,
            f"{schema.property}'s length must be greater or equal to {schema.min_length}",
        )
    if schema.max_length is not None and length > schema.max_length:
        result.add_error(
            location,
            f"{schema.property}'s length must be lower or equal to {schema.max_length}",
        )
    if schema.pattern is not None and schema.pattern.search(value.value) is None:
        result.add_error(location, f"{schema.property} has an invalid format")

    result.increment_score()
    return result


def check_number(
    validator: "Validator",
    schema: SchemaNode,
    value: Value,
    location: Location,
) -> ValidationOutcome:
    result = validator.new_outcome()
    if not isinstance(value, Number):
        return result

    number = value.value
    shown = format_number(number)

    if schema.multiple_of is not None and not is_multiple_of(number, schema.multiple_of):
        result.add_error(
            location,
            f"{schema.property} ({shown}) is not a multiple of {format_number(schema.multiple_of)}",
        )

    if schema.maximum is not None:
        bound = format_number(schema.maximum)
        if schema.exclusive_maximum:
            if number >= schema.maximum:
                result.add_error(location, f"{schema.property} ({shown}) must be lower than {bound}")
        elif number > schema.maximum:
            result.add_error(
                location,
                f"{schema.property} ({shown}) must be lower than or equal to {bound}",
            )

    if schema.minimum is not None:
        bound = format_number(schema.minimum)
        if schema.exclusive_minimum:
            if number <= schema.minimum:
                result.add_error(location, f"{schema.property} ({shown}) must be greater than {bound}")
        elif number < schema.minimum:
            result.add_error(
                location,
                f"{schema.property} ({shown}) must be greater than or equal to {bound}",
            )

    result.increment_score()
    return result


def check_common(
    validator: "Validator",
    schema: SchemaNode,
    value: Value,
    location: Location,
) -> ValidationOutcome:
    result = validator.new_outcome()

    if schema.enum:
        candidates: list[str] = []
        failed = False
        for candidate in schema.enum:
            try:
                candidates.append(canonical_json(candidate))
            except (TypeError, ValueError):
                failed = True
        try:
            serialized = canonical_json(value)
        except (TypeError, ValueError):
            serialized = None
            failed = True

        if failed:
            logger.warning(
                "enum comparison at %s hit a value that cannot be serialized",
                location.render(validator.config.path_delimiter),
            )
            result.add_error(location, f"{schema.property} could not be marshalled")
        if serialized is None or serialized not in candidates:
            result.add_error(
                location,
                f"{schema.property} must match one of the enum values [{','.join(candidates)}]",
            )

    result.increment_score()
    return result
