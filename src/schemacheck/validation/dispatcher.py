"""Recursive entry point: type gating and fan-out to the constraint checkers."""

from __future__ import annotations

import logging
import time

from .arrays import check_array
from .composition import check_composition
from .config import ValidationConfig
from .context import Location
from .objects import check_object
from .outcome import ValidationOutcome
from .scalars import check_common, check_number, check_string
from .schema import JsonType, SchemaNode
from .values import Array, Bool, Null, Number, Object, String, Value

logger = logging.getLogger(__name__)


class ValidationTimeoutError(RuntimeError):
    """Raised when a validation call runs past its configured time budget."""


def _kind_matches(schema: SchemaNode, value: Value) -> bool:
    if not schema.has_type_constraint():
        return True
    if isinstance(value, Null):
        return schema.has_type(JsonType.NULL)
    if isinstance(value, Bool):
        return schema.has_type(JsonType.BOOLEAN)
    if isinstance(value, Number):
        return schema.has_type(JsonType.NUMBER) or (
            value.is_integer and schema.has_type(JsonType.INTEGER)
        )
    if isinstance(value, String):
        return schema.has_type(JsonType.STRING)
    if isinstance(value, Array):
        return schema.has_type(JsonType.ARRAY)
    if isinstance(value, Object):
        return schema.has_type(JsonType.OBJECT)
    raise TypeError(f"not a document value: {type(value).__name__}")


class Validator:
    """
    One validation run.

    Holds the configuration and the optional deadline; every node gets its
    own fresh outcome which the caller merges.
    """

    def __init__(self, config: ValidationConfig | None = None) -> None:
        self.config = config or ValidationConfig()
        self._deadline: float | None = None
        if self.config.time_budget_seconds is not None:
            self._deadline = time.monotonic() + self.config.time_budget_seconds

    def new_outcome(self) -> ValidationOutcome:
        return ValidationOutcome(path_delimiter=self.config.path_delimiter)

    def root_location(self) -> Location:
        return Location.root(self.config.root_label)

    def validate_node(self, schema: SchemaNode, value: Value, location: Location) -> ValidationOutcome:
        """Validate one value against one schema node."""
        self._check_deadline(location)

        if schema.reference_target is not None:
            return self.validate_node(schema.reference_target, value, location)

        result = self.new_outcome()
        if not _kind_matches(schema, value):
            result.add_error(location, f"{schema.property} must be of type {schema.types_label()}")
            return result

        result.merge(check_composition(self, schema, value, location))
        if isinstance(value, Null):
            result.merge(check_common(self, schema, value, location))
        elif isinstance(value, Array):
            result.merge(check_array(self, schema, value, location))
            result.merge(check_common(self, schema, value, location))
        elif isinstance(value, Object):
            result.merge(check_object(self, schema, value, location))
            result.merge(check_common(self, schema, value, location))
            for child in schema.properties_children:
                member = value.get(child.property)
                if member is not None:
                    result.merge(self.validate_node(child, member, location.child(child.property)))
        else:
            result.merge(check_number(self, schema, value, location))
            result.merge(check_common(self, schema, value, location))
            result.merge(check_string(self, schema, value, location))

        result.increment_score()
        return result

    def _check_deadline(self, location: Location) -> None:
        if self._deadline is not None and time.monotonic() > self._deadline:
            logger.warning(
                "validation time budget of %ss exhausted at %s",
                self.config.time_budget_seconds,
                location.render(self.config.path_delimiter),
            )
            raise ValidationTimeoutError(
                f"validation exceeded {self.config.time_budget_seconds}s budget"
            )


def validate(
    schema_root: SchemaNode,
    document: Value,
    config: ValidationConfig | None = None,
) -> ValidationOutcome:
    """Validate a whole document against a compiled schema."""
    validator = Validator(config)
    outcome = validator.validate_node(schema_root, document, validator.root_location())
    logger.debug(
        "validated document against %s: %d violation(s), score %d",
        schema_root.property,
        len(outcome.violations),
        outcome.score,
    )
    return outcome
