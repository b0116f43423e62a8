"""Runtime options for validation calls, wired from the environment."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import os
from typing import Mapping

from .context import PATH_DELIMITER, ROOT_LABEL


class ValidationConfigError(ValueError):
    """Raised when validation settings are malformed."""


class LengthUnit(str, Enum):
    """How minLength / maxLength count a string."""

    CODEPOINTS = "codepoints"
    BYTES = "bytes"


@dataclass(frozen=True)
class ValidationConfig:
    """Knobs that change how results are measured and rendered, never validity rules."""

    length_unit: LengthUnit = LengthUnit.CODEPOINTS
    root_label: str = ROOT_LABEL
    path_delimiter: str = PATH_DELIMITER
    time_budget_seconds: float | None = None

    def __post_init__(self) -> None:
        if not self.root_label:
            raise ValidationConfigError("root_label must not be empty")
        if not self.path_delimiter:
            raise ValidationConfigError("path_delimiter must not be empty")
        if self.time_budget_seconds is not None and self.time_budget_seconds <= 0:
            raise ValidationConfigError("time_budget_seconds must be > 0")

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "ValidationConfig":
        source = os.environ if env is None else env
        raw_unit = source.get("SCHEMACHECK_LENGTH_UNIT", LengthUnit.CODEPOINTS.value)

        try:
            length_unit = LengthUnit(raw_unit.strip().lower())
        except ValueError as exc:
            raise ValidationConfigError(
                "SCHEMACHECK_LENGTH_UNIT must be 'codepoints' or 'bytes'"
            ) from exc

        root_label = source.get("SCHEMACHECK_ROOT_LABEL", "").strip() or ROOT_LABEL
        path_delimiter = source.get("SCHEMACHECK_PATH_DELIMITER", "") or PATH_DELIMITER
        return cls(
            length_unit=length_unit,
            root_label=root_label,
            path_delimiter=path_delimiter,
            time_budget_seconds=_parse_budget(source.get("SCHEMACHECK_TIME_BUDGET", "")),
        )

    def measure(self, text: str) -> int:
        """Length of a string in the configured unit."""
        if self.length_unit is LengthUnit.BYTES:
            return len(text.encode("utf-8", "surrogatepass"))
        return len(text)


def _parse_budget(raw: str) -> float | None:
    value = raw.strip()
    if not value:
        return None
    try:
        budget = float(value)
    except ValueError as exc:
        raise ValidationConfigError("SCHEMACHECK_TIME_BUDGET must be a number of seconds") from exc
    if not budget > 0:
        raise ValidationConfigError("SCHEMACHECK_TIME_BUDGET must be > 0")
    return budget
