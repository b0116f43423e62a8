"""Violation accumulator returned by every validation call."""

from __future__ import annotations

from dataclasses import dataclass, field

from .context import PATH_DELIMITER, Location

VIOLATION_PENALTY = 2


@dataclass(frozen=True)
class Violation:
    """One failed check, located in the document."""

    location: Location
    description: str
    labels: tuple[str, ...] = ()

    def render(self, delimiter: str = PATH_DELIMITER) -> str:
        text = f"{self.location.render(delimiter)} : {self.description}"
        if not self.labels:
            return text
        return " ".join((*self.labels, text))

    def with_label(self, label: str) -> "Violation":
        return Violation(
            location=self.location,
            description=self.description,
            labels=(label, *self.labels),
        )


@dataclass
class ValidationOutcome:
    """
    Messages plus a plausibility score.

    Every successful validator pass adds 1 to the score and every violation
    subtracts 2, so a failing check nets -1. The score only ranks failing
    composition branches; validity depends on messages alone.
    """

    violations: list[Violation] = field(default_factory=list)
    score: int = 0
    path_delimiter: str = PATH_DELIMITER

    def is_valid(self) -> bool:
        return not self.violations

    def messages(self) -> list[str]:
        return [violation.render(self.path_delimiter) for violation in self.violations]

    def add_error(self, location: Location, description: str) -> None:
        self.violations.append(Violation(location=location, description=description))
        self.score -= VIOLATION_PENALTY

    def increment_score(self, amount: int = 1) -> None:
        self.score += amount

    def merge(self, other: "ValidationOutcome") -> None:
        self.violations.extend(other.violations)
        self.score += other.score

    def merge_with_annotation(self, other: "ValidationOutcome", label: str) -> None:
        self.violations.extend(violation.with_label(label) for violation in other.violations)
        self.score += other.score
