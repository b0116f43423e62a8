"""Location of the value under validation, as an immutable linked path."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

ROOT_LABEL = "(root)"
PATH_DELIMITER = "."


@dataclass(frozen=True)
class Location:
    """Path segment plus a link to the parent location."""

    segment: str
    parent: Optional["Location"] = None

    @classmethod
    def root(cls, label: str = ROOT_LABEL) -> "Location":
        return cls(segment=label)

    def child(self, segment: str | int) -> "Location":
        """Return a new location one level deeper; self is left untouched."""
        return Location(segment=str(segment), parent=self)

    def segments(self) -> tuple[str, ...]:
        parts: list[str] = []
        node: Optional[Location] = self
        while node is not None:
            parts.append(node.segment)
            node = node.parent
        return tuple(reversed(parts))

    def render(self, delimiter: str = PATH_DELIMITER) -> str:
        return delimiter.join(self.segments())

    def __str__(self) -> str:
        return self.render()
