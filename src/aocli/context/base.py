"""Resolved (year, day, part) context."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

from aocli.errors import AocError

FIRST_DAY = 1
LAST_DAY = 25
PARTS = (1, 2)


class InvalidContextError(AocError):
    """Raised when a year, day or part value is out of range."""


def is_valid_day(day: int) -> bool:
    """Check that ``day`` is an Advent of Code day (1-25)."""
    return FIRST_DAY <= day <= LAST_DAY


def is_valid_part(part: int) -> bool:
    """Check that ``part`` is 1 or 2."""
    return part in PARTS


@dataclass(frozen=True)
class Context:
    """Which puzzle the user is working on right now.

    Created once per invocation from the working directory and never
    mutated afterwards; ``with_part`` returns a new instance.
    """

    year: int
    day: int
    part: int = 1

    def __post_init__(self) -> None:
        if self.year < 1:
            raise InvalidContextError(f"Invalid year: {self.year}")
        if not is_valid_day(self.day):
            raise InvalidContextError(
                f"Invalid day: {self.day} (expected {FIRST_DAY}-{LAST_DAY})"
            )
        if not is_valid_part(self.part):
            raise InvalidContextError(f"Invalid part: {self.part} (expected 1 or 2)")

    def with_part(self, part: int) -> Context:
        """Return a copy of this context pointing at another part."""
        return replace(self, part=part)

    def values(self, file: str | None = None) -> dict[str, int | str]:
        """Placeholder values available to templates."""
        result: dict[str, int | str] = {
            "year": self.year,
            "day": self.day,
            "part": self.part,
        }
        if file is not None:
            result["file"] = file
        return result


@dataclass(frozen=True)
class ResolvedContext:
    """A Context together with the directories it was resolved from."""

    context: Context
    repo_dir: Path
    day_dir: Path
    part_file: Path  # may not exist yet

    @property
    def relative_part_file(self) -> str:
        """Part file path relative to the day directory (the ``{file}`` value)."""
        return self.part_file.relative_to(self.day_dir).as_posix()
