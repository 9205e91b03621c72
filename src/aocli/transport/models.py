"""Submission outcome types."""

from dataclasses import dataclass
from enum import Enum


class Verdict(Enum):
    """How Advent of Code classified a submitted answer."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    TOO_RECENT = "too_recent"
    ALREADY_SOLVED = "already_solved"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SubmissionResult:
    """Verdict plus the server's own message, shown to the user verbatim."""

    verdict: Verdict
    message: str

    @property
    def accepted(self) -> bool:
        return self.verdict is Verdict.CORRECT
