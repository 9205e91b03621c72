"""Submission transport for adventofcode.com."""

from aocli.transport.client import (
    DEFAULT_BASE_URL,
    AocClient,
    MissingSessionError,
    TransportError,
    classify,
    extract_message,
)
from aocli.transport.models import SubmissionResult, Verdict

__all__ = [
    "DEFAULT_BASE_URL",
    "AocClient",
    "MissingSessionError",
    "SubmissionResult",
    "TransportError",
    "Verdict",
    "classify",
    "extract_message",
]
