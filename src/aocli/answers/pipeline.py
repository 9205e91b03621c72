"""Answer pipeline: obtain an answer, then hand it to the transport.

The answer source is chosen once, up front, from the CLI flags and whether
stdin is piped:

- ``FromProcess``: run the solution and take the last non-empty stdout line.
- ``FromStdin``: read the piped input fully.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, TextIO

from aocli.context.base import Context
from aocli.errors import AocError
from aocli.executors.base import ProcessResult
from aocli.executors.shell import ShellExecutor
from aocli.transport.models import SubmissionResult

logger = logging.getLogger(__name__)


class AnswerError(AocError):
    """Base exception for answer extraction."""


class NoOutputProducedError(AnswerError):
    """Raised when the solution printed nothing usable."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Command {command!r} produced no output to submit")


class EmptyInputError(AnswerError):
    """Raised when piped stdin is blank."""

    def __init__(self) -> None:
        super().__init__("Standard input is empty; nothing to submit")


class CommandFailedError(AnswerError):
    """Raised when the solution exits non-zero and that blocks submission."""

    def __init__(self, result: ProcessResult) -> None:
        self.result = result
        super().__init__(
            f"Command {result.command!r} exited with code {result.exit_code}; "
            "not submitting (use --ignore-exit-code to override)"
        )


@dataclass(frozen=True)
class FromProcess:
    """Run ``command`` in ``cwd`` and use its last line of output."""

    command: str
    cwd: Path
    allow_failure: bool = False


@dataclass(frozen=True)
class FromStdin:
    """Read the answer from a stream (the invoking process's stdin)."""

    stream: TextIO


AnswerSource = FromProcess | FromStdin


class SubmissionTransport(Protocol):
    """Anything that can deliver an answer to Advent of Code."""

    def submit(self, year: int, day: int, part: int, answer: str) -> SubmissionResult:
        ...


def use_stdin(stdin_flag: bool, part_override: int | None, stdin_is_piped: bool) -> bool:
    """Decide whether the answer comes from stdin.

    An explicit ``--stdin``/``-`` always wins. Otherwise piped input is used
    unless ``--part`` was given, which asks for the solution to be run.
    """
    if stdin_flag:
        return True
    return stdin_is_piped and part_override is None


def obtain_answer(source: AnswerSource, executor: ShellExecutor | None = None) -> str:
    """Produce the answer string from ``source``.

    Raises:
        NoOutputProducedError: The process printed no non-empty line.
        CommandFailedError: The process exited non-zero and failures are
            not allowed.
        EmptyInputError: Stdin was blank after trimming.
        ProcessSpawnError: The process could not be launched.
    """
    if isinstance(source, FromStdin):
        answer = source.stream.read().strip()
        if not answer:
            raise EmptyInputError()
        logger.debug("Answer from stdin: %r", answer)
        return answer

    executor = executor or ShellExecutor()
    result = executor.run(source.command, source.cwd, echo=True)
    if not result.ok and not source.allow_failure:
        raise CommandFailedError(result)
    answer = result.last_line()
    if answer is None:
        raise NoOutputProducedError(source.command)
    logger.debug("Answer from %r: %r", source.command, answer)
    return answer


def submit_answer(
    answer: str, ctx: Context, transport: SubmissionTransport
) -> SubmissionResult:
    """Send ``answer`` for ``ctx`` and return the transport's verdict unchanged."""
    logger.debug("Submitting %r for %s", answer, ctx)
    return transport.submit(ctx.year, ctx.day, ctx.part, answer)
