"""Process runner types and the command source capability."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from aocli.context.base import Context
from aocli.errors import AocError


class ProcessSpawnError(AocError):
    """Raised when a command cannot be launched at all."""

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        self.reason = reason
        super().__init__(f"Cannot launch {command!r}: {reason}")


@dataclass(frozen=True)
class ProcessResult:
    """Captured outcome of a finished command."""

    command: str
    stdout: str
    stderr: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def last_line(self) -> str | None:
        """Last non-empty line of stdout, stripped, or None."""
        for line in reversed(self.stdout.splitlines()):
            if line.strip():
                return line.strip()
        return None


class CommandSource(ABC):
    """Provides the command line for each logical action."""

    @abstractmethod
    def run(self, ctx: Context, file: str) -> str:
        """Command line that runs the solution for ``ctx``."""
        ...

    @abstractmethod
    def test(self, ctx: Context, file: str) -> str:
        """Command line that tests the solution for ``ctx``."""
        ...

    def for_action(self, action: str, ctx: Context, file: str) -> str:
        """Dispatch by action name ("run" or "test")."""
        if action == "run":
            return self.run(ctx, file)
        if action == "test":
            return self.test(ctx, file)
        raise ValueError(f"Unknown action: {action}")
