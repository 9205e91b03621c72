"""Process execution for run/test/submit."""

from aocli.executors.base import CommandSource, ProcessResult, ProcessSpawnError
from aocli.executors.commands import TemplateCommandSource
from aocli.executors.shell import ShellExecutor

__all__ = [
    "CommandSource",
    "ProcessResult",
    "ProcessSpawnError",
    "ShellExecutor",
    "TemplateCommandSource",
]
