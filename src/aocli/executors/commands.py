"""Command source backed by configured command templates."""

from aocli.config.schema import CommandsConfig
from aocli.context.base import Context
from aocli.executors.base import CommandSource
from aocli.templates import render


class TemplateCommandSource(CommandSource):
    """Renders the ``commands`` section of the config."""

    def __init__(self, commands: CommandsConfig) -> None:
        self._commands = commands

    def run(self, ctx: Context, file: str) -> str:
        return render(self._commands.run, ctx, file=file)

    def test(self, ctx: Context, file: str) -> str:
        return render(self._commands.test, ctx, file=file)
