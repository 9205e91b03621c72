"""Command-line interface for aocli."""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
import yaml
from rich.logging import RichHandler
from rich.markup import escape

from aocli import __version__
from aocli.answers import (
    FromProcess,
    FromStdin,
    obtain_answer,
    submit_answer,
    use_stdin,
)
from aocli.config import AocConfig, load_config, save_config
from aocli.config.loader import CONFIG_DIRNAME, CONFIG_FILENAME
from aocli.console import console, err_console
from aocli.context import ContextResolver, ResolvedContext
from aocli.errors import AocError
from aocli.executors import ShellExecutor, TemplateCommandSource
from aocli.scaffold import (
    AlreadyExistsError,
    ScaffoldError,
    new_day,
    new_part,
    next_day,
)
from aocli.templates import render
from aocli.transport import AocClient, Verdict

logger = logging.getLogger(__name__)

PART_TYPE = click.IntRange(1, 2)

_VERDICT_STYLES = {
    Verdict.CORRECT: "green",
    Verdict.INCORRECT: "red",
    Verdict.TOO_RECENT: "yellow",
    Verdict.ALREADY_SOLVED: "yellow",
    Verdict.UNKNOWN: "magenta",
}


def _fail(error: AocError) -> NoReturn:
    """Print ``error`` to stderr and exit with status 1."""
    logger.debug("Aborting on %s", type(error).__name__, exc_info=error)
    err_console.print(f"[red]Error: {escape(str(error))}[/red]")
    raise SystemExit(1)


def _resolver(config: AocConfig) -> ContextResolver:
    return ContextResolver(
        config.formats, root=config.root_path, default_year=config.year
    )


def _stdin_is_piped() -> bool:
    """Check whether stdin is connected to a pipe or file instead of a terminal."""
    stream = sys.stdin
    return stream is not None and not stream.isatty()


def _describe(resolved: ResolvedContext) -> str:
    ctx = resolved.context
    return f"{ctx.year} day {ctx.day} part {ctx.part}"


def version_callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    console.print(f"aocli [bold cyan]{__version__}[/bold cyan]")
    ctx.exit()


@click.group(invoke_without_command=True)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug details to stderr.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """aocli - Advent of Code workflow automation.

    The year, day and part are inferred from the current directory using the
    naming templates in .aocli/config.yaml.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )

    if ctx.invoked_subcommand is None:
        console.print("[bold]aocli[/bold] - Advent of Code workflow automation")
        console.print("\nRun [cyan]aoc --help[/cyan] for available commands.")


@main.command("input")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing input file.")
def input_cmd(force: bool) -> None:
    """Download the puzzle input for the current day."""
    try:
        config = load_config()
        resolved = _resolver(config).resolve(Path.cwd())
        target = resolved.day_dir / render(config.formats.input, resolved.context)
        if target.exists() and not force:
            raise AlreadyExistsError(target)

        client = AocClient(config.session)
        text = client.fetch_input(resolved.context.year, resolved.context.day)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    except AocError as e:
        _fail(e)

    console.print(f"[green]Saved input to {escape(str(target))}[/green]")


@main.command()
@click.argument("dash", required=False, type=click.Choice(["-"]), metavar="[-]")
@click.option("--part", "-p", type=PART_TYPE, help="Part to submit (runs the solution).")
@click.option("--stdin", "stdin_flag", is_flag=True, help="Read the answer from stdin.")
@click.option(
    "--ignore-exit-code",
    is_flag=True,
    help="Submit even if the solution exits with a non-zero code.",
)
def submit(
    dash: str | None,
    part: int | None,
    stdin_flag: bool,
    ignore_exit_code: bool,
) -> None:
    """Submit an answer for the current day.

    The answer is read from stdin when it is piped (or with --stdin / -);
    otherwise the solution is run and its last line of output is submitted.
    """
    from_stdin = use_stdin(stdin_flag or dash == "-", part, _stdin_is_piped())
    try:
        config = load_config()
        resolved = _resolver(config).resolve(
            Path.cwd(), part=part, require_part=not from_stdin
        )
        if from_stdin:
            source = FromStdin(click.get_text_stream("stdin"))
        else:
            command = TemplateCommandSource(config.commands).run(
                resolved.context, resolved.relative_part_file
            )
            console.print(f"[dim]Running {escape(command)}[/dim]")
            source = FromProcess(
                command=command,
                cwd=resolved.day_dir,
                allow_failure=ignore_exit_code,
            )
        answer = obtain_answer(source, ShellExecutor(use_shell=config.commands.shell))

        client = AocClient(config.session)
        console.print(f"[dim]Submitting {escape(answer)!r} for {_describe(resolved)}[/dim]")
        result = submit_answer(answer, resolved.context, client)
    except AocError as e:
        _fail(e)

    style = _VERDICT_STYLES[result.verdict]
    console.print(f"[{style}]{escape(result.message)}[/{style}]")
    if not result.accepted:
        raise SystemExit(1)


def _run_action(action: str, part: int | None) -> None:
    try:
        config = load_config()
        resolved = _resolver(config).resolve(Path.cwd(), part=part, require_part=True)
        command = TemplateCommandSource(config.commands).for_action(
            action, resolved.context, resolved.relative_part_file
        )
        console.print(f"[dim]{_describe(resolved)}: {escape(command)}[/dim]")
        executor = ShellExecutor(use_shell=config.commands.shell)
        result = executor.run(command, resolved.day_dir, echo=True)
    except AocError as e:
        _fail(e)

    if not result.ok:
        err_console.print(
            f"[yellow]{escape(command)} exited with code {result.exit_code}[/yellow]"
        )
        raise SystemExit(result.exit_code)


@main.command("run")
@click.option("--part", "-p", type=PART_TYPE, help="Part to run (default: latest).")
def run_cmd(part: int | None) -> None:
    """Run the solution for the current day and part."""
    _run_action("run", part)


@main.command("test")
@click.option("--part", "-p", type=PART_TYPE, help="Part to test (default: latest).")
def test_cmd(part: int | None) -> None:
    """Run the tests for the current day and part."""
    _run_action("test", part)


@main.group()
def new() -> None:
    """Create a new day or part."""


@new.command("day")
@click.option(
    "--day",
    "-d",
    "day_number",
    type=click.IntRange(1, 25),
    help="Day to create (default: one past the latest day).",
)
def new_day_cmd(day_number: int | None) -> None:
    """Create the next day directory with its part 1 file."""
    try:
        config = load_config()
        resolver = _resolver(config)
        repo = resolver.locate_repo(Path.cwd())
        day = day_number if day_number is not None else next_day(resolver, repo)

        content = b""
        template_path = config.part_template_path
        if template_path is not None:
            if not template_path.is_file():
                raise ScaffoldError(f"Part template not found: {template_path}")
            content = template_path.read_bytes()

        created = new_day(resolver, repo, day, content)
    except AocError as e:
        _fail(e)

    console.print(f"[green]Created day {day} ({repo.year})[/green]")
    for path in created:
        console.print(f"  {escape(str(path))}")


@new.command("part")
def new_part_cmd() -> None:
    """Copy the latest part into the next part."""
    try:
        config = load_config()
        resolver = _resolver(config)
        day = resolver.locate_day(Path.cwd())
        created = new_part(resolver, day)
    except AocError as e:
        _fail(e)

    console.print(f"[green]Created {escape(str(created))}[/green]")


@main.command()
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing local config.")
@click.option("--show", is_flag=True, help="Show the effective configuration and exit.")
def init(force: bool, show: bool) -> None:
    """Write a local configuration with the default templates.

    Config locations:
      - Global: ~/.aocli/config.yaml
      - Local: .aocli/config.yaml (nearest at or above the current directory)
    """
    try:
        config = load_config()
    except AocError as e:
        _fail(e)

    if show:
        data = config.to_dict()
        if "session" in data:
            data["session"] = "********"
        console.print("[bold]Current Effective Configuration[/bold]\n")
        console.print(
            escape(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
        )
        return

    path = Path.cwd() / CONFIG_DIRNAME / CONFIG_FILENAME
    if path.exists() and not force:
        err_console.print(
            f"[yellow]Config already exists at {escape(str(path))}[/yellow]"
        )
        raise SystemExit(1)

    save_config(config, path)
    console.print(f"[green]Wrote {escape(str(path))}[/green]")
