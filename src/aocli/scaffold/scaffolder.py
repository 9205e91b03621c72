"""Create new day directories and part files.

Nothing here ever overwrites: an existing target fails with
AlreadyExistsError before anything is written.
"""

from __future__ import annotations

import logging
from pathlib import Path

from aocli.context.base import LAST_DAY, Context, InvalidContextError, is_valid_day
from aocli.context.resolver import ContextResolver, DayLocation, RepoLocation
from aocli.errors import AocError
from aocli.templates import render

logger = logging.getLogger(__name__)


class ScaffoldError(AocError):
    """Base exception for scaffolding."""


class AlreadyExistsError(ScaffoldError):
    """Raised when a target path already exists."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Already exists: {path}")


class NoPreviousPartError(ScaffoldError):
    """Raised when there is no part to copy from."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"No previous part to copy: {path} does not exist")


def _write_new(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with path.open("xb") as f:
            f.write(content)
    except FileExistsError:
        raise AlreadyExistsError(path) from None


def next_day(resolver: ContextResolver, repo: RepoLocation) -> int:
    """One past the highest existing day in ``repo`` (1 if there is none)."""
    days = resolver.existing_days(repo)
    day = max(days) + 1 if days else 1
    if day > LAST_DAY:
        raise InvalidContextError(
            f"All {LAST_DAY} days already exist in {repo.path}"
        )
    return day


def new_day(
    resolver: ContextResolver,
    repo: RepoLocation,
    day: int,
    part_content: bytes = b"",
) -> list[Path]:
    """Create the directory for ``day`` and its part 1 file.

    Returns:
        The created day directory and part file.

    Raises:
        AlreadyExistsError: If a directory for ``day`` already exists, under
            the rendered name or any other name the day template matches.
        InvalidContextError: If ``day`` is outside 1-25.
    """
    if not is_valid_day(day):
        raise InvalidContextError(f"Invalid day: {day} (expected 1-{LAST_DAY})")
    existing = resolver.existing_days(repo)
    if day in existing:
        raise AlreadyExistsError(existing[day])
    ctx = Context(year=repo.year, day=day, part=1)
    day_dir = repo.path / render(resolver.formats.day, ctx)
    if day_dir.exists():
        raise AlreadyExistsError(day_dir)

    part_file = day_dir / render(resolver.formats.part, ctx)
    day_dir.mkdir(parents=True)
    _write_new(part_file, part_content)
    logger.debug("Created day %d at %s", day, day_dir)
    return [day_dir, part_file]


def new_part(resolver: ContextResolver, day: DayLocation) -> Path:
    """Copy the highest existing part verbatim into the next part.

    Raises:
        NoPreviousPartError: If part 1 does not exist.
        AlreadyExistsError: If the next part (or part 2) already exists.
    """
    parts = resolver.existing_parts(day)
    if 1 not in parts:
        raise NoPreviousPartError(resolver.part_path(day, 1))

    highest = max(parts)
    if highest >= 2:
        raise AlreadyExistsError(parts[highest])

    target = resolver.part_path(day, highest + 1)
    if target.exists():
        raise AlreadyExistsError(target)
    _write_new(target, parts[highest].read_bytes())
    logger.debug("Copied %s to %s", parts[highest], target)
    return target
