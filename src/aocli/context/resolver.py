"""Infer the current year, day and part from the directory tree.

Directory names are matched against the ``repo`` and ``day`` templates,
with placeholders acting as capture groups (``day-{day:02}`` matches
``day-07`` and yields day 7). The search walks upward from the working
directory first; when that finds no day, the children of the repo root are
scanned and more than one candidate is an error rather than a guess.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from aocli.config.schema import FormatsConfig
from aocli.context.base import (
    Context,
    InvalidContextError,
    ResolvedContext,
    is_valid_day,
    is_valid_part,
)
from aocli.errors import AocError
from aocli.templates import match_values, placeholders, render

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ContextError(AocError):
    """Base exception for context resolution."""


class ContextNotFoundError(ContextError):
    """Raised when no directory matches the repo/day templates."""


class AmbiguousContextError(ContextError):
    """Raised when sibling directories match a template with different captures."""

    def __init__(self, template: str, parent: Path, candidates: list[Path]) -> None:
        self.template = template
        self.parent = parent
        self.candidates = candidates
        names = ", ".join(sorted(c.name for c in candidates))
        super().__init__(
            f"Ambiguous context in {parent}: several directories match "
            f"{template!r} ({names})"
        )


class NoPartFoundError(ContextError):
    """Raised when an operation needs a part file that does not exist."""


@dataclass(frozen=True)
class RepoLocation:
    """The repo directory and the year it stands for."""

    path: Path
    year: int


@dataclass(frozen=True)
class DayLocation:
    """The day directory inside a repo."""

    repo: RepoLocation
    path: Path
    day: int


class ContextResolver:
    """Resolves contexts against a set of naming templates."""

    def __init__(
        self,
        formats: FormatsConfig,
        root: Path | None = None,
        default_year: int | None = None,
    ) -> None:
        """Initialize with templates, an optional search root and fallback year."""
        self._formats = formats
        self._root = root.resolve() if root is not None else None
        self._default_year = default_year

    @property
    def formats(self) -> FormatsConfig:
        return self._formats

    def _match_repo(self, path: Path) -> RepoLocation | None:
        values = match_values(self._formats.repo, path.name)
        if values is None or not path.is_dir():
            return None
        year = values.get("year", self._default_year)
        if year is None:
            raise ContextNotFoundError(
                f"Repo template {self._formats.repo!r} has no {{year}} "
                "and no year is configured"
            )
        return RepoLocation(path=path, year=int(year))

    def _match_day(self, repo: RepoLocation, path: Path) -> DayLocation | None:
        values = match_values(self._formats.day, path.name)
        if values is None or "day" not in values or not path.is_dir():
            return None
        day = int(values["day"])
        if not is_valid_day(day):
            return None
        if "year" in values and values["year"] != repo.year:
            return None
        return DayLocation(repo=repo, path=path, day=day)

    def _search_path(self, cwd: Path) -> list[Path]:
        """The working directory and its ancestors, nearest first, up to root."""
        chain = [cwd, *cwd.parents]
        if self._root is not None and self._root in chain:
            chain = chain[: chain.index(self._root) + 1]
        return chain

    def _scan_children(
        self, parent: Path, template: str, matcher: Callable[[Path], T | None]
    ) -> list[T]:
        """Match child directories; more than one candidate is ambiguous."""
        if not parent.is_dir():
            return []
        found = []
        for child in sorted(parent.iterdir()):
            location = matcher(child)
            if location is not None:
                found.append((child, location))
        if len(found) > 1:
            raise AmbiguousContextError(template, parent, [c for c, _ in found])
        return [location for _, location in found]

    def locate_repo(self, cwd: Path) -> RepoLocation:
        """Find the repo directory for ``cwd``.

        Raises:
            ContextNotFoundError: If neither ``cwd``, its ancestors nor its
                children match the repo template.
            AmbiguousContextError: If several children of ``cwd`` match.
        """
        cwd = cwd.resolve()
        for directory in self._search_path(cwd):
            repo = self._match_repo(directory)
            if repo is not None:
                logger.debug("Repo %s (year %d)", repo.path, repo.year)
                return repo

        found = self._scan_children(cwd, self._formats.repo, self._match_repo)
        if found:
            logger.debug("Repo %s (year %d) below cwd", found[0].path, found[0].year)
            return found[0]

        raise ContextNotFoundError(
            f"No directory matching {self._formats.repo!r} at or above {cwd}"
        )

    def locate_day(self, cwd: Path) -> DayLocation:
        """Find the day directory for ``cwd``.

        The first directory below the repo on the way to ``cwd`` that matches
        the day template wins. Otherwise the children of the repo root are
        scanned.
        """
        cwd = cwd.resolve()
        repo = self.locate_repo(cwd)

        if repo.path in cwd.parents:
            current = repo.path
            for name in cwd.relative_to(repo.path).parts:
                current = current / name
                day = self._match_day(repo, current)
                if day is not None:
                    logger.debug("Day %d at %s", day.day, day.path)
                    return day

        found = self._scan_children(
            repo.path, self._formats.day, lambda p: self._match_day(repo, p)
        )
        if found:
            logger.debug("Day %d at %s in repo root", found[0].day, found[0].path)
            return found[0]

        raise ContextNotFoundError(
            f"No directory matching {self._formats.day!r} found for {cwd} "
            f"(repo {repo.path})"
        )

    def existing_days(self, repo: RepoLocation) -> dict[int, Path]:
        """Map of day number to directory for every day dir in the repo."""
        days: dict[int, Path] = {}
        for child in sorted(repo.path.iterdir()):
            day = self._match_day(repo, child)
            if day is not None:
                days.setdefault(day.day, child)
        return days

    def existing_parts(self, day: DayLocation) -> dict[int, Path]:
        """Map of part number to file for every part file in the day dir."""
        template = self._formats.part
        depth = template.count("/") + 1
        parts: dict[int, Path] = {}
        for candidate in sorted(day.path.glob("/".join(["*"] * depth))):
            if not candidate.is_file():
                continue
            rel = candidate.relative_to(day.path).as_posix()
            values = match_values(template, rel)
            if values is None or "part" not in values:
                continue
            part = int(values["part"])
            if not is_valid_part(part):
                continue
            if values.get("year", day.repo.year) != day.repo.year:
                continue
            if values.get("day", day.day) != day.day:
                continue
            parts.setdefault(part, candidate)
        return parts

    def part_path(self, day: DayLocation, part: int) -> Path:
        """Rendered path of a part file, whether or not it exists."""
        ctx = Context(year=day.repo.year, day=day.day, part=part)
        return day.path / render(self._formats.part, ctx)

    def resolve(
        self,
        cwd: Path,
        part: int | None = None,
        require_part: bool = False,
    ) -> ResolvedContext:
        """Resolve the full context for ``cwd``.

        Args:
            cwd: Working directory to resolve from.
            part: Explicit part override. When None, the highest existing
                part is used, or part 1 if none exists.
            require_part: Fail with NoPartFoundError when the part file is
                missing.

        Raises:
            ContextNotFoundError, AmbiguousContextError, NoPartFoundError,
            InvalidContextError
        """
        day = self.locate_day(cwd)
        if "part" not in placeholders(self._formats.part):
            raise ContextNotFoundError(
                f"Part template {self._formats.part!r} has no {{part}}"
            )

        if part is not None:
            if not is_valid_part(part):
                raise InvalidContextError(f"Invalid part: {part} (expected 1 or 2)")
            part_file = self.part_path(day, part)
            if require_part and not part_file.is_file():
                raise NoPartFoundError(f"Part {part} not found: {part_file}")
        else:
            existing = self.existing_parts(day)
            if existing:
                part = max(existing)
                part_file = existing[part]
            elif require_part:
                raise NoPartFoundError(
                    f"No file matching {self._formats.part!r} in {day.path}"
                )
            else:
                part = 1
                part_file = self.part_path(day, part)

        ctx = Context(year=day.repo.year, day=day.day, part=part)
        logger.debug("Resolved %s from %s", ctx, cwd)
        return ResolvedContext(
            context=ctx,
            repo_dir=day.repo.path,
            day_dir=day.path,
            part_file=part_file,
        )


def resolve(cwd: Path, templates: FormatsConfig, root: Path | None = None) -> Context:
    """Resolve the Context for ``cwd`` using the given naming templates."""
    return ContextResolver(templates, root=root).resolve(cwd).context
