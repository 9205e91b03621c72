"""Configuration schema for aocli."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from aocli.errors import AocError

_TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "off", "0"})


class ConfigError(AocError):
    """Raised when a config value has the wrong type or form."""


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ConfigError(f"Invalid value for {key!r}: {value!r} (expected true or false)")


def _parse_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"Invalid value for {key!r}: {value!r} (expected an integer)")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(
            f"Invalid value for {key!r}: {value!r} (expected an integer)"
        ) from None


@dataclass(frozen=True)
class FormatsConfig:
    """Naming templates for the repo, day and part layout.

    ``part`` and ``input`` are relative to the day directory.
    """

    repo: str = "advent-of-code-{year}"
    day: str = "day-{day:02}"
    part: str = "part-{part}.py"
    input: str = "input.txt"

    def overlay(self, data: dict[str, Any]) -> FormatsConfig:
        """Return a new config with string values from ``data`` overlaid."""
        values = {
            f.name: str(data[f.name])
            for f in fields(self)
            if data.get(f.name) is not None
        }
        return FormatsConfig(**{**self.to_dict(), **values})

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class CommandsConfig:
    """Command templates for running and testing a part."""

    run: str = "python {file}"
    test: str = "python -m pytest {file}"
    shell: bool = False  # run through the system shell instead of argv splitting

    def overlay(self, data: dict[str, Any]) -> CommandsConfig:
        """Return a new config with values from ``data`` overlaid."""
        run = data.get("run")
        test = data.get("test")
        shell = data.get("shell")
        return CommandsConfig(
            run=str(run) if run is not None else self.run,
            test=str(test) if test is not None else self.test,
            shell=(
                _parse_bool("commands.shell", shell)
                if shell is not None
                else self.shell
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"run": self.run, "test": self.test, "shell": self.shell}


@dataclass
class AocConfig:
    """aocli configuration schema.

    None values indicate "not set" and will be inherited when merging.
    """

    formats: FormatsConfig = field(default_factory=FormatsConfig)
    commands: CommandsConfig = field(default_factory=CommandsConfig)

    # AoC session cookie; AOC_SESSION takes precedence
    session: str | None = None

    # Upward context search stops at this directory
    root: str | None = None

    # Used when the repo template has no {year}
    year: int | None = None

    # File whose content seeds part 1 of a new day
    part_template: str | None = None

    # Raw sections as read from a file, kept so merge only overlays set keys
    _formats_raw: dict[str, Any] = field(default_factory=dict, repr=False)
    _commands_raw: dict[str, Any] = field(default_factory=dict, repr=False)

    def merge(self, other: AocConfig) -> AocConfig:
        """Merge another config into this one.

        Values from ``other`` take precedence when they are set.
        Returns a new AocConfig instance.
        """
        return AocConfig(
            formats=self.formats.overlay(other._formats_raw),
            commands=self.commands.overlay(other._commands_raw),
            session=other.session if other.session is not None else self.session,
            root=other.root if other.root is not None else self.root,
            year=other.year if other.year is not None else self.year,
            part_template=(
                other.part_template
                if other.part_template is not None
                else self.part_template
            ),
        )

    @property
    def root_path(self) -> Path | None:
        """``root`` as an expanded path, or None."""
        return Path(self.root).expanduser() if self.root else None

    @property
    def part_template_path(self) -> Path | None:
        """``part_template`` as an expanded path, or None."""
        return Path(self.part_template).expanduser() if self.part_template else None

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary, excluding None values."""
        result: dict[str, Any] = {
            "formats": self.formats.to_dict(),
            "commands": self.commands.to_dict(),
        }
        for name in ("session", "root", "year", "part_template"):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AocConfig:
        """Create an AocConfig from a dictionary.

        Unknown keys are ignored. Sections that are not mappings are ignored.
        """
        formats_raw = data.get("formats")
        if not isinstance(formats_raw, dict):
            formats_raw = {}
        commands_raw = data.get("commands")
        if not isinstance(commands_raw, dict):
            commands_raw = {}

        session = data.get("session")
        root = data.get("root")
        year_raw = data.get("year")
        year = _parse_int("year", year_raw) if year_raw is not None else None
        part_template = data.get("part_template")

        return cls(
            formats=FormatsConfig().overlay(formats_raw),
            commands=CommandsConfig().overlay(commands_raw),
            session=str(session) if session is not None else None,
            root=str(root) if root is not None else None,
            year=year,
            part_template=str(part_template) if part_template is not None else None,
            _formats_raw=dict(formats_raw),
            _commands_raw=dict(commands_raw),
        )


# Default configuration values (used when not specified anywhere)
DEFAULT_CONFIG = AocConfig()
