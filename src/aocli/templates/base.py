"""Template building blocks and errors."""

from __future__ import annotations

from dataclasses import dataclass

from aocli.errors import AocError

NUMERIC_KEYS: frozenset[str] = frozenset({"year", "day", "part"})
KNOWN_KEYS: frozenset[str] = NUMERIC_KEYS | {"file"}


class TemplateError(AocError):
    """Base exception for template problems."""


class MalformedTemplateError(TemplateError):
    """Raised on unbalanced braces or an invalid formatting directive."""

    def __init__(self, template: str, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(f"Malformed template {template!r}: {reason}")


class UnresolvedPlaceholderError(TemplateError):
    """Raised when a placeholder has no value to substitute."""

    def __init__(self, template: str, placeholder: str) -> None:
        self.template = template
        self.placeholder = placeholder
        super().__init__(
            f"Unresolved placeholder {{{placeholder}}} in template {template!r}"
        )


@dataclass(frozen=True)
class Literal:
    """Plain text copied to the output unchanged."""

    text: str


@dataclass(frozen=True)
class Placeholder:
    """A ``{name}`` or ``{name:spec}`` slot."""

    name: str
    spec: str = ""  # e.g. "02" for zero-padded width 2

    @property
    def width(self) -> int:
        return int(self.spec) if self.spec else 0


Segment = Literal | Placeholder
