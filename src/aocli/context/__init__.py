"""Context model and directory-based resolution."""

from aocli.context.base import (
    Context,
    InvalidContextError,
    ResolvedContext,
    is_valid_day,
    is_valid_part,
)
from aocli.context.resolver import (
    AmbiguousContextError,
    ContextError,
    ContextNotFoundError,
    ContextResolver,
    DayLocation,
    NoPartFoundError,
    RepoLocation,
    resolve,
)

__all__ = [
    "AmbiguousContextError",
    "Context",
    "ContextError",
    "ContextNotFoundError",
    "ContextResolver",
    "DayLocation",
    "InvalidContextError",
    "NoPartFoundError",
    "RepoLocation",
    "ResolvedContext",
    "is_valid_day",
    "is_valid_part",
    "resolve",
]
