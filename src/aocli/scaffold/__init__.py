"""Scaffolding for new days and parts."""

from aocli.scaffold.scaffolder import (
    AlreadyExistsError,
    NoPreviousPartError,
    ScaffoldError,
    new_day,
    new_part,
    next_day,
)

__all__ = [
    "AlreadyExistsError",
    "NoPreviousPartError",
    "ScaffoldError",
    "new_day",
    "new_part",
    "next_day",
]
