"""Template engine for path and command templates."""

from aocli.templates.base import (
    KNOWN_KEYS,
    Literal,
    MalformedTemplateError,
    Placeholder,
    TemplateError,
    UnresolvedPlaceholderError,
)
from aocli.templates.engine import (
    compile_pattern,
    match_values,
    parse_template,
    placeholders,
    render,
    render_values,
)

__all__ = [
    "KNOWN_KEYS",
    "Literal",
    "MalformedTemplateError",
    "Placeholder",
    "TemplateError",
    "UnresolvedPlaceholderError",
    "compile_pattern",
    "match_values",
    "parse_template",
    "placeholders",
    "render",
    "render_values",
]
