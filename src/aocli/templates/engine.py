"""Template rendering and template-derived path patterns.

Templates use ``{name}`` placeholders, optionally with a numeric formatting
directive (``{day:02}`` renders day 7 as ``07``). ``{{`` and ``}}`` are
literal braces. A template is parsed once into segments and rendered in a
single pass, so substituted values are never re-read as template syntax.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from functools import lru_cache
from typing import TYPE_CHECKING

from aocli.templates.base import (
    KNOWN_KEYS,
    NUMERIC_KEYS,
    Literal,
    MalformedTemplateError,
    Placeholder,
    Segment,
    UnresolvedPlaceholderError,
)

if TYPE_CHECKING:
    from aocli.context.base import Context

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_SPEC_RE = re.compile(r"0[1-9][0-9]*")


@lru_cache(maxsize=128)
def parse_template(template: str) -> tuple[Segment, ...]:
    """Split a template into literal and placeholder segments.

    Raises:
        MalformedTemplateError: On unbalanced braces, an empty or invalid
            placeholder name, or an unsupported formatting directive.
        UnresolvedPlaceholderError: On a placeholder name that is not one of
            year, day, part or file.
    """
    segments: list[Segment] = []
    buffer: list[str] = []
    i = 0
    length = len(template)

    while i < length:
        char = template[i]
        if char == "{":
            if template.startswith("{{", i):
                buffer.append("{")
                i += 2
                continue
            end = template.find("}", i + 1)
            if end == -1:
                raise MalformedTemplateError(
                    template, f"unclosed '{{' at position {i}"
                )
            body = template[i + 1 : end]
            if "{" in body:
                raise MalformedTemplateError(
                    template, f"nested '{{' at position {i + 1 + body.index('{')}"
                )
            if buffer:
                segments.append(Literal("".join(buffer)))
                buffer = []
            segments.append(_parse_placeholder(template, body))
            i = end + 1
        elif char == "}":
            if template.startswith("}}", i):
                buffer.append("}")
                i += 2
                continue
            raise MalformedTemplateError(template, f"unmatched '}}' at position {i}")
        else:
            buffer.append(char)
            i += 1

    if buffer:
        segments.append(Literal("".join(buffer)))
    return tuple(segments)


def _parse_placeholder(template: str, body: str) -> Placeholder:
    name, sep, spec = body.partition(":")
    if not name:
        raise MalformedTemplateError(template, "empty placeholder '{}'")
    if not _NAME_RE.fullmatch(name):
        raise MalformedTemplateError(template, f"invalid placeholder name {name!r}")
    if name not in KNOWN_KEYS:
        raise UnresolvedPlaceholderError(template, name)
    if sep:
        if name not in NUMERIC_KEYS:
            raise MalformedTemplateError(
                template, f"formatting directive not allowed on {{{name}}}"
            )
        if not _SPEC_RE.fullmatch(spec):
            raise MalformedTemplateError(
                template, f"unsupported formatting directive {spec!r} for {{{name}}}"
            )
    return Placeholder(name=name, spec=spec)


def placeholders(template: str) -> frozenset[str]:
    """Names of the placeholders used by ``template``."""
    return frozenset(
        seg.name for seg in parse_template(template) if isinstance(seg, Placeholder)
    )


def render_values(template: str, values: Mapping[str, int | str]) -> str:
    """Render ``template`` against an explicit value mapping."""
    parts: list[str] = []
    for seg in parse_template(template):
        if isinstance(seg, Literal):
            parts.append(seg.text)
            continue
        if seg.name not in values:
            raise UnresolvedPlaceholderError(template, seg.name)
        value = values[seg.name]
        if seg.spec:
            parts.append(format(int(value), seg.spec))
        else:
            parts.append(str(value))
    return "".join(parts)


def render(template: str, ctx: Context, file: str | None = None) -> str:
    """Render ``template`` for ``ctx``.

    ``file`` supplies the ``{file}`` placeholder (the part file relative to
    the day directory); using ``{file}`` without one is an error.
    """
    return render_values(template, ctx.values(file))


@lru_cache(maxsize=64)
def compile_pattern(template: str) -> re.Pattern[str]:
    """Build an anchored regex matching strings the template can produce.

    Numeric placeholders become digit groups (at least ``width`` digits when
    a padding directive is present), ``{file}`` matches any non-empty text.
    A placeholder appearing twice must match the same text both times.
    Use ``fullmatch`` on the result.
    """
    pieces: list[str] = []
    seen: set[str] = set()
    for seg in parse_template(template):
        if isinstance(seg, Literal):
            pieces.append(re.escape(seg.text))
        elif seg.name in seen:
            pieces.append(f"(?P={seg.name})")
        else:
            seen.add(seg.name)
            if seg.name in NUMERIC_KEYS:
                digits = f"[0-9]{{{seg.width},}}" if seg.width else "[0-9]+"
                pieces.append(f"(?P<{seg.name}>{digits})")
            else:
                pieces.append(f"(?P<{seg.name}>.+?)")
    return re.compile("".join(pieces))


def match_values(template: str, text: str) -> dict[str, int | str] | None:
    """Match ``text`` against ``template`` and return the captured values.

    Numeric captures are converted to ``int``. Returns None when ``text``
    does not match.
    """
    match = compile_pattern(template).fullmatch(text)
    if match is None:
        return None
    captured: dict[str, int | str] = {}
    for name, raw in match.groupdict().items():
        captured[name] = int(raw) if name in NUMERIC_KEYS else raw
    return captured
