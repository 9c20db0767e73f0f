"""Typed GLSL array literal formatting."""

from __future__ import annotations

from typing import Iterable, Sequence

from .colors import format_color
from .models import PaletteFormat, Spacing


def int_type(intable: bool) -> str:
    return "int" if intable else "uint"


def int_suffix(intable: bool) -> str:
    return "" if intable else "U"


def format_array(
    items: Sequence[str],
    element_type: str,
    per_line: int,
    spacing: Spacing = Spacing.SPACED,
) -> str:
    """Render ``T[](...)`` with ``per_line`` items on each line.

    Compact spacing drops every separator, line break, and the trailing ``;``.
    """
    nl = spacing.newline
    per_line = max(per_line, 1)
    lines = [
        spacing.indent + ("," + spacing.space).join(items[start : start + per_line])
        for start in range(0, len(items), per_line)
    ]
    body = ("," + nl).join(lines)
    if lines:
        body += nl
    return f"{element_type}[]({nl}{body}){spacing.terminator}{nl}{nl}"


def format_word_array(
    words: Iterable[int],
    intable: bool,
    per_line: int,
    spacing: Spacing = Spacing.SPACED,
) -> str:
    suffix = int_suffix(intable)
    items = [f"{word}{suffix}" for word in words]
    return format_array(items, int_type(intable), per_line, spacing)


def format_palette_array(
    palette: Sequence[int],
    palette_format: PaletteFormat,
    spacing: Spacing = Spacing.SPACED,
) -> str:
    items = [format_color(color, palette_format, spacing) for color in palette]
    return format_array(items, palette_format.element_type, 1, spacing)
