"""Palette color literal formatting."""

from __future__ import annotations

from .models import PaletteFormat, Spacing


def split_rgb(color: int) -> tuple[int, int, int]:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def _float_channel(value: int, spacing: Spacing) -> str:
    unit = round(value / 255.0, 3)
    if spacing is Spacing.SPACED:
        return f"{unit:.3f}"
    text = f"{unit:.3f}".rstrip("0").rstrip(".")
    if text.startswith("0."):
        text = text[1:]
    return text


def format_color(color: int, palette_format: PaletteFormat, spacing: Spacing = Spacing.SPACED) -> str:
    sp = spacing.space
    r, g, b = split_rgb(color)
    if palette_format is PaletteFormat.INT_DECIMAL:
        return str(color)
    if palette_format is PaletteFormat.INT_HEX:
        return hex(color)
    if palette_format is PaletteFormat.RGB_DECIMAL:
        return f"vec3({r},{sp}{g},{sp}{b}){sp}/{sp}{_unit_divisor(spacing)}"
    if palette_format is PaletteFormat.RGB_HEX:
        return f"vec3({hex(r)},{sp}{hex(g)},{sp}{hex(b)}){sp}/{sp}{_unit_divisor(spacing)}"
    if palette_format is PaletteFormat.RGB_FLOAT:
        channels = [_float_channel(c, spacing) for c in (r, g, b)]
        if channels[0] == channels[1] == channels[2]:
            return f"vec3({channels[0]})"
        delim = "," + sp
        return f"vec3({delim.join(channels)})"
    raise ValueError(f"Unknown palette format: {palette_format}")


def _unit_divisor(spacing: Spacing) -> str:
    return "255.0" if spacing is Spacing.SPACED else "255."
