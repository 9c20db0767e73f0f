"""Renderer package for GLSL shader text emission."""

from .accessor import INT_TO_RGB, format_constants, format_geekest, format_get_color, format_main
from .arrays import format_array, format_palette_array, format_word_array, int_suffix, int_type
from .colors import format_color, split_rgb
from .display import Display, pack_for_display, render
from .models import (
    DEFAULT_DISPLAY_CONFIG,
    BufferFormat,
    DisplayConfig,
    InlineLevel,
    PaletteFormat,
    Spacing,
)

__all__ = [
    "BufferFormat",
    "DEFAULT_DISPLAY_CONFIG",
    "Display",
    "DisplayConfig",
    "INT_TO_RGB",
    "InlineLevel",
    "PaletteFormat",
    "Spacing",
    "format_array",
    "format_color",
    "format_constants",
    "format_geekest",
    "format_get_color",
    "format_main",
    "format_palette_array",
    "format_word_array",
    "int_suffix",
    "int_type",
    "pack_for_display",
    "render",
    "split_rgb",
]
