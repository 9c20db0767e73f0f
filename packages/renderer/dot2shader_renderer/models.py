"""Typed display configuration models."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


class PaletteFormat(str, Enum):
    INT_DECIMAL = "IntDecimal"
    INT_HEX = "IntHex"
    RGB_DECIMAL = "RGBDecimal"
    RGB_HEX = "RGBHex"
    RGB_FLOAT = "RGBFloat"

    @property
    def is_integer(self) -> bool:
        return self in (PaletteFormat.INT_DECIMAL, PaletteFormat.INT_HEX)

    @property
    def element_type(self) -> str:
        return "int" if self.is_integer else "vec3"


class InlineLevel(str, Enum):
    NONE = "None"
    INLINE_VARIABLE = "InlineVariable"
    GEEKEST = "Geekest"


class Spacing(Enum):
    SPACED = "spaced"
    COMPACT = "compact"

    @property
    def space(self) -> str:
        return " " if self is Spacing.SPACED else ""

    @property
    def newline(self) -> str:
        return "\n" if self is Spacing.SPACED else ""

    @property
    def indent(self) -> str:
        return "    " if self is Spacing.SPACED else ""

    @property
    def terminator(self) -> str:
        return ";" if self is Spacing.SPACED else ""


@dataclass(frozen=True)
class BufferFormat:
    reverse_rows: bool = True
    reverse_each_chunk: bool = True
    force_to_raw: bool = False


@dataclass(frozen=True)
class DisplayConfig:
    buffer_format: BufferFormat = field(default_factory=BufferFormat)
    palette_format: PaletteFormat = PaletteFormat.RGB_DECIMAL
    inline_level: InlineLevel = InlineLevel.NONE

    @property
    def spacing(self) -> Spacing:
        return Spacing.COMPACT if self.inline_level is InlineLevel.GEEKEST else Spacing.SPACED

    def effective(self) -> DisplayConfig:
        """Configuration actually rendered; Geekest only supports float palettes and packed buffers."""
        if self.inline_level is not InlineLevel.GEEKEST:
            return self
        return replace(
            self,
            palette_format=PaletteFormat.RGB_FLOAT,
            buffer_format=replace(self.buffer_format, force_to_raw=False),
        )


DEFAULT_DISPLAY_CONFIG = DisplayConfig()
