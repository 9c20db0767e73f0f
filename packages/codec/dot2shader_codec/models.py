"""Typed pixel-art models and codec errors."""

from __future__ import annotations

from dataclasses import dataclass


SUPPORTED_FORMATS = ("PNG", "BMP", "GIF")


class Dot2ShaderError(Exception):
    """Base class for every error raised by dot2shader."""


class DecodeError(Dot2ShaderError):
    """Malformed or truncated image bytes."""


class UnsupportedFormatError(DecodeError):
    def __init__(self, detected: str | None = None) -> None:
        super().__init__("Supported image format is PNG, BMP, and GIF.")
        self.detected = detected


@dataclass(frozen=True)
class PixelArt:
    """Deduplicated palette plus one palette index per pixel, row-major."""

    palette: tuple[int, ...]
    buffer: tuple[int, ...]
    size: tuple[int, int]

    def __post_init__(self) -> None:
        width, height = self.size
        if width < 0 or height < 0:
            raise ValueError("Image size must be non-negative")
        if len(self.buffer) != width * height:
            raise ValueError(f"Buffer length {len(self.buffer)} does not match size {width}x{height}")
        if self.buffer and max(self.buffer) >= len(self.palette):
            raise ValueError("Buffer references an index outside the palette")

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    @property
    def palette_size(self) -> int:
        return len(self.palette)

    def pixel(self, x: int, y: int) -> int:
        """Color at (x, y), top-left origin."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside {self.width}x{self.height}")
        return self.palette[self.buffer[y * self.width + x]]
