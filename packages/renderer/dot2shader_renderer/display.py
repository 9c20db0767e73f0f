"""Shader text emission for a pixel art and a display configuration."""

from __future__ import annotations

import logging

from dot2shader_codec import PackedBuffer, PixelArt, plan_buffer

from .accessor import INT_TO_RGB, format_constants, format_geekest, format_get_color, format_main
from .arrays import format_palette_array, format_word_array, int_type
from .models import DEFAULT_DISPLAY_CONFIG, DisplayConfig, InlineLevel, Spacing


logger = logging.getLogger("dot2shader.renderer")


def pack_for_display(art: PixelArt, config: DisplayConfig) -> PackedBuffer:
    buffer_format = config.effective().buffer_format
    return plan_buffer(
        art,
        reverse_rows=buffer_format.reverse_rows,
        reverse_each_chunk=buffer_format.reverse_each_chunk,
        force_to_raw=buffer_format.force_to_raw,
    )


class Display:
    """Read-only pairing of a pixel art and a configuration."""

    def __init__(self, art: PixelArt, config: DisplayConfig | None = None) -> None:
        self.art = art
        self.config = config or DEFAULT_DISPLAY_CONFIG

    def render(self) -> str:
        config = self.config.effective()
        packed = pack_for_display(self.art, config)
        if config.inline_level is InlineLevel.GEEKEST:
            text = self._render_geekest(config, packed)
        else:
            text = self._render_structured(config, packed)
        logger.debug(
            "rendered %d chars (inline=%s palette=%s compressed=%s bits=%d)",
            len(text),
            config.inline_level.value,
            config.palette_format.value,
            packed.compressed,
            packed.bits,
            extra={"event": "shader_rendered"},
        )
        return text

    def _render_structured(self, config: DisplayConfig, packed: PackedBuffer) -> str:
        palette_format = config.palette_format
        out = [
            f"const {palette_format.element_type} PALETTE[] = ",
            format_palette_array(self.art.palette, palette_format, Spacing.SPACED),
        ]
        if config.inline_level is InlineLevel.NONE:
            out.append(format_constants(self.art, packed))
        out.append(f"const {int_type(packed.intable)} BUFFER[] = ")
        out.append(format_word_array(packed.words, packed.intable, packed.per_line, Spacing.SPACED))
        if palette_format.is_integer:
            out.append(INT_TO_RGB)
        out.append(format_get_color(self.art, config, packed))
        out.append(format_main(self.art, config))
        return "".join(out)

    def _render_geekest(self, config: DisplayConfig, packed: PackedBuffer) -> str:
        palette_text = format_palette_array(self.art.palette, config.palette_format, Spacing.COMPACT)
        buffer_text = format_word_array(packed.words, packed.intable, packed.per_line, Spacing.COMPACT)
        return format_geekest(self.art, config, packed, palette_text, buffer_text)

    def __str__(self) -> str:
        return self.render()


def render(art: PixelArt, config: DisplayConfig | None = None) -> str:
    return Display(art, config).render()
