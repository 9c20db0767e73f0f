"""GLSL lookup function and entry point synthesis."""

from __future__ import annotations

from dot2shader_codec import PackedBuffer, PixelArt

from .arrays import int_suffix
from .models import DisplayConfig, InlineLevel


INT_TO_RGB = (
    "vec3 int2rgb(int color) {\n"
    "    return vec3((color & 0xff0000) >> 16, (color & 0xff00) >> 8, color & 0xff) / 255.0;\n"
    "}\n\n"
)


def format_constants(art: PixelArt, packed: PackedBuffer) -> str:
    text = f"const int WIDTH = {art.width}, HEIGHT = {art.height}"
    if packed.compressed:
        text += f", CHUNKS_IN_U32 = {packed.chunk_size}"
    return text + ";\n"


def _slot_shift(slot: str, last_slot: str, bits: str, reverse_each_chunk: bool) -> str:
    if reverse_each_chunk:
        return f"{slot} * {bits}"
    return f"({last_slot} - {slot}) * {bits}"


def format_get_color(art: PixelArt, config: DisplayConfig, packed: PackedBuffer) -> str:
    buffer_format = config.buffer_format
    named = config.inline_level is InlineLevel.NONE
    width = "WIDTH" if named else str(art.width)
    last_row = "HEIGHT - 1" if named else str(art.height - 1)

    # One image row per word: the word index is the row itself.
    row_per_word = not named and packed.compressed and art.width == packed.chunk_size

    lines = [f"{config.palette_format.element_type} getColor(in ivec2 u) {{"]
    if not row_per_word:
        if buffer_format.reverse_rows:
            lines.append(f"    int idx = u.y * {width} + u.x;")
        else:
            lines.append(f"    int idx = ({last_row} - u.y) * {width} + u.x;")

    if packed.compressed:
        suffix = int_suffix(packed.intable)
        if named:
            lines.append("    u = ivec2(idx % CHUNKS_IN_U32, idx / CHUNKS_IN_U32);")
            lines.append("    int bitShift = 32 / CHUNKS_IN_U32;")
            bits = "bitShift"
            mask = f"(1{suffix} << bitShift) - 1{suffix}"
            last_slot = "CHUNKS_IN_U32 - 1"
            word = "u.y"
        else:
            bits = str(packed.bits)
            mask = f"{(1 << packed.bits) - 1}{suffix}"
            last_slot = str(packed.chunk_size - 1)
            if row_per_word:
                word = "u.y" if buffer_format.reverse_rows else f"{last_row} - u.y"
            else:
                lines.append(f"    u = ivec2(idx % {packed.chunk_size}, idx / {packed.chunk_size});")
                word = "u.y"
        shift = _slot_shift("u.x", last_slot, bits, buffer_format.reverse_each_chunk)
        lines.append(f"    return PALETTE[BUFFER[{word}] >> {shift} & {mask}];")
    else:
        lines.append("    return PALETTE[BUFFER[idx]];")
    lines.append("}")
    return "\n".join(lines) + "\n\n"


def format_main(art: PixelArt, config: DisplayConfig) -> str:
    if config.inline_level is InlineLevel.NONE:
        width, height = "WIDTH", "HEIGHT"
        float_height = "float(HEIGHT)"
        half_size = "vec2(WIDTH, HEIGHT) / 2.0"
    else:
        width, height = str(art.width), str(art.height)
        float_height = f"{art.height}.0"
        half_size = f"vec2({art.width / 2!r}, {art.height / 2!r})"
    color = "int2rgb(getColor(u))" if config.palette_format.is_integer else "getColor(u)"
    return (
        "void mainImage(out vec4 O, in vec2 U) {\n"
        "    vec2 r = iResolution.xy;\n"
        f"    ivec2 u = ivec2(floor((U - 0.5 * r) / r.y * {float_height} + {half_size}));\n"
        f"    O.xyz = u == abs(u) && u.x < {width} && u.y < {height} ? {color} : vec3(0.5);\n"
        "}\n"
    )


def format_geekest(
    art: PixelArt,
    config: DisplayConfig,
    packed: PackedBuffer,
    palette_text: str,
    buffer_text: str,
) -> str:
    """Single statement for hosts that predefine ``FC``, ``r`` and ``o``."""
    buffer_format = config.buffer_format
    width, height = art.width, art.height
    size = f"{width}." if width == height else f"vec2({width},{height})"
    row = "u.y" if buffer_format.reverse_rows else f"{height - 1}-u.y"
    row_per_word = packed.compressed and width == packed.chunk_size

    parts = [f"ivec2 u=ivec2(FC.xy/r*{size});"]
    if not row_per_word:
        row_start = f"u.y*{width}" if buffer_format.reverse_rows else f"({row})*{width}"
        parts.append(f"int i={row_start}+u.x;")

    if packed.compressed:
        chunk = packed.chunk_size
        word, slot = (row, "u.x") if row_per_word else (f"i/{chunk}", f"i%{chunk}")
        if buffer_format.reverse_each_chunk:
            shift = f"{slot}*{packed.bits}"
        else:
            shift = f"({chunk - 1}-{slot})*{packed.bits}"
        mask = f"{(1 << packed.bits) - 1}{int_suffix(packed.intable)}"
        lookup = f"[{word}]>>{shift}&{mask}"
    else:
        lookup = "[i]"
    parts.append(f"o.xyz={palette_text}[{buffer_text}{lookup}];")
    return "".join(parts)
