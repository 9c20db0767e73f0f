"""Image decoding into a first-occurrence palette and index buffer."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from .models import SUPPORTED_FORMATS, DecodeError, PixelArt, UnsupportedFormatError


logger = logging.getLogger("dot2shader.codec")


def encode_rgba(rgba: bytes, width: int, height: int) -> PixelArt:
    if len(rgba) != width * height * 4:
        raise ValueError(f"RGBA data must be {width * height * 4} bytes for {width}x{height}")

    arr = np.frombuffer(rgba, dtype=np.uint8).reshape((-1, 4)).astype(np.uint32)
    colors = (arr[:, 0] << 16) | (arr[:, 1] << 8) | arr[:, 2]
    if colors.size == 0:
        return PixelArt(palette=(), buffer=(), size=(width, height))

    uniques, first_seen, inverse = np.unique(colors, return_index=True, return_inverse=True)
    order = np.argsort(first_seen, kind="stable")
    rank = np.empty_like(order)
    rank[order] = np.arange(order.size)

    palette = uniques[order]
    buffer = rank[inverse.ravel()]
    return PixelArt(
        palette=tuple(palette.tolist()),
        buffer=tuple(buffer.tolist()),
        size=(width, height),
    )


def decode(raw: bytes) -> PixelArt:
    try:
        with Image.open(io.BytesIO(raw)) as im:
            if im.format not in SUPPORTED_FORMATS:
                raise UnsupportedFormatError(im.format)
            im.seek(0)
            rgba = im.convert("RGBA")
    except UnsupportedFormatError:
        raise
    except (
        Image.DecompressionBombError,
        UnidentifiedImageError,
        OSError,
        EOFError,
        ValueError,
        SyntaxError,
    ) as exc:
        raise DecodeError(str(exc)) from exc

    width, height = rgba.size
    art = encode_rgba(rgba.tobytes(), width, height)
    logger.debug(
        "decoded %dx%d image with %d colors",
        width,
        height,
        art.palette_size,
        extra={"event": "image_decoded"},
    )
    return art


def decode_file(path: Path | str) -> PixelArt:
    return decode(Path(path).read_bytes())


def swap_palette_indices(art: PixelArt, i: int, j: int) -> PixelArt:
    """Exchange palette entries i and j and rewrite every buffer reference."""
    size = len(art.palette)
    if not (0 <= i < size and 0 <= j < size):
        raise IndexError(f"Palette indices ({i}, {j}) out of range for {size} colors")
    if i == j:
        return art

    palette = list(art.palette)
    palette[i], palette[j] = palette[j], palette[i]

    lookup = np.arange(size)
    lookup[i], lookup[j] = j, i
    buffer = lookup[np.asarray(art.buffer, dtype=np.int64)] if art.buffer else np.empty(0, dtype=np.int64)
    return PixelArt(palette=tuple(palette), buffer=tuple(buffer.tolist()), size=art.size)
