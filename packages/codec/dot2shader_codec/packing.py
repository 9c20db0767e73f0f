"""Bit-width planning and 32-bit word packing of palette index buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .models import PixelArt


WORD_BITS = 32
COMPRESSIBLE_PALETTE_LIMIT = 1 << 16
INT_MAX_EXCLUSIVE = 1 << 31


@dataclass(frozen=True)
class PackedBuffer:
    words: tuple[int, ...]
    bits: int
    chunk_size: int
    compressed: bool
    intable: bool
    per_line: int


def necessary_bit_width(palette_size: int) -> int:
    needed = max(palette_size - 1, 1).bit_length()
    bits = 1
    while bits < needed:
        bits <<= 1
    return bits


def chunk_size(bits: int) -> int:
    return WORD_BITS // bits


def is_compressible(palette_size: int, force_to_raw: bool = False) -> bool:
    return palette_size < COMPRESSIBLE_PALETTE_LIMIT and not force_to_raw


def reorder_rows(buffer: Sequence[int], width: int, reverse: bool) -> list[int]:
    """Flip row order so the bottom row comes first when ``reverse`` is set."""
    if not reverse or width <= 0 or not buffer:
        return list(buffer)
    rows = np.asarray(buffer, dtype=np.int64).reshape((-1, width))
    return rows[::-1].ravel().tolist()


def _chunk_shifts(bits: int, reverse_each_chunk: bool) -> np.ndarray:
    size = chunk_size(bits)
    positions = np.arange(size, dtype=np.uint64)
    if reverse_each_chunk:
        return positions * np.uint64(bits)
    return (np.uint64(size - 1) - positions) * np.uint64(bits)


def pack_indices(indices: Sequence[int], bits: int, reverse_each_chunk: bool) -> list[int]:
    size = chunk_size(bits)
    if not indices:
        return []
    values = np.asarray(indices, dtype=np.uint64)
    if values.max() >= (1 << bits):
        raise ValueError(f"Index {int(values.max())} does not fit in {bits} bits")

    padding = (-values.size) % size
    if padding:
        values = np.concatenate([values, np.zeros(padding, dtype=np.uint64)])
    chunks = values.reshape((-1, size))
    shifted = chunks << _chunk_shifts(bits, reverse_each_chunk)
    return np.bitwise_or.reduce(shifted, axis=1).tolist()


def unpack_words(words: Sequence[int], bits: int, reverse_each_chunk: bool, count: int) -> list[int]:
    """Inverse of pack_indices using the same shift/mask formula as the shader."""
    if not words:
        return []
    mask = np.uint64((1 << bits) - 1)
    arr = np.asarray(words, dtype=np.uint64).reshape((-1, 1))
    values = (arr >> _chunk_shifts(bits, reverse_each_chunk)) & mask
    return values.ravel()[:count].tolist()


def plan_buffer(
    art: PixelArt,
    reverse_rows: bool = True,
    reverse_each_chunk: bool = True,
    force_to_raw: bool = False,
) -> PackedBuffer:
    bits = necessary_bit_width(art.palette_size)
    size = chunk_size(bits)
    ordered = reorder_rows(art.buffer, art.width, reverse_rows)
    compressed = is_compressible(art.palette_size, force_to_raw)

    if compressed:
        words = pack_indices(ordered, bits, reverse_each_chunk)
        per_line = 8
    else:
        words = ordered
        per_line = max(art.width, 1)

    intable = max(words, default=0) < INT_MAX_EXCLUSIVE
    return PackedBuffer(
        words=tuple(words),
        bits=bits,
        chunk_size=size,
        compressed=compressed,
        intable=intable,
        per_line=per_line,
    )
