"""Codec package: image decoding, palette indexing, and bit packing."""

from .decode import decode, decode_file, encode_rgba, swap_palette_indices
from .models import (
    SUPPORTED_FORMATS,
    DecodeError,
    Dot2ShaderError,
    PixelArt,
    UnsupportedFormatError,
)
from .packing import (
    PackedBuffer,
    chunk_size,
    is_compressible,
    necessary_bit_width,
    pack_indices,
    plan_buffer,
    reorder_rows,
    unpack_words,
)

__all__ = [
    "DecodeError",
    "Dot2ShaderError",
    "PackedBuffer",
    "PixelArt",
    "SUPPORTED_FORMATS",
    "UnsupportedFormatError",
    "chunk_size",
    "decode",
    "decode_file",
    "encode_rgba",
    "is_compressible",
    "necessary_bit_width",
    "pack_indices",
    "plan_buffer",
    "reorder_rows",
    "unpack_words",
    "swap_palette_indices",
]
