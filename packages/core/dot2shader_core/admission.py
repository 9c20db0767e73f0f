"""Caller-side admission checks applied before decoding or rendering."""

from __future__ import annotations

from dot2shader_codec import Dot2ShaderError, PixelArt


MAX_FILE_BYTES = 15 * 1024
MAX_PALETTE_SIZE = 1 << 16


class AdmissionError(Dot2ShaderError):
    """Input rejected by a front-end policy, not by the codec."""


def check_file_size(raw: bytes, max_bytes: int | None = MAX_FILE_BYTES) -> None:
    if max_bytes is not None and len(raw) >= max_bytes:
        raise AdmissionError(
            f"File size must be less than {max_bytes // 1024}KB. file size: {len(raw) // 1024}KB"
        )


def check_palette_size(art: PixelArt, limit: int | None = MAX_PALETTE_SIZE) -> None:
    if limit is not None and art.palette_size > limit:
        raise AdmissionError(
            f"Palette size must be no more than {limit}. Palette size: {art.palette_size}"
        )
