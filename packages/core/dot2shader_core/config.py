"""Persistent display settings schema and load/save helpers."""

from __future__ import annotations

import json
import logging
import os
import platform
from enum import Enum
from pathlib import Path
from typing import Any

from dot2shader_renderer import DEFAULT_DISPLAY_CONFIG, BufferFormat, DisplayConfig, InlineLevel, PaletteFormat


CONFIG_VERSION = 2
DEFAULT_FILE_NAME = "default.json"

logger = logging.getLogger("dot2shader.core")

_BUFFER_KEYS = {
    "reverseRows": "reverse_rows",
    "reverseEachChunk": "reverse_each_chunk",
    "forceToRaw": "force_to_raw",
}

_LEGACY_PALETTE_NAMES = {
    "IntegerDecimal": PaletteFormat.INT_DECIMAL.value,
    "IntegerHexadecimal": PaletteFormat.INT_HEX.value,
    "RGBHexadecimal": PaletteFormat.RGB_HEX.value,
}


def config_root() -> Path:
    override = os.environ.get("DOT2SHADER_HOME")
    if override:
        return Path(override)
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "dot2shader"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "dot2shader"
    return Path.home() / ".config" / "dot2shader"


def config_path() -> Path:
    return config_root() / "config.json"


def config_to_dict(cfg: DisplayConfig) -> dict[str, Any]:
    buffer_format = cfg.buffer_format
    return {
        "config_version": CONFIG_VERSION,
        "bufferFormat": {
            "reverseRows": buffer_format.reverse_rows,
            "reverseEachChunk": buffer_format.reverse_each_chunk,
            "forceToRaw": buffer_format.force_to_raw,
        },
        "paletteFormat": cfg.palette_format.value,
        "inlineLevel": cfg.inline_level.value,
    }


def _enum_or_default(enum_type: type[Enum], raw: Any, default: Enum) -> Any:
    try:
        return enum_type(raw)
    except (TypeError, ValueError):
        logger.warning(
            "ignoring invalid %s value %r",
            enum_type.__name__,
            raw,
            extra={"event": "config_invalid_value"},
        )
        return default


def _merge_buffer_format(raw: Any) -> BufferFormat:
    defaults = BufferFormat()
    if not isinstance(raw, dict):
        return defaults
    values: dict[str, bool] = {}
    for key, attr in _BUFFER_KEYS.items():
        if key in raw and isinstance(raw[key], bool):
            values[attr] = raw[key]
        else:
            values[attr] = getattr(defaults, attr)
    return BufferFormat(**values)


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    try:
        version = int(raw.get("config_version", 1))
    except (TypeError, ValueError):
        version = 1
    data = dict(raw)

    if version < 2:
        # v1 is the snake_case layout with long variant names.
        buffer_format = data.get("bufferFormat", data.get("buffer_format", {}))
        if isinstance(buffer_format, dict):
            migrated = {}
            for key, attr in _BUFFER_KEYS.items():
                if key in buffer_format:
                    migrated[key] = buffer_format[key]
                elif attr in buffer_format:
                    migrated[key] = buffer_format[attr]
            buffer_format = migrated
        data["bufferFormat"] = buffer_format
        palette = data.get("paletteFormat", data.get("palette_format"))
        if palette is not None:
            data["paletteFormat"] = _LEGACY_PALETTE_NAMES.get(palette, palette)
        inline_level = data.get("inlineLevel", data.get("inline_level"))
        if inline_level is not None:
            data["inlineLevel"] = inline_level
        data["config_version"] = 2

    return data


def config_from_dict(raw: dict[str, Any]) -> DisplayConfig:
    data = _migrate(raw)
    defaults = DEFAULT_DISPLAY_CONFIG
    return DisplayConfig(
        buffer_format=_merge_buffer_format(data.get("bufferFormat", {})),
        palette_format=_enum_or_default(
            PaletteFormat, data.get("paletteFormat", defaults.palette_format.value), defaults.palette_format
        ),
        inline_level=_enum_or_default(
            InlineLevel, data.get("inlineLevel", defaults.inline_level.value), defaults.inline_level
        ),
    )


def load_config(path: Path | None = None) -> DisplayConfig:
    path = path or config_path()
    if not path.exists():
        return DEFAULT_DISPLAY_CONFIG

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("unreadable config %s: %s", path, exc, extra={"event": "config_unreadable"})
        return DEFAULT_DISPLAY_CONFIG
    if not isinstance(raw, dict):
        logger.warning("config %s is not a JSON object", path, extra={"event": "config_unreadable"})
        return DEFAULT_DISPLAY_CONFIG

    return config_from_dict(raw)


def save_config(cfg: DisplayConfig, path: Path | None = None) -> Path:
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config_to_dict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path


def resolve_config(explicit: Path | None = None, cwd: Path | None = None) -> DisplayConfig:
    """Explicit file first, then ``default.json`` in the working directory, then the user file."""
    candidates: list[Path] = []
    if explicit is not None:
        if explicit.exists():
            candidates.append(explicit)
        else:
            logger.warning("config %s not found, falling back", explicit, extra={"event": "config_missing"})
    candidates.append((cwd or Path.cwd()) / DEFAULT_FILE_NAME)
    candidates.append(config_path())

    for candidate in candidates:
        if candidate.exists():
            logger.info("using config %s", candidate, extra={"event": "config_selected"})
            return load_config(candidate)
    return DEFAULT_DISPLAY_CONFIG
