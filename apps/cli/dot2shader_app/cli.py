"""CLI entrypoint converting a pixel-art image into GLSL shader source."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from dot2shader_codec import Dot2ShaderError, decode_file
from dot2shader_core import (
    MAX_PALETTE_SIZE,
    check_file_size,
    check_palette_size,
    config_to_dict,
    resolve_config,
    save_config,
)
from dot2shader_core.logging_setup import configure_logging, get_logger
from dot2shader_renderer import DisplayConfig, InlineLevel, PaletteFormat, render


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def apply_overrides(cfg: DisplayConfig, args: argparse.Namespace) -> DisplayConfig:
    buffer_format = cfg.buffer_format
    if args.reverse_rows is not None:
        buffer_format = replace(buffer_format, reverse_rows=args.reverse_rows)
    if args.reverse_each_chunk is not None:
        buffer_format = replace(buffer_format, reverse_each_chunk=args.reverse_each_chunk)
    if args.force_raw:
        buffer_format = replace(buffer_format, force_to_raw=True)
    cfg = replace(cfg, buffer_format=buffer_format)
    if args.palette_format is not None:
        cfg = replace(cfg, palette_format=PaletteFormat(args.palette_format))
    if args.inline_level is not None:
        cfg = replace(cfg, inline_level=InlineLevel(args.inline_level))
    return cfg


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dot2shader",
        description="Convert a PNG/BMP/GIF pixel-art image into GLSL shader source.",
    )
    parser.add_argument("image", type=Path, help="Input image (PNG, BMP or GIF)")
    parser.add_argument(
        "config",
        nargs="?",
        type=Path,
        default=None,
        help="Display config JSON. Defaults to ./default.json, then the user config.",
    )
    parser.add_argument(
        "--palette-format",
        choices=[f.value for f in PaletteFormat],
        default=None,
        help="Palette literal format",
    )
    parser.add_argument(
        "--inline-level",
        choices=[level.value for level in InlineLevel],
        default=None,
        help="None: named constants, InlineVariable: literal sizes, Geekest: one minified statement",
    )
    parser.add_argument(
        "--reverse-rows",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Store rows bottom-up so the shader needs no y flip",
    )
    parser.add_argument(
        "--reverse-each-chunk",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Put the first pixel of each word in the low bits",
    )
    parser.add_argument("--force-raw", action="store_true", help="Never pack the buffer")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Write the shader to a file")
    parser.add_argument("--save-config", type=Path, default=None, help="Save the resolved config as JSON")
    parser.add_argument("--print-config", action="store_true", help="Print the resolved config and exit")
    parser.add_argument(
        "--max-file-kb",
        type=int,
        default=None,
        help="Reject input files of this many KiB or more",
    )
    parser.add_argument(
        "--max-palette",
        type=int,
        default=MAX_PALETTE_SIZE,
        help="Reject images with more distinct colors than this",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log to stderr")
    return parser


def run(args: argparse.Namespace) -> int:
    logger = get_logger()
    cfg = apply_overrides(resolve_config(args.config), args)

    if args.save_config is not None:
        saved = save_config(cfg, args.save_config)
        logger.info("saved config to %s", saved, extra={"event": "config_saved"})
    if args.print_config:
        _print_json(config_to_dict(cfg))
        return 0

    if args.max_file_kb is not None:
        check_file_size(args.image.read_bytes(), args.max_file_kb * 1024)
    art = decode_file(args.image)
    check_palette_size(art, args.max_palette)
    logger.info(
        "decoded %s: %dx%d, %d colors",
        args.image,
        art.width,
        art.height,
        art.palette_size,
        extra={"event": "image_decoded"},
    )

    text = render(art, cfg)
    if args.output is not None:
        args.output.write_text(text + "\n", encoding="utf-8")
        logger.info("wrote %s", args.output, extra={"event": "shader_written"})
    else:
        print(text)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(console=args.verbose, level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        return run(args)
    except (Dot2ShaderError, OSError) as exc:
        get_logger().error("%s", exc, extra={"event": "cli_error"})
        print(exc, file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
