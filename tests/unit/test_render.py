import sys
import unittest
from dataclasses import replace
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "codec"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from dot2shader_codec import PixelArt
from dot2shader_renderer import (
    DEFAULT_DISPLAY_CONFIG,
    INT_TO_RGB,
    BufferFormat,
    Display,
    DisplayConfig,
    InlineLevel,
    PaletteFormat,
    render,
)

ART = PixelArt(palette=(0xFF0000, 0x00FF00, 0x0000FF), buffer=(0, 0, 1, 2), size=(2, 2))

PALETTE_BLOCK = (
    "const vec3 PALETTE[] = vec3[](\n"
    "    vec3(255, 0, 0) / 255.0,\n"
    "    vec3(0, 255, 0) / 255.0,\n"
    "    vec3(0, 0, 255) / 255.0\n"
    ");\n\n"
)

DEFAULT_OUTPUT = PALETTE_BLOCK + (
    "const int WIDTH = 2, HEIGHT = 2, CHUNKS_IN_U32 = 16;\n"
    "const int BUFFER[] = int[](\n"
    "    9\n"
    ");\n\n"
    "vec3 getColor(in ivec2 u) {\n"
    "    int idx = u.y * WIDTH + u.x;\n"
    "    u = ivec2(idx % CHUNKS_IN_U32, idx / CHUNKS_IN_U32);\n"
    "    int bitShift = 32 / CHUNKS_IN_U32;\n"
    "    return PALETTE[BUFFER[u.y] >> u.x * bitShift & (1 << bitShift) - 1];\n"
    "}\n\n"
    "void mainImage(out vec4 O, in vec2 U) {\n"
    "    vec2 r = iResolution.xy;\n"
    "    ivec2 u = ivec2(floor((U - 0.5 * r) / r.y * float(HEIGHT) + vec2(WIDTH, HEIGHT) / 2.0));\n"
    "    O.xyz = u == abs(u) && u.x < WIDTH && u.y < HEIGHT ? getColor(u) : vec3(0.5);\n"
    "}\n"
)

INLINE_OUTPUT = PALETTE_BLOCK + (
    "const int BUFFER[] = int[](\n"
    "    9\n"
    ");\n\n"
    "vec3 getColor(in ivec2 u) {\n"
    "    int idx = u.y * 2 + u.x;\n"
    "    u = ivec2(idx % 16, idx / 16);\n"
    "    return PALETTE[BUFFER[u.y] >> u.x * 2 & 3];\n"
    "}\n\n"
    "void mainImage(out vec4 O, in vec2 U) {\n"
    "    vec2 r = iResolution.xy;\n"
    "    ivec2 u = ivec2(floor((U - 0.5 * r) / r.y * 2.0 + vec2(1.0, 1.0)));\n"
    "    O.xyz = u == abs(u) && u.x < 2 && u.y < 2 ? getColor(u) : vec3(0.5);\n"
    "}\n"
)


class StructuredRenderTests(unittest.TestCase):
    def test_default_config_output(self):
        self.assertEqual(render(ART, DisplayConfig()), DEFAULT_OUTPUT)

    def test_display_str_matches_render(self):
        display = Display(ART)
        self.assertIs(display.config, DEFAULT_DISPLAY_CONFIG)
        self.assertEqual(str(display), DEFAULT_OUTPUT)

    def test_inline_variable_output(self):
        cfg = DisplayConfig(inline_level=InlineLevel.INLINE_VARIABLE)
        self.assertEqual(render(ART, cfg), INLINE_OUTPUT)

    def test_forward_chunks_and_unflipped_rows(self):
        cfg = DisplayConfig(
            buffer_format=BufferFormat(reverse_rows=False, reverse_each_chunk=False),
            inline_level=InlineLevel.INLINE_VARIABLE,
        )
        text = render(ART, cfg)
        self.assertIn("    100663296\n", text)
        self.assertIn("    int idx = (1 - u.y) * 2 + u.x;\n", text)
        self.assertIn("    return PALETTE[BUFFER[u.y] >> (15 - u.x) * 2 & 3];\n", text)

    def test_named_forward_chunks(self):
        cfg = DisplayConfig(buffer_format=BufferFormat(reverse_rows=False, reverse_each_chunk=False))
        text = render(ART, cfg)
        self.assertIn("    int idx = (HEIGHT - 1 - u.y) * WIDTH + u.x;\n", text)
        self.assertIn(
            "    return PALETTE[BUFFER[u.y] >> (CHUNKS_IN_U32 - 1 - u.x) * bitShift & (1 << bitShift) - 1];\n",
            text,
        )

    def test_raw_buffer(self):
        cfg = DisplayConfig(buffer_format=BufferFormat(force_to_raw=True))
        text = render(ART, cfg)
        self.assertIn("const int WIDTH = 2, HEIGHT = 2;\n", text)
        self.assertIn("const int BUFFER[] = int[](\n    1, 2,\n    0, 0\n);\n\n", text)
        self.assertIn("    return PALETTE[BUFFER[idx]];\n", text)
        self.assertNotIn("CHUNKS_IN_U32", text)

    def test_integer_palette_adds_helper(self):
        cfg = DisplayConfig(palette_format=PaletteFormat.INT_HEX)
        text = render(ART, cfg)
        self.assertTrue(text.startswith("const int PALETTE[] = int[](\n    0xff0000,\n"))
        self.assertIn(INT_TO_RGB, text)
        self.assertIn("int getColor(in ivec2 u) {\n", text)
        self.assertIn("? int2rgb(getColor(u)) : vec3(0.5);", text)
        self.assertLess(text.index("int2rgb(int color)"), text.index("getColor(in ivec2 u)"))

    def test_unsigned_buffer(self):
        art = PixelArt(palette=(0, 0xFFFFFF), buffer=(1,) + (0,) * 31, size=(32, 1))
        cfg = DisplayConfig(buffer_format=BufferFormat(reverse_each_chunk=False))
        text = render(art, cfg)
        self.assertIn("const uint BUFFER[] = uint[](\n    2147483648U\n);", text)
        self.assertIn("(1U << bitShift) - 1U", text)

    def test_row_per_word_shortcut(self):
        art = PixelArt(palette=(0, 0xFFFFFF), buffer=(1, 0) * 16 + (0,) * 32, size=(32, 2))
        flipped = DisplayConfig(
            buffer_format=BufferFormat(reverse_rows=False),
            inline_level=InlineLevel.INLINE_VARIABLE,
        )
        text = render(art, flipped)
        self.assertNotIn("int idx", text)
        self.assertIn("    return PALETTE[BUFFER[1 - u.y] >> u.x * 1 & 1];\n", text)
        upright = replace(flipped, buffer_format=BufferFormat())
        self.assertIn("    return PALETTE[BUFFER[u.y] >> u.x * 1 & 1];\n", render(art, upright))

    def test_render_does_not_mutate(self):
        before = (ART.palette, ART.buffer, ART.size)
        for level in InlineLevel:
            render(ART, DisplayConfig(inline_level=level))
        self.assertEqual((ART.palette, ART.buffer, ART.size), before)


class GeekestRenderTests(unittest.TestCase):
    def test_geekest_output(self):
        cfg = DisplayConfig(inline_level=InlineLevel.GEEKEST)
        self.assertEqual(
            render(ART, cfg),
            "ivec2 u=ivec2(FC.xy/r*2.);int i=u.y*2+u.x;"
            "o.xyz=vec3[](vec3(1,0,0),vec3(0,1,0),vec3(0,0,1))[int[](9)[i/16]>>i%16*2&3];",
        )

    def test_geekest_overrides_palette_and_raw(self):
        requested = DisplayConfig(
            buffer_format=BufferFormat(force_to_raw=True),
            palette_format=PaletteFormat.INT_HEX,
            inline_level=InlineLevel.GEEKEST,
        )
        effective = requested.effective()
        self.assertIs(effective.palette_format, PaletteFormat.RGB_FLOAT)
        self.assertFalse(effective.buffer_format.force_to_raw)
        text = render(ART, requested)
        self.assertNotIn("0xff0000", text)
        self.assertIn("vec3(1,0,0)", text)
        self.assertIn("int[](9)", text)
        self.assertEqual(text, render(ART, DisplayConfig(inline_level=InlineLevel.GEEKEST)))

    def test_geekest_non_square_forward(self):
        art = PixelArt(palette=(0, 0xFFFFFF, 0x808080), buffer=(0, 1, 2, 2, 1, 0), size=(3, 2))
        cfg = DisplayConfig(
            buffer_format=BufferFormat(reverse_rows=False, reverse_each_chunk=False),
            inline_level=InlineLevel.GEEKEST,
        )
        text = render(art, cfg)
        self.assertTrue(text.startswith("ivec2 u=ivec2(FC.xy/r*vec2(3,2));int i=(1-u.y)*3+u.x;"))
        self.assertTrue(text.endswith("[i/16]>>(15-i%16)*2&3];"))
        self.assertNotIn("\n", text)
        self.assertNotIn(" ", text)

    def test_non_geekest_effective_is_identity(self):
        cfg = DisplayConfig(palette_format=PaletteFormat.INT_HEX)
        self.assertIs(cfg.effective(), cfg)


if __name__ == "__main__":
    unittest.main()
