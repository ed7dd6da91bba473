"""Tests for palette brightness analysis."""

from typing import Dict

import pytest
from PIL import Image

from moonjify.analyzer import (
    GlyphRasterizer,
    analyze_brightness,
    create_custom_palette,
    linear_brightness,
    measure_brightness,
)
from moonjify.exceptions import PaletteError, RenderSurfaceUnavailable
from moonjify.palette import BUILTIN_PALETTES, Palette
from moonjify.pipeline import EmojiArtConverter


class FakeRasterizer:
    """Draws each symbol as a solid square of a fixed gray level."""

    available = True

    def __init__(self, levels: Dict[str, int]):
        self.levels = levels
        self.calls = []

    def rasterize(self, symbol: str, size: int) -> Image.Image:
        self.calls.append((symbol, size))
        level = self.levels[symbol]
        return Image.new('RGBA', (size, size), (level, level, level, 255))


class BrokenRasterizer:
    available = True

    def rasterize(self, symbol: str, size: int) -> Image.Image:
        raise RenderSurfaceUnavailable("font vanished")


@pytest.fixture
def headless() -> GlyphRasterizer:
    return GlyphRasterizer(font_path='/nonexistent/emoji-font.ttf')


class TestMeasureBrightness:
    """Tests for measure_brightness."""

    def test_transparent_pixels_ignored(self) -> None:
        image = Image.new('RGBA', (4, 4), (0, 0, 0, 0))
        image.putpixel((0, 0), (255, 255, 255, 255))
        image.putpixel((1, 0), (51, 102, 153, 10))
        expected = (1.0 + (51 + 102 + 153) / 3 / 255) / 2
        assert measure_brightness(image) == pytest.approx(expected)

    def test_fully_transparent_is_dark(self) -> None:
        assert measure_brightness(Image.new('RGBA', (4, 4), (255, 255, 255, 0))) == 0.0


class TestAnalyzeBrightness:
    """Tests for analyze_brightness."""

    def test_headless_fallback_is_linear(self, headless: GlyphRasterizer) -> None:
        assert not headless.available
        result = analyze_brightness(['a', 'b', 'c'], rasterizer=headless)
        assert [r.symbol for r in result] == ['a', 'b', 'c']
        assert [r.brightness for r in result] == [0, 0.5, 1]

    def test_headless_is_reproducible(self, headless: GlyphRasterizer) -> None:
        symbols = list('vwxyz')
        assert analyze_brightness(symbols, rasterizer=headless) == \
            analyze_brightness(symbols, rasterizer=headless)

    def test_single_symbol(self) -> None:
        assert [r.brightness for r in linear_brightness(['only'])] == [0.0]

    def test_sorted_by_measured_brightness(self) -> None:
        rasterizer = FakeRasterizer({'x': 200, 'y': 10, 'z': 100})
        result = analyze_brightness(['x', 'y', 'z'], render_size=8, rasterizer=rasterizer)
        assert [r.symbol for r in result] == ['y', 'z', 'x']
        assert result[0].brightness == pytest.approx(10 / 255)
        assert all(size == 8 for _, size in rasterizer.calls)

    def test_ties_keep_input_order(self) -> None:
        rasterizer = FakeRasterizer({'p': 50, 'q': 50, 'r': 0})
        result = analyze_brightness(['p', 'q', 'r'], rasterizer=rasterizer)
        assert [r.symbol for r in result] == ['r', 'p', 'q']

    def test_rasterizer_failure_falls_back(self) -> None:
        result = analyze_brightness(['a', 'b'], rasterizer=BrokenRasterizer())
        assert [r.brightness for r in result] == [0.0, 1.0]

    def test_missing_font_raises_on_rasterize(self, headless: GlyphRasterizer) -> None:
        with pytest.raises(RenderSurfaceUnavailable):
            headless.rasterize('a', 16)


class TestCreateCustomPalette:
    """Tests for create_custom_palette."""

    def test_custom_palette_ordering(self) -> None:
        rasterizer = FakeRasterizer({'⬜': 250, '⬛': 5, '🟫': 90, '🟨': 180})
        palette = create_custom_palette('blocks', 'Blocks', ['⬜', '⬛', '🟫', '🟨'],
                                        rasterizer=rasterizer)
        assert palette.symbols == ('⬛', '🟫', '🟨', '⬜')
        assert palette.dark_symbol == '⬛'
        assert palette.bright_symbol == '⬜'
        assert not palette.is_directional

    def test_measured_order_is_ascending(self) -> None:
        levels = {'a': 30, 'b': 220, 'c': 120, 'd': 60}
        rasterizer = FakeRasterizer(levels)
        palette = create_custom_palette('p', 'P', list(levels), rasterizer=rasterizer)
        measured = [levels[s] for s in palette.symbols]
        assert measured == sorted(measured)

    def test_empty_symbols(self, headless: GlyphRasterizer) -> None:
        with pytest.raises(PaletteError):
            create_custom_palette('none', 'None', [], rasterizer=headless)


class TestBuiltinPaletteOrdering:
    """Built-in palettes stay in declared order when measured."""

    @pytest.mark.parametrize('palette', BUILTIN_PALETTES, ids=lambda p: p.id)
    def test_headless_measurement_is_monotonic(self, palette: Palette,
                                               headless: GlyphRasterizer) -> None:
        result = analyze_brightness(palette.symbols, rasterizer=headless)
        assert tuple(r.symbol for r in result) == palette.symbols
        brightness = [r.brightness for r in result]
        assert brightness == sorted(brightness)

    @pytest.mark.parametrize('palette', BUILTIN_PALETTES, ids=lambda p: p.id)
    def test_measured_brightness_restores_declared_order(self, palette: Palette) -> None:
        step = 255 // len(palette.symbols)
        rasterizer = FakeRasterizer({s: i * step for i, s in enumerate(palette.symbols)})

        result = analyze_brightness(reversed(palette.symbols), rasterizer=rasterizer)
        assert tuple(r.symbol for r in result) == palette.symbols
        brightness = [r.brightness for r in result]
        assert brightness == sorted(brightness)


class TestCustomPaletteRoundTrip:
    """Light-first input comes back dark-first."""

    def test_white_and_black_circles(self) -> None:
        rasterizer = FakeRasterizer({'⚪': 240, '⚫': 15})
        palette = create_custom_palette('mono', 'Mono', ['⚪', '⚫'], rasterizer=rasterizer)
        assert list(palette.symbols) == ['⚫', '⚪']
        assert palette.dark_symbol == '⚫'
        assert palette.bright_symbol == '⚪'

    def test_registered_through_converter(self, converter: EmojiArtConverter) -> None:
        rasterizer = FakeRasterizer({'⚪': 240, '⚫': 15})
        palette = converter.add_custom_palette('mono', 'Mono', ['⚪', '⚫'], rasterizer=rasterizer)
        assert list(palette.symbols) == ['⚫', '⚪']
        assert converter.registry.get('mono').symbols == ('⚫', '⚪')
