"""
Emoji Art Converter - Palette Brightness Analysis
=================================================
Rasterizes symbols with Pillow and measures how bright each one looks, so an
arbitrary set of symbols can be ordered into a palette.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from moonjify.constants import (
    ANALYZER_RENDER_SIZE,
    BITMAP_EMOJI_STRIKE,
    EMOJI_FONT_CANDIDATES,
    EMOJI_FONT_ENV,
)
from moonjify.exceptions import PaletteError, RenderSurfaceUnavailable
from moonjify.palette import Palette

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SymbolBrightness:
    """Measured brightness of one symbol (0.0 dark .. 1.0 bright)."""
    symbol: str
    brightness: float


# =============================================================================
# GLYPH RASTERIZATION
# =============================================================================

class GlyphRasterizer:
    """Draw single symbols onto transparent RGBA canvases."""

    def __init__(self, font_path: Optional[str] = None):
        self.font_path = font_path
        self._fonts: Dict[int, Tuple[ImageFont.FreeTypeFont, int]] = {}

    def _candidate_paths(self) -> List[str]:
        if self.font_path:
            return [self.font_path]
        paths = []
        env_path = os.environ.get(EMOJI_FONT_ENV)
        if env_path:
            paths.append(env_path)
        paths.extend(EMOJI_FONT_CANDIDATES)
        return paths

    def resolve_font_path(self) -> Optional[str]:
        """First candidate font file that exists, or None."""
        for path in self._candidate_paths():
            if os.path.isfile(path):
                return path
        return None

    @property
    def available(self) -> bool:
        return self.resolve_font_path() is not None

    def _font(self, size: int) -> Tuple[ImageFont.FreeTypeFont, int]:
        if size in self._fonts:
            return self._fonts[size]

        path = self.resolve_font_path()
        if path is None:
            raise RenderSurfaceUnavailable("No font available to rasterize symbols")

        try:
            loaded = (ImageFont.truetype(path, size), size)
        except OSError:
            # Bitmap colour fonts only load at their fixed strike size
            try:
                loaded = (ImageFont.truetype(path, BITMAP_EMOJI_STRIKE), BITMAP_EMOJI_STRIKE)
            except OSError as e:
                raise RenderSurfaceUnavailable(f"Cannot load font {path}: {e}") from e

        logger.debug("Loaded glyph font %s at size %d", path, loaded[1])
        self._fonts[size] = loaded
        return loaded

    def rasterize(self, symbol: str, size: int = ANALYZER_RENDER_SIZE) -> Image.Image:
        """
        Render ``symbol`` centered on a transparent ``size`` x ``size`` canvas.

        Monochrome glyphs are drawn in black; colour glyphs keep their
        embedded colours.
        """
        font, font_size = self._font(size)

        canvas = Image.new('RGBA', (font_size, font_size), (0, 0, 0, 0))
        draw = ImageDraw.Draw(canvas)
        draw.text(
            (font_size / 2, font_size / 2),
            symbol,
            font=font,
            fill=(0, 0, 0, 255),
            anchor='mm',
            embedded_color=True,
        )

        if font_size != size:
            canvas = canvas.resize((size, size), Image.Resampling.LANCZOS)
        return canvas


# =============================================================================
# BRIGHTNESS MEASUREMENT
# =============================================================================

def measure_brightness(image: Image.Image) -> float:
    """Average (r+g+b)/3/255 over all pixels with non-zero alpha."""
    arr = np.asarray(image.convert('RGBA'), dtype=np.float64)
    opaque = arr[..., 3] > 0
    if not opaque.any():
        return 0.0

    rgb = arr[opaque][:, :3]
    return float(np.mean(rgb.sum(axis=1) / 3) / 255)


def linear_brightness(symbols: Iterable[str]) -> List[SymbolBrightness]:
    """Evenly spaced brightness in input order, used when nothing can be drawn."""
    symbols = list(symbols)
    last = len(symbols) - 1
    return [
        SymbolBrightness(symbol, index / last if last > 0 else 0.0)
        for index, symbol in enumerate(symbols)
    ]


def analyze_brightness(symbols: Iterable[str],
                       render_size: int = ANALYZER_RENDER_SIZE,
                       rasterizer: Optional[GlyphRasterizer] = None) -> List[SymbolBrightness]:
    """
    Measure and sort symbols by visual brightness.

    Args:
        symbols: Symbols to measure
        render_size: Canvas edge and font size in pixels
        rasterizer: Object with ``available`` and ``rasterize(symbol, size)``;
            a GlyphRasterizer using the system emoji font when omitted

    Returns:
        Symbols with brightness, ascending; ties keep input order. Without a
        usable font, a linear distribution in input order.
    """
    symbols = list(symbols)
    if rasterizer is None:
        rasterizer = GlyphRasterizer()

    if not rasterizer.available:
        logger.info("No glyph font available, using linear brightness for %d symbols",
                    len(symbols))
        return linear_brightness(symbols)

    try:
        measured = [
            SymbolBrightness(symbol, measure_brightness(rasterizer.rasterize(symbol, render_size)))
            for symbol in symbols
        ]
    except RenderSurfaceUnavailable as e:
        logger.warning("Glyph rasterization failed (%s), using linear brightness", e)
        return linear_brightness(symbols)

    return sorted(measured, key=lambda item: item.brightness)


def create_custom_palette(palette_id: str,
                          name: str,
                          symbols: Iterable[str],
                          description: Optional[str] = None,
                          render_size: int = ANALYZER_RENDER_SIZE,
                          rasterizer: Optional[GlyphRasterizer] = None) -> Palette:
    """
    Build a palette from arbitrary symbols ordered by measured brightness.

    Custom palettes carry no directional sub-palettes.
    """
    symbols = list(symbols)
    if not symbols:
        raise PaletteError(f"Custom palette {palette_id!r} needs at least one symbol")

    analyzed = analyze_brightness(symbols, render_size=render_size, rasterizer=rasterizer)
    ordered = tuple(item.symbol for item in analyzed)
    logger.debug("Custom palette %r ordered as %s", palette_id, ''.join(ordered))

    return Palette(
        id=palette_id,
        name=name,
        symbols=ordered,
        description=description,
    )
