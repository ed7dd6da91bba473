"""
Emoji Art Converter - Pipeline
==============================
Entry points for turning image bytes into emoji art: still images render to
one string, animations to a list of frames.
"""

import asyncio
import logging
from pathlib import Path
from typing import AsyncIterator, Iterable, List, Optional, Tuple, Union

from moonjify.analyzer import GlyphRasterizer, create_custom_palette
from moonjify.animation import AnimatedFrameDecoder
from moonjify.config import ConversionConfig, RenderRequest
from moonjify.curve import Curve, Point
from moonjify.palette import Palette, PaletteRegistry
from moonjify.raster import is_gif, load_raster
from moonjify.renderer import StaticFrameRenderer

logger = logging.getLogger(__name__)

CurveLike = Union[Curve, Iterable[Union[Point, Tuple[float, float]]], None]
PaletteLike = Union[Palette, str, None]


class EmojiArtConverter:
    """
    Converts still images and GIF animations to emoji art.

    Holds the palette registry; every other piece of state is per call.
    """

    def __init__(self,
                 config: Optional[ConversionConfig] = None,
                 registry: Optional[PaletteRegistry] = None,
                 renderer: Optional[StaticFrameRenderer] = None,
                 decoder: Optional[AnimatedFrameDecoder] = None):
        self.config = config or ConversionConfig()
        self.registry = registry if registry is not None else PaletteRegistry.with_builtins()
        self.renderer = renderer or StaticFrameRenderer()
        self.decoder = decoder or AnimatedFrameDecoder(self.renderer, self.config.max_frames)

    # -------------------------------------------------------------------------
    # Requests
    # -------------------------------------------------------------------------

    def _curve(self, curve: CurveLike) -> Curve:
        if curve is None:
            return self.config.default_curve()
        if isinstance(curve, Curve):
            return curve
        points = tuple(p if isinstance(p, Point) else Point(float(p[0]), float(p[1]))
                       for p in curve)
        return Curve(points, self.config.curve_height)

    def build_request(self,
                      cell_width: Optional[int] = None,
                      inverted: Optional[bool] = None,
                      curve: CurveLike = None,
                      palette: PaletteLike = None,
                      cell_height: Optional[int] = None) -> RenderRequest:
        """Fill unspecified render parameters from the configuration."""
        return RenderRequest(
            cell_width=cell_width if cell_width is not None else self.config.cell_width,
            palette=self.registry.resolve(palette),
            inverted=self.config.inverted if inverted is None else inverted,
            curve=self._curve(curve),
            cell_height=cell_height if cell_height is not None else self.config.cell_height,
            resample=self.config.resample,
        )

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def convert_still(self,
                      data: bytes,
                      cell_width: Optional[int] = None,
                      inverted: Optional[bool] = None,
                      curve: CurveLike = None,
                      palette: PaletteLike = None,
                      cell_height: Optional[int] = None) -> str:
        """
        Convert a still image.

        Args:
            data: Encoded image in any format Pillow can read
            cell_width: Output width in symbols
            inverted: Swap dark and bright
            curve: Brightness curve, or control points for one
            palette: Palette, registered palette id, or None for the default
            cell_height: Output height; derived from the aspect ratio if None

        Returns:
            Rows of symbols, each ending in a newline

        Raises:
            ImageDecodeError: If the data cannot be decoded
        """
        request = self.build_request(cell_width, inverted, curve, palette, cell_height)
        return self.renderer.render(load_raster(data), request)

    def convert_animated(self,
                         data: bytes,
                         cell_width: Optional[int] = None,
                         inverted: Optional[bool] = None,
                         curve: CurveLike = None,
                         palette: PaletteLike = None,
                         cell_height: Optional[int] = None) -> List[str]:
        """
        Convert an animated GIF into a list of rendered frames.

        At most ``config.max_frames`` frames are returned. Input that is not
        a multi-frame GIF yields ``[convert_still(...)]``.
        """
        request = self.build_request(cell_width, inverted, curve, palette, cell_height)
        frames = self.decoder.decode_frames(data, request)
        logger.info("Converted %d frame(s)", len(frames))
        return frames

    def convert_file(self, path: Union[str, Path], **kwargs) -> List[str]:
        """
        Convert an image file, treating GIFs as animations.

        Returns:
            Rendered frames; a single element for still images
        """
        data = Path(path).read_bytes()
        logger.info("Converting %s", path)
        if is_gif(data):
            return self.convert_animated(data, **kwargs)
        return [self.convert_still(data, **kwargs)]

    # -------------------------------------------------------------------------
    # Cooperative variants
    # -------------------------------------------------------------------------

    async def convert_still_async(self, data: bytes, **kwargs) -> str:
        """``convert_still`` that yields to the event loop between stages."""
        request = self.build_request(**kwargs)
        await asyncio.sleep(0)
        raster = load_raster(data)
        await asyncio.sleep(0)
        return self.renderer.render(raster, request)

    async def iter_frames_async(self, data: bytes, **kwargs) -> AsyncIterator[str]:
        """Yield rendered animation frames, suspending between frames."""
        request = self.build_request(**kwargs)
        await asyncio.sleep(0)
        for frame in self.decoder.iter_frames(data, request):
            yield frame
            await asyncio.sleep(0)

    async def convert_animated_async(self, data: bytes, **kwargs) -> List[str]:
        """``convert_animated`` that yields to the event loop between frames."""
        return [frame async for frame in self.iter_frames_async(data, **kwargs)]

    # -------------------------------------------------------------------------
    # Palettes
    # -------------------------------------------------------------------------

    def add_custom_palette(self,
                           palette_id: str,
                           name: str,
                           symbols: Iterable[str],
                           description: Optional[str] = None,
                           rasterizer: Optional[GlyphRasterizer] = None) -> Palette:
        """
        Order symbols by measured brightness and register them as a palette.

        Raises:
            PaletteError: If ``symbols`` is empty or the id is taken
        """
        palette = create_custom_palette(
            palette_id,
            name,
            symbols,
            description=description,
            render_size=self.config.analyzer_render_size,
            rasterizer=rasterizer or GlyphRasterizer(self.config.font_path),
        )
        return self.registry.register(palette)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

_default_converter: Optional[EmojiArtConverter] = None


def get_converter() -> EmojiArtConverter:
    """Shared converter with default configuration and built-in palettes."""
    global _default_converter
    if _default_converter is None:
        _default_converter = EmojiArtConverter()
    return _default_converter


def convert_still(data: bytes,
                  cell_width: Optional[int] = None,
                  inverted: bool = False,
                  curve: CurveLike = None,
                  palette: PaletteLike = None) -> str:
    """
    Convenience function to convert a still image to emoji art.

    Args:
        data: Encoded image bytes
        cell_width: Output width in symbols (50 if None)
        inverted: Swap dark and bright
        curve: Brightness curve or control points
        palette: Palette or built-in palette id ('moon' if None)

    Returns:
        Rendered rows of symbols
    """
    return get_converter().convert_still(data, cell_width, inverted, curve, palette)


def convert_animated(data: bytes,
                     cell_width: Optional[int] = None,
                     inverted: bool = False,
                     curve: CurveLike = None,
                     palette: PaletteLike = None) -> List[str]:
    """Convenience function to convert an animated GIF to emoji art frames."""
    return get_converter().convert_animated(data, cell_width, inverted, curve, palette)
