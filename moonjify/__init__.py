"""
Emoji Art Converter
===================
Turns images and GIF animations into grids of emoji whose brightness follows
the source picture.

Quick start:
    from moonjify import convert_still
    print(convert_still(open('photo.png', 'rb').read(), cell_width=40))
"""

from moonjify.analyzer import GlyphRasterizer, analyze_brightness, create_custom_palette
from moonjify.animation import AnimatedFrameDecoder, FrameCompositor
from moonjify.config import ConversionConfig, RenderRequest
from moonjify.constants import DisposalMode, ResampleMethod
from moonjify.curve import Curve, Point, map_brightness
from moonjify.exceptions import (
    ContainerError,
    CurveError,
    ImageDecodeError,
    MoonjifyError,
    PaletteError,
    RenderSurfaceUnavailable,
)
from moonjify.palette import BUILTIN_PALETTES, Palette, PaletteRegistry
from moonjify.pipeline import EmojiArtConverter, convert_animated, convert_still
from moonjify.playback import FramePlayer, PlaybackState
from moonjify.renderer import StaticFrameRenderer, select_symbol

__version__ = "1.0.0"

__all__ = [
    "AnimatedFrameDecoder",
    "BUILTIN_PALETTES",
    "ContainerError",
    "ConversionConfig",
    "Curve",
    "CurveError",
    "DisposalMode",
    "EmojiArtConverter",
    "FrameCompositor",
    "FramePlayer",
    "GlyphRasterizer",
    "ImageDecodeError",
    "MoonjifyError",
    "Palette",
    "PaletteError",
    "PaletteRegistry",
    "PlaybackState",
    "Point",
    "RenderRequest",
    "RenderSurfaceUnavailable",
    "ResampleMethod",
    "StaticFrameRenderer",
    "analyze_brightness",
    "convert_animated",
    "convert_still",
    "create_custom_palette",
    "map_brightness",
    "select_symbol",
]
