"""
Emoji Art Converter - Configuration
===================================
Defaults for conversions and render requests.
"""

import math
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from moonjify.constants import (
    ANALYZER_RENDER_SIZE,
    DEFAULT_CELL_WIDTH,
    DEFAULT_CURVE_HEIGHT,
    EMOJI_FONT_ENV,
    MAX_FRAMES,
    ResampleMethod,
)
from moonjify.curve import Curve
from moonjify.palette import Palette


@dataclass
class ConversionConfig:
    """Configuration shared by every conversion made through a converter."""

    # Grid size
    cell_width: int = DEFAULT_CELL_WIDTH      # Output width in symbols
    cell_height: Optional[int] = None         # Derived from aspect ratio if None

    # Brightness
    inverted: bool = False
    curve_height: float = DEFAULT_CURVE_HEIGHT  # Curve-editor space

    # Scaling filter for the cell grid
    resample: ResampleMethod = ResampleMethod.BILINEAR

    # Animation
    max_frames: int = MAX_FRAMES              # Hard cap on decoded frames

    # Palette analysis
    analyzer_render_size: int = ANALYZER_RENDER_SIZE
    font_path: Optional[str] = field(default_factory=lambda: os.environ.get(EMOJI_FONT_ENV))

    def __post_init__(self):
        if self.cell_width < 1:
            raise ValueError(f"cell_width must be at least 1, got {self.cell_width}")
        if self.cell_height is not None and self.cell_height < 1:
            raise ValueError(f"cell_height must be at least 1, got {self.cell_height}")
        if self.max_frames < 1:
            raise ValueError(f"max_frames must be at least 1, got {self.max_frames}")

    def default_curve(self) -> Curve:
        """A curve with no points: brightness passes through unchanged."""
        return Curve(height=self.curve_height)


@dataclass(frozen=True)
class RenderRequest:
    """Parameters for rendering one raster frame to symbols."""
    cell_width: int
    palette: Palette
    inverted: bool = False
    curve: Curve = field(default_factory=Curve)
    cell_height: Optional[int] = None
    resample: ResampleMethod = ResampleMethod.BILINEAR

    def __post_init__(self):
        if self.cell_width < 1:
            raise ValueError(f"cell_width must be at least 1, got {self.cell_width}")
        if self.cell_height is not None and self.cell_height < 1:
            raise ValueError(f"cell_height must be at least 1, got {self.cell_height}")

    def grid_size(self, source_width: int, source_height: int) -> Tuple[int, int]:
        """
        Cell grid (width, height) for a source raster.

        Height is cell_width / aspect_ratio rounded half up, unless overridden.
        """
        if self.cell_height is not None:
            return self.cell_width, self.cell_height
        if source_width < 1 or source_height < 1:
            raise ValueError(f"Empty source raster {source_width}x{source_height}")
        aspect_ratio = source_width / source_height
        return self.cell_width, max(1, math.floor(self.cell_width / aspect_ratio + 0.5))
