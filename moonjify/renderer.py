"""
Emoji Art Converter - Static Frame Renderer
===========================================
Turns one raster frame into rows of palette symbols. Each cell's symbol
follows its brightness; where the right-hand neighbour differs sharply, the
palette's directional symbols are used so edges read as lit from one side.
"""

import logging
import math
from typing import List, Optional, Union

import numpy as np
from PIL import Image

from moonjify.config import RenderRequest
from moonjify.constants import (
    BRIGHT_THRESHOLD,
    DARK_THRESHOLD,
    GRADIENT_THRESHOLD,
    Direction,
)
from moonjify.curve import brightness_table
from moonjify.palette import Palette
from moonjify.raster import resample_to_grid

logger = logging.getLogger(__name__)


# =============================================================================
# SYMBOL SELECTION
# =============================================================================

def _clamped_index(value: float, length: int) -> int:
    return max(0, min(length - 1, math.floor(value)))


def uniform_symbol(nb: float, palette: Palette) -> str:
    """Symbol from the main sequence, spread evenly over 0..1."""
    symbols = palette.symbols
    return symbols[_clamped_index(nb * (len(symbols) - 1), len(symbols))]


def select_symbol(nb: float, nb_right: Optional[float], palette: Palette) -> str:
    """
    Choose the symbol for one cell.

    Args:
        nb: Normalized (curved, possibly inverted) brightness of the cell
        nb_right: Same for the right-hand neighbour, None on the last column
        palette: Palette to draw from

    Returns:
        The selected symbol
    """
    if nb < DARK_THRESHOLD:
        return palette.dark_symbol
    if nb > BRIGHT_THRESHOLD:
        return palette.bright_symbol

    if nb_right is not None and abs(nb - nb_right) > GRADIENT_THRESHOLD:
        direction = Direction.RIGHT if nb_right > nb else Direction.LEFT
        lit = palette.directional(direction)
        if lit:
            # Indexed by the cell's own brightness, not rescaled to the sub-palette
            return lit[_clamped_index(nb * len(lit), len(lit))]

    return uniform_symbol(nb, palette)


# =============================================================================
# RENDERER
# =============================================================================

class StaticFrameRenderer:
    """Render raster frames to newline-terminated rows of symbols."""

    def brightness_grid(self, pixels: np.ndarray, request: RenderRequest,
                        table: Optional[np.ndarray] = None) -> np.ndarray:
        """Normalized brightness per cell, before inversion."""
        if table is None:
            table = brightness_table(request.curve)
        sums = pixels[..., :3].astype(np.int32).sum(axis=2)
        return table[sums]

    def render_pixels(self, pixels: np.ndarray, request: RenderRequest,
                      table: Optional[np.ndarray] = None) -> str:
        """
        Render an already resampled (h, w, 4) grid, one symbol per pixel.

        Args:
            pixels: RGBA cell grid
            request: Render parameters (palette, inversion, curve)
            table: Precomputed brightness table for ``request.curve``

        Returns:
            ``h`` lines of ``w`` symbols, each ending in a newline
        """
        grid = self.brightness_grid(pixels, request, table)
        palette = request.palette
        inverted = request.inverted

        lines: List[str] = []
        for row in grid.tolist():
            width = len(row)
            line = []
            for x, nb in enumerate(row):
                nb_right = row[x + 1] if x < width - 1 else None

                if inverted:
                    nb = 1 - nb
                    if nb_right is not None:
                        nb_right = 1 - nb_right

                line.append(select_symbol(nb, nb_right, palette))
            lines.append(''.join(line) + '\n')

        return ''.join(lines)

    def render(self, raster: Union[Image.Image, np.ndarray], request: RenderRequest,
               table: Optional[np.ndarray] = None) -> str:
        """
        Downsample a raster to the request's cell grid and render it.

        Args:
            raster: RGBA Pillow image or (h, w, 4) uint8 array
            request: Render parameters
            table: Optional precomputed brightness table for ``request.curve``

        Returns:
            The rendered frame
        """
        pixels = resample_to_grid(raster, request)
        logger.debug("Rendering %dx%d cells with palette %r",
                     pixels.shape[1], pixels.shape[0], request.palette.id)
        return self.render_pixels(pixels, request, table)
