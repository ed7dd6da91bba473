"""
Emoji Art Converter - Raster Helpers
====================================
Decoding input bytes into RGBA rasters and scaling them to the cell grid.
"""

import io
import logging
from typing import Union

import numpy as np
from PIL import Image

from moonjify.config import RenderRequest
from moonjify.exceptions import ImageDecodeError
from moonjify.gif import GIF_SIGNATURES

logger = logging.getLogger(__name__)


def load_raster(data: bytes) -> Image.Image:
    """
    Decode image bytes into an RGBA raster.

    Raises:
        ImageDecodeError: If the bytes are not an image Pillow can decode
    """
    if not data:
        raise ImageDecodeError("Failed to load image: no data")
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            raster = img.convert('RGBA')
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(f"Failed to load image: {e}") from e

    logger.debug("Decoded %dx%d raster", raster.width, raster.height)
    return raster


def is_gif(data: bytes) -> bool:
    return data[:6] in GIF_SIGNATURES


def to_image(raster: Union[Image.Image, np.ndarray]) -> Image.Image:
    """Accept a Pillow image or an (h, w, 4) uint8 array."""
    if isinstance(raster, Image.Image):
        return raster if raster.mode == 'RGBA' else raster.convert('RGBA')
    arr = np.ascontiguousarray(raster, dtype=np.uint8)
    if arr.ndim != 3 or arr.shape[2] != 4:
        raise ValueError(f"Expected an (h, w, 4) RGBA array, got shape {arr.shape}")
    return Image.fromarray(arr)


def resample_to_grid(raster: Union[Image.Image, np.ndarray],
                     request: RenderRequest) -> np.ndarray:
    """Scale a raster to the request's cell grid; returns (h, w, 4) uint8."""
    image = to_image(raster)
    width, height = request.grid_size(image.width, image.height)
    if (width, height) != image.size:
        image = image.resize((width, height), request.resample.pil_filter)
    return np.asarray(image, dtype=np.uint8)
