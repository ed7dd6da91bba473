"""
Emoji Art Converter - GIF Frame Reader
======================================
Opens GIF data with Pillow and hands out each frame as an uncomposited patch:
its pixels, placement offset and disposal mode, so the animation decoder can
composite frames onto its own canvas.
"""

import io
import logging
import struct
from dataclasses import dataclass
from typing import Optional

import numpy as np
from PIL import Image, ImageSequence

from moonjify.constants import DisposalMode
from moonjify.exceptions import ContainerError

logger = logging.getLogger(__name__)

GIF_SIGNATURES = (b"GIF87a", b"GIF89a")


@dataclass
class RawFrame:
    """A decoded frame patch, not yet composited."""
    pixels: np.ndarray          # (height, width, 4) uint8 RGBA
    left: int
    top: int
    disposal: DisposalMode = DisposalMode.UNSPECIFIED
    delay_ms: int = 0

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]


def extract_frame(frame: Image.Image) -> RawFrame:
    """
    Cut the current frame of an opened GIF out as a patch.

    Pillow decodes each frame over its own canvas, so pixels the frame leaves
    transparent arrive holding whatever Pillow's canvas showed there. Only
    pixels transparent on that canvas too keep alpha 0.

    Args:
        frame: A Pillow GIF image positioned on the frame to extract

    Returns:
        RawFrame covering the frame's rectangle
    """
    box = getattr(frame, 'dispose_extent', None) or (0, 0) + frame.size

    # convert() loads the frame; it also applies a first frame's transparency index
    rgba = frame.convert('RGBA').crop(box)
    return RawFrame(
        pixels=np.asarray(rgba, dtype=np.uint8),
        left=box[0],
        top=box[1],
        disposal=DisposalMode.from_code(getattr(frame, 'disposal_method', 0)),
        delay_ms=int(frame.info.get('duration', 0)),
    )


class GifImage:
    """
    An opened GIF container.

    Frames are decoded by Pillow on request, in any order; asking for an
    earlier frame rewinds and replays the file up to it.
    """

    def __init__(self, image: Image.Image, frame_count: int):
        self.image = image
        self.frame_count = frame_count
        self.width, self.height = image.size
        self._sequence = ImageSequence.Iterator(image)

    @property
    def is_animated(self) -> bool:
        return self.frame_count > 1

    @property
    def loop_count(self) -> Optional[int]:
        return self.image.info.get('loop')

    def frame(self, index: int) -> RawFrame:
        """
        Decode one frame.

        Raises:
            ContainerError: If the frame is missing or its data is corrupt
        """
        try:
            return extract_frame(self._sequence[index])
        except (IndexError, EOFError, OSError, ValueError, struct.error) as e:
            raise ContainerError(f"Cannot decode GIF frame {index}: {e}") from e

    def close(self):
        self.image.close()

    def __enter__(self) -> 'GifImage':
        return self

    def __exit__(self, *exc_info):
        self.close()


def read_gif(data: bytes) -> GifImage:
    """
    Open GIF data and count its frames.

    Args:
        data: Raw file contents

    Returns:
        GifImage ready to decode frames

    Raises:
        ContainerError: If the data is not a readable GIF
    """
    if not data.startswith(GIF_SIGNATURES):
        raise ContainerError("Not a GIF file (missing GIF87a/GIF89a signature)")

    try:
        image = Image.open(io.BytesIO(data))
        frame_count = getattr(image, 'n_frames', 1)
    except (EOFError, OSError, ValueError, struct.error) as e:
        raise ContainerError(f"Cannot read GIF: {e}") from e

    logger.debug("Opened GIF %dx%d with %d frame(s)", image.width, image.height, frame_count)
    return GifImage(image, frame_count)
