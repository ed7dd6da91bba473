"""
Emoji Art Converter - Animated Frame Decoder
============================================
Composites GIF frames onto a persistent canvas, honouring each frame's
disposal mode, and renders every composited canvas with the static renderer.
"""

import logging
from typing import Iterator, List, Optional

import numpy as np

from moonjify.config import RenderRequest
from moonjify.constants import MAX_FRAMES, DisposalMode
from moonjify.curve import brightness_table
from moonjify.exceptions import ContainerError
from moonjify.gif import GifImage, RawFrame, read_gif
from moonjify.raster import load_raster
from moonjify.renderer import StaticFrameRenderer

logger = logging.getLogger(__name__)


class FrameCompositor:
    """
    Persistent RGBA canvas that frame patches are painted onto.

    The disposal mode of a frame is applied just before the next frame is
    painted: background clears the whole canvas, previous restores the canvas
    as it stood after that frame was painted. Patches falling outside the
    canvas are clipped.
    """

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Canvas must be at least 1x1, got {width}x{height}")
        self.canvas = np.zeros((height, width, 4), dtype=np.uint8)
        self._previous = self.canvas.copy()
        self._pending = DisposalMode.UNSPECIFIED

    @property
    def width(self) -> int:
        return self.canvas.shape[1]

    @property
    def height(self) -> int:
        return self.canvas.shape[0]

    def _dispose(self):
        if self._pending is DisposalMode.RESTORE_BACKGROUND:
            self.canvas[:] = 0
        elif self._pending is DisposalMode.RESTORE_PREVIOUS:
            self.canvas[:] = self._previous
        # UNSPECIFIED and COMBINE leave the canvas as is

    def _paint(self, frame: RawFrame):
        x0, y0 = frame.left, frame.top
        if x0 >= self.width or y0 >= self.height:
            return
        x1 = min(x0 + frame.width, self.width)
        y1 = min(y0 + frame.height, self.height)

        patch = frame.pixels[:y1 - y0, :x1 - x0]
        region = self.canvas[y0:y1, x0:x1]
        opaque = patch[..., 3] != 0
        region[opaque] = patch[opaque]

    def add(self, frame: RawFrame) -> np.ndarray:
        """
        Paint a frame and return a copy of the composited canvas.

        Args:
            frame: Decoded frame patch with offset and disposal mode

        Returns:
            (height, width, 4) uint8 snapshot of the canvas after painting
        """
        self._dispose()
        self._paint(frame)
        # RESTORE_PREVIOUS brings back the canvas as last drawn
        self._previous = self.canvas.copy()
        self._pending = frame.disposal
        return self.canvas.copy()


class AnimatedFrameDecoder:
    """Decode an animated GIF into rendered symbol frames."""

    def __init__(self, renderer: Optional[StaticFrameRenderer] = None,
                 max_frames: int = MAX_FRAMES):
        if max_frames < 1:
            raise ValueError(f"max_frames must be at least 1, got {max_frames}")
        self.renderer = renderer or StaticFrameRenderer()
        self.max_frames = max_frames

    def render_still(self, data: bytes, request: RenderRequest) -> str:
        """Render the data as a single still image (the fallback path)."""
        return self.renderer.render(load_raster(data), request)

    def render_frames(self, gif: GifImage, request: RenderRequest) -> Iterator[str]:
        """
        Composite and render the frames of an opened GIF.

        Frames that fail to decode or render are logged and skipped. The
        canvas takes the size of the first frame that decodes.
        """
        table = brightness_table(request.curve)
        compositor: Optional[FrameCompositor] = None

        for index in range(min(gif.frame_count, self.max_frames)):
            try:
                frame = gif.frame(index)
                if compositor is None:
                    compositor = FrameCompositor(frame.width, frame.height)
                canvas = compositor.add(frame)
                rendered = self.renderer.render(canvas, request, table)
            except Exception:
                logger.exception("Error processing frame %d", index)
                continue
            yield rendered

    def iter_frames(self, data: bytes, request: RenderRequest) -> Iterator[str]:
        """
        Yield rendered frames one at a time, in source order.

        Falls back to a single still rendering when the container cannot be
        parsed, holds fewer than two frames, or no frame renders.

        Raises:
            ImageDecodeError: If the still fallback cannot decode the data either
        """
        try:
            gif = read_gif(data)
        except ContainerError as e:
            logger.warning("Could not parse animation (%s), rendering as a still image", e)
            yield self.render_still(data, request)
            return

        with gif:
            if not gif.is_animated:
                logger.info("Input has %d frame(s), rendering as a still image", gif.frame_count)
                yield self.render_still(data, request)
                return

            logger.info("Decoding %d of %d frame(s)",
                        min(gif.frame_count, self.max_frames), gif.frame_count)
            count = 0
            for rendered in self.render_frames(gif, request):
                count += 1
                yield rendered

            if count == 0:
                logger.warning("No frame could be rendered, rendering as a still image")
                yield self.render_still(data, request)

    def decode_frames(self, data: bytes, request: RenderRequest) -> List[str]:
        """
        Decode and render up to ``max_frames`` frames.

        Args:
            data: GIF file contents
            request: Render parameters shared by every frame

        Returns:
            Rendered frames in source order; a one-element list for inputs
            that are not animations
        """
        return list(self.iter_frames(data, request))
