"""
Emoji Art Converter - Playback
==============================
Frame scheduling for rendered animations, kept apart from conversion.
"""

import logging
import sys
import time
from enum import Enum, auto
from typing import Callable, Optional, Sequence, TextIO

from moonjify.constants import DEFAULT_FRAME_DELAY_MS

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\x1b[2J\x1b[H"


class PlaybackState(Enum):
    PLAYING = auto()
    PAUSED = auto()


class FramePlayer:
    """
    Playing/paused state machine over a fixed list of frames.

    The current frame advances by one per tick and wraps at the end.
    """

    def __init__(self, frames: Sequence[str], delay_ms: int = DEFAULT_FRAME_DELAY_MS):
        if not frames:
            raise ValueError("FramePlayer needs at least one frame")
        self.frames = list(frames)
        self.current = 0
        self.state = PlaybackState.PAUSED
        self.delay_ms = DEFAULT_FRAME_DELAY_MS
        self.set_delay(delay_ms)

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def is_playing(self) -> bool:
        return self.state is PlaybackState.PLAYING

    @property
    def frame(self) -> str:
        return self.frames[self.current]

    def start(self):
        self.state = PlaybackState.PLAYING

    def stop(self):
        self.state = PlaybackState.PAUSED

    def toggle(self) -> PlaybackState:
        self.state = PlaybackState.PAUSED if self.is_playing else PlaybackState.PLAYING
        return self.state

    def set_delay(self, delay_ms: int):
        if delay_ms <= 0:
            raise ValueError(f"Frame delay must be positive, got {delay_ms} ms")
        self.delay_ms = delay_ms

    def advance(self) -> str:
        """Move to the next frame, wrapping around, and return it."""
        self.current = (self.current + 1) % self.frame_count
        return self.frame

    def seek(self, index: int) -> str:
        if not 0 <= index < self.frame_count:
            raise IndexError(f"Frame {index} out of range (0..{self.frame_count - 1})")
        self.current = index
        return self.frame


def play_in_terminal(frames: Sequence[str],
                     delay_ms: int = DEFAULT_FRAME_DELAY_MS,
                     loops: int = -1,
                     stream: Optional[TextIO] = None,
                     sleep: Callable[[float], None] = time.sleep) -> int:
    """
    Play rendered frames in a terminal.

    Args:
        frames: Rendered frames
        delay_ms: Delay between frames in milliseconds
        loops: Number of loops (-1 for infinite)
        stream: Output stream (stdout if None)
        sleep: Sleep function, in seconds

    Returns:
        Number of frames shown
    """
    stream = stream or sys.stdout
    player = FramePlayer(frames, delay_ms)
    player.start()

    shown = 0
    loop_count = 0
    try:
        while player.is_playing and (loops == -1 or loop_count < loops):
            stream.write(CLEAR_SCREEN + player.frame)
            stream.flush()
            shown += 1
            sleep(player.delay_ms / 1000)
            if player.current == player.frame_count - 1:
                loop_count += 1
            player.advance()
    except KeyboardInterrupt:
        player.stop()
        stream.write("\nAnimation stopped.\n")

    logger.debug("Played %d frame(s) over %d loop(s)", shown, loop_count)
    return shown
