"""Tests for frame playback."""

import io

import pytest

from moonjify.playback import CLEAR_SCREEN, FramePlayer, PlaybackState, play_in_terminal


class TestFramePlayer:
    """Tests for the playing/paused state machine."""

    def test_starts_paused(self) -> None:
        player = FramePlayer(['a', 'b'])
        assert player.state is PlaybackState.PAUSED
        assert player.current == 0
        assert player.delay_ms == 100

    def test_start_stop_toggle(self) -> None:
        player = FramePlayer(['a'])
        player.start()
        assert player.is_playing
        player.stop()
        assert not player.is_playing
        assert player.toggle() is PlaybackState.PLAYING
        assert player.toggle() is PlaybackState.PAUSED

    def test_advance_wraps(self) -> None:
        player = FramePlayer(['a', 'b', 'c'])
        assert [player.advance() for _ in range(4)] == ['b', 'c', 'a', 'b']

    def test_seek(self) -> None:
        player = FramePlayer(['a', 'b', 'c'])
        assert player.seek(2) == 'c'
        with pytest.raises(IndexError):
            player.seek(3)

    def test_delay_must_be_positive(self) -> None:
        player = FramePlayer(['a'], delay_ms=40)
        assert player.delay_ms == 40
        with pytest.raises(ValueError):
            player.set_delay(0)
        with pytest.raises(ValueError):
            FramePlayer(['a'], delay_ms=-5)

    def test_needs_frames(self) -> None:
        with pytest.raises(ValueError):
            FramePlayer([])


class TestPlayInTerminal:
    """Tests for play_in_terminal."""

    def test_plays_requested_loops(self) -> None:
        stream = io.StringIO()
        sleeps = []
        shown = play_in_terminal(['A\n', 'B\n', 'C\n'], delay_ms=50, loops=2,
                                 stream=stream, sleep=sleeps.append)
        assert shown == 6
        assert sleeps == [0.05] * 6
        assert stream.getvalue() == (CLEAR_SCREEN + 'A\n' + CLEAR_SCREEN + 'B\n'
                                     + CLEAR_SCREEN + 'C\n') * 2

    def test_interrupt_stops_playback(self) -> None:
        stream = io.StringIO()

        def interrupt(seconds: float) -> None:
            raise KeyboardInterrupt

        assert play_in_terminal(['A\n', 'B\n'], stream=stream, sleep=interrupt) == 1
        assert stream.getvalue().endswith("Animation stopped.\n")
