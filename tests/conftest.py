"""Shared fixtures: in-memory images, GIFs and converters."""

import io
from typing import Callable, Sequence

import pytest
from PIL import Image

from moonjify.config import ConversionConfig
from moonjify.palette import MOON_PALETTE, Palette
from moonjify.pipeline import EmojiArtConverter


def encode_png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format='PNG')
    return buf.getvalue()


def encode_gif(frames: Sequence[Image.Image], duration: int = 100, **options) -> bytes:
    buf = io.BytesIO()
    frames[0].save(buf, format='GIF', save_all=True, append_images=list(frames[1:]),
                   duration=duration, loop=0, **options)
    return buf.getvalue()


@pytest.fixture
def converter() -> EmojiArtConverter:
    return EmojiArtConverter(ConversionConfig(font_path='/nonexistent/emoji-font.ttf'))


@pytest.fixture
def moon() -> Palette:
    return MOON_PALETTE


@pytest.fixture
def gray_row() -> Callable[[Sequence[int]], Image.Image]:
    """Factory for a one-pixel-high RGBA strip of gray levels."""
    def build(levels: Sequence[int]) -> Image.Image:
        image = Image.new('RGBA', (len(levels), 1))
        image.putdata([(v, v, v, 255) for v in levels])
        return image
    return build


@pytest.fixture
def solid_png() -> Callable[..., bytes]:
    def build(level: int, size=(8, 8)) -> bytes:
        return encode_png(Image.new('RGB', size, (level, level, level)))
    return build


@pytest.fixture
def gray_gif() -> Callable[..., bytes]:
    """Factory for an animated GIF whose frame i is solid gray ``i * step``."""
    def build(count: int, step: int = 3, size=(8, 8)) -> bytes:
        frames = [Image.new('L', size, i * step) for i in range(count)]
        return encode_gif(frames)
    return build


@pytest.fixture
def png_bytes() -> bytes:
    image = Image.new('RGB', (40, 20), 'black')
    image.paste((255, 255, 255), (20, 0, 40, 20))
    return encode_png(image)
