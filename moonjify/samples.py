"""
Emoji Art Converter - Sample Images
===================================
Generated sample images for trying palettes and curves without an input file.
"""

import io
import math
from dataclasses import dataclass
from typing import Callable, Dict, List

import numpy as np
from PIL import Image, ImageDraw

SAMPLE_SIZE = (200, 200)


@dataclass(frozen=True)
class SampleImage:
    id: str
    name: str
    description: str
    kind: str                               # 'static' or 'animated'
    build: Callable[[], List[Image.Image]]

    @property
    def is_animated(self) -> bool:
        return self.kind == 'animated'

    def to_bytes(self) -> bytes:
        """Encode the sample as PNG (static) or looping GIF (animated)."""
        frames = self.build()
        buf = io.BytesIO()
        if self.is_animated:
            frames[0].save(buf, format='GIF', save_all=True, append_images=frames[1:],
                           duration=100, loop=0)
        else:
            frames[0].save(buf, format='PNG')
        return buf.getvalue()


# =============================================================================
# GENERATORS
# =============================================================================

def gradient(size=SAMPLE_SIZE) -> Image.Image:
    """Left-to-right ramp from black to white."""
    width, height = size
    ramp = np.linspace(0, 255, width).astype(np.uint8)
    return Image.fromarray(np.tile(ramp, (height, 1))).convert('RGB')


def mountains(size=SAMPLE_SIZE) -> Image.Image:
    """Two mountain ridges against a bright sky."""
    width, height = size
    sky = np.linspace(255, 150, height).astype(np.uint8)
    image = Image.fromarray(np.tile(sky[:, None], (1, width))).convert('RGB')

    draw = ImageDraw.Draw(image)
    draw.ellipse([width * 0.65, height * 0.1, width * 0.85, height * 0.3], fill='white')
    far = [(0, height * 0.7), (width * 0.25, height * 0.35), (width * 0.45, height * 0.6),
           (width * 0.7, height * 0.3), (width, height * 0.65), (width, height), (0, height)]
    near = [(0, height * 0.85), (width * 0.3, height * 0.55), (width * 0.6, height * 0.8),
            (width * 0.85, height * 0.6), (width, height * 0.75), (width, height), (0, height)]
    draw.polygon(far, fill=(90, 90, 110))
    draw.polygon(near, fill=(20, 20, 30))
    return image


def circles(size=SAMPLE_SIZE) -> Image.Image:
    """Grid of dots whose radius grows across the image."""
    width, height = size
    image = Image.new('RGB', size, color='black')
    draw = ImageDraw.Draw(image)

    columns, rows = 6, 6
    step_x, step_y = width / columns, height / rows
    for row in range(rows):
        for col in range(columns):
            cx, cy = (col + 0.5) * step_x, (row + 0.5) * step_y
            radius = (col + row + 1) / (columns + rows) * min(step_x, step_y) / 2 * 1.6
            draw.ellipse([cx - radius, cy - radius, cx + radius, cy + radius], fill='white')
    return image


def checkerboard(size=SAMPLE_SIZE, squares: int = 8) -> Image.Image:
    """Alternating black and white squares."""
    width, height = size
    ys, xs = np.mgrid[0:height, 0:width]
    cells = (xs * squares // width + ys * squares // height) % 2
    return Image.fromarray((cells * 255).astype(np.uint8)).convert('RGB')


def spiral(size=SAMPLE_SIZE, turns: float = 4.0, phase: float = 0.0) -> Image.Image:
    """Archimedean swirl of light and dark bands."""
    width, height = size
    ys, xs = np.mgrid[0:height, 0:width]
    dx, dy = xs - width / 2, ys - height / 2
    radius = np.hypot(dx, dy) / (min(width, height) / 2)
    theta = np.arctan2(dy, dx)
    bands = 0.5 + 0.5 * np.sin(theta + radius * turns * 2 * math.pi + phase)
    return Image.fromarray((bands * 255).astype(np.uint8)).convert('RGB')


def pulse_frames(size=SAMPLE_SIZE, count: int = 12) -> List[Image.Image]:
    """A bright disc that grows and shrinks."""
    width, height = size
    frames = []
    for index in range(count):
        scale = 0.2 + 0.7 * (0.5 - 0.5 * math.cos(2 * math.pi * index / count))
        radius = scale * min(width, height) / 2
        image = Image.new('RGB', size, color='black')
        draw = ImageDraw.Draw(image)
        draw.ellipse([width / 2 - radius, height / 2 - radius,
                      width / 2 + radius, height / 2 + radius], fill='white')
        frames.append(image)
    return frames


def swirl_frames(size=SAMPLE_SIZE, count: int = 12) -> List[Image.Image]:
    """The spiral, rotating."""
    return [spiral(size, phase=2 * math.pi * index / count) for index in range(count)]


# =============================================================================
# CATALOGUE
# =============================================================================

SAMPLE_IMAGES: Dict[str, SampleImage] = {
    sample.id: sample for sample in (
        SampleImage('gradient', 'Gradient', 'Perfect for testing brightness range',
                    'static', lambda: [gradient()]),
        SampleImage('mountains', 'Mountains', 'Silhouette with crisp edges',
                    'static', lambda: [mountains()]),
        SampleImage('circles', 'Circles', 'Dot pattern with varied densities',
                    'static', lambda: [circles()]),
        SampleImage('checkerboard', 'Checkerboard', 'High contrast alternating pattern',
                    'static', lambda: [checkerboard()]),
        SampleImage('spiral', 'Spiral', 'Hypnotic swirl with fine details',
                    'static', lambda: [spiral()]),
        SampleImage('pulse', 'Pulse', 'Growing and shrinking disc',
                    'animated', pulse_frames),
        SampleImage('swirl', 'Swirl', 'Rotating spiral',
                    'animated', swirl_frames),
    )
}


def get_sample(sample_id: str) -> SampleImage:
    try:
        return SAMPLE_IMAGES[sample_id]
    except KeyError:
        known = ', '.join(SAMPLE_IMAGES)
        raise ValueError(f"Unknown sample {sample_id!r} (available: {known})") from None
