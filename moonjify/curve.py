"""
Emoji Art Converter - Brightness Curve
======================================
Piecewise-linear tone curve applied to pixel brightness before symbol
selection. Points live in curve-editor space: x grows to the right with input
brightness, y grows downward, so the top edge (y=0) is full output brightness.
"""

from dataclasses import dataclass, field
from typing import Iterable, Sequence, Tuple

import numpy as np

from moonjify.constants import DEFAULT_CURVE_HEIGHT, DEFAULT_CURVE_WIDTH
from moonjify.exceptions import CurveError


# Largest possible r+g+b of an 8-bit pixel
MAX_CHANNEL_SUM = 3 * 255

# Mapped brightness is rounded to this many decimals so that equivalent curves
# (no points, or the straight reset line) produce bit-identical values
BRIGHTNESS_DECIMALS = 12


@dataclass(frozen=True)
class Point:
    """A control point in curve-editor space."""
    x: float
    y: float


def map_brightness(raw_brightness: float, points: Sequence[Point],
                   curve_height: float) -> float:
    """
    Map a raw brightness sample through a piecewise-linear curve.

    Args:
        raw_brightness: Brightness in 0..255
        points: At least two control points, in any order
        curve_height: Height of the curve-editor space

    Returns:
        Normalized brightness, nominally 0.0..1.0, rounded to
        ``BRIGHTNESS_DECIMALS`` places
    """
    b = raw_brightness / 255
    ordered = sorted(points, key=lambda p: p.x)
    target = b * ordered[-1].x

    p1, p2 = ordered[0], ordered[-1]
    for left, right in zip(ordered, ordered[1:]):
        if left.x <= target <= right.x:
            p1, p2 = left, right
            break

    t = (target - p1.x) / ((p2.x - p1.x) or 1)
    mapped_y = p1.y + t * (p2.y - p1.y)

    # Canvas y grows downward, brightness grows upward
    return round(1 - mapped_y / curve_height, BRIGHTNESS_DECIMALS)


@dataclass(frozen=True)
class Curve:
    """
    Immutable brightness curve.

    Points are kept sorted by x. The lowest-x and highest-x points are anchors
    that edits never remove. Fewer than two points means no adjustment.
    """
    points: Tuple[Point, ...] = field(default_factory=tuple)
    height: float = DEFAULT_CURVE_HEIGHT

    def __post_init__(self):
        if self.height <= 0:
            raise ValueError(f"Curve height must be positive, got {self.height}")
        ordered = tuple(sorted(self.points, key=lambda p: p.x))
        object.__setattr__(self, 'points', ordered)

    @classmethod
    def identity(cls, width: float = DEFAULT_CURVE_WIDTH,
                 height: float = DEFAULT_CURVE_HEIGHT) -> 'Curve':
        """The editor's reset state: black at bottom-left, white at top-right."""
        return cls((Point(0, height), Point(width, 0)), height)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[float, float]],
                   height: float = DEFAULT_CURVE_HEIGHT) -> 'Curve':
        return cls(tuple(Point(float(x), float(y)) for x, y in pairs), height)

    @property
    def is_active(self) -> bool:
        return len(self.points) >= 2

    @property
    def width(self) -> float:
        return self.points[-1].x if self.points else 0.0

    def map(self, raw_brightness: float) -> float:
        """Normalized brightness for a raw 0..255 sample."""
        if not self.is_active:
            return round(raw_brightness / 255, BRIGHTNESS_DECIMALS)
        return map_brightness(raw_brightness, self.points, self.height)

    def with_point(self, point: Point) -> 'Curve':
        """Return a copy with an intermediate control point added."""
        if self.is_active and not (self.points[0].x <= point.x <= self.points[-1].x):
            raise CurveError(
                f"Point x={point.x} lies outside the curve range "
                f"[{self.points[0].x}, {self.points[-1].x}]"
            )
        if not (0 <= point.y <= self.height):
            raise CurveError(f"Point y={point.y} lies outside 0..{self.height}")
        return Curve(self.points + (point,), self.height)

    def without_point(self, index: int) -> 'Curve':
        """Return a copy without the control point at ``index`` (x order)."""
        if index < 0:
            index += len(self.points)
        if not 0 <= index < len(self.points):
            raise IndexError(f"No curve point at index {index}")
        if index in (0, len(self.points) - 1):
            raise CurveError("Curve anchors cannot be removed")
        return Curve(self.points[:index] + self.points[index + 1:], self.height)


def brightness_table(curve: Curve) -> np.ndarray:
    """
    Precompute normalized brightness for every channel sum r+g+b.

    Index the result with the summed RGB channels of a pixel; each entry is
    ``curve.map(sum / 3)``, so table lookups match per-pixel mapping exactly.
    """
    return np.array(
        [curve.map(total / 3) for total in range(MAX_CHANNEL_SUM + 1)],
        dtype=np.float64,
    )
