"""
Emoji Art Converter - Constants
===============================
Enums and tuning constants shared by the conversion pipeline.
"""

from enum import Enum, auto

from PIL import Image


# =============================================================================
# ENUMS
# =============================================================================

class ResampleMethod(Enum):
    """Scaling filter used when downsampling a raster to the cell grid."""
    NEAREST = auto()
    BILINEAR = auto()
    LANCZOS = auto()

    @property
    def pil_filter(self) -> Image.Resampling:
        return {
            ResampleMethod.NEAREST: Image.Resampling.NEAREST,
            ResampleMethod.BILINEAR: Image.Resampling.BILINEAR,
            ResampleMethod.LANCZOS: Image.Resampling.LANCZOS,
        }[self]

    @classmethod
    def from_name(cls, name: str) -> 'ResampleMethod':
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown resample method: {name!r}") from None


class DisposalMode(Enum):
    """What happens to the canvas after an animation frame has been shown."""
    UNSPECIFIED = 0
    COMBINE = 1
    RESTORE_BACKGROUND = 2
    RESTORE_PREVIOUS = 3

    @classmethod
    def from_code(cls, code: int) -> 'DisposalMode':
        """Map a GIF disposal code; reserved codes (4-7) count as unspecified."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNSPECIFIED


class Direction(Enum):
    """Side of a cell that is lit when a brightness gradient is detected."""
    RIGHT = auto()
    LEFT = auto()


# =============================================================================
# SYMBOL SELECTION
# =============================================================================

DARK_THRESHOLD = 0.15        # below: neutral dark symbol
BRIGHT_THRESHOLD = 0.85      # above: neutral bright symbol
GRADIENT_THRESHOLD = 0.2     # neighbour difference that counts as an edge


# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_CELL_WIDTH = 50
MIN_CELL_WIDTH = 10          # recommended range for callers
MAX_CELL_WIDTH = 150

DEFAULT_CURVE_WIDTH = 300
DEFAULT_CURVE_HEIGHT = 200

MAX_FRAMES = 50
DEFAULT_FRAME_DELAY_MS = 100

ANALYZER_RENDER_SIZE = 32
EMOJI_FONT_ENV = "MOONJIFY_EMOJI_FONT"

# Well-known emoji font locations, tried in order
EMOJI_FONT_CANDIDATES = (
    "/usr/share/fonts/truetype/noto/NotoColorEmoji.ttf",
    "/usr/share/fonts/noto/NotoColorEmoji.ttf",
    "/usr/share/fonts/google-noto-emoji/NotoColorEmoji.ttf",
    "/usr/share/fonts/truetype/ancient-scripts/Symbola_hint.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/System/Library/Fonts/Apple Color Emoji.ttc",
    "C:\\Windows\\Fonts\\seguiemj.ttf",
)

# Strike size of bitmap colour emoji fonts (CBDT/sbix)
BITMAP_EMOJI_STRIKE = 109
