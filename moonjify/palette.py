"""
Emoji Art Converter - Palettes
==============================
Ordered symbol palettes (darkest to brightest), the built-in palette set and
an append-only registry.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from moonjify.constants import Direction
from moonjify.exceptions import PaletteError


# =============================================================================
# PALETTE MODEL
# =============================================================================

@dataclass(frozen=True)
class Palette:
    """
    An ordered brightness palette.

    ``symbols`` runs from darkest to brightest. ``neutral_symbols`` is the
    (darkest, brightest) pair used for extreme cells and defaults to the ends
    of ``symbols``. The directional sequences are used on brightness edges
    and fall back to ``symbols`` when absent.
    """
    id: str
    name: str
    symbols: Tuple[str, ...]
    description: Optional[str] = None
    neutral_symbols: Optional[Tuple[str, str]] = None
    right_lit_symbols: Optional[Tuple[str, ...]] = None
    left_lit_symbols: Optional[Tuple[str, ...]] = None

    def __post_init__(self):
        object.__setattr__(self, 'symbols', tuple(self.symbols))
        if not self.symbols:
            raise PaletteError(f"Palette {self.id!r} has no symbols")

        if self.neutral_symbols is not None:
            neutral = tuple(self.neutral_symbols)
            if len(neutral) != 2:
                raise PaletteError(
                    f"Palette {self.id!r} needs exactly two neutral symbols, got {len(neutral)}"
                )
            object.__setattr__(self, 'neutral_symbols', neutral)

        for attr in ('right_lit_symbols', 'left_lit_symbols'):
            value = getattr(self, attr)
            if value is None:
                continue
            value = tuple(value)
            if not value:
                raise PaletteError(f"Palette {self.id!r} has an empty {attr}")
            object.__setattr__(self, attr, value)

    def __len__(self) -> int:
        return len(self.symbols)

    @property
    def dark_symbol(self) -> str:
        if self.neutral_symbols is not None:
            return self.neutral_symbols[0]
        return self.symbols[0]

    @property
    def bright_symbol(self) -> str:
        if self.neutral_symbols is not None:
            return self.neutral_symbols[1]
        return self.symbols[-1]

    @property
    def is_directional(self) -> bool:
        return self.right_lit_symbols is not None or self.left_lit_symbols is not None

    def directional(self, direction: Direction) -> Optional[Tuple[str, ...]]:
        """Sub-palette for cells lit from ``direction``, or None if absent."""
        if direction is Direction.RIGHT:
            return self.right_lit_symbols
        return self.left_lit_symbols


# =============================================================================
# BUILT-IN PALETTES
# =============================================================================

MOON_PALETTE = Palette(
    id='moon',
    name='Moon Phases',
    symbols=("🌑", "🌒", "🌓", "🌔", "🌕", "🌖", "🌗", "🌘"),
    neutral_symbols=("🌑", "🌕"),
    right_lit_symbols=("🌒", "🌓", "🌔"),   # waxing
    left_lit_symbols=("🌘", "🌗", "🌖"),    # waning
    description='Moon emojis following the lunar cycle from new moon to full moon',
)

WEATHER_PALETTE = Palette(
    id='weather',
    name='Weather',
    symbols=("⚫", "🌧️", "⛅", "🌤️", "☀️"),
    neutral_symbols=("⚫", "☀️"),
    description='Weather emojis from darkness to brightness',
)

HEART_PALETTE = Palette(
    id='hearts',
    name='Hearts',
    symbols=("🖤", "❤️", "💗", "💕", "💖", "💝"),
    neutral_symbols=("🖤", "💝"),
    description='Heart emojis from dark to bright',
)

FACE_PALETTE = Palette(
    id='faces',
    name='Faces',
    symbols=("😶", "🙁", "😐", "🙂", "😊", "😄"),
    neutral_symbols=("😶", "😄"),
    description='Face emojis from neutral to happy',
)

CIRCLE_PALETTE = Palette(
    id='circles',
    name='Circles',
    symbols=("⚫", "🔵", "🟣", "🟡", "⚪"),
    neutral_symbols=("⚫", "⚪"),
    description='Circle emojis from dark to bright',
)

BUILTIN_PALETTES: Tuple[Palette, ...] = (
    MOON_PALETTE,
    WEATHER_PALETTE,
    HEART_PALETTE,
    FACE_PALETTE,
    CIRCLE_PALETTE,
)

DEFAULT_PALETTE = MOON_PALETTE


# =============================================================================
# REGISTRY
# =============================================================================

class PaletteRegistry:
    """
    Append-only collection of palettes keyed by id.

    Palettes can be added but never replaced or removed, so readers always
    see a consistent set.
    """

    def __init__(self, palettes: Sequence[Palette] = (),
                 default_id: str = DEFAULT_PALETTE.id):
        self._palettes: Dict[str, Palette] = {}
        self._default_id = default_id
        for palette in palettes:
            self.register(palette)

    @classmethod
    def with_builtins(cls) -> 'PaletteRegistry':
        return cls(BUILTIN_PALETTES)

    def register(self, palette: Palette) -> Palette:
        """Add a palette; an id that is already taken raises PaletteError."""
        if palette.id in self._palettes:
            raise PaletteError(f"Palette {palette.id!r} is already registered")
        self._palettes[palette.id] = palette
        return palette

    def get(self, palette_id: str) -> Palette:
        try:
            return self._palettes[palette_id]
        except KeyError:
            known = ', '.join(self._palettes) or 'none'
            raise PaletteError(
                f"Unknown palette {palette_id!r} (available: {known})"
            ) from None

    def list(self) -> List[Palette]:
        return list(self._palettes.values())

    @property
    def default(self) -> Palette:
        if self._default_id in self._palettes:
            return self._palettes[self._default_id]
        if self._palettes:
            return next(iter(self._palettes.values()))
        return DEFAULT_PALETTE

    def resolve(self, palette: Optional[object] = None) -> Palette:
        """Accept a Palette, a registered id or None (the default palette)."""
        if palette is None:
            return self.default
        if isinstance(palette, Palette):
            return palette
        if isinstance(palette, str):
            return self.get(palette)
        raise TypeError(f"Expected Palette, palette id or None, got {type(palette).__name__}")

    def __contains__(self, palette_id: object) -> bool:
        return palette_id in self._palettes

    def __iter__(self) -> Iterator[Palette]:
        return iter(list(self._palettes.values()))

    def __len__(self) -> int:
        return len(self._palettes)
