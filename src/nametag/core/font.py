"""Built-in single-stroke vector font.

Each glyph is a set of open polylines drawn in a box whose cap height is 1.0,
plus the glyph's ink width. The pen advances by the ink width plus a fixed
letter spacing. Text is laid out in font units with a cap height of 21, the
metrics the tag layout constants are tuned for.

Lowercase letters are rendered as small capitals: the uppercase strokes
scaled by SMALL_CAPS_SCALE.
"""

import logging
from dataclasses import dataclass

from nametag.config import UnknownGlyphPolicy
from nametag.domain import Vector2D
from nametag.exceptions import UnknownGlyphError

logger = logging.getLogger(__name__)

FONT_HEIGHT = 21.0
LETTER_SPACING = 0.3
SMALL_CAPS_SCALE = 0.75

Stroke = tuple[tuple[float, float], ...]
Polyline = tuple[Vector2D, ...]


@dataclass(frozen=True)
class StrokeGlyph:
    """A glyph of the stroke font.

    Attributes:
        width: Ink width in cap-height units
        strokes: Open polylines in cap-height units
    """

    width: float
    strokes: tuple[Stroke, ...]

    @property
    def advance(self) -> float:
        """Pen advance in cap-height units."""
        return self.width + LETTER_SPACING


def _glyph(width: float, *strokes: Stroke) -> StrokeGlyph:
    return StrokeGlyph(width, strokes)


def _mirror_x(width: float, stroke: Stroke) -> Stroke:
    return tuple((width - x, y) for x, y in stroke)


_ROUND_LEFT: Stroke = (
    (0.68, 0.8), (0.58, 0.94), (0.42, 1.0), (0.28, 1.0), (0.12, 0.92), (0.03, 0.75),
    (0.0, 0.55), (0.0, 0.45), (0.03, 0.25), (0.12, 0.08), (0.28, 0.0), (0.42, 0.0),
    (0.58, 0.06), (0.68, 0.2),
)

_OVAL: Stroke = (
    (0.36, 0.0), (0.18, 0.05), (0.06, 0.2), (0.0, 0.42), (0.0, 0.58), (0.06, 0.8),
    (0.18, 0.95), (0.36, 1.0), (0.54, 0.95), (0.66, 0.8), (0.72, 0.58), (0.72, 0.42),
    (0.66, 0.2), (0.54, 0.05), (0.36, 0.0),
)

_BOWL_P: Stroke = (
    (0.0, 0.0), (0.0, 1.0), (0.45, 1.0), (0.6, 0.93), (0.66, 0.8), (0.66, 0.68),
    (0.6, 0.55), (0.45, 0.48), (0.0, 0.48),
)

_SIX: Stroke = (
    (0.55, 0.95), (0.4, 1.0), (0.25, 0.98), (0.1, 0.86), (0.02, 0.65), (0.0, 0.4),
    (0.03, 0.18), (0.12, 0.05), (0.3, 0.0), (0.47, 0.04), (0.58, 0.16), (0.6, 0.32),
    (0.55, 0.48), (0.42, 0.58), (0.28, 0.6), (0.12, 0.53), (0.02, 0.4),
)

_PAREN: Stroke = (
    (0.28, 1.05), (0.11, 0.85), (0.02, 0.6), (0.02, 0.3), (0.11, 0.05), (0.28, -0.15),
)

GLYPHS: dict[str, StrokeGlyph] = {
    " ": _glyph(0.4),
    "A": _glyph(0.7, ((0.0, 0.0), (0.35, 1.0), (0.7, 0.0)), ((0.13, 0.35), (0.57, 0.35))),
    "B": _glyph(
        0.68,
        ((0.0, 0.0), (0.0, 1.0), (0.45, 1.0), (0.6, 0.93), (0.65, 0.8), (0.6, 0.62),
         (0.45, 0.54), (0.0, 0.54)),
        ((0.45, 0.54), (0.62, 0.46), (0.68, 0.3), (0.68, 0.22), (0.62, 0.07), (0.45, 0.0),
         (0.0, 0.0)),
    ),
    "C": _glyph(0.68, _ROUND_LEFT),
    "D": _glyph(
        0.68,
        ((0.0, 0.0), (0.0, 1.0), (0.32, 1.0), (0.5, 0.93), (0.62, 0.78), (0.68, 0.58),
         (0.68, 0.42), (0.62, 0.22), (0.5, 0.07), (0.32, 0.0), (0.0, 0.0)),
    ),
    "E": _glyph(0.62, ((0.62, 1.0), (0.0, 1.0), (0.0, 0.0), (0.62, 0.0)), ((0.0, 0.53), (0.45, 0.53))),
    "F": _glyph(0.62, ((0.62, 1.0), (0.0, 1.0), (0.0, 0.0)), ((0.0, 0.53), (0.45, 0.53))),
    "G": _glyph(0.68, (*_ROUND_LEFT, (0.68, 0.45), (0.42, 0.45))),
    "H": _glyph(0.68, ((0.0, 0.0), (0.0, 1.0)), ((0.68, 0.0), (0.68, 1.0)), ((0.0, 0.53), (0.68, 0.53))),
    "I": _glyph(0.0, ((0.0, 0.0), (0.0, 1.0))),
    "J": _glyph(
        0.5,
        ((0.5, 1.0), (0.5, 0.25), (0.45, 0.08), (0.32, 0.0), (0.18, 0.0), (0.05, 0.08),
         (0.0, 0.25)),
    ),
    "K": _glyph(0.68, ((0.0, 0.0), (0.0, 1.0)), ((0.65, 1.0), (0.0, 0.35)), ((0.22, 0.57), (0.68, 0.0))),
    "L": _glyph(0.58, ((0.0, 1.0), (0.0, 0.0), (0.58, 0.0))),
    "M": _glyph(0.8, ((0.0, 0.0), (0.0, 1.0), (0.4, 0.3), (0.8, 1.0), (0.8, 0.0))),
    "N": _glyph(0.68, ((0.0, 0.0), (0.0, 1.0), (0.68, 0.0), (0.68, 1.0))),
    "O": _glyph(0.72, _OVAL),
    "P": _glyph(0.66, _BOWL_P),
    "Q": _glyph(0.75, _OVAL, ((0.42, 0.25), (0.75, -0.05))),
    "R": _glyph(0.68, _BOWL_P, ((0.4, 0.48), (0.68, 0.0))),
    "S": _glyph(
        0.68,
        ((0.66, 0.85), (0.55, 0.96), (0.38, 1.0), (0.25, 1.0), (0.1, 0.94), (0.03, 0.83),
         (0.03, 0.7), (0.1, 0.6), (0.25, 0.54), (0.45, 0.48), (0.6, 0.4), (0.68, 0.28),
         (0.68, 0.16), (0.6, 0.05), (0.43, 0.0), (0.27, 0.0), (0.1, 0.05), (0.0, 0.16)),
    ),
    "T": _glyph(0.7, ((0.0, 1.0), (0.7, 1.0)), ((0.35, 1.0), (0.35, 0.0))),
    "U": _glyph(
        0.68,
        ((0.0, 1.0), (0.0, 0.3), (0.05, 0.12), (0.18, 0.02), (0.34, 0.0), (0.5, 0.02),
         (0.63, 0.12), (0.68, 0.3), (0.68, 1.0)),
    ),
    "V": _glyph(0.7, ((0.0, 1.0), (0.35, 0.0), (0.7, 1.0))),
    "W": _glyph(0.9, ((0.0, 1.0), (0.2, 0.0), (0.45, 0.7), (0.7, 0.0), (0.9, 1.0))),
    "X": _glyph(0.68, ((0.0, 1.0), (0.68, 0.0)), ((0.68, 1.0), (0.0, 0.0))),
    "Y": _glyph(0.7, ((0.0, 1.0), (0.35, 0.5), (0.7, 1.0)), ((0.35, 0.5), (0.35, 0.0))),
    "Z": _glyph(0.68, ((0.0, 1.0), (0.68, 1.0), (0.0, 0.0), (0.68, 0.0))),
    "0": _glyph(0.6, tuple((x * 0.6 / 0.72, y) for x, y in _OVAL)),
    "1": _glyph(0.3, ((0.0, 0.8), (0.3, 1.0), (0.3, 0.0))),
    "2": _glyph(
        0.62,
        ((0.03, 0.78), (0.1, 0.92), (0.25, 1.0), (0.4, 1.0), (0.55, 0.92), (0.6, 0.78),
         (0.58, 0.62), (0.45, 0.46), (0.0, 0.0), (0.62, 0.0)),
    ),
    "3": _glyph(
        0.62,
        ((0.05, 1.0), (0.6, 1.0), (0.3, 0.6), (0.42, 0.6), (0.55, 0.52), (0.62, 0.38),
         (0.62, 0.22), (0.55, 0.08), (0.42, 0.0), (0.22, 0.0), (0.08, 0.05), (0.0, 0.15)),
    ),
    "4": _glyph(0.68, ((0.48, 0.0), (0.48, 1.0), (0.0, 0.32), (0.68, 0.32))),
    "5": _glyph(
        0.62,
        ((0.6, 1.0), (0.08, 1.0), (0.03, 0.56), (0.18, 0.63), (0.35, 0.64), (0.5, 0.58),
         (0.6, 0.45), (0.62, 0.3), (0.58, 0.14), (0.46, 0.03), (0.3, 0.0), (0.15, 0.02),
         (0.0, 0.12)),
    ),
    "6": _glyph(0.6, _SIX),
    "7": _glyph(0.62, ((0.0, 1.0), (0.62, 1.0), (0.22, 0.0))),
    "8": _glyph(
        0.6,
        ((0.3, 0.55), (0.12, 0.62), (0.06, 0.78), (0.12, 0.93), (0.3, 1.0), (0.48, 0.93),
         (0.54, 0.78), (0.48, 0.62), (0.3, 0.55)),
        ((0.3, 0.55), (0.1, 0.47), (0.02, 0.3), (0.06, 0.1), (0.3, 0.0), (0.54, 0.1),
         (0.58, 0.3), (0.5, 0.47), (0.3, 0.55)),
    ),
    "9": _glyph(0.6, tuple((0.6 - x, 1.0 - y) for x, y in _SIX)),
    ".": _glyph(0.0, ((0.0, 0.0), (0.0, 0.12))),
    ",": _glyph(0.08, ((0.08, 0.12), (0.08, 0.0), (0.0, -0.15))),
    "-": _glyph(0.45, ((0.0, 0.45), (0.45, 0.45))),
    "_": _glyph(0.6, ((0.0, -0.1), (0.6, -0.1))),
    "!": _glyph(0.0, ((0.0, 1.0), (0.0, 0.3)), ((0.0, 0.12), (0.0, 0.0))),
    "?": _glyph(
        0.6,
        ((0.0, 0.78), (0.08, 0.93), (0.25, 1.0), (0.4, 1.0), (0.55, 0.93), (0.6, 0.78),
         (0.55, 0.62), (0.3, 0.45), (0.3, 0.3)),
        ((0.3, 0.12), (0.3, 0.0)),
    ),
    "'": _glyph(0.0, ((0.0, 1.0), (0.0, 0.75))),
    ":": _glyph(0.0, ((0.0, 0.62), (0.0, 0.5)), ((0.0, 0.12), (0.0, 0.0))),
    "/": _glyph(0.55, ((0.0, 0.0), (0.55, 1.0))),
    "+": _glyph(0.56, ((0.0, 0.45), (0.56, 0.45)), ((0.28, 0.17), (0.28, 0.73))),
    "=": _glyph(0.55, ((0.0, 0.32), (0.55, 0.32)), ((0.0, 0.6), (0.55, 0.6))),
    "(": _glyph(0.28, _PAREN),
    ")": _glyph(0.28, _mirror_x(0.28, _PAREN)),
}


def lookup_glyph(character: str) -> tuple[StrokeGlyph, float] | None:
    """Find the glyph for a character.

    Returns:
        Tuple of (glyph, scale) or None if the font has no glyph for it;
        lowercase letters map to their uppercase glyph at small-caps scale
    """
    glyph = GLYPHS.get(character)
    if glyph is not None:
        return glyph, 1.0
    if character.islower() and character.upper() in GLYPHS:
        return GLYPHS[character.upper()], SMALL_CAPS_SCALE
    return None


def supported_characters() -> str:
    """All characters the font can render (uppercase, lowercase and symbols)."""
    letters = "".join(c.lower() for c in GLYPHS if c.isalpha())
    return "".join(GLYPHS) + letters


def text_to_polylines(
    text: str,
    unknown_glyphs: UnknownGlyphPolicy = UnknownGlyphPolicy.FAIL,
) -> list[Polyline]:
    """Lay out text as open polylines in font units.

    The pen starts at the origin on the baseline and advances by each
    glyph's advance width.

    Args:
        text: Text to render
        unknown_glyphs: What to do with characters the font lacks

    Returns:
        Polylines of all glyphs, in reading order

    Raises:
        UnknownGlyphError: For an unsupported character under the FAIL policy
    """
    polylines: list[Polyline] = []
    cursor = 0.0
    for position, character in enumerate(text):
        found = lookup_glyph(character)
        if found is None:
            if unknown_glyphs == UnknownGlyphPolicy.SKIP:
                logger.debug("skipping unsupported character %r at %d", character, position)
                continue
            raise UnknownGlyphError(character, position)

        glyph, scale = found
        size = FONT_HEIGHT * scale
        for stroke in glyph.strokes:
            polylines.append(tuple(Vector2D(cursor + x * size, y * size) for x, y in stroke))
        cursor += glyph.advance * size
    return polylines
