"""Tests for the stroke font and text layout."""

import pytest

from nametag.config import UnknownGlyphPolicy
from nametag.core.font import (
    FONT_HEIGHT,
    GLYPHS,
    SMALL_CAPS_SCALE,
    lookup_glyph,
    supported_characters,
    text_to_polylines,
)
from nametag.exceptions import UnknownGlyphError


class TestGlyphs:
    """Tests for glyph coverage and lookup."""

    @pytest.mark.parametrize("character", list("ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789 .-"))
    def test_coverage(self, character: str) -> None:
        """Test letters, digits and common punctuation are present."""
        assert character in GLYPHS

    def test_strokes_stay_near_cap_box(self) -> None:
        """Test stroke points lie in the glyph box (with room for descenders)."""
        for character, glyph in GLYPHS.items():
            for stroke in glyph.strokes:
                assert len(stroke) >= 2, character
                for x, y in stroke:
                    assert -0.01 <= x <= glyph.width + 0.01, character
                    assert -0.2 <= y <= 1.1, character

    def test_lowercase_maps_to_small_caps(self) -> None:
        """Test lowercase letters reuse uppercase strokes at reduced scale."""
        glyph, scale = lookup_glyph("a")
        assert glyph is GLYPHS["A"]
        assert scale == SMALL_CAPS_SCALE

    def test_unknown_lookup(self) -> None:
        """Test characters outside the font are not found."""
        assert lookup_glyph("€") is None
        assert lookup_glyph("ß") is None

    def test_supported_characters(self) -> None:
        """Test the listing includes both cases and symbols."""
        characters = supported_characters()
        assert "A" in characters
        assert "a" in characters
        assert "7" in characters
        assert "€" not in characters


class TestTextToPolylines:
    """Tests for text_to_polylines."""

    def test_single_glyph(self) -> None:
        """Test a glyph is scaled to the font height."""
        polylines = text_to_polylines("I")
        assert len(polylines) == 1
        (bottom, top) = polylines[0]
        assert bottom.to_tuple() == (0.0, 0.0)
        assert top.to_tuple() == (0.0, FONT_HEIGHT)

    def test_cursor_advance(self) -> None:
        """Test the second glyph starts after the first glyph's advance."""
        polylines = text_to_polylines("AB")
        # A has 2 strokes; B starts with its stem at x = (0.7 + 0.3) * 21
        assert polylines[2][0].x == pytest.approx(21.0)

    def test_space_advances_cursor(self) -> None:
        """Test a space draws nothing but moves the pen."""
        polylines = text_to_polylines("A B")
        assert len(polylines) == len(text_to_polylines("AB"))
        assert polylines[2][0].x == pytest.approx(35.7)

    def test_lowercase_height(self) -> None:
        """Test small caps reach three quarters of the cap height."""
        polylines = text_to_polylines("a")
        top = max(p.y for polyline in polylines for p in polyline)
        assert top == pytest.approx(FONT_HEIGHT * SMALL_CAPS_SCALE)

    def test_empty_text(self) -> None:
        """Test empty text has no strokes."""
        assert text_to_polylines("") == []
        assert text_to_polylines("   ") == []

    def test_unknown_glyph_fails(self) -> None:
        """Test the default policy reports the character and its position."""
        with pytest.raises(UnknownGlyphError) as exc_info:
            text_to_polylines("A€B")
        assert exc_info.value.character == "€"
        assert exc_info.value.position == 1

    def test_unknown_glyph_skipped(self) -> None:
        """Test the skip policy drops the character without advancing."""
        skipped = text_to_polylines("A€B", UnknownGlyphPolicy.SKIP)
        assert skipped == text_to_polylines("AB")
