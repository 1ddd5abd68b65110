"""Tests for stroke ribbons and measured text solids."""

import pytest

from nametag.config import UnknownGlyphPolicy
from nametag.core.font import supported_characters
from nametag.core.text import (
    TEXT_PADDING,
    TEXT_X_OFFSET,
    TEXT_Y_OFFSET,
    measure_text,
    rectangular_extrude,
    stroke_to_ribbon,
)
from nametag.domain import Vector2D
from nametag.exceptions import DegeneratePolygonError, UnknownGlyphError


def path(*points: tuple[float, float]) -> list[Vector2D]:
    """Polyline from coordinate pairs."""
    return [Vector2D(x, y) for x, y in points]


class TestStrokeToRibbon:
    """Tests for stroke_to_ribbon."""

    def test_straight_stroke(self) -> None:
        """Test a straight stroke becomes a flat-ended rectangle."""
        ribbon = stroke_to_ribbon(path((0, 0), (10, 0)), 2.0)
        assert ribbon.area() == pytest.approx(20.0)
        lo, hi = ribbon.bounds()
        assert (lo.x, lo.y, hi.x, hi.y) == pytest.approx((0.0, -1.0, 10.0, 1.0))

    def test_right_angle_is_mitred(self) -> None:
        """Test a 90 degree corner keeps its square outer corner."""
        ribbon = stroke_to_ribbon(path((0, 0), (10, 0), (10, 10)), 2.0)
        assert ribbon.area() == pytest.approx(40.0)
        lo, hi = ribbon.bounds()
        assert (lo.y, hi.x) == pytest.approx((-1.0, 11.0))

    def test_closed_stroke_has_hole(self) -> None:
        """Test a stroke that returns to its start encloses a hole."""
        ribbon = stroke_to_ribbon(path((0, 0), (10, 0), (10, 10), (0, 10), (0, 0)), 2.0)
        assert len(ribbon.regions) == 1
        assert len(ribbon.regions[0].holes) == 1

    def test_zero_width(self) -> None:
        """Test zero-width ribbons are rejected."""
        with pytest.raises(DegeneratePolygonError):
            stroke_to_ribbon(path((0, 0), (10, 0)), 0.0)

    def test_single_point(self) -> None:
        """Test strokes without length are rejected."""
        with pytest.raises(DegeneratePolygonError):
            stroke_to_ribbon(path((1, 1), (1, 1)), 2.0)

    def test_rectangular_extrude(self) -> None:
        """Test the extruded ribbon volume."""
        solid = rectangular_extrude(path((0, 0), (10, 0)), 2.0, 3.0)
        assert solid.volume() == pytest.approx(60.0)
        assert solid.is_manifold()


class TestMeasureText:
    """Tests for measure_text."""

    def test_single_stem(self) -> None:
        """Test the length and placement of a one-stroke glyph."""
        measured = measure_text("I", font_weight=5, font_width=100, text_thickness=2)
        # stem 5 units wide scaled by 0.33
        assert measured.length == pytest.approx((5 * 0.33 + TEXT_PADDING) / 2)

        lo, hi = measured.solid.bounds()
        assert lo.x == pytest.approx(-measured.length + TEXT_X_OFFSET - 2.5 * 0.33)
        assert hi.x - lo.x == pytest.approx(5 * 0.33)
        assert lo.y == pytest.approx(TEXT_Y_OFFSET)
        assert hi.y == pytest.approx(TEXT_Y_OFFSET + 21 * 0.33)
        assert lo.z == pytest.approx(0.0)
        assert hi.z == pytest.approx(1.0)
        assert measured.solid.is_manifold()

    def test_font_width_stretches(self) -> None:
        """Test font width scales only the horizontal extent."""
        measured = measure_text("I", font_weight=5, font_width=200, text_thickness=2)
        assert measured.length == pytest.approx(10.15)
        lo, hi = measured.solid.bounds()
        assert hi.y - lo.y == pytest.approx(21 * 0.33)

    def test_longer_text_is_longer(self) -> None:
        """Test the body grows with the text."""
        short = measure_text("JS", 5, 100, 2)
        long = measure_text("JSCAD", 5, 100, 2)
        assert long.length > short.length
        assert long.length == pytest.approx(25.0, abs=1.0)

    @pytest.mark.parametrize("text", ["", "   "])
    def test_blank_text(self, text: str) -> None:
        """Test text without glyphs gives an empty solid and minimal length."""
        measured = measure_text(text, 5, 100, 2)
        assert measured.solid.is_empty
        assert measured.length == pytest.approx(8.5)

    def test_unknown_glyph(self) -> None:
        """Test the unknown glyph policy is forwarded."""
        with pytest.raises(UnknownGlyphError):
            measure_text("A€", 5, 100, 2)
        skipped = measure_text("A€", 5, 100, 2, UnknownGlyphPolicy.SKIP)
        plain = measure_text("A", 5, 100, 2)
        assert skipped.length == pytest.approx(plain.length)


class TestGlyphSolids:
    """Tests for the extruded solid of every glyph the font offers."""

    @pytest.mark.parametrize("weight", [1, 2, 5, 10])
    @pytest.mark.parametrize("character", sorted(set(supported_characters()) - {" "}))
    def test_glyph_is_closed(self, character: str, weight: float) -> None:
        """Test each glyph extrudes to a watertight solid at several weights."""
        measured = measure_text(character, font_weight=weight, font_width=100, text_thickness=2)
        assert not measured.solid.is_empty
        assert measured.solid.is_manifold()

    @pytest.mark.parametrize("text", ["K", "X", "k", "x", "KX", "Kix", "Max"])
    def test_crossing_strokes(self, text: str) -> None:
        """Test glyphs whose strokes cross or meet mid-stroke stay closed."""
        measured = measure_text(text, font_weight=5, font_width=100, text_thickness=2)
        assert measured.solid.is_manifold()
        assert measured.solid.volume() > 0
