"""Exception hierarchy for Nametag."""


class NameTagError(Exception):
    """Base exception for all Nametag errors."""

    pass


class GeometryError(NameTagError):
    """Errors in geometric construction."""

    pass


class DegeneratePolygonError(GeometryError):
    """Outline with too few distinct points, zero area or a crossing boundary."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Degenerate polygon: {reason}")


class NonManifoldResultError(GeometryError):
    """A solid is not closed after a boolean operation or extrusion."""

    def __init__(self, open_edges: int, reason: str = "") -> None:
        self.open_edges = open_edges
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Solid is not watertight: {open_edges} unmatched edges{detail}")


class GearError(NameTagError):
    """Errors related to gear generation."""

    pass


class InvalidGearSpecError(GearError):
    """Gear parameters that cannot produce a valid gear."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid gear specification: {reason}")


class TextError(NameTagError):
    """Errors related to text layout."""

    pass


class UnknownGlyphError(TextError):
    """Character not present in the stroke font."""

    def __init__(self, character: str, position: int) -> None:
        self.character = character
        self.position = position
        super().__init__(
            f"No glyph for character {character!r} at position {position}"
        )


class AssemblyError(NameTagError):
    """A step of the tag assembly failed."""

    def __init__(self, step: str, reason: str) -> None:
        self.step = step
        self.reason = reason
        super().__init__(f"Tag assembly failed at '{step}': {reason}")
