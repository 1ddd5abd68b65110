"""Colour conversion between hex strings and normalized RGB triples."""

import re

from nametag.domain import RGB

HEX_COLOR = re.compile(r"#[0-9a-fA-F]{6}")


def hex_to_rgb(hex_color: str) -> RGB:
    """Convert '#rrggbb' to an (r, g, b) triple in [0, 1].

    Raises:
        ValueError: If the string is not of the form '#rrggbb'
    """
    if not HEX_COLOR.fullmatch(hex_color):
        raise ValueError(f"expected '#rrggbb', got {hex_color!r}")
    return (
        int(hex_color[1:3], 16) / 255,
        int(hex_color[3:5], 16) / 255,
        int(hex_color[5:7], 16) / 255,
    )


def rgb_to_hex(color: RGB) -> str:
    """Convert an (r, g, b) triple in [0, 1] to '#rrggbb'."""
    r, g, b = (round(c * 255) for c in color)
    return f"#{r:02x}{g:02x}{b:02x}"
