"""Nametag - Procedurally generate 3D-printable name tags.

Nametag builds a watertight solid for a name tag: a rounded body outline with
raised text on the front, a mirrored label engraved into the back, a lanyard
slot and a decorative involute gear.

Example:
    $ nametag --text ADA

This builds the tag for "ADA" and prints a summary of the resulting solid.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
