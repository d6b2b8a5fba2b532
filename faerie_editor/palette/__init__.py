"""
Palette module - 15-bit hardware palette and its file formats.
"""

from .palette import Palette, PaletteFormat, rgb_to_snes, snes_to_rgb

__all__ = [
    "Palette",
    "PaletteFormat",
    "rgb_to_snes",
    "snes_to_rgb",
]
