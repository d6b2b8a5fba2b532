"""
Core module - Sprite model, behavior record and errors.

Providers live in faerie_editor.core.provider and faerie_editor.core.rom and
are not imported here, since they depend on the codecs in faerie_editor.formats.
"""

from .behavior import BEHAVIOR_FIELDS, InvalidLength, SpriteBehavior
from .bounds import Bounds
from .display import DisplayData, Label, SpriteTile, TileList
from .errors import (
    FaerieError, FaerieWarning, ParseError, Severity, StructuralParseError, ValueParseError,
)
from .sprite import Sprite, SpriteSubType, SpriteType, StatusHandling

__all__ = [
    "BEHAVIOR_FIELDS",
    "InvalidLength",
    "SpriteBehavior",
    "Bounds",
    "DisplayData",
    "Label",
    "SpriteTile",
    "TileList",
    "FaerieError",
    "FaerieWarning",
    "ParseError",
    "Severity",
    "StructuralParseError",
    "ValueParseError",
    "Sprite",
    "SpriteSubType",
    "SpriteType",
    "StatusHandling",
]
