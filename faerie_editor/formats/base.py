"""
Shared pieces of the configuration codecs.

A codec turns text into a Sprite and a Sprite back into text. Codecs never
touch the file system and never log: reading and writing files is left to the
providers.
"""

import os
from dataclasses import dataclass, field
from typing import List

from ..core.errors import FaerieWarning, StructuralParseError
from ..core.sprite import Sprite

ENCODING = "utf-8"

TYPE_CFG = "cfg"
TYPE_JSON = "json"
TYPE_SMC_ROM = "smc"
TYPE_SFC_ROM = "sfc"
TYPE_RGB_PALETTE = "pal"
TYPE_TPL_PALETTE = "tpl"
TYPE_SNES_PALETTE = "mw3"

CONFIGURATION_TYPES = (TYPE_CFG, TYPE_JSON)
ROM_TYPES = (TYPE_SMC_ROM, TYPE_SFC_ROM)
PALETTE_TYPES = (TYPE_RGB_PALETTE, TYPE_TPL_PALETTE, TYPE_SNES_PALETTE)


def get_extension(path: str) -> str:
    """Get the lowercase extension of a path without the dot, or "" if there is none."""
    name = os.path.basename(path)
    dot = name.rfind(".")
    if 0 < dot < len(name) - 1:
        return name[dot + 1:].lower()
    return ""


def is_configuration(path: str) -> bool:
    return get_extension(path) in CONFIGURATION_TYPES


def is_rom(path: str) -> bool:
    return get_extension(path) in ROM_TYPES


def is_palette(path: str) -> bool:
    return get_extension(path) in PALETTE_TYPES


@dataclass
class ParseResult:
    """A parsed sprite and the non-fatal problems found on the way."""
    sprite: Sprite
    warnings: List[FaerieWarning] = field(default_factory=list)
    is_legacy: bool = False


class ConfigCodec:
    """Parse/emit pair for one configuration format."""

    extension = ""

    def parse(self, text: str) -> ParseResult:
        raise NotImplementedError

    def emit(self, sprite: Sprite) -> str:
        raise NotImplementedError

    def parse_bytes(self, data: bytes) -> ParseResult:
        """Decode UTF-8 data (an optional BOM is skipped) and parse it."""
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise StructuralParseError(
                "The file is not valid UTF-8 text.", "encoding", detail=str(exc)
            ) from exc
        return self.parse(text)

    def emit_bytes(self, sprite: Sprite) -> bytes:
        return self.emit(sprite).encode(ENCODING)
