"""
Formats module - Configuration codecs and file type helpers.
"""

from typing import Optional

from .base import (
    ConfigCodec, ParseResult, get_extension, is_configuration, is_palette, is_rom,
)
from .cfg import CFGCodec
from .json_format import JSONCodec

CODECS = {
    CFGCodec.extension: CFGCodec(),
    JSONCodec.extension: JSONCodec(),
}


def codec_for_path(path: str) -> Optional[ConfigCodec]:
    """Get the codec matching a file's extension, or None."""
    return CODECS.get(get_extension(path))


__all__ = [
    "ConfigCodec",
    "ParseResult",
    "CFGCodec",
    "JSONCodec",
    "CODECS",
    "codec_for_path",
    "get_extension",
    "is_configuration",
    "is_palette",
    "is_rom",
]
