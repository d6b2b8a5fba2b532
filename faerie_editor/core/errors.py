"""
Errors and warnings raised or returned by the codecs and providers.

Every error carries a resource and a subkey which together form the i18n key
of its human readable message, plus the arguments used to format it. Nothing
here decides how a message is presented.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from ..i18n import tr


class Severity(Enum):
    """How serious a reported problem is."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"


class FaerieError(Exception):
    """Base class of all localizable errors."""

    resource = "error"
    severity = Severity.ERROR

    def __init__(self, message: str, subkey: str, /, **args: Any):
        super().__init__(message)
        self.subkey = subkey
        self.args_map: Dict[str, Any] = args

    @property
    def key(self) -> str:
        return f"{self.resource}.{self.subkey}"

    def localized_message(self) -> str:
        return tr(self.key, **self.args_map)


@dataclass(frozen=True)
class FaerieWarning:
    """Non-fatal problem returned alongside a successful result."""
    resource: str
    subkey: str
    args: Dict[str, Any] = field(default_factory=dict)

    severity = Severity.WARNING

    @property
    def key(self) -> str:
        return f"{self.resource}.{self.subkey}"

    def localized_message(self) -> str:
        return tr(self.key, **self.args)


# ============================================================================
# Configuration parsing
# ============================================================================

class ParseError(FaerieError):
    """A configuration file could not be parsed."""

    resource = "parse"

    def __init__(self, message: str, subkey: str, line: Optional[int] = None, /, **args: Any):
        if line is not None:
            args.setdefault("line", line)
            message = f"{message} (line {line})"
        super().__init__(message, subkey, **args)
        self.line = line


class StructuralParseError(ParseError):
    """The document has the wrong shape: too few lines, bad sections, invalid JSON."""


class ValueParseError(ParseError):
    """A single field could not be read in its declared radix."""


# ============================================================================
# Palette
# ============================================================================

class PaletteFormatError(FaerieError):
    """A palette file does not match its binary layout."""

    resource = "palette"


class TooShort(PaletteFormatError):
    def __init__(self, expected: int, found: int):
        super().__init__(
            f"The palette file is too short: expected {expected} bytes, got {found}",
            "too_short", expected=expected, found=found
        )


class BadMagic(PaletteFormatError):
    def __init__(self, found: bytes):
        super().__init__(
            f"The palette file has the wrong magic: {found.hex(' ').upper()}",
            "bad_magic", found=found.hex(" ").upper()
        )


class PaletteIndexError(FaerieError, IndexError):
    """A palette index outside of [0, 255]."""

    resource = "palette"

    def __init__(self, index: int):
        super().__init__(f"Palette index out of range: {index}", "index", index=index)
        self.index = index


# ============================================================================
# Providers
# ============================================================================

class ProviderError(FaerieError):
    """Base class of the errors raised by providers."""

    resource = "file"
    prefix = ""

    @property
    def key(self) -> str:
        return f"{self.resource}.{self.prefix}.{self.subkey}"


class LoadingError(ProviderError):
    """A provider could not be created for a file."""
    prefix = "load"


class ProvisionError(ProviderError):
    """A sprite could not be provided."""
    prefix = "provision"


class SavingError(ProviderError):
    """A sprite could not be saved."""
    prefix = "save"
