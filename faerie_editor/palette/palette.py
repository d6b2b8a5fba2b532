"""
Palette - The 256 entry, 15-bit color table of the target console.

A 15-bit color packs three 5-bit channels as R | G << 5 | B << 10. Three
palette files are understood:

    .pal  768 bytes, 8-bit R, G, B per color
    .tpl  magic 54 50 4C 02, then 256 little-endian 15-bit colors
    .mw3  256 little-endian 15-bit colors

Loads decode into a scratch table first; the palette is only replaced once
the whole file has been read, so a bad file leaves the previous colors intact.
"""

import struct
from enum import Enum
from typing import Callable, List, Sequence, Tuple

from PIL import ImagePalette

from ..core.bounds import Bounds
from ..core.errors import BadMagic, PaletteFormatError, PaletteIndexError, TooShort
from ..formats.base import get_extension

COLOR_COUNT = 256
SNES_MASK = 0x7FFF

PAL_SIZE = COLOR_COUNT * 3
TPL_MAGIC = b"TPL\x02"
MW3_SIZE = COLOR_COUNT * 2
TPL_SIZE = len(TPL_MAGIC) + MW3_SIZE

INDEX_BOUNDS = Bounds(0, COLOR_COUNT - 1)

RGB = Tuple[int, int, int]
Listener = Callable[["Palette"], None]


class PaletteFormat(Enum):
    """Palette file formats, valued by their file extension."""
    PAL = "pal"
    TPL = "tpl"
    MW3 = "mw3"

    @classmethod
    def from_path(cls, path: str) -> "PaletteFormat":
        """
        Pick the format from a file extension.

        Raises:
            PaletteFormatError: if the extension is not a palette extension
        """
        try:
            return cls(get_extension(path))
        except ValueError as exc:
            raise PaletteFormatError(f"Not a palette file: {path}", "type") from exc


def snes_to_rgb(color: int) -> RGB:
    """Convert a 15-bit color to 8-bit RGB channels."""
    return (
        (color & 0x1F) << 3,
        ((color >> 5) & 0x1F) << 3,
        ((color >> 10) & 0x1F) << 3,
    )


def rgb_to_snes(red: int, green: int, blue: int) -> int:
    """Convert 8-bit RGB channels to a 15-bit color. The low three bits of each channel are lost."""
    return ((red >> 3) & 0x1F) | (((green >> 3) & 0x1F) << 5) | (((blue >> 3) & 0x1F) << 10)


def _read_snes_colors(data: bytes, offset: int) -> List[int]:
    return [c & SNES_MASK for c in struct.unpack_from(f"<{COLOR_COUNT}H", data, offset)]


class Palette:
    """256 15-bit colors with change listeners."""

    def __init__(self):
        self._colors = [0] * COLOR_COUNT
        self._listeners: List[Listener] = []
        self._notifying = False

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: Listener) -> None:
        """Register a callback run after every successful change, in registration order."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        self._notifying = True
        try:
            for listener in list(self._listeners):
                listener(self)
        finally:
            self._notifying = False

    def _check_mutable(self) -> None:
        if self._notifying:
            raise RuntimeError("The palette can't be changed from inside a listener")

    @staticmethod
    def _check_index(index: int) -> None:
        if not INDEX_BOUNDS.contains(index):
            raise PaletteIndexError(index)

    # ------------------------------------------------------------------
    # Colors
    # ------------------------------------------------------------------

    def get_snes_color(self, index: int) -> int:
        self._check_index(index)
        return self._colors[index]

    def get_color(self, index: int) -> RGB:
        return snes_to_rgb(self.get_snes_color(index))

    def set_snes_color(self, index: int, color: int) -> "Palette":
        self._check_mutable()
        self._check_index(index)
        self._colors[index] = color & SNES_MASK
        self._notify()
        return self

    def set_color(self, index: int, rgb: RGB) -> "Palette":
        return self.set_snes_color(index, rgb_to_snes(*rgb))

    def snes_colors(self) -> List[int]:
        return list(self._colors)

    def rgb_triples(self) -> List[RGB]:
        return [snes_to_rgb(c) for c in self._colors]

    def to_image_palette(self) -> ImagePalette.ImagePalette:
        """Hand the colors over to Pillow, e.g. for Image.putpalette()."""
        flat = bytes(channel for rgb in self.rgb_triples() for channel in rgb)
        return ImagePalette.ImagePalette("RGB", flat)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _replace(self, colors: Sequence[int]) -> "Palette":
        self._check_mutable()
        self._colors = list(colors)
        self._notify()
        return self

    def load_pal(self, data: bytes) -> "Palette":
        """
        Load 256 8-bit RGB triples.

        Raises:
            TooShort: if there are fewer than 768 bytes
        """
        if len(data) < PAL_SIZE:
            raise TooShort(PAL_SIZE, len(data))

        return self._replace([
            rgb_to_snes(data[i * 3], data[i * 3 + 1], data[i * 3 + 2])
            for i in range(COLOR_COUNT)
        ])

    def load_tpl(self, data: bytes) -> "Palette":
        """
        Load a TPL file: magic followed by 256 little-endian 15-bit colors.

        Raises:
            TooShort: if there are fewer than 516 bytes
            BadMagic: if the file does not start with 54 50 4C 02
        """
        if len(data) < TPL_SIZE:
            raise TooShort(TPL_SIZE, len(data))

        if data[:len(TPL_MAGIC)] != TPL_MAGIC:
            raise BadMagic(bytes(data[:len(TPL_MAGIC)]))

        return self._replace(_read_snes_colors(data, len(TPL_MAGIC)))

    def load_mw3(self, data: bytes) -> "Palette":
        """
        Load 256 little-endian 15-bit colors.

        Raises:
            TooShort: if there are fewer than 512 bytes
        """
        if len(data) < MW3_SIZE:
            raise TooShort(MW3_SIZE, len(data))

        return self._replace(_read_snes_colors(data, 0))

    def load(self, data: bytes, fmt: PaletteFormat) -> "Palette":
        if fmt is PaletteFormat.PAL:
            return self.load_pal(data)
        if fmt is PaletteFormat.TPL:
            return self.load_tpl(data)
        if fmt is PaletteFormat.MW3:
            return self.load_mw3(data)
        raise ValueError(f"Unknown palette format: {fmt!r}")

    def load_file(self, path: str) -> "Palette":
        """Read a palette file, picking the format from its extension."""
        fmt = PaletteFormat.from_path(path)
        with open(path, "rb") as f:
            data = f.read()
        return self.load(data, fmt)
