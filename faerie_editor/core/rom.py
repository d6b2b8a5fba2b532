"""
ROM Provider - The vanilla sprites of an unmodified game ROM image.

The game keeps the behavior of every regular sprite in six 201 entry tables,
one per behavior byte. Sprites above 0xC8 have no behavior and are listed
with the subtype the game treats them as.

ROM Layout (PC offsets, plus 0x200 when the image has a copier header):
    0x7FC0   internal title, 21 bytes
    0x3F26C  $1656 table
    0x3F335  $1662 table
    0x3F3FE  $166E table
    0x3F4C7  $167A table
    0x3F590  $1686 table
    0x3F659  $190F table
"""

import os
from typing import BinaryIO, Dict, List, Optional, Set

from ..formats import is_configuration, is_rom
from ..i18n import tr
from ..log import get_logger
from .behavior import BEHAVIOR_SIZE
from .errors import LoadingError, ProvisionError, SavingError
from .provider import ConfigurationProvider, Provider
from .sprite import Sprite, SpriteSubType, SpriteType

logger = get_logger("rom")

ROM_TITLE = b"SUPER MARIOWORLD     "
TITLE_OFFSET = 0x7FC0
COPIER_HEADER = 0x200

BEHAVIOR_TABLES = (0x3F26C, 0x3F335, 0x3F3FE, 0x3F4C7, 0x3F590, 0x3F659)

SPRITE_COUNT = 0x100
LAST_REGULAR = 0xC8
SHOOTERS = (0xC9, 0xCA)
LAST_GENERATOR = 0xD9
LAST_INITIALIZER = 0xE6


def subtype_for_index(index: int) -> SpriteSubType:
    """Get the subtype the game gives to a vanilla sprite number."""
    if index <= LAST_REGULAR:
        return SpriteSubType.REGULAR
    if index in SHOOTERS:
        return SpriteSubType.SHOOTER
    if index <= LAST_GENERATOR:
        return SpriteSubType.GENERATOR
    if index <= LAST_INITIALIZER:
        return SpriteSubType.INITIALIZER
    return SpriteSubType.SCROLLER


def _header_size(rom: BinaryIO) -> int:
    rom.seek(0, os.SEEK_END)
    return rom.tell() & COPIER_HEADER


def _read_title(rom: BinaryIO) -> bytes:
    rom.seek(TITLE_OFFSET + _header_size(rom))
    return rom.read(len(ROM_TITLE))


def _read_byte(rom: BinaryIO, pc: int) -> int:
    rom.seek(pc + _header_size(rom))
    data = rom.read(1)
    if not data:
        raise EOFError(f"Offset 0x{pc:X} is past the end of the ROM")
    return data[0]


def _write_byte(rom: BinaryIO, pc: int, value: int) -> None:
    rom.seek(pc + _header_size(rom))
    rom.write(bytes([value & 0xFF]))


class ROMProvider(Provider):
    """All 256 vanilla sprites of a ROM image. Sprites are read on first use."""

    def __init__(self, input_path: str):
        """
        Check that a file is the expected game.

        Raises:
            LoadingError: if the file is not a ROM image of the game or can't be read
        """
        super().__init__(input_path)
        self._index = 0
        self._sprites: Dict[int, Sprite] = {}
        self._modified: Set[int] = set()

        if not is_rom(input_path):
            raise LoadingError(f"Unknown ROM image type: {input_path}", "rom.type")

        try:
            with open(input_path, "rb") as rom:
                title = _read_title(rom)
        except OSError as exc:
            raise LoadingError("Error reading the ROM file.", "rom.read") from exc

        if title != ROM_TITLE:
            found = title.decode("ascii", errors="replace")
            raise LoadingError(f"Wrong ROM title: {found!r}", "rom.title", found=found)

        logger.info(f"Opened ROM: {input_path}")

    def get_available_sprites(self) -> List[str]:
        return [tr("provider.rom_sprite", index=i) for i in range(SPRITE_COUNT)]

    def load_sprite(self, index: int) -> None:
        if not 0 <= index < SPRITE_COUNT:
            raise ProvisionError(f"Index out of bounds: {index}.", "index", index=index)

        if index not in self._sprites:
            self._sprites[index] = self._read_sprite(index)

        self._index = index

    def _read_sprite(self, index: int) -> Sprite:
        sprite = Sprite()
        sprite.type = SpriteType.TWEAK
        sprite.subtype = subtype_for_index(index)
        sprite.acts_like = index

        if sprite.subtype == SpriteSubType.REGULAR:
            try:
                with open(self.input_path, "rb") as rom:
                    sprite.behavior.unpack([_read_byte(rom, table + index) for table in BEHAVIOR_TABLES])
            except (OSError, EOFError) as exc:
                logger.error(f"Can't read sprite {index:02X}: {exc}")
                raise ProvisionError("Error reading the file.", "rom.io") from exc

        logger.debug(f"Read sprite {index:02X} from ROM")
        return sprite

    def get_loaded_index(self) -> int:
        return self._index

    def get_current_sprite(self) -> Optional[Sprite]:
        return self._sprites.get(self._index)

    def start_modification(self) -> Sprite:
        self._modified.add(self._index)
        return self._sprites[self._index]

    def is_modified(self) -> bool:
        return bool(self._modified)

    def save(self, path: Optional[str] = None) -> Provider:
        path = path or self.input_path

        if is_configuration(path):
            sprite = self.get_current_sprite()
            self._modified.discard(self._index)

            provider = ConfigurationProvider(path)
            provider.set_sprite(sprite.copy())
            return provider.save(path)

        if os.path.abspath(path) != os.path.abspath(self.input_path):
            raise SavingError(f"Different target file: {path}", "rom.different")

        self._write_behavior(path)
        self._modified.clear()
        return self

    def _write_behavior(self, path: str) -> None:
        logger.info(f"Writing {len(self._modified)} sprite(s) to ROM: {path}")
        try:
            with open(path, "r+b") as rom:
                title = _read_title(rom)
                if title != ROM_TITLE:
                    found = title.decode("ascii", errors="replace")
                    raise SavingError(f"Wrong ROM title: {found!r}", "rom.title", found=found)

                for index in sorted(self._modified):
                    sprite = self._sprites[index]
                    if not sprite.has_behavior or sprite.acts_like > LAST_REGULAR:
                        continue

                    packed = sprite.behavior.pack()
                    for i in range(BEHAVIOR_SIZE):
                        _write_byte(rom, BEHAVIOR_TABLES[i] + sprite.acts_like, packed[i])
        except OSError as exc:
            logger.error(f"Can't write {path}: {exc}")
            raise SavingError("Error writing the file.", "rom.write") from exc
