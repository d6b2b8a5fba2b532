"""
Shared fixtures.
"""
import pytest

from faerie_editor.core.rom import BEHAVIOR_TABLES, ROM_TITLE, TITLE_OFFSET
from faerie_editor.i18n import DEFAULT_LANGUAGE, set_language

ROM_SIZE = 0x40000
HEADER_SIZE = 0x200


@pytest.fixture(autouse=True)
def english():
    """Every test starts and ends in English."""
    set_language(DEFAULT_LANGUAGE)
    yield
    set_language(DEFAULT_LANGUAGE)


def build_rom(behaviors=None, headered=False, title=ROM_TITLE, size=ROM_SIZE):
    """
    Build a blank ROM image with the game title.

    Args:
        behaviors: {sprite index: six behavior bytes}
        headered: prepend a 512 byte copier header
    """
    rom = bytearray(size)
    rom[TITLE_OFFSET:TITLE_OFFSET + len(title)] = title

    for index, packed in (behaviors or {}).items():
        for table, value in zip(BEHAVIOR_TABLES, packed):
            rom[table + index] = value

    if headered:
        return bytes(HEADER_SIZE) + bytes(rom)
    return bytes(rom)


def read_behavior(data, index, headered=False):
    """Read back the six behavior bytes of a sprite from a ROM image."""
    offset = HEADER_SIZE if headered else 0
    return bytes(data[offset + table + index] for table in BEHAVIOR_TABLES)


@pytest.fixture
def rom_file(tmp_path):
    """A ROM image where sprite 05 has some behavior set."""
    path = tmp_path / "game.smc"
    path.write_bytes(build_rom({0x05: bytes([0x15, 0x03, 0x0A, 0x00, 0x81, 0x40])}))
    return path
