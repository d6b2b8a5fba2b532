"""
Sprite - The in-memory descriptor of one sprite's configuration.

Which optional fields a sprite actually uses depends on its subtype. The
subtype catalog below is consulted by every accessor: a field the subtype
does not support reads back as the value the insertion tool writes for an
unused field, while the raw value is kept so that switching the subtype back
restores it.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from .behavior import SpriteBehavior
from .bounds import Bounds
from .display import DisplayData

DEFAULT_ACTS_LIKE = 0x36

UNUSED_PROPERTY_BYTE = 0xFF
UNUSED_SECOND_PROPERTY_BYTE = 0x3F
UNUSED_UNIQUE_BYTE = 0xFF


class SpriteType(IntEnum):
    """How the sprite is inserted."""
    TWEAK = 0
    CUSTOM = 1

    @classmethod
    def from_integer(cls, value: int) -> "SpriteType":
        return cls.TWEAK if value == 0 else cls.CUSTOM


class StatusHandling(IntEnum):
    """How the sprite handles statuses, stored in the top two bits of the second property byte."""
    HANDLE_STUNNED = 0
    HANDLE_ALL = 1
    OVERRIDE_ALL = 2

    @classmethod
    def from_bits(cls, bits: int) -> "StatusHandling":
        bits &= 0b11
        if bits == 0:
            return cls.HANDLE_STUNNED
        if bits == 1:
            return cls.HANDLE_ALL
        return cls.OVERRIDE_ALL

    @property
    def bits(self) -> int:
        return int(self)


@dataclass(frozen=True)
class SubtypeRules:
    """Which optional fields a subtype supports."""
    has_behavior: bool
    has_property_bytes: bool
    has_unique_byte: bool
    max_extra_bytes: int
    uses_first_asm: bool
    uses_second_asm: bool


class SpriteSubType(IntEnum):
    """Kind of custom sprite. Capabilities come from SUBTYPE_CATALOG."""
    VANILLA = 0
    REGULAR = 1
    SHOOTER = 2
    GENERATOR = 3
    INITIALIZER = 4
    SCROLLER = 5

    @classmethod
    def from_integer(cls, value: int) -> "SpriteSubType":
        """Map an integer to a subtype. Unknown values become VANILLA."""
        try:
            return cls(value)
        except ValueError:
            return cls.VANILLA

    @property
    def rules(self) -> SubtypeRules:
        return SUBTYPE_CATALOG[self]

    @property
    def has_behavior(self) -> bool:
        return self.rules.has_behavior

    @property
    def has_property_bytes(self) -> bool:
        return self.rules.has_property_bytes

    @property
    def has_unique_byte(self) -> bool:
        return self.rules.has_unique_byte

    @property
    def max_extra_bytes(self) -> int:
        return self.rules.max_extra_bytes

    @property
    def extra_byte_bounds(self) -> Bounds:
        return Bounds(0, self.rules.max_extra_bytes)

    @property
    def uses_first_asm(self) -> bool:
        return self.rules.uses_first_asm

    @property
    def uses_second_asm(self) -> bool:
        return self.rules.uses_second_asm

    @property
    def readable(self) -> str:
        return self.name.capitalize()


SUBTYPE_CATALOG = {
    SpriteSubType.VANILLA: SubtypeRules(True, False, False, 0, False, False),
    SpriteSubType.REGULAR: SubtypeRules(True, True, True, 4, True, False),
    SpriteSubType.SHOOTER: SubtypeRules(False, False, True, 1, True, False),
    SpriteSubType.GENERATOR: SubtypeRules(False, False, True, 1, True, False),
    SpriteSubType.INITIALIZER: SubtypeRules(False, False, True, 251, True, False),
    SpriteSubType.SCROLLER: SubtypeRules(False, False, True, 1, True, True),
}


class Sprite:
    """Full configuration of one sprite."""

    def __init__(self):
        self.type = SpriteType.CUSTOM
        self.subtype = SpriteSubType.REGULAR
        self._acts_like = DEFAULT_ACTS_LIKE
        self.behavior = SpriteBehavior()
        self._first_property_byte = 0
        self._second_property_byte = 0
        self._status_handling = StatusHandling.HANDLE_STUNNED
        self._unique_byte = 0
        self._extra_bytes = 0
        self._first_asm_file: Optional[str] = None
        self._second_asm_file: Optional[str] = None
        self.display_data: Optional[DisplayData] = None

    # ------------------------------------------------------------------
    # Always available
    # ------------------------------------------------------------------

    @property
    def acts_like(self) -> int:
        return self._acts_like

    @acts_like.setter
    def acts_like(self, value: int):
        self._acts_like = value & 0xFF

    @property
    def has_behavior(self) -> bool:
        return self.subtype.has_behavior

    # ------------------------------------------------------------------
    # Subtype dependent
    # ------------------------------------------------------------------

    @property
    def first_property_byte(self) -> int:
        if not self.subtype.has_property_bytes:
            return UNUSED_PROPERTY_BYTE
        return self._first_property_byte

    @first_property_byte.setter
    def first_property_byte(self, value: int):
        self._first_property_byte = value & 0xFF

    @property
    def second_property_byte(self) -> int:
        if not self.subtype.has_property_bytes:
            return UNUSED_SECOND_PROPERTY_BYTE
        return self._second_property_byte

    @second_property_byte.setter
    def second_property_byte(self, value: int):
        self._second_property_byte = value & 0x3F

    @property
    def status_handling(self) -> StatusHandling:
        if not self.subtype.has_property_bytes:
            return StatusHandling.OVERRIDE_ALL
        return self._status_handling

    @status_handling.setter
    def status_handling(self, value: StatusHandling):
        self._status_handling = value

    @property
    def packed_second_property_byte(self) -> int:
        """Second property byte with the status handling in its top two bits."""
        return self.second_property_byte | (self.status_handling.bits << 6)

    def set_packed_second_property_byte(self, value: int) -> "Sprite":
        self.second_property_byte = value
        self.status_handling = StatusHandling.from_bits(value >> 6)
        return self

    @property
    def unique_byte(self) -> int:
        if not self.subtype.has_unique_byte:
            return UNUSED_UNIQUE_BYTE
        return self._unique_byte

    @unique_byte.setter
    def unique_byte(self, value: int):
        self._unique_byte = value & 0xFF

    @property
    def extra_bytes(self) -> int:
        return self.subtype.extra_byte_bounds.clamp(self._extra_bytes)

    @extra_bytes.setter
    def extra_bytes(self, value: int):
        self._extra_bytes = self.subtype.extra_byte_bounds.clamp(value)

    @property
    def first_asm_file(self) -> Optional[str]:
        return self._first_asm_file if self.subtype.uses_first_asm else None

    @first_asm_file.setter
    def first_asm_file(self, value: Optional[str]):
        self._first_asm_file = value

    @property
    def second_asm_file(self) -> Optional[str]:
        return self._second_asm_file if self.subtype.uses_second_asm else None

    @second_asm_file.setter
    def second_asm_file(self, value: Optional[str]):
        self._second_asm_file = value

    # ------------------------------------------------------------------

    def verify(self) -> bool:
        """
        Check that the sprite can be inserted.

        Tweaks are always complete. Custom sprites need every ASM file their
        subtype uses.
        """
        if self.type == SpriteType.TWEAK:
            return True

        if self.subtype.uses_first_asm and not self._first_asm_file:
            return False

        return not self.subtype.uses_second_asm or bool(self._second_asm_file)

    def copy(self) -> "Sprite":
        sprite = Sprite()
        sprite.__dict__.update(self.__dict__)
        sprite.behavior = self.behavior.copy()
        sprite.display_data = self.display_data.copy() if self.display_data else None
        return sprite

    def _key(self):
        return (
            self.type, self.subtype, self.acts_like, self.behavior,
            self.first_property_byte, self.second_property_byte, self.status_handling,
            self.unique_byte, self.extra_bytes, self.first_asm_file, self.second_asm_file,
            self.display_data,
        )

    def __eq__(self, other):
        if not isinstance(other, Sprite):
            return NotImplemented
        return self._key() == other._key()

    __hash__ = None

    def __repr__(self):
        return (
            f"Sprite(type={self.type.name}, subtype={self.subtype.name}, "
            f"acts_like=0x{self.acts_like:02X})"
        )
