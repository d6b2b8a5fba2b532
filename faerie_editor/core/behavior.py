"""
Sprite Behavior - The six packed bytes controlling engine-side sprite behavior.

Every bit of the six bytes belongs to a named field. Most fields are single
flags; object clipping, sprite clipping and palette are small integers. The
layout is described once in BEHAVIOR_FIELDS and both pack() and unpack() are
driven by it, so pack(unpack(b)) == b for any six bytes.
"""

from dataclasses import dataclass, fields
from typing import List, Sequence, Union

BEHAVIOR_SIZE = 6


class InvalidLength(ValueError):
    """Raised when a packed behavior record does not have exactly six values."""


@dataclass(frozen=True)
class BehaviorField:
    """Position of one field inside the packed record."""
    name: str
    byte: int  # 0-based byte index
    shift: int  # lowest bit of the field
    width: int = 1  # bit count

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    @property
    def is_flag(self) -> bool:
        return self.width == 1


BEHAVIOR_FIELDS = (
    # Byte 1
    BehaviorField("object_clipping", 0, 0, 4),
    BehaviorField("can_be_jumped_on", 0, 4),
    BehaviorField("dies_when_jumped_on", 0, 5),
    BehaviorField("hop_in_shells", 0, 6),
    BehaviorField("disappear_in_smoke", 0, 7),
    # Byte 2
    BehaviorField("sprite_clipping", 1, 0, 6),
    BehaviorField("use_shell_as_death_frame", 1, 6),
    BehaviorField("falls_straight_down_when_killed", 1, 7),
    # Byte 3
    BehaviorField("use_second_graphics_page", 2, 0),
    BehaviorField("palette", 2, 1, 3),
    BehaviorField("disable_fireball_killing", 2, 4),
    BehaviorField("disable_cape_killing", 2, 5),
    BehaviorField("disable_water_splash", 2, 6),
    BehaviorField("disable_secondary_interaction", 2, 7),
    # Byte 4
    BehaviorField("process_if_dead", 3, 0),
    BehaviorField("invincible_to_player", 3, 1),
    BehaviorField("process_while_offscreen", 3, 2),
    BehaviorField("skip_shell_if_stunned", 3, 3),
    BehaviorField("disable_kicking", 3, 4),
    BehaviorField("process_interaction_every_frame", 3, 5),
    BehaviorField("is_powerup", 3, 6),
    BehaviorField("disable_default_interaction", 3, 7),
    # Byte 5
    BehaviorField("inedible", 4, 0),
    BehaviorField("stay_in_mouth", 4, 1),
    BehaviorField("weird_ground_behavior", 4, 2),
    BehaviorField("disable_sprite_interaction", 4, 3),
    BehaviorField("preserve_direction", 4, 4),
    BehaviorField("disappear_when_goal_passed", 4, 5),
    BehaviorField("spawns_new_sprite", 4, 6),
    BehaviorField("disable_object_interaction", 4, 7),
    # Byte 6
    BehaviorField("platform_passable_from_below", 5, 0),
    BehaviorField("ignore_goal", 5, 1),
    BehaviorField("disable_slide_kill", 5, 2),
    BehaviorField("needs_five_fireballs", 5, 3),
    BehaviorField("can_be_jumped_on_from_below", 5, 4),
    BehaviorField("tall_death_frame", 5, 5),
    BehaviorField("immune_to_silver_pow", 5, 6),
    BehaviorField("escape_walls", 5, 7),
)

FIELDS_BY_NAME = {f.name: f for f in BEHAVIOR_FIELDS}


def fields_in_byte(index: int) -> List[BehaviorField]:
    """Get the fields stored in one byte, lowest bit first."""
    return [f for f in BEHAVIOR_FIELDS if f.byte == index]


@dataclass
class SpriteBehavior:
    """Unpacked behavior record."""
    # Byte 1
    object_clipping: int = 0
    can_be_jumped_on: bool = False
    dies_when_jumped_on: bool = False
    hop_in_shells: bool = False
    disappear_in_smoke: bool = False
    # Byte 2
    sprite_clipping: int = 0
    use_shell_as_death_frame: bool = False
    falls_straight_down_when_killed: bool = False
    # Byte 3
    use_second_graphics_page: bool = False
    palette: int = 0
    disable_fireball_killing: bool = False
    disable_cape_killing: bool = False
    disable_water_splash: bool = False
    disable_secondary_interaction: bool = False
    # Byte 4
    process_if_dead: bool = False
    invincible_to_player: bool = False
    process_while_offscreen: bool = False
    skip_shell_if_stunned: bool = False
    disable_kicking: bool = False
    process_interaction_every_frame: bool = False
    is_powerup: bool = False
    disable_default_interaction: bool = False
    # Byte 5
    inedible: bool = False
    stay_in_mouth: bool = False
    weird_ground_behavior: bool = False
    disable_sprite_interaction: bool = False
    preserve_direction: bool = False
    disappear_when_goal_passed: bool = False
    spawns_new_sprite: bool = False
    disable_object_interaction: bool = False
    # Byte 6
    platform_passable_from_below: bool = False
    ignore_goal: bool = False
    disable_slide_kill: bool = False
    needs_five_fireballs: bool = False
    can_be_jumped_on_from_below: bool = False
    tall_death_frame: bool = False
    immune_to_silver_pow: bool = False
    escape_walls: bool = False

    def get_field(self, name: str) -> Union[int, bool]:
        return getattr(self, FIELDS_BY_NAME[name].name)

    def set_field(self, name: str, value: Union[int, bool]) -> None:
        """
        Set a field by name, masking integers to the field's width.

        Raises:
            KeyError: if the field does not exist
        """
        entry = FIELDS_BY_NAME[name]
        if entry.is_flag:
            setattr(self, name, bool(value))
        else:
            setattr(self, name, int(value) & entry.mask)

    def pack(self) -> bytes:
        """Pack all fields into six bytes."""
        result = bytearray(BEHAVIOR_SIZE)
        for entry in BEHAVIOR_FIELDS:
            value = int(getattr(self, entry.name)) & entry.mask
            result[entry.byte] |= value << entry.shift
        return bytes(result)

    def unpack(self, values: Sequence[int]) -> "SpriteBehavior":
        """
        Unpack six bytes into the fields.

        Args:
            values: exactly six integers, each masked to 8 bits

        Raises:
            InvalidLength: if there are not exactly six values
        """
        if len(values) != BEHAVIOR_SIZE:
            raise InvalidLength(
                f"The packed behavior must have {BEHAVIOR_SIZE} bytes, got {len(values)}"
            )

        for entry in BEHAVIOR_FIELDS:
            raw = ((values[entry.byte] & 0xFF) >> entry.shift) & entry.mask
            setattr(self, entry.name, bool(raw) if entry.is_flag else raw)
        return self

    @classmethod
    def from_bytes(cls, values: Sequence[int]) -> "SpriteBehavior":
        return cls().unpack(values)

    def copy(self) -> "SpriteBehavior":
        return SpriteBehavior(**{f.name: getattr(self, f.name) for f in fields(self)})
