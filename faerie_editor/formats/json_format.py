"""
JSON Codec - The structured sprite configuration format.

The keys of this format are shared with the sprite insertion tool and must
not change. Behavior bits are grouped per RAM table ($1656, $1662, ...) and
use long descriptive keys, including their spelling mistakes.

Reading is lenient: a missing or wrongly typed value is treated as absent and
falls back to 0, false or an empty string. Only a broken document or a root
that is not an object is an error; a sprite missing its ASM file is reported
as a warning.
"""

import json
import math
from typing import Any, Dict, List, Optional, Tuple

from ..core.behavior import FIELDS_BY_NAME
from ..core.display import DisplayData, Label, SpriteTile, TileList
from ..core.errors import FaerieWarning, StructuralParseError
from ..core.sprite import Sprite, SpriteSubType, SpriteType
from .base import ConfigCodec, ParseResult, TYPE_JSON

INDENT = 4

# (group key, [(entry key, behavior field)]) in byte order
BEHAVIOR_GROUPS: Tuple[Tuple[str, Tuple[Tuple[str, str], ...]], ...] = (
    ("$1656", (
        ("Object Clipping", "object_clipping"),
        ("Can be jumped on", "can_be_jumped_on"),
        ("Dies when jumped on", "dies_when_jumped_on"),
        ("Hop in /kick shell", "hop_in_shells"),
        ("Disappears in cloud of smoke", "disappear_in_smoke"),
    )),
    ("$1662", (
        ("Sprite Clipping", "sprite_clipping"),
        ("Use shell as death frame", "use_shell_as_death_frame"),
        ("Fall straight down when killed", "falls_straight_down_when_killed"),
    )),
    ("$166E", (
        ("Use second graphics page", "use_second_graphics_page"),
        ("Palette", "palette"),
        ("Disable fireball killing", "disable_fireball_killing"),
        ("Disable cape killing", "disable_cape_killing"),
        ("Disable water splash", "disable_water_splash"),
        ("Don't interact with Layer 2", "disable_secondary_interaction"),
    )),
    ("$167A", (
        ("Don't disable cliping when starkilled", "process_if_dead"),
        ("Invincible to star/cape/fire/bounce blk", "invincible_to_player"),
        ("Process when off screen", "process_while_offscreen"),
        ("Don't change into shell when stunned", "skip_shell_if_stunned"),
        ("Can't be kicked like shell", "disable_kicking"),
        ("Process interaction with Mario every frame", "process_interaction_every_frame"),
        ("Gives power-up when eaten by Yoshi", "is_powerup"),
        ("Don't use default interaction with Mario", "disable_default_interaction"),
    )),
    ("$1686", (
        ("Inedible", "inedible"),
        ("Stay in Yoshi's mouth", "stay_in_mouth"),
        ("Weird ground behaviour", "weird_ground_behavior"),
        ("Don't interact with other sprites", "disable_sprite_interaction"),
        ("Don't change direction if touched", "preserve_direction"),
        ("Don't turn into coin when goal passed", "disappear_when_goal_passed"),
        ("Spawn a new sprite", "spawns_new_sprite"),
        ("Don't interact with objects", "disable_object_interaction"),
    )),
    ("$190F", (
        ("Make platform passable from below", "platform_passable_from_below"),
        ("Don't erase when goal passed", "ignore_goal"),
        ("Can't be killed by sliding", "disable_slide_kill"),
        ("Take 5 fireballs to kill", "needs_five_fireballs"),
        ("Can't be jumped on with upwards Y speed", "can_be_jumped_on_from_below"),
        ("Death frame two tiles high", "tall_death_frame"),
        ("Don't turn into a coin with silver POW", "immune_to_silver_pow"),
        ("Don't get stuck in walls (carryable sprites)", "escape_walls"),
    )),
)

KEY_TYPE = "Type"
KEY_SUBTYPE = "SubType"
KEY_ACTS_LIKE = "ActLike"
KEY_FIRST_PROPERTY = "Extra Property Byte 1"
KEY_SECOND_PROPERTY = "Extra Property Byte 2"
KEY_UNIQUE = "Unique Info"
KEY_FIRST_ASM = "AsmFile"
KEY_SECOND_ASM = "AsmFile2"
KEY_EXTRA_BYTES = "Extra Bytes Length"
KEY_NAME = "Name"
KEY_DESCRIPTION = "Description"
KEY_X = "X"
KEY_Y = "Y"
KEY_TILES = "Tiles"
KEY_LABEL = "Label"
KEY_TILE = "Tile"


# ============================================================================
# Lenient accessors
# ============================================================================

def _get_int(obj: Any, key: str) -> int:
    if not isinstance(obj, dict):
        return 0
    value = obj.get(key)
    # bool is an int subclass but not a JSON number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return int(value)


def _get_bool(obj: Any, key: str) -> bool:
    if not isinstance(obj, dict):
        return False
    value = obj.get(key)
    return value if isinstance(value, bool) else False


def _get_string(obj: Any, key: str) -> str:
    if not isinstance(obj, dict):
        return ""
    value = obj.get(key)
    return value if isinstance(value, str) else ""


def _get_object(obj: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
    value = obj.get(key)
    return value if isinstance(value, dict) else None


def _get_lines(obj: Dict[str, Any], key: str) -> Optional[str]:
    """Join an array of strings with newlines. None if the key is not an array."""
    value = obj.get(key)
    if not isinstance(value, list):
        return None
    return "\n".join(line for line in value if isinstance(line, str)).strip()


class JSONCodec(ConfigCodec):
    """Parser and emitter for .json files."""

    extension = TYPE_JSON

    def parse(self, text: str) -> ParseResult:
        try:
            root = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StructuralParseError(
                "Can't parse JSON.", "json.syntax", exc.lineno, detail=exc.msg
            ) from exc
        except RecursionError as exc:
            raise StructuralParseError(
                "Can't parse JSON.", "json.syntax", detail="nested too deeply"
            ) from exc

        if not isinstance(root, dict):
            raise StructuralParseError("Malformed configuration.", "json.malformed")

        sprite = Sprite()
        result = ParseResult(sprite)

        sprite.type = SpriteType.from_integer(_get_int(root, KEY_TYPE))
        sprite.subtype = SpriteSubType.from_integer(_get_int(root, KEY_SUBTYPE))
        sprite.acts_like = _get_int(root, KEY_ACTS_LIKE)

        if KEY_SUBTYPE not in root:
            result.is_legacy = True
            result.warnings.append(FaerieWarning("parse", "json.legacy"))

        self._parse_behavior(root, sprite)

        sprite.first_property_byte = _get_int(root, KEY_FIRST_PROPERTY)
        sprite.set_packed_second_property_byte(_get_int(root, KEY_SECOND_PROPERTY))
        sprite.unique_byte = _get_int(root, KEY_UNIQUE)

        sprite.first_asm_file = _get_string(root, KEY_FIRST_ASM) or None
        sprite.second_asm_file = _get_string(root, KEY_SECOND_ASM) or None

        sprite.extra_bytes = _get_int(root, KEY_EXTRA_BYTES)

        sprite.display_data = self._parse_display(root)

        if not sprite.verify():
            result.warnings.append(FaerieWarning("parse", "incomplete"))

        return result

    @staticmethod
    def _parse_behavior(root: Dict[str, Any], sprite: Sprite) -> None:
        behavior = sprite.behavior
        for group, entries in BEHAVIOR_GROUPS:
            values = _get_object(root, group)
            if values is None:
                continue

            for key, name in entries:
                if FIELDS_BY_NAME[name].is_flag:
                    behavior.set_field(name, _get_bool(values, key))
                else:
                    behavior.set_field(name, _get_int(values, key))

    @staticmethod
    def _parse_display(root: Dict[str, Any]) -> DisplayData:
        display = DisplayData()

        label = _get_lines(root, KEY_LABEL)
        tiles = root.get(KEY_TILES)

        if label is not None:
            display.content = Label(label)
        elif isinstance(tiles, list):
            display.content = TileList([
                SpriteTile(_get_int(tile, KEY_X), _get_int(tile, KEY_Y), _get_int(tile, KEY_TILE))
                for tile in tiles
            ])
        else:
            display.content = TileList()

        display.set_position(_get_int(root, KEY_X), _get_int(root, KEY_Y))
        display.name = _get_string(root, KEY_NAME)
        display.description = _get_lines(root, KEY_DESCRIPTION) or ""
        return display

    def emit(self, sprite: Sprite) -> str:
        behavior = sprite.behavior

        root: Dict[str, Any] = {
            KEY_TYPE: sprite.type.value,
            KEY_SUBTYPE: sprite.subtype.value,
            KEY_ACTS_LIKE: sprite.acts_like,
        }

        for group, entries in BEHAVIOR_GROUPS:
            root[group] = {key: behavior.get_field(name) for key, name in entries}

        root[KEY_FIRST_PROPERTY] = sprite.first_property_byte
        root[KEY_SECOND_PROPERTY] = sprite.packed_second_property_byte
        root[KEY_UNIQUE] = sprite.unique_byte
        root[KEY_FIRST_ASM] = sprite.first_asm_file or ""
        root[KEY_SECOND_ASM] = sprite.second_asm_file or ""
        root[KEY_EXTRA_BYTES] = sprite.extra_bytes

        display = sprite.display_data
        if display is not None:
            root[KEY_NAME] = display.name
            root[KEY_DESCRIPTION] = _split_lines(display.description)
            root[KEY_X] = display.x
            root[KEY_Y] = display.y

            content = display.content
            if isinstance(content, TileList):
                root[KEY_TILES] = [
                    {KEY_X: t.x, KEY_Y: t.y, KEY_TILE: t.tile} for t in content.tiles
                ]
            elif isinstance(content, Label):
                root[KEY_LABEL] = _split_lines(content.text)
            else:
                raise TypeError(f"Unknown display content: {type(content).__name__}")

        return json.dumps(root, indent=INDENT, ensure_ascii=False) + "\n"


def _split_lines(text: str) -> List[str]:
    return text.split("\n")
