"""
CFG Codec - The line-oriented sprite configuration format.

Layout (one value per line, ';' starts a comment):

     1  type                      hex
     2  acts like                 hex
     3  behavior                  six space separated hex bytes
     4  property bytes            two space separated hex bytes
     5  first ASM file
     6  ignored (written as 00)
     7  subtype                   hex
     8  unique byte               hex
     9  extra byte count          hex
    10  second ASM file

Files with fewer than seven lines come from the older insertion tool; they
are read as Regular sprites without a second ASM file or extra bytes.

An empty line followed by a line starting with '---' opens the display
block, made of [Section] headers (Name, Description, Position, Tiles, Label)
each followed by its data lines. Position and tile offsets are decimal and
may be negative; tile numbers are hex.

Data lines are comment-stripped and trimmed like every other line, and blank
lines are skipped. A description or label therefore loses its blank lines,
anything after a ';', and any line starting with '[' (read as a section header)
when written and read back.
"""

import re
from typing import Dict, List, Optional, Tuple

from ..core.behavior import BEHAVIOR_SIZE, InvalidLength
from ..core.display import DisplayData, Label, SpriteTile, TileList
from ..core.errors import FaerieWarning, StructuralParseError, ValueParseError
from ..core.sprite import Sprite, SpriteSubType, SpriteType
from .base import ConfigCodec, ParseResult, TYPE_CFG

MIN_LINES = 5
MODERN_LINES = 7
DISPLAY_MARKER = "---"
LEGACY_TOKEN = "00"

SINGLE_LINE_SECTIONS = ("name", "position")

_HEX = re.compile(r"[0-9A-Fa-f]+")
_DEC = re.compile(r"-?[0-9]+")


def remove_comments(line: str) -> str:
    """Strip a ';' comment and surrounding whitespace."""
    semicolon = line.find(";")
    if semicolon != -1:
        line = line[:semicolon]
    return line.strip()


def parse_int(text: str, radix: int = 16) -> int:
    """
    Parse one number in the given radix (16 or 10).

    Raises:
        ValueError: if the text is not made of digits of the radix (decimal
            numbers may start with '-')
    """
    pattern = _HEX if radix == 16 else _DEC
    if not pattern.fullmatch(text):
        raise ValueError(f"Not a base {radix} number: {text!r}")
    return int(text, radix)


def parse_ints(text: str, count: int, separator: Optional[str] = None,
               radixes: Tuple[int, ...] = ()) -> List[int]:
    """
    Parse exactly `count` separated numbers.

    Args:
        separator: None splits on whitespace
        radixes: radix of each number, 16 where not given

    Raises:
        ValueError: on a wrong count or a malformed number
    """
    parts = text.split(separator)
    if len(parts) != count:
        raise ValueError(f"Expected {count} numbers, got {len(parts)}")

    return [
        parse_int(part.strip(), radixes[i] if i < len(radixes) else 16)
        for i, part in enumerate(parts)
    ]


class CFGCodec(ConfigCodec):
    """Parser and emitter for .cfg files."""

    extension = TYPE_CFG

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(self, text: str) -> ParseResult:
        raw_lines = text.splitlines()
        config, display_start = self._split(raw_lines)

        if len(config) < MIN_LINES:
            raise StructuralParseError(
                "Incomplete configuration file.", "cfg.too_few",
                min=MIN_LINES, found=len(config)
            )

        sprite = Sprite()
        for number, line in enumerate(config, start=1):
            self._parse_line(sprite, number, line)

        result = ParseResult(sprite)
        if len(config) < MODERN_LINES:
            result.is_legacy = True
            result.warnings.append(FaerieWarning("parse", "cfg.legacy"))

        if not sprite.verify():
            raise StructuralParseError("Incomplete sprite data.", "incomplete")

        if display_start is not None:
            sprite.display_data = self._parse_display(raw_lines, display_start)

        return result

    def _split(self, raw_lines: List[str]) -> Tuple[List[str], Optional[int]]:
        """
        Separate the configuration lines from the display block.

        Returns:
            (cleaned configuration lines, index of the first display line or None)
        """
        config = []
        display_start = None
        previous_empty = False

        for index, raw in enumerate(raw_lines):
            line = remove_comments(raw)
            if previous_empty and line.startswith(DISPLAY_MARKER):
                config.pop()  # the empty line before the marker
                display_start = index + 1
                break
            config.append(line)
            previous_empty = not line

        while config and not config[-1]:
            config.pop()

        return config, display_start

    def _parse_line(self, sprite: Sprite, number: int, line: str) -> None:
        if number == 1:
            sprite.type = SpriteType.from_integer(
                self._number(line, number, "cfg.type", "Invalid sprite type.")
            )
        elif number == 2:
            sprite.acts_like = self._number(line, number, "cfg.acts_like", "Invalid acts like setting.")
        elif number == 3:
            try:
                sprite.behavior.unpack(parse_ints(line, BEHAVIOR_SIZE))
            except (ValueError, InvalidLength) as exc:
                raise ValueParseError("Invalid behavior bytes.", "cfg.behavior", number) from exc
        elif number == 4:
            try:
                first, second = parse_ints(line, 2)
            except ValueError as exc:
                raise ValueParseError("Invalid property bytes.", "cfg.properties", number) from exc
            sprite.first_property_byte = first
            sprite.set_packed_second_property_byte(second)
        elif number == 5:
            sprite.first_asm_file = line or None
        elif number == 6:
            pass  # assembler or extra byte token of older tools
        elif number == 7:
            sprite.subtype = SpriteSubType.from_integer(
                self._number(line, number, "cfg.subtype", "Invalid sprite subtype.")
            )
        elif number == 8:
            sprite.unique_byte = self._number(line, number, "cfg.unique_byte", "Invalid unique byte.")
        elif number == 9:
            sprite.extra_bytes = self._number(line, number, "cfg.extra_bytes", "Invalid extra byte count.")
        elif number == 10:
            sprite.second_asm_file = line or None

    @staticmethod
    def _number(line: str, number: int, subkey: str, message: str) -> int:
        try:
            return parse_int(line, 16)
        except ValueError as exc:
            raise ValueParseError(message, subkey, number) from exc

    def _parse_display(self, raw_lines: List[str], start: int) -> DisplayData:
        # section name -> [(line number, text)]
        sections: Dict[str, List[Tuple[int, str]]] = {}
        section = None

        for index in range(start, len(raw_lines)):
            number = index + 1
            line = remove_comments(raw_lines[index])

            if not line:
                continue

            if line.startswith("["):
                end = line.find("]")
                if end < 2:
                    raise StructuralParseError(
                        "Malformed section definition.", "cfg.section.malformed", number
                    )

                section = line[1:end].lower()
                if section in sections:
                    raise StructuralParseError(
                        "Duplicate section definition.", "cfg.section.duplicate", number,
                        name=section
                    )
                sections[section] = []
            else:
                if section is None:
                    raise StructuralParseError(
                        "Section data with no preceding section definition.", "cfg.orphan", number
                    )

                sections[section].append((number, line))
                if section in SINGLE_LINE_SECTIONS:
                    section = None

        display = DisplayData()

        if "label" in sections:
            display.content = Label(_join(sections["label"]))
        elif "tiles" in sections:
            tiles = []
            for number, line in sections["tiles"]:
                try:
                    x, y, tile = parse_ints(line, 3, ",", (10, 10, 16))
                except ValueError as exc:
                    raise ValueParseError("Malformed tile data.", "cfg.display.tiles", number) from exc
                tiles.append(SpriteTile(x, y, tile))
            display.content = TileList(tiles)
        else:
            display.content = TileList()

        if sections.get("position"):
            number, line = sections["position"][0]
            try:
                x, y = parse_ints(line, 2, ",", (10, 10))
            except ValueError as exc:
                raise ValueParseError("Malformed position.", "cfg.display.position", number) from exc
            display.set_position(x, y)

        if "name" in sections:
            display.name = _join(sections["name"])

        if "description" in sections:
            display.description = _join(sections["description"])

        return display

    # ------------------------------------------------------------------
    # Emitting
    # ------------------------------------------------------------------

    def emit(self, sprite: Sprite) -> str:
        lines = [
            f"{sprite.type.value:02X}",
            f"{sprite.acts_like:02X}",
            " ".join(f"{b:02X}" for b in sprite.behavior.pack()),
            f"{sprite.first_property_byte:02X} {sprite.packed_second_property_byte:02X}",
            sprite.first_asm_file or "",
            LEGACY_TOKEN,
            f"{sprite.subtype.value:02X}",
            f"{sprite.unique_byte:02X}",
            f"{sprite.extra_bytes:02X}",
            sprite.second_asm_file or "",
        ]

        display = sprite.display_data
        if display is not None:
            lines += [
                "",
                DISPLAY_MARKER,
                "[Name]",
                " ".join(display.name.splitlines()),
                "[Description]",
                display.description,
                "[Position]",
                f"{display.x},{display.y}",
            ]

            content = display.content
            if isinstance(content, TileList):
                lines.append("[Tiles]")
                lines += [f"{t.x},{t.y},{t.tile:02X}" for t in content.tiles]
            elif isinstance(content, Label):
                lines += ["[Label]", content.text]
            else:
                raise TypeError(f"Unknown display content: {type(content).__name__}")

        return "\n".join(lines) + "\n"


def _join(entries: List[Tuple[int, str]]) -> str:
    return "\n".join(text for _, text in entries)
