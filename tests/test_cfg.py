"""
Tests for the line-oriented configuration codec.
"""
import pytest

from faerie_editor.core.display import DisplayData, Label, SpriteTile, TileList, tile_display
from faerie_editor.core.errors import StructuralParseError, ValueParseError
from faerie_editor.core.sprite import (
    UNUSED_UNIQUE_BYTE, Sprite, SpriteSubType, SpriteType, StatusHandling,
)
from faerie_editor.formats.cfg import CFGCodec, parse_int, parse_ints, remove_comments
from faerie_editor.formats.json_format import JSONCodec

EXAMPLE = "\n".join([
    "01", "24", "05 00 00 00 00 00", "00 00", "", "00", "00", "00", "00", "00",
]) + "\n"

REGULAR = """\
01
36
10 80 00 08 00 00
00 40
sprite.asm  ; the main file
00
01
12
03

"""


def parse(text):
    return CFGCodec().parse(text)


class TestHelpers:
    """Tests for the number helpers."""

    def test_remove_comments(self):
        assert remove_comments("  05 ; five ") == "05"
        assert remove_comments("; all comment") == ""

    def test_parse_int(self):
        assert parse_int("ff") == 0xFF
        assert parse_int("10", 10) == 10
        assert parse_int("-8", 10) == -8

    @pytest.mark.parametrize("text", ["", "+8", "--8", "8-", "-"])
    def test_parse_decimal_rejects(self, text):
        with pytest.raises(ValueError):
            parse_int(text, 10)

    @pytest.mark.parametrize("text", ["", "0x10", "-1", "1 2", "G"])
    def test_parse_int_rejects(self, text):
        """Only plain digits of the radix are numbers."""
        with pytest.raises(ValueError):
            parse_int(text)

    def test_parse_ints_count(self):
        assert parse_ints("1,2,a", 3, ",", (10, 10, 16)) == [1, 2, 10]
        with pytest.raises(ValueError):
            parse_ints("1 2", 3)


class TestParse:
    """Tests for CFGCodec.parse."""

    def test_example(self):
        """The ten line example parses to a custom vanilla sprite."""
        result = parse(EXAMPLE)
        sprite = result.sprite

        assert sprite.type == SpriteType.CUSTOM
        assert sprite.acts_like == 0x24
        assert sprite.behavior.object_clipping == 5
        assert sprite.behavior.pack() == bytes([5, 0, 0, 0, 0, 0])
        assert sprite.subtype == SpriteSubType.VANILLA
        assert sprite.unique_byte == UNUSED_UNIQUE_BYTE
        assert sprite.extra_bytes == 0
        assert sprite.display_data is None
        assert not result.is_legacy
        assert result.warnings == []

    def test_regular(self):
        """Comments are stripped and every field is read."""
        sprite = parse(REGULAR).sprite

        assert sprite.behavior.can_be_jumped_on
        assert sprite.behavior.disable_secondary_interaction is False
        assert sprite.behavior.pack()[1] == 0x80
        assert sprite.second_property_byte == 0
        assert sprite.status_handling == StatusHandling.HANDLE_ALL
        assert sprite.first_asm_file == "sprite.asm"
        assert sprite.subtype == SpriteSubType.REGULAR
        assert sprite.unique_byte == 0x12
        assert sprite.extra_bytes == 3
        assert sprite.second_asm_file is None

    def test_legacy(self):
        """Six lines make a legacy Regular sprite with a warning."""
        result = parse("01\n36\n00 00 00 00 00 00\n00 00\nold.asm\n00\n")

        assert result.is_legacy
        assert result.sprite.subtype == SpriteSubType.REGULAR
        assert result.sprite.first_asm_file == "old.asm"
        assert result.sprite.extra_bytes == 0
        assert [w.key for w in result.warnings] == ["parse.cfg.legacy"]

    def test_too_few_lines(self):
        """Fewer than five lines is a structural error."""
        with pytest.raises(StructuralParseError) as info:
            parse("01\n36\n00 00 00 00 00 00\n")

        assert info.value.key == "parse.cfg.too_few"
        assert info.value.args_map == {"min": 5, "found": 3}

    @pytest.mark.parametrize("line, subkey", [
        (1, "cfg.type"),
        (2, "cfg.acts_like"),
        (3, "cfg.behavior"),
        (4, "cfg.properties"),
        (7, "cfg.subtype"),
        (8, "cfg.unique_byte"),
        (9, "cfg.extra_bytes"),
    ])
    def test_bad_value(self, line, subkey):
        """A field that isn't hex fails with its line number."""
        lines = EXAMPLE.splitlines()
        lines[line - 1] = "zz"

        with pytest.raises(ValueParseError) as info:
            parse("\n".join(lines))

        assert info.value.subkey == subkey
        assert info.value.line == line
        assert info.value.args_map["line"] == line

    def test_five_behavior_bytes(self):
        """The behavior line needs exactly six bytes."""
        lines = EXAMPLE.splitlines()
        lines[2] = "00 00 00 00 00"

        with pytest.raises(ValueParseError) as info:
            parse("\n".join(lines))
        assert info.value.subkey == "cfg.behavior"

    def test_incomplete(self):
        """A custom regular sprite without its ASM file fails."""
        with pytest.raises(StructuralParseError) as info:
            parse(REGULAR.replace("sprite.asm", ""))
        assert info.value.subkey == "incomplete"


class TestDisplay:
    """Tests for the display block."""

    def test_tiles(self):
        text = EXAMPLE + "\n---\n[Name]\nGoomba\n[Position]\n8,9\n[Tiles]\n0,0,4A\n16,0,4B\n"
        display = parse(text).sprite.display_data

        assert display.name == "Goomba"
        assert display.position == (8, 9)
        assert display.content == TileList([SpriteTile(0, 0, 0x4A), SpriteTile(16, 0, 0x4B)])

    def test_label_wins_over_tiles(self):
        text = EXAMPLE + "\n---\n[Tiles]\n0,0,4A\n[Label]\nBIG\n"
        display = parse(text).sprite.display_data
        assert display.content == Label("BIG")

    def test_empty_block(self):
        """A block without tiles or label still has an empty tile list."""
        display = parse(EXAMPLE + "\n---\n[Description]\nFirst\nSecond\n").sprite.display_data

        assert display.content == TileList()
        assert display.description == "First\nSecond"
        assert display.name == DisplayData().name

    def test_marker_needs_blank_line(self):
        """Without the blank line, --- is just another configuration line."""
        sprite = parse(EXAMPLE.rstrip("\n") + "\n---\n").sprite
        assert sprite.display_data is None

    def test_duplicate_section(self):
        with pytest.raises(StructuralParseError) as info:
            parse(EXAMPLE + "\n---\n[Name]\nA\n[name]\nB\n")
        assert info.value.subkey == "cfg.section.duplicate"
        assert info.value.args_map["name"] == "name"

    def test_orphan_data(self):
        with pytest.raises(StructuralParseError) as info:
            parse(EXAMPLE + "\n---\nstray\n")
        assert info.value.subkey == "cfg.orphan"
        assert info.value.line == 13

    def test_single_line_sections_end_after_one_line(self):
        with pytest.raises(StructuralParseError) as info:
            parse(EXAMPLE + "\n---\n[Name]\nA\nB\n")
        assert info.value.subkey == "cfg.orphan"

    def test_malformed_section(self):
        with pytest.raises(StructuralParseError) as info:
            parse(EXAMPLE + "\n---\n[Name\n")
        assert info.value.subkey == "cfg.section.malformed"

    def test_malformed_tile(self):
        with pytest.raises(ValueParseError) as info:
            parse(EXAMPLE + "\n---\n[Tiles]\n0,0\n")
        assert info.value.subkey == "cfg.display.tiles"

    def test_malformed_position(self):
        with pytest.raises(ValueParseError) as info:
            parse(EXAMPLE + "\n---\n[Position]\nA,7\n")
        assert info.value.subkey == "cfg.display.position"


class TestEmit:
    """Tests for CFGCodec.emit."""

    def test_exact_output(self):
        """Unused fields are written as filler and absent strings as empty lines."""
        sprite = parse(EXAMPLE).sprite
        assert CFGCodec().emit(sprite) == "01\n24\n05 00 00 00 00 00\nFF BF\n\n00\n00\nFF\n00\n\n"

    def test_status_in_second_property_byte(self):
        sprite = Sprite()
        sprite.second_property_byte = 0x01
        sprite.status_handling = StatusHandling.HANDLE_ALL

        lines = CFGCodec().emit(sprite).splitlines()
        assert lines[3] == "00 41"

    def test_display_block(self):
        sprite = Sprite()
        sprite.first_asm_file = "a.asm"
        sprite.display_data = tile_display([SpriteTile(0, 16, 0xC0)], name="Thing")

        text = CFGCodec().emit(sprite)
        assert text.endswith(
            "\n\n---\n[Name]\nThing\n[Description]\nNo description given.\n"
            "[Position]\n7,7\n[Tiles]\n0,16,C0\n"
        )

    def test_round_trip(self):
        """Every field the grammar covers survives emit then parse."""
        sprite = Sprite()
        sprite.subtype = SpriteSubType.SCROLLER
        sprite.acts_like = 0x7F
        sprite.behavior.unpack([0x12, 0x34, 0x56, 0x78, 0x9A, 0xBC])
        sprite.unique_byte = 0xEE
        sprite.extra_bytes = 1
        sprite.first_asm_file = "scroll.asm"
        sprite.second_asm_file = "scroll_init.asm"
        sprite.display_data = tile_display(
            [SpriteTile(0, 0, 0x20), SpriteTile(16, 8, 0x22)],
            name="Scroller", description="Moves the layer.\nSlowly.",
        ).set_position(3, 4)

        codec = CFGCodec()
        assert codec.parse(codec.emit(sprite)).sprite == sprite

    def test_round_trip_bytes(self):
        """The byte helpers use UTF-8 and skip a BOM."""
        sprite = Sprite()
        sprite.first_asm_file = "spéciale.asm"

        codec = CFGCodec()
        data = codec.emit_bytes(sprite)
        assert codec.parse_bytes(b"\xef\xbb\xbf" + data).sprite == sprite

    def test_invalid_utf8(self):
        with pytest.raises(StructuralParseError) as info:
            CFGCodec().parse_bytes(b"01\n\xff\xfe\n")
        assert info.value.key == "parse.encoding"

    def test_negative_offsets(self):
        """Tiles and anchors left of or above the sprite survive emit then parse."""
        sprite = Sprite()
        sprite.first_asm_file = "wide.asm"
        sprite.display_data = tile_display(
            [SpriteTile(-8, 0, 0x20), SpriteTile(0, -16, 0x22)]
        ).set_position(-2, 5)

        codec = CFGCodec()
        text = codec.emit(sprite)

        assert "[Position]\n-2,5\n[Tiles]\n-8,0,20\n0,-16,22\n" in text
        assert codec.parse(text).sprite == sprite

    def test_from_json_with_negative_offsets(self):
        """A JSON sprite with negative offsets converts to a readable .cfg."""
        sprite = JSONCodec().parse(
            '{"Type": 1, "SubType": 1, "AsmFile": "a.asm", "X": -1, "Y": 0,'
            ' "Tiles": [{"X": -8, "Y": 0, "Tile": 32}]}'
        ).sprite

        codec = CFGCodec()
        display = codec.parse(codec.emit(sprite)).sprite.display_data

        assert display.position == (-1, 0)
        assert display.content == TileList([SpriteTile(-8, 0, 0x20)])

    def test_description_loses_blank_lines(self):
        """Blank lines and comments inside a description are not kept."""
        sprite = Sprite()
        sprite.first_asm_file = "a.asm"
        sprite.display_data = tile_display(description="First.\n\nSecond; with a note")

        codec = CFGCodec()
        display = codec.parse(codec.emit(sprite)).sprite.display_data
        assert display.description == "First.\nSecond"
