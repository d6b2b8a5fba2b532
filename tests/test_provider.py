"""
Tests for the blank and configuration providers.
"""
import logging

import pytest

from faerie_editor.core.display import label_display
from faerie_editor.core.errors import ParseError, ProvisionError, SavingError
from faerie_editor.core.provider import BlankProvider, ConfigurationProvider, open_provider
from faerie_editor.core.sprite import Sprite
from faerie_editor.formats import CFGCodec, JSONCodec

LEGACY_CFG = "01\n36\n00 00 00 00 00 00\n00 00\nold.asm\n00\n"


@pytest.fixture
def cfg_file(tmp_path):
    path = tmp_path / "sprite.cfg"
    path.write_text(LEGACY_CFG, encoding="utf-8")
    return path


class TestBlankProvider:
    """Tests for BlankProvider."""

    def test_single_default_sprite(self):
        provider = BlankProvider()

        assert provider.get_available_sprites() == ["Sprite"]
        assert provider.get_current_sprite() == Sprite()
        assert provider.get_loaded_index() == 0
        assert provider.input_path is None
        assert provider.get_warnings() == []

    def test_name_from_display_data(self):
        provider = BlankProvider()
        provider.start_modification().display_data = label_display(name="Bob")
        assert provider.get_available_sprites() == ["Bob"]

    def test_load_other_index(self):
        with pytest.raises(ProvisionError) as info:
            BlankProvider().load_sprite(1)
        assert info.value.key == "file.provision.index"

    def test_modification(self):
        provider = BlankProvider()
        assert not provider.is_modified()

        provider.start_modification().acts_like = 0x10
        assert provider.is_modified()
        assert provider.get_current_sprite().acts_like == 0x10

    def test_save_hands_over(self, tmp_path):
        provider = BlankProvider()
        provider.start_modification().first_asm_file = "new.asm"
        target = tmp_path / "new.cfg"

        saved = provider.save(str(target))

        assert isinstance(saved, ConfigurationProvider)
        assert saved.input_path == str(target)
        assert not saved.is_modified()
        assert saved.get_current_sprite() == provider.get_current_sprite()
        assert saved.get_current_sprite() is not provider.get_current_sprite()
        assert target.read_text(encoding="utf-8") == CFGCodec().emit(provider.get_current_sprite())


class TestConfigurationProvider:
    """Tests for ConfigurationProvider."""

    def test_load(self, cfg_file):
        provider = ConfigurationProvider(str(cfg_file))
        provider.load_sprite(0)

        sprite = provider.get_current_sprite()
        assert sprite.first_asm_file == "old.asm"
        assert provider.is_legacy
        assert [w.key for w in provider.get_warnings()] == ["parse.cfg.legacy"]
        assert not provider.is_modified()

    def test_load_logs(self, cfg_file, caplog):
        caplog.set_level(logging.DEBUG, logger="Faerie")
        ConfigurationProvider(str(cfg_file)).load_sprite(0)

        assert any("Loading configuration" in r.message for r in caplog.records)
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_load_other_index(self, cfg_file):
        with pytest.raises(ProvisionError) as info:
            ConfigurationProvider(str(cfg_file)).load_sprite(2)
        assert info.value.args_map == {"index": 2}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ProvisionError) as info:
            ConfigurationProvider(str(tmp_path / "gone.cfg")).load_sprite(0)
        assert info.value.key == "file.provision.configuration.io"
        assert isinstance(info.value.__cause__, OSError)

    def test_unknown_type(self, tmp_path):
        path = tmp_path / "sprite.txt"
        path.write_text(LEGACY_CFG)

        with pytest.raises(ProvisionError) as info:
            ConfigurationProvider(str(path)).load_sprite(0)
        assert info.value.key == "file.provision.configuration.type"

    def test_malformed(self, tmp_path):
        path = tmp_path / "sprite.json"
        path.write_text("[]")

        with pytest.raises(ProvisionError) as info:
            ConfigurationProvider(str(path)).load_sprite(0)

        assert info.value.key == "file.provision.configuration.malformed"
        assert isinstance(info.value.__cause__, ParseError)
        assert "JSON" in info.value.localized_message()

    def test_save_converts_format(self, cfg_file, tmp_path):
        provider = ConfigurationProvider(str(cfg_file))
        provider.load_sprite(0)
        provider.start_modification().unique_byte = 0x42
        target = tmp_path / "sprite.json"

        assert provider.save(str(target)) is provider
        assert provider.input_path == str(target)
        assert not provider.is_modified()

        reread = JSONCodec().parse(target.read_text(encoding="utf-8")).sprite
        assert reread.unique_byte == 0x42
        assert reread.first_asm_file == "old.asm"
        assert reread.behavior == provider.get_current_sprite().behavior

    def test_save_in_place(self, cfg_file):
        provider = ConfigurationProvider(str(cfg_file))
        provider.load_sprite(0)
        provider.start_modification().acts_like = 0x99
        provider.save()

        assert cfg_file.read_text(encoding="utf-8").splitlines()[1] == "99"

    def test_save_unknown_type(self, cfg_file, tmp_path):
        provider = ConfigurationProvider(str(cfg_file))
        provider.load_sprite(0)

        with pytest.raises(SavingError) as info:
            provider.save(str(tmp_path / "sprite.txt"))
        assert info.value.key == "file.save.configuration.type"

    def test_save_before_load(self, cfg_file):
        with pytest.raises(SavingError) as info:
            ConfigurationProvider(str(cfg_file)).save()
        assert info.value.key == "file.save.configuration.empty"
        assert cfg_file.read_text(encoding="utf-8") == LEGACY_CFG

    def test_save_unwritable(self, cfg_file, tmp_path):
        provider = ConfigurationProvider(str(cfg_file))
        provider.load_sprite(0)

        with pytest.raises(SavingError) as info:
            provider.save(str(tmp_path / "missing_dir" / "sprite.cfg"))
        assert info.value.key == "file.save.configuration.io"


class TestOpenProvider:
    """Tests for open_provider."""

    def test_no_path(self):
        provider, errors = open_provider()
        assert isinstance(provider, BlankProvider)
        assert errors == []

    def test_configuration(self, cfg_file):
        provider, errors = open_provider(str(cfg_file))
        assert isinstance(provider, ConfigurationProvider)
        assert provider.get_current_sprite().first_asm_file == "old.asm"
        assert errors == []

    def test_missing_file(self, tmp_path):
        provider, errors = open_provider(str(tmp_path / "gone.cfg"))
        assert isinstance(provider, BlankProvider)
        assert [e.key for e in errors] == ["file.load.file"]

    def test_unknown_type(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hello")

        provider, errors = open_provider(str(path))
        assert isinstance(provider, BlankProvider)
        assert [e.key for e in errors] == ["file.load.type"]

    def test_bad_index_falls_back_to_first(self, cfg_file):
        provider, errors = open_provider(str(cfg_file), index=4)
        assert isinstance(provider, ConfigurationProvider)
        assert provider.get_current_sprite() is not None
        assert [e.key for e in errors] == ["file.provision.index"]

    def test_malformed_falls_back_to_blank(self, tmp_path):
        path = tmp_path / "broken.cfg"
        path.write_text("01\n")

        provider, errors = open_provider(str(path))
        assert isinstance(provider, BlankProvider)
        assert [e.key for e in errors] == [
            "file.provision.configuration.malformed",
            "file.provision.configuration.malformed",
        ]

    def test_bad_value_falls_back_to_blank(self, tmp_path):
        """A field in the wrong radix is reported, not raised."""
        path = tmp_path / "broken.cfg"
        path.write_text("zz\n36\n00 00 00 00 00 00\n00 00\nold.asm\n00\n", encoding="utf-8")

        provider, errors = open_provider(str(path))
        assert isinstance(provider, BlankProvider)
        assert all(isinstance(e, ProvisionError) for e in errors)
        assert [e.key for e in errors] == [
            "file.provision.configuration.malformed",
            "file.provision.configuration.malformed",
        ]
        assert errors[0].localized_message() == (
            "Malformed configuration file: Invalid sprite type on line 1."
        )
