"""
Providers - Own the sprite being edited and know where it came from.

A provider hands out one sprite at a time, tracks whether it was modified and
saves it back. Providers are the only place where configuration files are
read and written; the codecs only ever see text.
"""

import os
from typing import List, Optional, Tuple

from ..formats import codec_for_path, is_configuration, is_rom
from ..formats.base import ParseResult
from ..i18n import tr
from ..log import get_logger
from .errors import (
    FaerieError, FaerieWarning, LoadingError, ParseError, ProvisionError, SavingError,
)
from .sprite import Sprite

logger = get_logger("provider")


class Provider:
    """Base class of the sprite sources."""

    def __init__(self, input_path: Optional[str] = None):
        self.input_path = input_path

    def get_available_sprites(self) -> List[str]:
        raise NotImplementedError

    def load_sprite(self, index: int) -> None:
        """
        Make the sprite at `index` the current one.

        Raises:
            ProvisionError: if there is no such sprite or it can't be read
        """
        raise NotImplementedError

    def get_loaded_index(self) -> int:
        return 0

    def get_current_sprite(self) -> Optional[Sprite]:
        """The current sprite. Use start_modification() before changing it."""
        raise NotImplementedError

    def start_modification(self) -> Sprite:
        """Get the current sprite for editing and mark it as modified."""
        raise NotImplementedError

    def is_modified(self) -> bool:
        raise NotImplementedError

    def get_warnings(self) -> List[FaerieWarning]:
        return []

    def save(self, path: Optional[str] = None) -> "Provider":
        """
        Save the current data.

        Args:
            path: Target file, the input file if not given

        Returns:
            The provider now responsible for the data, which may be this one

        Raises:
            SavingError: if the data can't be written to the target
        """
        raise NotImplementedError

    def _check_single_index(self, index: int) -> None:
        if index != 0:
            raise ProvisionError(f"Index out of bounds: {index}.", "index", index=index)


def _single_sprite_names(sprite: Optional[Sprite]) -> List[str]:
    if sprite is not None and sprite.display_data is not None and sprite.display_data.name:
        return [sprite.display_data.name]
    return [tr("provider.default_name")]


# ============================================================================
# Blank
# ============================================================================

class BlankProvider(Provider):
    """A single default sprite that does not exist on disk yet."""

    def __init__(self):
        super().__init__(None)
        self._sprite = Sprite()
        self._modified = False

    def get_available_sprites(self) -> List[str]:
        return _single_sprite_names(self._sprite)

    def load_sprite(self, index: int) -> None:
        self._check_single_index(index)

    def get_current_sprite(self) -> Sprite:
        return self._sprite

    def start_modification(self) -> Sprite:
        self._modified = True
        return self._sprite

    def is_modified(self) -> bool:
        return self._modified

    def save(self, path: Optional[str] = None) -> Provider:
        if path is None:
            raise SavingError("A blank sprite needs a target file.", "configuration.type")

        provider = ConfigurationProvider(path)
        provider.set_sprite(self._sprite.copy())
        return provider.save(path)


# ============================================================================
# Configuration file
# ============================================================================

class ConfigurationProvider(Provider):
    """A single sprite stored in a .cfg or .json file."""

    def __init__(self, input_path: str):
        super().__init__(input_path)
        self._sprite: Optional[Sprite] = None
        self._result: Optional[ParseResult] = None
        self._modified = False

    def set_sprite(self, sprite: Sprite) -> "ConfigurationProvider":
        self._sprite = sprite
        self._result = None
        return self

    def get_available_sprites(self) -> List[str]:
        return _single_sprite_names(self._sprite)

    def load_sprite(self, index: int) -> None:
        self._check_single_index(index)

        codec = codec_for_path(self.input_path)
        if codec is None:
            raise ProvisionError(f"Unknown file type: {self.input_path}", "configuration.type")

        logger.info(f"Loading configuration: {self.input_path}")
        try:
            with open(self.input_path, "rb") as f:
                data = f.read()
        except OSError as exc:
            logger.error(f"Can't read {self.input_path}: {exc}")
            raise ProvisionError("Can't read file.", "configuration.io") from exc

        try:
            result = codec.parse_bytes(data)
        except ParseError as exc:
            logger.error(f"Malformed configuration {self.input_path}: {exc}")
            raise ProvisionError(
                "Malformed file.", "configuration.malformed", detail=exc.localized_message()
            ) from exc

        for warning in result.warnings:
            logger.warning(f"{self.input_path}: {warning.key}")

        self._result = result
        self._sprite = result.sprite
        self._modified = False
        logger.debug(f"Loaded {self._sprite!r}")

    def get_current_sprite(self) -> Optional[Sprite]:
        return self._sprite

    def start_modification(self) -> Sprite:
        self._modified = True
        return self._sprite

    def is_modified(self) -> bool:
        return self._modified

    def get_warnings(self) -> List[FaerieWarning]:
        if self._result is None:
            return []
        return list(self._result.warnings)

    @property
    def is_legacy(self) -> bool:
        return self._result is not None and self._result.is_legacy

    def save(self, path: Optional[str] = None) -> Provider:
        path = path or self.input_path
        codec = codec_for_path(path)
        if codec is None:
            raise SavingError(f"Unsupported file type: {path}", "configuration.type")

        if self._sprite is None:
            raise SavingError("No sprite has been loaded.", "configuration.empty")

        logger.info(f"Saving configuration: {path}")
        data = codec.emit_bytes(self._sprite)
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError as exc:
            logger.error(f"Can't write {path}: {exc}")
            raise SavingError("Can't write to file.", "configuration.io") from exc

        self.input_path = path
        self._modified = False
        return self


# ============================================================================
# Opening files
# ============================================================================

def _provider_for_path(path: str, errors: List[FaerieError]) -> Provider:
    if not os.path.isfile(path) or not os.access(path, os.R_OK):
        errors.append(LoadingError(f"Can't read {path}", "file"))
        return BlankProvider()

    if is_configuration(path):
        return ConfigurationProvider(path)

    if is_rom(path):
        from .rom import ROMProvider
        try:
            return ROMProvider(path)
        except LoadingError as exc:
            errors.append(exc)
            return BlankProvider()

    errors.append(LoadingError(f"Unknown file type: {path}", "type"))
    return BlankProvider()


def open_provider(path: Optional[str] = None, index: int = 0) -> Tuple[Provider, List[FaerieError]]:
    """
    Open a file for editing and load one of its sprites.

    Nothing is raised: when the file or the sprite can't be opened, the
    first sprite is tried, then a blank sprite is used. Every problem met on
    the way is returned so it can be shown to the user.

    Args:
        path: File to open, None for a blank sprite
        index: Sprite to load

    Returns:
        (provider, errors)
    """
    errors: List[FaerieError] = []
    provider = _provider_for_path(path, errors) if path else BlankProvider()

    try:
        provider.load_sprite(index)
    except ProvisionError as exc:
        errors.append(exc)
        try:
            provider.load_sprite(0)
        except ProvisionError as inner:
            errors.append(inner)
            provider = BlankProvider()

    for error in errors:
        logger.warning(f"{error.key}: {error}")

    return provider, errors
