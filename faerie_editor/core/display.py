"""
Display Data - Editor preview metadata attached to a sprite.

The preview is either a list of 8x8 tiles or a text label. A sprite without
any preview simply has no DisplayData.
"""

from dataclasses import dataclass, field
from typing import List, Union

DEFAULT_NAME = "Sprite"
DEFAULT_DESCRIPTION = "No description given."
DEFAULT_LABEL = "Sprite"
DEFAULT_POSITION = (7, 7)


@dataclass
class SpriteTile:
    """One tile of a preview, relative to the display anchor."""
    x: int
    y: int
    tile: int


@dataclass
class TileList:
    """Preview drawn from tiles."""
    tiles: List[SpriteTile] = field(default_factory=list)


@dataclass
class Label:
    """Preview drawn as a text label."""
    text: str = DEFAULT_LABEL


DisplayContent = Union[TileList, Label]


@dataclass
class DisplayData:
    """Name, description and anchor shared by every kind of preview."""
    name: str = DEFAULT_NAME
    description: str = DEFAULT_DESCRIPTION
    x: int = DEFAULT_POSITION[0]
    y: int = DEFAULT_POSITION[1]
    content: DisplayContent = field(default_factory=TileList)

    @property
    def position(self):
        return self.x, self.y

    def set_position(self, x: int, y: int) -> "DisplayData":
        self.x = x
        self.y = y
        return self

    @property
    def is_label(self) -> bool:
        return isinstance(self.content, Label)

    def copy(self) -> "DisplayData":
        content = self.content
        if isinstance(content, TileList):
            content = TileList([SpriteTile(t.x, t.y, t.tile) for t in content.tiles])
        elif isinstance(content, Label):
            content = Label(content.text)
        else:
            raise TypeError(f"Unknown display content: {type(content).__name__}")

        return DisplayData(self.name, self.description, self.x, self.y, content)


def tile_display(tiles: List[SpriteTile] = None, **kwargs) -> DisplayData:
    """Create display data previewed by tiles."""
    return DisplayData(content=TileList(list(tiles or [])), **kwargs)


def label_display(text: str = DEFAULT_LABEL, **kwargs) -> DisplayData:
    """Create display data previewed by a label."""
    return DisplayData(content=Label(text), **kwargs)
