"""Data models for icons collected into a sprite."""

from pydantic import BaseModel, ConfigDict


class IconEntry(BaseModel):
    """A single icon ready to be placed in a sprite.

    Attributes:
        identifier: Slugified symbol id, unique within one build
        markup: Minified SVG markup of the icon
    """

    model_config = ConfigDict(frozen=True)

    identifier: str
    markup: str
