"""SVG markup optimizer.

Parses SVG documents with ElementTree, applies a configurable list of named
plugins and serializes the result compactly or pretty-printed.
"""

from iconsprite.optimizer.document import SvgDocument, parse, serialize
from iconsprite.optimizer.optimize import DEFAULT_PRESET_PLUGINS, optimize, resolve_plugins
from iconsprite.optimizer.plugins import PLUGINS

__all__ = [
    "DEFAULT_PRESET_PLUGINS",
    "PLUGINS",
    "SvgDocument",
    "optimize",
    "parse",
    "resolve_plugins",
    "serialize",
]
