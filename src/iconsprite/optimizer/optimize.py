"""Markup optimizer entry point.

Resolves the configured plugin list (expanding the bundled preset), runs the
plugins over the parsed document in order and serializes the result.
"""

import logging
from typing import Any

from iconsprite.constants import PRESET_DEFAULT
from iconsprite.exceptions import InvalidConfigError
from iconsprite.models.config import OptimizeConfig, PluginSpec
from iconsprite.optimizer.document import parse, serialize
from iconsprite.optimizer.plugins import PLUGINS

logger = logging.getLogger(__name__)

# Members of the bundled preset, in execution order
DEFAULT_PRESET_PLUGINS = (
    "removeComments",
    "removeMetadata",
    "removeEditorsNSData",
    "cleanupAttrs",
    "removeUnknownsAndDefaults",
    "removeViewBox",
    "removeHiddenElems",
    "removeEmptyText",
    "removeEmptyAttrs",
    "removeEmptyContainers",
    "collapseGroups",
    "removeUnusedNS",
    "removeTitle",
    "removeDesc",
)


def _expand_preset(params: dict[str, Any]) -> list[tuple[str, dict[str, Any]]]:
    overrides: dict[str, Any] = params.get("overrides", {})
    unknown = sorted(set(overrides) - set(DEFAULT_PRESET_PLUGINS))
    if unknown:
        raise InvalidConfigError(
            f"Unknown plugins in {PRESET_DEFAULT} overrides: {', '.join(unknown)}",
            {"plugins": unknown, "preset": PRESET_DEFAULT},
        )

    resolved: list[tuple[str, dict[str, Any]]] = []
    for name in DEFAULT_PRESET_PLUGINS:
        override = overrides.get(name, True)
        if override is False:
            continue
        resolved.append((name, override if isinstance(override, dict) else {}))
    return resolved


def resolve_plugins(plugins: list[str | PluginSpec]) -> list[tuple[str, dict[str, Any]]]:
    """Turn a plugin configuration into an ordered list of (name, params).

    Args:
        plugins: Plugin names or specs, as found in OptimizeConfig.plugins

    Returns:
        The plugins to run, with the preset expanded in place.

    Raises:
        InvalidConfigError: If a plugin name is not registered.
    """
    resolved: list[tuple[str, dict[str, Any]]] = []
    for entry in plugins:
        spec = PluginSpec(name=entry) if isinstance(entry, str) else entry
        if spec.name == PRESET_DEFAULT:
            resolved.extend(_expand_preset(spec.params))
        elif spec.name in PLUGINS:
            resolved.append((spec.name, spec.params))
        else:
            raise InvalidConfigError(
                f"Unknown optimizer plugin: {spec.name}", {"plugin": spec.name}
            )
    return resolved


def optimize(svg: str | bytes, config: OptimizeConfig | None = None) -> str:
    """Optimize SVG markup.

    The XML declaration, DOCTYPE and anything outside the root element are
    never emitted; whitespace-only text between elements is dropped. What
    else changes is decided entirely by the configured plugins, so an empty
    plugin list only reformats.

    Args:
        svg: Markup as text or bytes
        config: Plugins and output options; defaults to no plugins, compact output

    Returns:
        The optimized markup.

    Raises:
        MarkupError: If the markup is not well-formed.
        InvalidConfigError: If the configuration names an unknown plugin.
    """
    config = config or OptimizeConfig()
    plugins = resolve_plugins(config.plugins)

    document = parse(svg)
    for name, params in plugins:
        logger.debug("Running optimizer plugin %s", name)
        PLUGINS[name](document, params)

    return serialize(document, pretty=config.pretty, indent=config.indent)
