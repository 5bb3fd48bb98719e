"""Sprite assembly for the icon sprite builder.

Loads SVG icons concurrently, minifies each one, and assembles the results
into a single sprite document of <symbol> elements sorted by id.

Loading uses asyncio: every file is read and minified in a worker thread,
bounded by a semaphore, and assembly waits until every load has finished.
The first failing load aborts the build and cancels the loads still pending.
"""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from iconsprite.constants import DEFAULT_INDENT, PRESET_DEFAULT, SVG_EXTENSION, SVG_NAMESPACE
from iconsprite.exceptions import IconReadError, MarkupError
from iconsprite.models.config import OptimizeConfig, PluginSpec, SpriteConfig
from iconsprite.models.icon import IconEntry
from iconsprite.optimizer import optimize
from iconsprite.slugify import slugify
from iconsprite.symbol import svg_to_symbol
from iconsprite.utils import file_utils

ICON_OPTIMIZE_CONFIG = OptimizeConfig(
    plugins=[
        PluginSpec(name=PRESET_DEFAULT, params={"overrides": {"removeViewBox": False}}),
        "removeXMLNS",
        "convertStyleToAttrs",
        "sortAttrs",
        "removeDimensions",
    ]
)


def minify(svg: str | bytes) -> str:
    """Minify a single icon document for inclusion in a sprite.

    Args:
        svg: Icon markup

    Returns:
        Compact markup without the default namespace declaration, explicit
        dimensions or editor metadata. The viewBox is always kept.

    Raises:
        MarkupError: If the markup is not well-formed.
    """
    return optimize(svg, ICON_OPTIMIZE_CONFIG)


def build_sprite(icons: Mapping[str, str], indent: str = DEFAULT_INDENT) -> str:
    """Assemble minified icons into a sprite document.

    Args:
        icons: Minified icon markup keyed by identifier
        indent: Indentation unit of the pretty-printed result

    Returns:
        The sprite markup with one <symbol> per icon, ordered by identifier.
    """
    symbols = "".join(
        svg_to_symbol(identifier, markup) for identifier, markup in sorted(icons.items())
    )
    sprite = f'<svg xmlns="{SVG_NAMESPACE}">{symbols}</svg>'

    # Formatting only; the symbols were minified when loaded
    return optimize(sprite, OptimizeConfig(plugins=[], pretty=True, indent=indent))


class IconSpriteBuilder:
    """Builds icon sprites from SVG files.

    Attributes:
        config: Sprite build settings
        logger: Logger for progress and warnings
    """

    def __init__(self, config: SpriteConfig | None = None) -> None:
        """Initialize the builder.

        Args:
            config: Sprite build settings; defaults are used when omitted.
        """
        self.config = config or SpriteConfig()
        self.logger = logging.getLogger(__name__)

    async def _load_icon(
        self, path: Path, namespace: str, semaphore: asyncio.Semaphore
    ) -> IconEntry | None:
        """Read and minify one input file.

        Args:
            path: Absolute path of the input file
            namespace: Identifier prefix
            semaphore: Limits how many files are processed at once

        Returns:
            The icon, or None if the file is not an SVG file.

        Raises:
            IconReadError: If the file cannot be read.
            MarkupError: If the file is not well-formed markup.
        """
        if path.suffix != SVG_EXTENSION:
            self.logger.warning("Ignoring non-SVG file: %s", path)
            return None

        identifier = slugify(path.stem, namespace)

        async with semaphore:
            try:
                contents = await asyncio.to_thread(file_utils.read_bytes, path)
            except OSError as e:
                self.logger.error("Error reading input file: %s", path)
                raise IconReadError(
                    f"Error reading input file: {path}", {"path": str(path), "error": str(e)}
                ) from e

            try:
                markup = await asyncio.to_thread(minify, contents)
            except MarkupError as e:
                self.logger.error("Error reading input file: %s", path)
                raise MarkupError(
                    f"Error reading input file: {path}", {**e.details, "path": str(path)}
                ) from e

        self.logger.debug("Loaded icon %s from %s", identifier, path)
        return IconEntry(identifier=identifier, markup=markup)

    async def load_icons(self, files: Sequence[Path], namespace: str = "") -> dict[str, str]:
        """Load every input file concurrently.

        Non-SVG files are skipped with a warning. When two files produce the
        same identifier, the one later in ``files`` wins.

        Args:
            files: Absolute input paths
            namespace: Identifier prefix

        Returns:
            Minified markup keyed by identifier.

        Raises:
            IconReadError: If any file cannot be read.
            MarkupError: If any file is not well-formed markup.
        """
        semaphore = asyncio.Semaphore(self.config.max_concurrent_loads)
        tasks = [
            asyncio.create_task(self._load_icon(path, namespace, semaphore)) for path in files
        ]

        try:
            entries = await asyncio.gather(*tasks)
        except Exception:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        icons: dict[str, str] = {}
        for entry in entries:
            if entry is not None:
                icons[entry.identifier] = entry.markup
        return icons

    async def build(self, files: Sequence[Path], namespace: str | None = None) -> str:
        """Build a sprite from input files.

        Args:
            files: Absolute input paths
            namespace: Identifier prefix; falls back to the configured prefix

        Returns:
            The sprite markup.

        Raises:
            IconReadError: If any file cannot be read.
            MarkupError: If any file is not well-formed markup.
        """
        if namespace is None:
            namespace = self.config.prefix or ""

        icons = await self.load_icons(files, namespace)
        sprite = build_sprite(icons, indent=self.config.indent)
        self.logger.info(
            "Built sprite with %d icons from %d input files", len(icons), len(files)
        )
        return sprite


async def iconsprite(
    files: Sequence[Path], namespace: str = "", config: SpriteConfig | None = None
) -> str:
    """Build a sprite from input files with a one-off builder.

    Args:
        files: Absolute input paths
        namespace: Identifier prefix
        config: Sprite build settings

    Returns:
        The sprite markup.
    """
    return await IconSpriteBuilder(config).build(files, namespace)
