"""Path utility module for the icon sprite builder.

Provides centralized path resolution for input icons, the output sprite and
the optional configuration file, so that relative paths are interpreted the
same way everywhere.
"""

import os
from pathlib import Path

from iconsprite.constants import APP_DIR_NAME, CONFIG_FILENAME
from iconsprite.exceptions import ConfigFileNotFoundError


class PathResolver:
    """Centralized utility for path resolution and management.

    Attributes:
        user_config_dir: User-specific configuration directory
    """

    def __init__(self) -> None:
        """Initialize the path resolver."""
        self.user_config_dir = Path.home() / f".config/{APP_DIR_NAME}"

    def resolve(self, path: str | Path) -> Path:
        """Resolve a command line path to an absolute path.

        Absolute paths pass through unchanged. Relative paths are joined onto
        the current working directory and normalized lexically, without
        following symlinks.

        Args:
            path: Path as given on the command line

        Returns:
            An absolute Path object.
        """
        normalized = self.normalize_path(path)
        if normalized.is_absolute():
            return normalized
        return Path(os.path.normpath(Path.cwd() / normalized))

    def resolve_all(self, paths: list[str]) -> list[Path]:
        """Resolve a list of command line paths, preserving order.

        Args:
            paths: Paths as given on the command line

        Returns:
            Absolute Path objects in the same order.
        """
        return [self.resolve(path) for path in paths]

    def get_config_path(self, config_filename: str = CONFIG_FILENAME) -> Path | None:
        """Search for a configuration file.

        Checks the current working directory first, then the user's
        configuration directory.

        Args:
            config_filename: Name of the configuration file

        Returns:
            Path to the first configuration file found, or None.
        """
        candidate_paths = [
            Path.cwd() / config_filename,
            self.user_config_dir / config_filename,
        ]

        for path in candidate_paths:
            if path.is_file():
                return path

        return None

    def normalize_path(self, path: str | Path) -> Path:
        """Convert a string path to a Path object.

        Args:
            path: String or Path object

        Returns:
            A Path object.
        """
        return Path(path) if isinstance(path, str) else path

    def ensure_dir_exists(self, path: str | Path) -> Path:
        """Ensure a directory exists, creating it if necessary.

        Args:
            path: Directory path

        Returns:
            Path to the directory.
        """
        dir_path = self.normalize_path(path)
        dir_path.mkdir(exist_ok=True, parents=True)
        return dir_path


# Create a global instance for easy import
path_resolver = PathResolver()


def validate_config_path(config_path: str | Path | None = None) -> Path | None:
    """Validate and resolve the configuration file path.

    A configuration file is optional. When no path is given the standard
    locations are searched and None is returned if nothing is found. A path
    given explicitly must exist.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Resolved Path to the configuration file, or None when running on defaults.

    Raises:
        ConfigFileNotFoundError: If an explicitly given file does not exist.
    """
    if config_path is None:
        return path_resolver.get_config_path()

    resolved_path = path_resolver.resolve(config_path)

    if not resolved_path.is_file():
        raise ConfigFileNotFoundError(
            f"Configuration file not found: {resolved_path}",
            {"path": str(resolved_path), "cwd": str(Path.cwd())},
        )

    return resolved_path
