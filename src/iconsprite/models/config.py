"""Configuration models for the icon sprite builder.

Defines Pydantic models for application configuration (logging and sprite
defaults loaded from YAML) and for the markup optimizer's plugin pipeline.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from iconsprite.constants import DEFAULT_INDENT, DEFAULT_MAX_CONCURRENT_LOADS


def _normalize_path(path: str | Path) -> Path:
    """Convert a string path to a Path object.

    Internal utility function to avoid circular imports with path_resolver.

    Args:
        path: String or Path object

    Returns:
        A Path object.
    """
    return Path(path) if isinstance(path, str) else path


class PluginSpec(BaseModel):
    """A named optimizer plugin with optional parameters."""

    name: str
    params: dict[str, Any] = Field(default_factory=dict)


class OptimizeConfig(BaseModel):
    """Markup optimizer configuration.

    Plugins run in list order. Plain strings are shorthand for a plugin
    without parameters.
    """

    plugins: list[str | PluginSpec] = Field(default_factory=list)
    pretty: bool = False
    indent: str = DEFAULT_INDENT


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    file: str | None = None
    format: str = "console"
    max_size_mb: int = 5
    backup_count: int = 3

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate the log level is one the logging module knows.

        Args:
            v: The log level name.

        Returns:
            The upper-cased log level name.

        Raises:
            ValueError: If the level is not a standard logging level.
        """
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate the log output format.

        Args:
            v: The log format name.

        Returns:
            The validated format value.

        Raises:
            ValueError: If the format is neither "console" nor "json".
        """
        valid_formats = ["console", "json"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {', '.join(valid_formats)}")
        return v.lower()


class SpriteConfig(BaseModel):
    """Sprite build defaults. Command line options take precedence."""

    prefix: str | None = None
    overwrite: bool = False
    indent: str = DEFAULT_INDENT
    max_concurrent_loads: int = DEFAULT_MAX_CONCURRENT_LOADS

    @field_validator("indent")
    @classmethod
    def validate_indent(cls, v: str) -> str:
        """Validate the indentation unit is non-empty whitespace.

        Args:
            v: The indentation string.

        Returns:
            The validated indentation string.

        Raises:
            ValueError: If the indent is empty or contains non-whitespace.
        """
        if not v or v.strip():
            raise ValueError("Indent must be a non-empty run of spaces or tabs")
        return v

    @field_validator("max_concurrent_loads")
    @classmethod
    def validate_max_concurrent_loads(cls, v: int) -> int:
        """Validate at least one file can be loaded at a time.

        Args:
            v: The concurrency limit.

        Returns:
            The validated limit.

        Raises:
            ValueError: If the limit is less than 1.
        """
        if v < 1:
            raise ValueError("max_concurrent_loads must be at least 1")
        return v


class AppConfig(BaseModel):
    """Main application configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    sprite: SpriteConfig = Field(default_factory=SpriteConfig)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "AppConfig":
        """Load configuration from YAML file.

        An empty file yields the default configuration.

        Args:
            config_path: Path to the YAML configuration file. Can be a string path
                or a Path object.

        Returns:
            An initialized AppConfig object with values from the YAML file.

        Raises:
            FileNotFoundError: If the specified config file doesn't exist.
            yaml.YAMLError: If the YAML file has invalid syntax.
            ValidationError: If the configuration values don't match the expected schema.
        """
        import yaml

        # Use direct import to avoid circular imports
        from iconsprite.utils.file_utils import read_text

        path = _normalize_path(config_path)

        yaml_content = read_text(path)
        config_data = yaml.safe_load(yaml_content)

        return cls.model_validate(config_data or {})
