"""Custom exception hierarchy for the icon sprite builder.

This module defines domain-specific exceptions so that the command line layer
can map each failure to the right exit behavior.

Exception Hierarchy:
    IconSpriteError (Base)
    ├── ConfigurationError
    │   ├── InvalidConfigError
    │   └── ConfigFileNotFoundError
    ├── InputError
    │   ├── IconReadError
    │   └── MarkupError
    └── OutputError
        ├── OutputWriteError
        └── OverwriteDeclinedError
"""

from typing import Any


# Base Exception
class IconSpriteError(Exception):
    """Base exception for all icon sprite errors.

    This is the root exception that all custom exceptions inherit from,
    allowing for broad exception handling when needed.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary containing additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize the exception with message and optional details.

        Args:
            message: Human-readable error description
            details: Optional dictionary containing additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


# Configuration Exceptions
class ConfigurationError(IconSpriteError):
    """Base exception for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration contains invalid values.

    Example:
        raise InvalidConfigError(
            "Unknown optimizer plugin",
            {"plugin": "removeEverything"}
        )
    """

    pass


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when an explicitly requested configuration file cannot be found.

    Example:
        raise ConfigFileNotFoundError(
            "Configuration file not found",
            {"path": "/home/user/iconsprite.yaml"}
        )
    """

    pass


# Input Exceptions
class InputError(IconSpriteError):
    """Base exception for failures while loading input icons.

    Any input error aborts the whole sprite build.
    """

    pass


class IconReadError(InputError):
    """Raised when an input icon file cannot be read.

    Example:
        raise IconReadError(
            "Error reading input file: /icons/home.svg",
            {"path": "/icons/home.svg", "error": "Permission denied"}
        )
    """

    pass


class MarkupError(InputError):
    """Raised when markup cannot be parsed by the optimizer.

    Example:
        raise MarkupError(
            "Invalid SVG markup",
            {"path": "/icons/broken.svg", "error": "mismatched tag: line 1, column 30"}
        )
    """

    pass


# Output Exceptions
class OutputError(IconSpriteError):
    """Base exception for failures while emitting the sprite."""

    pass


class OutputWriteError(OutputError):
    """Raised when the sprite cannot be written to the output file.

    Example:
        raise OutputWriteError(
            "Failed to write icon sprite to output file.",
            {"path": "/readonly/sprite.svg", "error": "Read-only file system"}
        )
    """

    pass


class OverwriteDeclinedError(OutputError):
    """Raised when the user declines to overwrite an existing output file.

    Example:
        raise OverwriteDeclinedError(
            "Cancelled.",
            {"path": "/icons/sprite.svg"}
        )
    """

    pass


# Utility function for exception chaining
def chain_exception(new_exception: IconSpriteError, cause: Exception) -> IconSpriteError:
    """Chain a new exception with its underlying cause.

    Args:
        new_exception: The new domain-specific exception to raise
        cause: The underlying exception that caused this error

    Returns:
        The new exception with cause properly chained

    Example:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise chain_exception(
                InvalidConfigError("Invalid YAML", {"path": path}),
                e
            )
    """
    new_exception.__cause__ = cause
    return new_exception
