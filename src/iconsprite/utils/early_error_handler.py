"""Early error handler for failures before logging is configured.

This module provides a simple error handler used while loading configuration,
before the logging system is initialized. It ensures fatal errors are visible
to users even if logging never comes up.
"""

import sys
from datetime import datetime
from typing import Any


def handle_startup_error(
    error_type: str, message: str, details: dict[str, Any] | None = None
) -> None:
    """Handle errors that occur before logging is configured.

    Writes a formatted error message to stderr, so it never mixes with a
    sprite written to stdout.

    Args:
        error_type: Type of error (e.g., "Configuration Error")
        message: Main error message
        details: Optional dictionary of additional error details
    """
    timestamp = datetime.now().isoformat()

    sys.stderr.write(f"\n[{timestamp}] {error_type}: {message}\n")

    if details:
        sys.stderr.write("Details:\n")
        for key, value in details.items():
            sys.stderr.write(f"  {key}: {value}\n")

    sys.stderr.flush()


def handle_keyboard_interrupt() -> None:
    """Handle keyboard interrupt gracefully."""
    sys.stderr.write("\n\nCancelled by user (Ctrl+C)\n")
    sys.stderr.flush()
