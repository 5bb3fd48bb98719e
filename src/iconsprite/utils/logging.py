"""Logging configuration module for the icon sprite builder.

Provides structured logging setup with support for console and file output
in both JSON and human-readable formats. Console output goes to stderr so it
never interleaves with a sprite printed on stdout.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler

import structlog
from structlog.stdlib import ProcessorFormatter

from iconsprite.constants import BYTES_PER_MEGABYTE
from iconsprite.models.config import LoggingConfig
from iconsprite.utils.early_error_handler import handle_startup_error
from iconsprite.utils.path_utils import path_resolver


def setup_logging(config: LoggingConfig, name: str) -> logging.Logger:
    """Set up logging with the specified configuration.

    Args:
        config: Logging configuration.
        name: Logger name. Module loggers below this name inherit its handlers.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    # Clear existing handlers
    logger.handlers = []

    level = getattr(logging, config.level.upper(), logging.WARNING)
    logger.setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if config.format.lower() == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    formatter = ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
    )

    # Console output always goes to stderr; the sprite may be on stdout
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if config.file:
        try:
            from iconsprite.utils import file_utils

            log_path = path_resolver.normalize_path(config.file)
            file_utils.ensure_dir_exists(log_path.parent)

            file_handler = RotatingFileHandler(
                config.file,
                maxBytes=config.max_size_mb * BYTES_PER_MEGABYTE,
                backupCount=config.backup_count,
            )
            file_handler.setFormatter(formatter)
            file_handler.setLevel(level)
            logger.addHandler(file_handler)
        except OSError as e:
            error_msg = f"Failed to set up file logging: {e}"
            handle_startup_error("LOGGING_FILE_ERROR", error_msg, {"log_file": str(config.file)})
            logger.error(error_msg)

    return logger
