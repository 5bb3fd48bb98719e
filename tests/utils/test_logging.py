"""Tests for the logging module.

Tests cover the setup_logging function, including configuration of log levels,
formatters, and handlers with various output formats.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from unittest.mock import patch

import pytest
from structlog.stdlib import ProcessorFormatter

from iconsprite.models.config import LoggingConfig
from iconsprite.utils.logging import setup_logging


@pytest.fixture()
def basic_config() -> LoggingConfig:
    """Create a basic logging configuration with no file output."""
    return LoggingConfig(level="INFO", file=None, format="console")


@pytest.fixture()
def json_file_config(tmp_path: Path) -> LoggingConfig:
    """Create a logging configuration with JSON file output."""
    log_file = tmp_path / "logs" / "iconsprite.log"
    return LoggingConfig(level="DEBUG", file=str(log_file), format="json", max_size_mb=2)


def test_setup_logging_basic(basic_config: LoggingConfig) -> None:
    """Test basic logger setup with no file output."""
    logger = setup_logging(basic_config, "test_logger")

    assert logger.name == "test_logger"
    assert logger.level == logging.INFO

    # Console output must stay off stdout
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert logger.handlers[0].stream is sys.stderr


def test_setup_logging_replaces_handlers(basic_config: LoggingConfig) -> None:
    """Test repeated setup does not stack handlers."""
    setup_logging(basic_config, "test_logger")
    logger = setup_logging(basic_config, "test_logger")
    assert len(logger.handlers) == 1


def test_setup_logging_json_format(basic_config: LoggingConfig) -> None:
    """Test logger setup with JSON formatter."""
    basic_config.format = "json"

    with patch("structlog.processors.JSONRenderer") as mock_json_renderer:
        logger = setup_logging(basic_config, "test_logger")

        assert mock_json_renderer.call_count == 1
        assert isinstance(logger.handlers[0].formatter, ProcessorFormatter)


def test_setup_logging_console_format(basic_config: LoggingConfig) -> None:
    """Test logger setup with console text formatter."""
    with patch("structlog.dev.ConsoleRenderer") as mock_console_renderer:
        logger = setup_logging(basic_config, "test_logger")

        assert mock_console_renderer.call_count == 1
        assert mock_console_renderer.call_args.kwargs == {"colors": False}
        assert isinstance(logger.handlers[0].formatter, ProcessorFormatter)


def test_setup_logging_with_file(json_file_config: LoggingConfig) -> None:
    """Test logger setup with file output."""
    logger = setup_logging(json_file_config, "test_logger")

    # Console and file
    assert len(logger.handlers) == 2
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert isinstance(logger.handlers[1], RotatingFileHandler)

    file_handler = logger.handlers[1]
    assert file_handler.baseFilename == str(json_file_config.file)
    assert file_handler.maxBytes == 2 * 1024 * 1024
    assert file_handler.backupCount == json_file_config.backup_count

    file_path = json_file_config.file
    assert file_path is not None
    assert Path(file_path).parent.exists()
    file_handler.close()


def test_setup_logging_writes_json_lines(json_file_config: LoggingConfig) -> None:
    """Test module loggers below the configured name end up in the file as JSON."""
    logger = setup_logging(json_file_config, "test_logger")
    logging.getLogger("test_logger.builder").warning("Ignoring non-SVG file: %s", "x.png")
    for handler in logger.handlers:
        handler.flush()

    assert json_file_config.file is not None
    content = Path(json_file_config.file).read_text(encoding="utf-8")
    assert '"event": "Ignoring non-SVG file: x.png"' in content
    assert '"level": "warning"' in content
    logger.handlers[1].close()


def test_setup_logging_file_error(
    json_file_config: LoggingConfig, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test error handling when setting up file logging."""
    with patch("pathlib.Path.mkdir", side_effect=PermissionError("Permission denied")):
        with patch("logging.Logger.error") as mock_error:
            logger = setup_logging(json_file_config, "test_logger")

            # Only the console handler is left
            assert len(logger.handlers) == 1
            assert isinstance(logger.handlers[0], logging.StreamHandler)

            assert mock_error.call_count == 1
            error_msg = mock_error.call_args[0][0]
            assert "Failed to set up file logging" in error_msg
            assert "Permission denied" in error_msg

    assert "LOGGING_FILE_ERROR" in capsys.readouterr().err


def test_setup_logging_custom_level(basic_config: LoggingConfig) -> None:
    """Test logger setup with custom log level."""
    basic_config.level = "DEBUG"
    logger = setup_logging(basic_config, "test_logger")
    assert logger.level == logging.DEBUG

    basic_config.level = "ERROR"
    logger = setup_logging(basic_config, "test_logger")
    assert logger.level == logging.ERROR

    # Unknown names fall back to WARNING
    basic_config.level = "INVALID_LEVEL"
    logger = setup_logging(basic_config, "test_logger")
    assert logger.level == logging.WARNING


def test_structlog_configuration(basic_config: LoggingConfig) -> None:
    """Test structlog configuration."""
    with patch("structlog.configure") as mock_configure:
        setup_logging(basic_config, "test_logger")

        assert mock_configure.call_count == 1

        _, kwargs = mock_configure.call_args
        assert len(kwargs["processors"]) == 8
        assert kwargs["processors"][-1] is ProcessorFormatter.wrap_for_formatter
        assert kwargs["context_class"] is dict
        assert kwargs["cache_logger_on_first_use"] is True
