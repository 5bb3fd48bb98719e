"""Tests for custom exception hierarchy."""

import pytest

from iconsprite.exceptions import (
    ConfigFileNotFoundError,
    ConfigurationError,
    IconReadError,
    IconSpriteError,
    InputError,
    InvalidConfigError,
    MarkupError,
    OutputError,
    OutputWriteError,
    OverwriteDeclinedError,
    chain_exception,
)


class TestIconSpriteError:
    """Test base exception class."""

    def test_base_exception_with_message_only(self) -> None:
        """Test creating exception with just a message."""
        exc = IconSpriteError("Test error")
        assert str(exc) == "Test error"
        assert exc.message == "Test error"
        assert exc.details == {}

    def test_base_exception_with_details(self) -> None:
        """Test creating exception with message and details."""
        exc = IconSpriteError("Test error", {"path": "/a.svg"})
        assert exc.details == {"path": "/a.svg"}
        assert str(exc) == "Test error - Details: {'path': '/a.svg'}"


@pytest.mark.parametrize(
    ("exc_class", "parent"),
    [
        (InvalidConfigError, ConfigurationError),
        (ConfigFileNotFoundError, ConfigurationError),
        (IconReadError, InputError),
        (MarkupError, InputError),
        (OutputWriteError, OutputError),
        (OverwriteDeclinedError, OutputError),
    ],
)
def test_hierarchy(exc_class: type[IconSpriteError], parent: type[IconSpriteError]) -> None:
    """Test each exception sits under its category and the base class."""
    exc = exc_class("message")
    assert isinstance(exc, parent)
    assert isinstance(exc, IconSpriteError)
    assert isinstance(exc, Exception)


def test_categories_are_distinct() -> None:
    """Test input and output failures can be told apart."""
    assert not isinstance(IconReadError("x"), OutputError)
    assert not isinstance(OutputWriteError("x"), InputError)


class TestChainException:
    """Test the chain_exception helper."""

    def test_chain_sets_cause(self) -> None:
        """Test the cause is attached to the new exception."""
        original = OSError("Permission denied")
        chained = chain_exception(IconReadError("Error reading input file: /a.svg"), original)
        assert chained.__cause__ is original

    def test_chain_in_raise(self) -> None:
        """Test a chained exception keeps its cause when raised."""
        with pytest.raises(InvalidConfigError) as exc_info:
            try:
                raise ValueError("bad yaml")
            except ValueError as e:
                raise chain_exception(InvalidConfigError("Invalid configuration file"), e)

        assert isinstance(exc_info.value.__cause__, ValueError)
