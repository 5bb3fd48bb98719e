"""Command line entry point for the icon sprite builder.

Parses arguments, loads the optional configuration file, builds the sprite
and writes it to a file or to standard output.

Exit codes:
    0: The sprite was emitted. This includes a failed output file write,
       which is reported but does not change the exit code.
    1: An input file could not be read, the configuration is invalid, the
       user declined to overwrite the output file, or the run was interrupted.
"""

import argparse
import asyncio
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from iconsprite import __version__
from iconsprite.builder import IconSpriteBuilder
from iconsprite.exceptions import (
    ConfigurationError,
    InputError,
    InvalidConfigError,
    OutputWriteError,
    OverwriteDeclinedError,
    chain_exception,
)
from iconsprite.models.config import AppConfig
from iconsprite.utils import file_utils, path_resolver, validate_config_path
from iconsprite.utils.early_error_handler import handle_keyboard_interrupt, handle_startup_error
from iconsprite.utils.logging import setup_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="iconsprite", description="Creates an icon sprite from a set of SVG files"
    )
    parser.add_argument("files", nargs="+", help="SVG files to compile")
    parser.add_argument("-p", "--prefix", default=None, help="Prefix to add to sprite IDs")
    parser.add_argument(
        "-o",
        "--outfile",
        default=None,
        help="Write result to a file (writes to stdout if omitted)",
    )
    parser.add_argument(
        "-y",
        "--overwrite",
        action="store_true",
        default=None,
        help="Overwrites outfile if specified",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to a YAML configuration file (default: ./iconsprite.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )
    parser.add_argument("--version", action="version", version=f"iconsprite {__version__}")
    return parser


def load_config(config_path: str | None, log_level: str | None = None) -> AppConfig:
    """Load the application configuration.

    Args:
        config_path: Explicit configuration file, or None to search the default locations
        log_level: Optional log level taking precedence over the file

    Returns:
        The configuration; defaults when no file is found.

    Raises:
        ConfigFileNotFoundError: If an explicit configuration file does not exist.
        InvalidConfigError: If the file cannot be read, is not valid YAML or fails
            validation.
    """
    resolved_path = validate_config_path(config_path)
    config = AppConfig()

    if resolved_path is not None:
        try:
            config = AppConfig.from_yaml(resolved_path)
        except (OSError, UnicodeDecodeError, yaml.YAMLError, ValidationError) as e:
            raise chain_exception(
                InvalidConfigError(
                    f"Invalid configuration file: {resolved_path}",
                    {"path": str(resolved_path), "error": str(e)},
                ),
                e,
            )

    if log_level is not None:
        config.logging.level = log_level
    return config


def confirm_overwrite(outfile: Path) -> bool:
    """Ask on the terminal whether an existing output file may be replaced.

    Args:
        outfile: The existing output file

    Returns:
        True only if the user answered "y".
    """
    try:
        answer = input(f'Output file "{outfile}" exists; overwrite? (y/N) ')
    except EOFError:
        return False
    return answer.strip().lower() == "y"


def write_output(sprite: str, outfile: Path | None, overwrite: bool) -> None:
    """Emit the sprite to standard output or to a file.

    Args:
        sprite: The sprite markup
        outfile: Absolute output path, or None for standard output
        overwrite: Replace an existing file without asking

    Raises:
        OverwriteDeclinedError: If the user declined to replace an existing file.
        OutputWriteError: If the file could not be written.
    """
    if outfile is None:
        print(sprite)
        return

    if file_utils.file_exists(outfile) and not overwrite:
        if not confirm_overwrite(outfile):
            raise OverwriteDeclinedError("Cancelled.", {"path": str(outfile)})

    try:
        file_utils.write_text(outfile, sprite, make_dirs=False)
    except OSError as e:
        raise OutputWriteError(
            "Failed to write icon sprite to output file.",
            {"path": str(outfile), "error": str(e)},
        ) from e


def main(argv: list[str] | None = None) -> int:
    """Run the icon sprite builder.

    Args:
        argv: Command line arguments, defaults to sys.argv[1:]

    Returns:
        The process exit code.
    """
    args = create_parser().parse_args(argv)

    try:
        config = load_config(args.config, args.log_level)
    except ConfigurationError as e:
        handle_startup_error("Configuration Error", e.message, e.details)
        return 1

    logger = setup_logging(config.logging, "iconsprite")

    files = path_resolver.resolve_all(args.files)
    outfile = path_resolver.resolve(args.outfile) if args.outfile else None
    prefix = args.prefix if args.prefix is not None else config.sprite.prefix
    overwrite = args.overwrite if args.overwrite is not None else config.sprite.overwrite

    builder = IconSpriteBuilder(config.sprite)

    try:
        sprite = asyncio.run(builder.build(files, prefix or ""))
        write_output(sprite, outfile, overwrite)
    except InputError as e:
        logger.error("Sprite build aborted: %s", e)
        return 1
    except OverwriteDeclinedError as e:
        print(e.message)
        return 1
    except OutputWriteError as e:
        logger.error("Output write failed: %s", e)
        print(e.message, file=sys.stderr)
        return 0
    except KeyboardInterrupt:
        handle_keyboard_interrupt()
        return 1

    if outfile is not None:
        logger.info("Wrote icon sprite to %s", outfile)
    return 0


def cli_entrypoint() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli_entrypoint()
