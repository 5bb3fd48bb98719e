"""Allow running the builder with ``python -m iconsprite``."""

from iconsprite.cli import cli_entrypoint

cli_entrypoint()
