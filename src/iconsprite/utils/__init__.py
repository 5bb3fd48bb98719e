"""Module initialization."""

from iconsprite.utils.path_utils import PathResolver, path_resolver, validate_config_path

__all__ = [
    "PathResolver",
    "path_resolver",
    "validate_config_path",
]
