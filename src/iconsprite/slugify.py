"""Identifier assignment for sprite symbols."""

import re

_DISALLOWED = re.compile(r"[^a-z0-9 _-]", re.IGNORECASE)
_CAMEL_BOUNDARY = re.compile(r"([^ _-])([A-Z])")
_SEPARATORS = re.compile(r"[ _]")
_EDGE_PUNCTUATION = re.compile(r"(^[^a-z0-9]+|[^a-z0-9]+$)", re.IGNORECASE)


def slugify(name: str, namespace: str | None = "") -> str:
    """Turn a file name into a lowercase, hyphen-separated symbol id.

    The namespace, when given, is prepended with a hyphen before the name is
    cleaned. Characters other than ASCII letters, digits, spaces, underscores
    and hyphens are dropped, camel-case boundaries become hyphens, spaces and
    underscores become hyphens and leading or trailing punctuation is trimmed.

    An input with no letters or digits yields an empty string.

    Args:
        name: Raw name, usually a file name without its extension
        namespace: Optional prefix shared by all icons of one sprite

    Returns:
        The identifier.

    Example:
        >>> slugify("MyIcon")
        'my-icon'
        >>> slugify("Icon", "nav")
        'nav-icon'
    """
    full_name = f"{namespace}-{name}" if namespace else name
    slug = _DISALLOWED.sub("", full_name)
    slug = _CAMEL_BOUNDARY.sub(r"\1-\2", slug)
    slug = _SEPARATORS.sub("-", slug)
    slug = _EDGE_PUNCTUATION.sub("", slug)
    return slug.lower()
