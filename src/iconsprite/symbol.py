"""Conversion of a minified icon into a reusable sprite symbol."""

import re

from iconsprite.constants import CURRENT_COLOR, SYMBOL_TAG

# Applied to the whole markup text, so a matching sequence anywhere is
# rewritten, not only real fill/stroke attributes.
_PAINT_ATTRIBUTE = re.compile(r'(fill|stroke)="(?!none).+?"', re.IGNORECASE)


def svg_to_symbol(identifier: str, svg: str) -> str:
    """Rewrite a minified icon document into a <symbol> fragment.

    The first ``<svg`` opening becomes ``<symbol id="...">``, the first
    ``</svg>`` becomes ``</symbol>`` and every fill or stroke value other
    than ``none`` becomes ``currentColor``, so the icon takes its color from
    the element that uses it. Nothing else in the markup changes.

    Args:
        identifier: Symbol id, as produced by slugify
        svg: Minified icon markup

    Returns:
        The symbol markup.
    """
    symbol = svg.replace("<svg", f'<{SYMBOL_TAG} id="{identifier}"', 1)
    symbol = symbol.replace("</svg>", f"</{SYMBOL_TAG}>", 1)
    return _PAINT_ATTRIBUTE.sub(rf'\1="{CURRENT_COLOR}"', symbol)
