"""Optimization plugins for SVG documents.

Each plugin is a function taking the parsed document and its parameters and
modifying the document in place. Plugins are registered by name with the
``plugin`` decorator; names follow the ones SVG tool chains commonly use so
that configurations read the same.
"""

import re
import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterator
from typing import Any

from iconsprite.optimizer.document import SvgDocument, is_declaration, is_element, split_name

Plugin = Callable[[SvgDocument, dict[str, Any]], None]

PLUGINS: dict[str, Plugin] = {}

EDITOR_NAMESPACES = frozenset(
    {
        "http://inkscape.sourceforge.net/DTD/sodi-0.dtd",
        "http://inkscape.sourceforge.net/DTD/sodipodi-0.dtd",
        "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd",
        "http://www.inkscape.org/namespaces/inkscape",
        "http://www.bohemiancoding.com/sketch/ns",
        "http://ns.adobe.com/AdobeIllustrator/10.0/",
        "http://ns.adobe.com/Graphs/1.0/",
        "http://ns.adobe.com/AdobeSVGViewerExtensions/3.0/",
        "http://ns.adobe.com/Variables/1.0/",
        "http://ns.adobe.com/SaveForWeb/1.0/",
        "http://ns.adobe.com/Extensibility/1.0/",
        "http://ns.adobe.com/Flows/1.0/",
        "http://ns.adobe.com/ImageReplacement/1.0/",
        "http://ns.adobe.com/GenericCustomNamespace/1.0/",
        "http://ns.adobe.com/XPath/1.0/",
        "http://schemas.microsoft.com/visio/2003/SVGExtensions/",
        "http://taptrix.com/vectorillustrator/svg_extensions",
        "http://www.figma.com/figma/ns",
        "http://purl.org/dc/elements/1.1/",
        "http://creativecommons.org/ns#",
        "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
        "http://www.serif.com/",
        "http://www.vector.evaxdesign.sk",
    }
)

# Properties that are also valid as SVG presentation attributes
PRESENTATION_ATTRIBUTES = frozenset(
    {
        "alignment-baseline", "baseline-shift", "clip", "clip-path", "clip-rule", "color",
        "color-interpolation", "color-interpolation-filters", "color-profile",
        "color-rendering", "cursor", "direction", "display", "dominant-baseline",
        "enable-background", "fill", "fill-opacity", "fill-rule", "filter", "flood-color",
        "flood-opacity", "font-family", "font-size", "font-size-adjust", "font-stretch",
        "font-style", "font-variant", "font-weight", "glyph-orientation-horizontal",
        "glyph-orientation-vertical", "image-rendering", "letter-spacing", "lighting-color",
        "marker-end", "marker-mid", "marker-start", "mask", "opacity", "overflow",
        "paint-order", "pointer-events", "shape-rendering", "stop-color", "stop-opacity",
        "stroke", "stroke-dasharray", "stroke-dashoffset", "stroke-linecap",
        "stroke-linejoin", "stroke-miterlimit", "stroke-opacity", "stroke-width",
        "text-anchor", "text-decoration", "text-overflow", "text-rendering",
        "unicode-bidi", "vector-effect", "visibility", "word-spacing", "writing-mode",
    }
)  # fmt: skip

CONTAINER_ELEMENTS = frozenset(
    {"a", "defs", "g", "glyph", "marker", "mask", "missing-glyph", "pattern", "svg", "switch", "symbol"}
)

# Conditional processing attributes are meaningful even when empty
CONDITIONAL_ATTRIBUTES = frozenset({"requiredExtensions", "requiredFeatures", "systemLanguage"})

ATTRIBUTE_ORDER = (
    "id", "width", "height", "x", "x1", "x2", "y", "y1", "y2",
    "cx", "cy", "r", "fill", "stroke", "marker", "d", "points",
)  # fmt: skip

ROOT_DEFAULTS = {
    "x": "0",
    "y": "0",
    "preserveAspectRatio": "xMidYMid meet",
}

_STYLE_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_STYLE_DECLARATION = re.compile(
    r"""\s*([-\w]+)\s*:\s*((?:[^;"'()]|"[^"]*"|'[^']*'|\([^)]*\))+)"""
)
_WHITESPACE_RUN = re.compile(r"\s+")
_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_PX_SUFFIX = re.compile(r"px$")


def plugin(name: str) -> Callable[[Plugin], Plugin]:
    """Register a plugin function under the given name."""

    def register(func: Plugin) -> Plugin:
        PLUGINS[name] = func
        return func

    return register


def _iter_with_parents(element: ET.Element) -> Iterator[tuple[ET.Element, ET.Element]]:
    """Yield (parent, child) pairs depth-first, children after their parents."""
    for child in list(element):
        yield element, child
        yield from _iter_with_parents(child)


def _remove_child(parent: ET.Element, child: ET.Element) -> None:
    """Remove child from parent, keeping any text that followed it."""
    if child.tail:
        index = list(parent).index(child)
        if index > 0:
            previous = parent[index - 1]
            previous.tail = (previous.tail or "") + child.tail
        else:
            parent.text = (parent.text or "") + child.tail
    parent.remove(child)


def _remove_where(root: ET.Element, predicate: Callable[[ET.Element], bool]) -> None:
    for parent, child in list(_iter_with_parents(root)):
        if predicate(child) and child in list(parent):
            _remove_child(parent, child)


def _format_number(value: float) -> str:
    return str(int(value)) if value.is_integer() else repr(value)


def _parse_number(value: str | None) -> float | None:
    if value is None or not _NUMBER.match(value.strip()):
        return None
    return float(value)


# --- Preset members ---


@plugin("removeComments")
def remove_comments(document: SvgDocument, params: dict[str, Any]) -> None:
    """Remove comments, keeping legal comments that start with "!"."""
    _remove_where(
        document.root,
        lambda node: node.tag is ET.Comment and not (node.text or "").startswith("!"),
    )


@plugin("removeMetadata")
def remove_metadata(document: SvgDocument, params: dict[str, Any]) -> None:
    _remove_where(document.root, lambda node: node.tag == "metadata")


@plugin("removeEditorsNSData")
def remove_editors_ns_data(document: SvgDocument, params: dict[str, Any]) -> None:
    """Remove elements, attributes and declarations of known editor namespaces."""
    namespaces = set(EDITOR_NAMESPACES) | set(params.get("additionalNamespaces", []))
    prefixes = {
        prefix for prefix, uri in document.namespaces.items() if prefix and uri in namespaces
    }
    for el in document.root.iter():
        if is_element(el):
            prefixes.update(
                split_name(key)[1]
                for key, uri in el.attrib.items()
                if key.startswith("xmlns:") and uri in namespaces
            )
    if not prefixes:
        return

    _remove_where(
        document.root,
        lambda node: is_element(node) and split_name(node.tag)[0] in prefixes,
    )
    for el in document.root.iter():
        if is_element(el):
            for key in [
                k
                for k in el.attrib
                if split_name(k)[0] in prefixes or (k.startswith("xmlns:") and k[6:] in prefixes)
            ]:
                del el.attrib[key]
    for prefix in prefixes:
        document.namespaces.pop(prefix, None)


@plugin("cleanupAttrs")
def cleanup_attrs(document: SvgDocument, params: dict[str, Any]) -> None:
    """Collapse whitespace runs in attribute values and trim them."""
    for el in document.root.iter():
        if not is_element(el):
            continue
        for key, value in el.attrib.items():
            el.attrib[key] = _WHITESPACE_RUN.sub(" ", value).strip()


@plugin("removeUnknownsAndDefaults")
def remove_unknowns_and_defaults(document: SvgDocument, params: dict[str, Any]) -> None:
    """Remove root attributes that only restate defaults.

    Covers the ``version`` and ``baseProfile`` attributes and the default
    position and aspect ratio of the root element.
    """
    root = document.root
    for key in ("version", "baseProfile"):
        root.attrib.pop(key, None)
    for key, default in ROOT_DEFAULTS.items():
        if root.get(key) == default:
            del root.attrib[key]


@plugin("removeViewBox")
def remove_view_box(document: SvgDocument, params: dict[str, Any]) -> None:
    """Remove a viewBox that matches the element's width and height."""

    def redundant(el: ET.Element) -> bool:
        view_box = el.get("viewBox")
        width, height = el.get("width"), el.get("height")
        if view_box is None or width is None or height is None:
            return False
        parts = view_box.replace(",", " ").split()
        return parts == [
            "0",
            "0",
            _PX_SUFFIX.sub("", width),
            _PX_SUFFIX.sub("", height),
        ]

    root = document.root
    if root.tag == "svg" and redundant(root):
        del root.attrib["viewBox"]
    for el in root.iter():
        if el.tag in ("pattern", "marker") and redundant(el):
            del el.attrib["viewBox"]


@plugin("removeHiddenElems")
def remove_hidden_elems(document: SvgDocument, params: dict[str, Any]) -> None:
    """Remove elements that can never render."""

    def zero(el: ET.Element, *names: str) -> bool:
        return any(_parse_number(el.get(name)) == 0 for name in names)

    def hidden(el: ET.Element) -> bool:
        if not is_element(el) or el.tag in ("svg", "defs", "clipPath", "mask", "symbol"):
            return False
        if el.get("display") == "none" or el.get("opacity") == "0":
            return True
        if el.tag == "circle":
            return zero(el, "r")
        if el.tag == "ellipse":
            return zero(el, "rx", "ry")
        if el.tag == "rect":
            return zero(el, "width", "height")
        if el.tag == "path":
            return not el.get("d", "").strip()
        if el.tag in ("polyline", "polygon"):
            return not el.get("points", "").strip()
        return False

    _remove_where(document.root, hidden)


@plugin("removeEmptyText")
def remove_empty_text(document: SvgDocument, params: dict[str, Any]) -> None:
    def empty(el: ET.Element) -> bool:
        if el.tag in ("text", "tspan"):
            return not (el.text or "").strip() and len(el) == 0
        if el.tag == "tref":
            return el.get("xlink:href") is None and el.get("href") is None
        return False

    _remove_where(document.root, empty)


@plugin("removeEmptyAttrs")
def remove_empty_attrs(document: SvgDocument, params: dict[str, Any]) -> None:
    for el in document.root.iter():
        if not is_element(el):
            continue
        for key in [
            k
            for k, v in el.attrib.items()
            if v == "" and k not in CONDITIONAL_ATTRIBUTES and not is_declaration(k)
        ]:
            del el.attrib[key]


@plugin("removeEmptyContainers")
def remove_empty_containers(document: SvgDocument, params: dict[str, Any]) -> None:
    """Remove container elements without children, innermost first."""

    def visit(parent: ET.Element) -> None:
        for child in list(parent):
            visit(child)
            if child.tag not in CONTAINER_ELEMENTS or len(child) or (child.text or "").strip():
                continue
            if child.tag == "pattern" and child.attrib:
                continue
            if child.tag == "mask" and "id" in child.attrib:
                continue
            if child.tag == "g" and "filter" in child.attrib:
                continue
            if parent.tag == "switch":
                continue
            _remove_child(parent, child)

    visit(document.root)


@plugin("collapseGroups")
def collapse_groups(document: SvgDocument, params: dict[str, Any]) -> None:
    """Replace attribute-less groups with their children."""

    def visit(parent: ET.Element) -> None:
        for child in list(parent):
            visit(child)
            if child.tag != "g" or child.attrib or (child.text or "").strip():
                continue
            index = list(parent).index(child)
            grandchildren = list(child)
            if grandchildren:
                last = grandchildren[-1]
                last.tail = (last.tail or "") + (child.tail or "") or None
                child.tail = None
            parent.remove(child)
            for offset, grandchild in enumerate(grandchildren):
                parent.insert(index + offset, grandchild)

    visit(document.root)


@plugin("removeUnusedNS")
def remove_unused_ns(document: SvgDocument, params: dict[str, Any]) -> None:
    """Drop prefixed namespace declarations no element or attribute uses."""
    used: set[str] = set()
    for el in document.root.iter():
        if not is_element(el):
            continue
        used.add(split_name(el.tag)[0])
        used.update(split_name(key)[0] for key in el.attrib)
    for prefix in [p for p in document.namespaces if p and p not in used]:
        del document.namespaces[prefix]


@plugin("removeTitle")
def remove_title(document: SvgDocument, params: dict[str, Any]) -> None:
    _remove_where(document.root, lambda node: node.tag == "title")


@plugin("removeDesc")
def remove_desc(document: SvgDocument, params: dict[str, Any]) -> None:
    """Remove empty descriptions and the ones editors add.

    Pass ``removeAny`` to drop every description.
    """
    remove_any = bool(params.get("removeAny", False))

    def removable(node: ET.Element) -> bool:
        if node.tag != "desc":
            return False
        text = (node.text or "").strip()
        return remove_any or not text or text.startswith(("Created with", "Created using"))

    _remove_where(document.root, removable)


# --- Standalone plugins ---


@plugin("removeXMLNS")
def remove_xmlns(document: SvgDocument, params: dict[str, Any]) -> None:
    """Remove the default namespace declaration, for inline use in HTML."""
    document.namespaces.pop("", None)


@plugin("convertStyleToAttrs")
def convert_style_to_attrs(document: SvgDocument, params: dict[str, Any]) -> None:
    """Move presentation properties out of style attributes."""
    keep_important = bool(params.get("keepImportant", False))

    for el in document.root.iter():
        if not is_element(el) or "style" not in el.attrib:
            continue

        style = _STYLE_COMMENT.sub("", el.attrib["style"])
        remaining: list[str] = []
        moved: dict[str, str] = {}
        for match in _STYLE_DECLARATION.finditer(style):
            prop, value = match.group(1).lower(), match.group(2).strip()
            important = value.endswith("!important")
            if prop in PRESENTATION_ATTRIBUTES and not (important and keep_important):
                moved[prop] = value.removesuffix("!important").strip() if important else value
            else:
                remaining.append(f"{prop}:{value}")

        # Style declarations override attributes of the same name
        el.attrib.update(moved)
        if remaining:
            el.attrib["style"] = ";".join(remaining)
        else:
            del el.attrib["style"]


@plugin("sortAttrs")
def sort_attrs(document: SvgDocument, params: dict[str, Any]) -> None:
    """Sort attributes into a canonical order.

    Namespace declarations come first, then namespaced attributes, then the
    names listed in ``order`` (an attribute ``stroke-width`` sorts with its
    head ``stroke``), then the rest alphabetically.
    """
    order = list(params.get("order", ATTRIBUTE_ORDER))

    def sort_key(name: str) -> tuple[int, int, str]:
        if is_declaration(name):
            namespace_rank = 0
        else:
            namespace_rank = 1 if ":" in name else 2
        head = name.split("-", 1)[0]
        position = order.index(head) if head in order else len(order)
        return namespace_rank, position, name

    for el in document.root.iter():
        if is_element(el) and len(el.attrib) > 1:
            el.attrib = {key: el.attrib[key] for key in sorted(el.attrib, key=sort_key)}


@plugin("removeDimensions")
def remove_dimensions(document: SvgDocument, params: dict[str, Any]) -> None:
    """Remove width and height from svg elements, keeping them scalable.

    When no viewBox exists one is derived from numeric width and height
    first; otherwise the dimensions are left alone.
    """
    for el in document.root.iter():
        if el.tag != "svg":
            continue
        if "viewBox" in el.attrib:
            el.attrib.pop("width", None)
            el.attrib.pop("height", None)
            continue
        width = _parse_number(el.get("width"))
        height = _parse_number(el.get("height"))
        if width is None or height is None:
            continue
        el.attrib["viewBox"] = f"0 0 {_format_number(width)} {_format_number(height)}"
        del el.attrib["width"]
        del el.attrib["height"]
