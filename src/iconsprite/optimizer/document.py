"""Parsing and serialization of SVG documents for the optimizer.

Documents are parsed with ElementTree and then flattened: namespaced tags
and attributes are rewritten to their ``prefix:local`` spelling (or just
``local`` for the default namespace) and the root namespace declarations are
kept on the side. Plugins therefore work on plain names like ``svg``, ``path``
or ``xlink:href``, and serialization re-emits the declarations on the root.
A nested element that changes the namespace scope, such as an XHTML ``div``
inside ``foreignObject``, keeps its declarations as ``xmlns`` attributes.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from iconsprite.constants import XML_NAMESPACE
from iconsprite.exceptions import MarkupError

# Elements whose whitespace-only text is significant
TEXT_ELEMENTS = frozenset(
    {"text", "tspan", "textPath", "tref", "altGlyph", "style", "script", "title", "desc", "pre"}
)


@dataclass
class SvgDocument:
    """A parsed SVG document.

    Attributes:
        root: Root element with namespace-free tag and attribute names
        namespaces: Namespaces declared on the root as prefix -> URI ("" is the
            default namespace)
    """

    root: ET.Element
    namespaces: dict[str, str] = field(default_factory=dict)


class _TreeTarget:
    """Parser target that records namespace declarations per element.

    Comments and processing instructions inside the root element are kept so
    that plugins decide whether to drop them. Anything outside the root (XML
    declaration, DOCTYPE, leading comments) is discarded by the tree builder.
    """

    def __init__(self) -> None:
        self._builder = ET.TreeBuilder(insert_comments=True, insert_pis=True)
        self._pending: dict[str, str] = {}
        self.declarations: dict[ET.Element, dict[str, str]] = {}

    def start_ns(self, prefix: str, uri: str) -> None:
        # Reported before the start of the element carrying the declaration
        self._pending[prefix] = uri

    def start(self, tag: str, attrs: dict[str, str]) -> ET.Element:
        element = self._builder.start(tag, attrs)
        if self._pending:
            self.declarations[element] = self._pending
            self._pending = {}
        return element

    def end(self, tag: str) -> ET.Element:
        return self._builder.end(tag)

    def data(self, data: str) -> None:
        self._builder.data(data)

    def comment(self, text: str) -> ET.Element:
        return self._builder.comment(text)

    def pi(self, target: str, text: str | None = None) -> ET.Element:
        return self._builder.pi(target, text)

    def close(self) -> ET.Element:
        return self._builder.close()


def is_element(node: ET.Element) -> bool:
    """Return True for real elements, False for comments and processing instructions."""
    return isinstance(node.tag, str)


def is_declaration(name: str) -> bool:
    """Return True for a namespace declaration kept as an attribute."""
    return name == "xmlns" or name.startswith("xmlns:")


def split_name(name: str) -> tuple[str, str]:
    """Split a flattened name into (prefix, local); prefix is "" when absent."""
    if name.startswith("{"):
        return "", name
    prefix, sep, local = name.partition(":")
    if not sep:
        return "", name
    return prefix, local


def _flatten_name(name: str, scope: dict[str, str], *, is_tag: bool) -> str:
    if not name.startswith("{"):
        return name
    uri, _, local = name[1:].partition("}")
    # Unprefixed attributes have no namespace, so only tags use the default
    if is_tag and scope.get("") == uri:
        return local
    for prefix, bound in scope.items():
        if prefix and bound == uri:
            return f"{prefix}:{local}"
    # Unreachable for parsed markup; keep the namespace rather than lose it
    return name


def _flatten(
    element: ET.Element,
    scope: dict[str, str],
    declarations: dict[ET.Element, dict[str, str]],
    *,
    is_root: bool = False,
) -> None:
    changed = {
        prefix: uri
        for prefix, uri in declarations.get(element, {}).items()
        if scope.get(prefix) != uri
    }
    if changed:
        scope = {**scope, **changed}

    element.tag = _flatten_name(element.tag, scope, is_tag=True)
    if any(key.startswith("{") for key in element.attrib):
        element.attrib = {
            _flatten_name(k, scope, is_tag=False): v for k, v in element.attrib.items()
        }

    # Root declarations live on SvgDocument.namespaces; nested ones stay in place
    if changed and not is_root:
        local_declarations = {
            ("xmlns" if not prefix else f"xmlns:{prefix}"): uri for prefix, uri in changed.items()
        }
        element.attrib = {**local_declarations, **element.attrib}

    for child in element:
        if is_element(child):
            _flatten(child, scope, declarations)


def _preserves_space(element: ET.Element, inherited: bool) -> bool:
    space = element.get("xml:space")
    if space is None:
        return inherited
    return space == "preserve"


def _strip_whitespace(element: ET.Element, preserve: bool = False) -> None:
    preserve = _preserves_space(element, preserve) or element.tag in TEXT_ELEMENTS
    if not preserve:
        if element.text is not None and not element.text.strip():
            element.text = None
        for child in element:
            if child.tail is not None and not child.tail.strip():
                child.tail = None

    for child in element:
        if is_element(child):
            _strip_whitespace(child, preserve)


def _indent(root: ET.Element, space: str) -> None:
    """Indent like ET.indent but leave the inside of text content untouched."""
    saved: list[tuple[ET.Element, str | None, str | None, bool]] = []

    def collect(element: ET.Element, preserve: bool) -> None:
        preserve = _preserves_space(element, preserve)
        if preserve or element.tag in TEXT_ELEMENTS:
            saved.append((element, element.text, None, False))
            saved.extend(
                (node, node.text, node.tail, True) for node in element.iter() if node is not element
            )
            return
        for child in element:
            if is_element(child):
                collect(child, preserve)

    collect(root, False)
    ET.indent(root, space=space)
    for node, text, tail, restore_tail in saved:
        node.text = text
        if restore_tail:
            node.tail = tail


def parse(svg: str | bytes) -> SvgDocument:
    """Parse SVG markup into an SvgDocument.

    Args:
        svg: Markup as text, or bytes whose encoding the XML declaration governs

    Returns:
        The parsed document.

    Raises:
        MarkupError: If the markup is not well-formed XML.
    """
    target = _TreeTarget()
    parser = ET.XMLParser(target=target)
    try:
        parser.feed(svg)
        root = parser.close()
    except ET.ParseError as e:
        raise MarkupError("Invalid SVG markup", {"error": str(e)}) from e

    namespaces = dict(target.declarations.get(root, {}))
    _flatten(root, {"xml": XML_NAMESPACE}, target.declarations, is_root=True)
    _strip_whitespace(root)
    root.tail = None
    return SvgDocument(root=root, namespaces=namespaces)


def serialize(document: SvgDocument, *, pretty: bool = False, indent: str = "\t") -> str:
    """Serialize a document back to markup.

    Namespace declarations are placed first on the root element. The document
    is consumed: its root is modified in place.

    Args:
        document: Document to serialize
        pretty: Put every element on its own line
        indent: Indentation unit used when pretty is set

    Returns:
        The markup text, without an XML declaration.
    """
    root = document.root
    declarations = {
        ("xmlns" if not prefix else f"xmlns:{prefix}"): uri
        for prefix, uri in document.namespaces.items()
        if prefix != "xml"
    }
    root.attrib = {**declarations, **root.attrib}

    if pretty:
        _indent(root, indent)

    return ET.tostring(root, encoding="unicode", short_empty_elements=True)
