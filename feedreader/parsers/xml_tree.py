"""
Generic XML tree parser.

Turns an XML document into plain nested Python values:

- an element without attributes or children becomes its (trimmed) text,
- any other element becomes a dict where attributes use the ``@_`` key
  prefix and the element's own text sits under ``#text``,
- sibling elements sharing a tag name are collected into a list in
  document order.

Namespaced names keep the prefix used in the source document
(``content:encoded``), and namespace declarations are exposed as
``@_xmlns:<prefix>`` attributes.
"""

import re
import xml.etree.ElementTree as ET
from typing import Any, Dict

from feedreader.core.errors import ParseFailure

ATTRIBUTE_PREFIX = '@_'
TEXT_KEY = '#text'

XML_NAMESPACE = 'http://www.w3.org/XML/1998/namespace'

_CDATA_RE = re.compile(r'(<!\[CDATA\[.*?\]\]>)', re.DOTALL)
# Ampersands that do not start one of the predefined XML entities or a character reference
_STRAY_AMPERSAND_RE = re.compile(r'&(?!(?:amp|lt|gt|quot|apos|#[0-9]+|#[xX][0-9a-fA-F]+);)')


def escape_stray_ampersands(text):
    """Escapes HTML entities and bare ampersands so they survive XML parsing literally.

    CDATA sections are left untouched since their content is never entity-decoded.
    """
    parts = _CDATA_RE.split(text)
    for index in range(0, len(parts), 2):
        parts[index] = _STRAY_AMPERSAND_RE.sub('&amp;', parts[index])
    return ''.join(parts)


def parse_xml_tree(raw_text) -> Dict[str, Any]:
    """Parses raw XML text into a generic node tree.

    Args:
        raw_text: XML document as text

    Returns:
        Dict with a single key, the root element name, mapped to the root node

    Raises:
        ParseFailure: The text is empty or not well-formed XML
    """
    if raw_text is None or not str(raw_text).strip():
        raise ParseFailure("Empty feed document")

    parser = ET.XMLPullParser(events=('start-ns', 'start'))
    try:
        parser.feed(escape_stray_ampersands(str(raw_text)))
        parser.close()
    except ET.ParseError as e:
        raise ParseFailure(f"Invalid XML: {e}") from e

    prefixes = {XML_NAMESPACE: 'xml'}
    declarations = {}
    pending = []
    root = None

    for event, payload in parser.read_events():
        if event == 'start-ns':
            prefix, uri = payload
            prefixes[uri] = prefix
            pending.append((prefix, uri))
        else:
            if root is None:
                root = payload
            if pending:
                declarations[id(payload)] = pending
                pending = []

    if root is None:
        raise ParseFailure("Feed document has no root element")

    return {_qualified_name(root.tag, prefixes): _convert(root, prefixes, declarations)}


def _qualified_name(name, prefixes):
    """Maps an ElementTree '{uri}local' name back to 'prefix:local'."""
    if not name.startswith('{'):
        return name
    uri, _, local = name[1:].partition('}')
    prefix = prefixes.get(uri)
    return f"{prefix}:{local}" if prefix else local


def _convert(element, prefixes, declarations):
    node = {}

    for prefix, uri in declarations.get(id(element), ()):
        node[f"{ATTRIBUTE_PREFIX}xmlns:{prefix}" if prefix else f"{ATTRIBUTE_PREFIX}xmlns"] = uri

    for name, value in element.attrib.items():
        node[ATTRIBUTE_PREFIX + _qualified_name(name, prefixes)] = value

    for child in element:
        _add_child(node, _qualified_name(child.tag, prefixes), _convert(child, prefixes, declarations))

    text = _element_text(element)
    if not node:
        return text
    if text:
        node[TEXT_KEY] = text
    return node


def _add_child(node, name, value):
    """Adds a child value, turning repeated names into an ordered list."""
    if name not in node:
        node[name] = value
    elif isinstance(node[name], list):
        node[name].append(value)
    else:
        node[name] = [node[name], value]


def _element_text(element):
    pieces = [element.text] + [child.tail for child in element]
    return ' '.join(piece.strip() for piece in pieces if piece and piece.strip())
