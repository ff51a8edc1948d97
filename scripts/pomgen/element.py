"""Generic element tree produced by the tag transformer, and its XML form.

Transforms build Element nodes whose children may be ``None`` for fields the
project does not set; ``Element.prune`` drops those before serialization.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Optional

from .mapping import POM_NAMESPACE

NS = {"m": POM_NAMESPACE}

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


@dataclass
class Element:
    """A labeled tree node.

    Attributes:
        tag: Element name.
        text: Scalar text content, or ``None``.
        children: Ordered child nodes; ``None`` marks an absent child.
        attrib: Attribute map.
    """
    tag: str
    text: Optional[str] = None
    children: list = field(default_factory=list)
    attrib: dict = field(default_factory=dict)

    def prune(self) -> "Element":
        """Return a copy of the tree with all absent children removed."""
        return Element(
            self.tag,
            self.text,
            [child.prune() for child in self.children if child is not None],
            dict(self.attrib),
        )


def to_etree(element: Element) -> ET.Element:
    """Convert an Element tree into ``xml.etree.ElementTree`` nodes."""
    node = ET.Element(element.tag, element.attrib)
    node.text = element.text
    for child in element.children:
        if child is not None:
            node.append(to_etree(child))
    return node


def to_xml(element: Element) -> str:
    """Serialize an Element tree as indented XML with a UTF-8 declaration."""
    root = to_etree(element.prune())
    ET.indent(root, space="  ")
    return f"{XML_DECLARATION}\n{ET.tostring(root, encoding='unicode')}\n"


def _find(el, tag, ns=NS):
    """Find a direct child XML element, trying with and without the POM namespace."""
    result = el.find(f"m:{tag}", ns)
    if result is not None:
        return result
    return el.find(tag)


def _text(el, tag, ns=NS):
    child = _find(el, tag, ns)
    if child is not None and child.text:
        return child.text.strip()
    return None


def read_dependencies(text: str) -> list:
    """Read the ``<dependencies>`` section back out of a POM document.

    Handles both namespaced and non-namespaced documents.

    Args:
        text: POM XML text.

    Returns:
        A list of ``(groupId, artifactId, version, scope)`` tuples in
        document order; missing elements are ``None``.
    """
    root = ET.fromstring(text)
    deps_el = _find(root, "dependencies")
    if deps_el is None:
        return []
    result = []
    for dep_el in list(deps_el.findall("m:dependency", NS)) + list(deps_el.findall("dependency")):
        result.append((
            _text(dep_el, "groupId"),
            _text(dep_el, "artifactId"),
            _text(dep_el, "version"),
            _text(dep_el, "scope"),
        ))
    return result
