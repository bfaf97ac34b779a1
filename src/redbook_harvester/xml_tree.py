"""Generic tree view of one bulk XML patent record.

Every element becomes an ``XmlNode``: its attributes and text are held in
dedicated fields, and its child elements are grouped by tag name into ordered
lists. Lookups return ``None`` instead of raising, so a field extractor can
walk a path and collapse any missing link to an absent value.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from html.entities import html5, name2codepoint
from typing import Iterator
from xml.etree import ElementTree as ET

logger = logging.getLogger(__name__)

_XML_ENTITIES = frozenset({"amp", "lt", "gt", "quot", "apos"})
_NAMED_ENTITY = re.compile(r"&([A-Za-z][A-Za-z0-9]*);")

# ISO 8879 Greek letters (ISOgrk1), used by the 2001-2004 grant DTD.
_ISO_GREEK: dict[str, str] = {
    "agr": "α", "bgr": "β", "ggr": "γ", "dgr": "δ", "egr": "ε", "zgr": "ζ",
    "eegr": "η", "thgr": "θ", "igr": "ι", "kgr": "κ", "lgr": "λ", "mgr": "μ",
    "ngr": "ν", "xgr": "ξ", "ogr": "ο", "pgr": "π", "rgr": "ρ", "sgr": "σ",
    "sfgr": "ς", "tgr": "τ", "ugr": "υ", "phgr": "φ", "khgr": "χ",
    "psgr": "ψ", "ohgr": "ω",
    "Agr": "Α", "Bgr": "Β", "Ggr": "Γ", "Dgr": "Δ", "Egr": "Ε", "Zgr": "Ζ",
    "EEgr": "Η", "THgr": "Θ", "Igr": "Ι", "Kgr": "Κ", "Lgr": "Λ", "Mgr": "Μ",
    "Ngr": "Ν", "Xgr": "Ξ", "Ogr": "Ο", "Pgr": "Π", "Rgr": "Ρ", "Sgr": "Σ",
    "Tgr": "Τ", "Ugr": "Υ", "PHgr": "Φ", "KHgr": "Χ", "PSgr": "Ψ",
    "OHgr": "Ω",
}  # fmt: skip


@dataclass
class XmlNode:
    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    text: str | None = None
    tail: str | None = None
    children: dict[str, list[XmlNode]] = field(default_factory=dict)
    nodes: list[XmlNode] = field(default_factory=list, repr=False)

    def child(self, name: str) -> list[XmlNode] | None:
        return self.children.get(name)

    def first(self, *path: str) -> XmlNode | None:
        """Follow the first child at each step of ``path``."""

        node: XmlNode | None = self
        for name in path:
            if node is None:
                return None
            children = node.child(name)
            node = children[0] if children else None
        return node

    def attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    def _iter_text(self) -> Iterator[str]:
        if self.text:
            yield self.text
        for node in self.nodes:
            yield from node._iter_text()
            if node.tail:
                yield node.tail

    def full_text(self) -> str:
        """Return all descendant text with whitespace runs collapsed."""

        return " ".join("".join(self._iter_text()).split())


def resolve_named_entities(markup: str) -> str:
    # The older grant DTDs declare HTML and ISO 8879 entities; without the
    # DTD the parser only knows the five XML ones.
    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in _XML_ENTITIES:
            return match.group(0)
        if name in _ISO_GREEK:
            return _ISO_GREEK[name]
        codepoint = name2codepoint.get(name)
        if codepoint is not None:
            return chr(codepoint)
        return html5.get(f"{name};", match.group(0))

    return _NAMED_ENTITY.sub(_replace, markup)


def _from_element(element: ET.Element) -> XmlNode:
    node = XmlNode(
        tag=str(element.tag),
        attributes=dict(element.attrib),
        text=element.text,
        tail=element.tail,
    )
    for child in element:
        converted = _from_element(child)
        node.nodes.append(converted)
        node.children.setdefault(converted.tag, []).append(converted)
    return node


def parse_record(section: str) -> XmlNode | None:
    """Parse one record substring; ``None`` when the markup is malformed."""

    try:
        element = ET.fromstring(resolve_named_entities(section))
    except ET.ParseError as exc:
        logger.warning("Skipping unparseable record markup: %s", exc)
        return None
    return _from_element(element)


__all__ = ["XmlNode", "parse_record", "resolve_named_entities"]
