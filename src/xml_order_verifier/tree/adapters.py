"""Conversion of parsed lxml and ElementTree documents into XMLElement trees.

Parsing is done by lxml. The adapters keep element children only (comments,
processing instructions and entity references are dropped) and compute an
element's text the way a DOM does: the element's own text followed by the
tail text of each of its children.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Optional, Union

from lxml import etree

from xml_order_verifier.shared import XMLInputError, get_logger
from xml_order_verifier.tree.element import XMLElement

XMLSource = Union[str, bytes]


def _local_name(tag: str) -> str:
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _direct_text(element: Any) -> str:
    parts = [element.text or ""]
    parts.extend(child.tail or "" for child in element)
    return "".join(parts)


def from_lxml(element: Any, strip_namespaces: bool = True) -> XMLElement:
    """Convert an lxml element (or element tree) into an XMLElement tree.

    Args:
        element: ``lxml.etree._Element`` or ``lxml.etree._ElementTree``
        strip_namespaces: Use local names instead of ``{uri}name`` tags

    Returns:
        XMLElement mirroring the element children of ``element``
    """
    if isinstance(element, etree._ElementTree):
        element = element.getroot()

    tag = etree.QName(element).localname if strip_namespaces else element.tag
    converted = XMLElement(
        tag=tag,
        text=_direct_text(element),
        attributes={str(k): str(v) for k, v in element.attrib.items()},
    )
    for child in element:
        # Comments, PIs and entities have a callable as tag
        if isinstance(child.tag, str):
            converted.add_child(from_lxml(child, strip_namespaces))
    return converted


def from_etree(element: Any, strip_namespaces: bool = True) -> XMLElement:
    """Convert an ``xml.etree.ElementTree`` element into an XMLElement tree."""
    if isinstance(element, ET.ElementTree):
        element = element.getroot()

    tag = _local_name(element.tag) if strip_namespaces else element.tag
    converted = XMLElement(
        tag=tag,
        text=_direct_text(element),
        attributes=dict(element.attrib),
    )
    for child in element:
        if isinstance(child.tag, str):
            converted.add_child(from_etree(child, strip_namespaces))
    return converted


def _make_parser(encoding: Optional[str] = None) -> etree.XMLParser:
    return etree.XMLParser(
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
        no_network=True,
        encoding=encoding,
    )


def parse_xml_string(
    source: XMLSource,
    strip_namespaces: bool = True,
    label: str = "<string>",
) -> XMLElement:
    """Parse an XML document held in memory.

    Args:
        source: XML document as text or bytes
        strip_namespaces: Use local element names
        label: Name of the document used in error messages

    Returns:
        Root XMLElement of the document

    Raises:
        XMLInputError: If the document is not well-formed
    """
    logger = get_logger(__name__, component="xml_adapter")
    parser = _make_parser()
    if isinstance(source, str):
        # lxml refuses text with an encoding declaration, so hand it UTF-8 bytes
        source = source.encode("utf-8")
        parser = _make_parser(encoding="utf-8")

    try:
        root = etree.fromstring(source, parser)
    except etree.XMLSyntaxError as e:
        raise XMLInputError(f"Could not parse {label}: {e}", source=label) from e

    logger.debug("Parsed document", extra={"source": label, "root": root.tag})
    return from_lxml(root, strip_namespaces)


def parse_xml_file(path: Union[str, Path], strip_namespaces: bool = True) -> XMLElement:
    """Parse an XML file from disk.

    Raises:
        XMLInputError: If the file cannot be read or is not well-formed
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise XMLInputError(f"Could not read {path}: {e}", source=str(path)) from e
    return parse_xml_string(data, strip_namespaces, label=str(path))
