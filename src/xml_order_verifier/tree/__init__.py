"""Element trees for XML order verification.

Key Components:
    XMLElement: Element with tag, text, attributes and owned children
    from_lxml / from_etree: Conversion from parsed lxml and ElementTree documents
    parse_xml_string / parse_xml_file: lxml-backed parsing into XMLElement trees
"""

from .adapters import (
    from_etree,
    from_lxml,
    parse_xml_file,
    parse_xml_string,
)
from .element import XMLElement

__all__ = [
    "XMLElement",
    "from_etree",
    "from_lxml",
    "parse_xml_file",
    "parse_xml_string",
]
