"""
XML response parsing.

Converts XML API responses into JSON-compatible dicts. Repeated child
elements become lists, single ones stay plain values, attributes are
prefixed with '@' and mixed text lands under '#text'.
"""

from __future__ import annotations

from typing import Any, Dict, Union
from xml.parsers.expat import ExpatError

import xmltodict

from .errors import XmlParseError


def parse_xml(text: Union[str, bytes]) -> Dict[str, Any]:
    """
    Parse an XML document into a dict keyed by its root element.

    Bytes are decoded by the parser using the document's own encoding
    declaration.

    Raises:
        XmlParseError: If the text is empty or not well-formed
    """
    if not isinstance(text, (str, bytes)) or not text.strip():
        raise XmlParseError("Expected a non-empty XML document")
    try:
        return xmltodict.parse(text)
    except ExpatError as e:
        raise XmlParseError(f"Failed to parse XML: {e}") from e


__all__ = ["parse_xml"]
