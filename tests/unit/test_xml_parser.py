"""Tests for XML response parsing."""
import pytest

from src.node_sdk.errors import NodeOperationError, XmlParseError
from src.node_sdk.xml_parser import parse_xml


class TestParseXml:
    """Test XML to dict conversion."""

    def test_repeated_elements_become_lists(self):
        data = parse_xml(
            "<hudson><job><name>api</name></job><job><name>web</name></job></hudson>"
        )

        assert data == {"hudson": {"job": [{"name": "api"}, {"name": "web"}]}}

    def test_single_element_is_not_wrapped(self):
        data = parse_xml("<hudson><job><name>api</name></job></hudson>")

        assert data == {"hudson": {"job": {"name": "api"}}}

    def test_attributes_are_prefixed(self):
        data = parse_xml('<freeStyleBuild _class="hudson.model.FreeStyleBuild"><number>12</number></freeStyleBuild>')

        build = data["freeStyleBuild"]
        assert build["@_class"] == "hudson.model.FreeStyleBuild"
        assert build["number"] == "12"

    def test_malformed_xml_raises(self):
        with pytest.raises(XmlParseError) as exc_info:
            parse_xml("<hudson><job></hudson>")

        assert "Failed to parse XML" in str(exc_info.value)

    def test_empty_document_raises(self):
        with pytest.raises(XmlParseError):
            parse_xml("   ")

    def test_parse_error_is_a_node_error(self):
        assert issubclass(XmlParseError, NodeOperationError)

    def test_bytes_decoded_with_declared_encoding(self):
        raw = '<?xml version="1.0" encoding="ISO-8859-1"?><job><name>Zürich</name></job>'.encode("latin-1")

        assert parse_xml(raw) == {"job": {"name": "Zürich"}}
