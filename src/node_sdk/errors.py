"""
Node errors - exception hierarchy raised by nodes and SDK helpers.

Every failure a node can hit while processing one item is a
NodeOperationError, so the execution loop has a single type to
catch when continue_on_fail is enabled.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class NodeOperationError(Exception):
    """Error during node operation."""

    def __init__(
        self,
        message: str,
        node: Optional[Any] = None,
        item_index: Optional[int] = None,
    ) -> None:
        self.message = message
        self.node = node
        self.item_index = item_index
        # Output branches produced before the failing item, set by the item loop
        self.partial_results: Optional[List[List[Dict[str, Any]]]] = None
        super().__init__(message)


class NodeApiError(NodeOperationError):
    """Error from external API call."""

    def __init__(
        self,
        message: str,
        node: Optional[Any] = None,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ) -> None:
        super().__init__(message, node)
        self.status_code = status_code
        self.response_body = response_body


class XmlParseError(NodeOperationError):
    """Raised when an API response is not well-formed XML."""


__all__ = [
    "NodeOperationError",
    "NodeApiError",
    "XmlParseError",
]
