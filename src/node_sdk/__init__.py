"""
Node SDK - Minimal Python node execution semantics.

This package provides the runtime for executing Python integration nodes:
- BaseNode / NodeExecutionContext: node contract and its runtime context
- ResourceNode + @operation: the per-item resource/operation loop
- ParameterSchema: declarative parameters with display-conditional visibility
- HttpClient / OperationRequest: timeout-bounded transport seam
- return_json_array / parse_xml: response normalization
- NodeRunner: builds the context and runs a registered node

All nodes execute synchronously (sync-Celery safe).
"""

from .items import NodeItem, BinaryData, return_json_array
from .basenode import (
    BaseNode,
    NodeExecutionContext,
    NodeExecutionData,
)
from .credentials import BaseCredential
from .errors import NodeApiError, NodeOperationError, XmlParseError
from .execution import ExecutionConfig, ResourceNode, operation
from .http import (
    HttpApiError,
    HttpClient,
    HttpResponse,
    NodeTimeoutError,
    OperationRequest,
    tolerate_trailing_slash,
)
from .parameters import (
    DisplayOptions,
    NodeParameter,
    NodeParameterType,
    ParameterSchema,
)
from .runner import NodeRunner
from .xml_parser import parse_xml

__all__ = [
    # Items
    "NodeItem",
    "BinaryData",
    "NodeExecutionData",
    "return_json_array",
    # Context
    "NodeExecutionContext",
    # Base classes
    "BaseNode",
    "ResourceNode",
    "ExecutionConfig",
    "operation",
    "BaseCredential",
    # Schema
    "DisplayOptions",
    "NodeParameter",
    "NodeParameterType",
    "ParameterSchema",
    # Errors
    "NodeOperationError",
    "NodeApiError",
    "XmlParseError",
    "HttpApiError",
    "NodeTimeoutError",
    # HTTP
    "HttpClient",
    "HttpResponse",
    "OperationRequest",
    "tolerate_trailing_slash",
    "parse_xml",
    # Runner
    "NodeRunner",
]
