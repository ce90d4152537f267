"""
BaseNode - Abstract base class for Python node implementations.

All nodes inherit from BaseNode and implement the execute() method.
The platform hands each node a NodeExecutionContext carrying the
workflow parameters, decrypted credentials, input items and the HTTP
transport to use.

SYNC-CELERY SAFE: execute() is synchronous.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, TypedDict

from .errors import NodeApiError, NodeOperationError
from .http import HttpClient
from .parameters import (
    NodeParameter,
    NodeParameterType,
    ParameterSchema,
    get_nested_value,
    resolve_item_expressions,
)


logger = logging.getLogger(__name__)

_MISSING = object()


# ==============================================================================
# NodeExecutionData - Output data format
# ==============================================================================

class NodeExecutionData(TypedDict, total=False):
    """
    Single item of execution output data.

    Format: {"json": {...}, "binary": {...}, "pairedItem": {"item": 0}}
    """
    json: Dict[str, Any]
    binary: Optional[Dict[str, Any]]
    pairedItem: Optional[Dict[str, int]]


# ==============================================================================
# BaseNode - Abstract base class
# ==============================================================================

class BaseNode(ABC):
    """
    Abstract base class for all Python node implementations.

    Nodes define:
    - type: Unique identifier (e.g., "jenkins")
    - version: Node version number
    - description: Node metadata dict
    - properties: Parameters and credentials

    And implement execute() which processes input items.

    SYNC-CELERY SAFE: All execution is synchronous.
    """

    # Required class attributes (override in subclasses)
    type: str = "base"
    version: int = 1

    description: Dict[str, Any] = {
        "displayName": "Base Node",
        "name": "base",
        "description": "",
        "group": [],
        "version": 1,
        "inputs": ["main"],
        "outputs": ["main"],
    }

    # Node configuration - parameters and credentials
    properties: Dict[str, Any] = {
        "parameters": [],
        "credentials": [],
    }

    # Continue processing other items if one fails
    continue_on_fail: bool = False

    def __init__(self) -> None:
        """Initialize node instance."""
        self.logger = logging.getLogger(f"node.{self.type}")
        self._context: Optional[NodeExecutionContext] = None

    @abstractmethod
    def execute(self) -> List[List[NodeExecutionData]]:
        """
        Execute node operation.

        Returns:
            List[List[NodeExecutionData]]: Nested list of execution results.
            - Outer list represents output branches (usually 1)
            - Inner list represents items in that branch

        Raises:
            NodeOperationError: On operation failure
            NodeApiError: On API call failure
        """
        raise NotImplementedError

    # ==== Context Management ====

    def set_context(self, context: "NodeExecutionContext") -> None:
        """Set the execution context."""
        if context.schema is None:
            context.schema = self.parameter_schema()
        self._context = context
        self.continue_on_fail = context.continue_on_fail

    @classmethod
    def parameter_schema(cls) -> ParameterSchema:
        return ParameterSchema(cls.properties.get("parameters", []))

    # ==== Helper methods for subclasses ====

    def get_node_parameter(
        self,
        name: str,
        item_index: int = 0,
        default: Any = None,
    ) -> Any:
        """
        Get parameter value.

        Args:
            name: Parameter name, dot paths allowed ('param.params')
            item_index: Index of item (for expression resolution)
            default: Default if neither the workflow nor the schema sets it
        """
        if self._context is None:
            return default
        return self._context.get_node_parameter(name, item_index, default)

    def get_credentials(self, name: str) -> Dict[str, Any]:
        """
        Get credentials by type name.

        Args:
            name: Credential type name (e.g., "jenkinsApi")

        Returns:
            Credentials dict with decrypted values
        """
        if self._context is None:
            raise NodeOperationError("No context set", node=self)
        return self._context.get_credentials(name)

    def get_input_data(self) -> List[Dict[str, Any]]:
        """
        Get input items from previous node.

        Returns:
            List of input items, each with 'json' key.
        """
        if self._context is None:
            return []
        return self._context.get_input_data()

    @property
    def http(self) -> HttpClient:
        """Transport for API calls (injected through the context)."""
        if self._context is None:
            raise NodeOperationError("No context set", node=self)
        return self._context.http_client

    @classmethod
    def get_definition(cls) -> Dict[str, Any]:
        """Get full node definition for registration."""
        return {
            "type": cls.type,
            "version": cls.version,
            "description": cls.description,
            "properties": cls.properties,
        }


# ==============================================================================
# NodeExecutionContext - Runtime context for node execution
# ==============================================================================

class NodeExecutionContext:
    """
    Runtime context provided to nodes during execution.

    Provides access to:
    - Parameters (with schema defaults and {{ $json }} item expressions)
    - Credentials
    - Input data
    - HTTP transport
    """

    def __init__(
        self,
        parameters: Dict[str, Any],
        credentials: Dict[str, Dict[str, Any]],
        input_data: List[Dict[str, Any]],
        continue_on_fail: bool = False,
        http_client: Optional[HttpClient] = None,
        schema: Optional[ParameterSchema] = None,
        workflow_id: Optional[str] = None,
        node_name: Optional[str] = None,
        execution_id: Optional[str] = None,
    ) -> None:
        self._parameters = parameters
        self._credentials = credentials
        self._input_data = input_data
        self.continue_on_fail = continue_on_fail
        self.http_client = http_client or HttpClient()
        self.schema = schema
        self.workflow_id = workflow_id
        self.node_name = node_name
        self.execution_id = execution_id

    def _resolved_parameters(self) -> Dict[str, Any]:
        if self.schema is None:
            return self._parameters
        return self.schema.resolve_values(self._parameters)

    def get_node_parameter(
        self,
        name: str,
        item_index: int = 0,
        default: Any = None,
    ) -> Any:
        """Get parameter value, resolved against input item `item_index`."""
        value = get_nested_value(self._resolved_parameters(), name, _MISSING)
        if value is _MISSING or value is None:
            return default

        item_json: Dict[str, Any] = {}
        if 0 <= item_index < len(self._input_data):
            item_json = self._input_data[item_index].get("json") or {}
        return resolve_item_expressions(value, item_json)

    def get_credentials(self, name: str) -> Dict[str, Any]:
        """Get credentials by type name."""
        if name not in self._credentials:
            raise NodeOperationError(f"Credentials '{name}' not found")
        return self._credentials[name]

    def get_input_data(self) -> List[Dict[str, Any]]:
        """Get input items."""
        return self._input_data


__all__ = [
    "BaseNode",
    "NodeExecutionContext",
    "NodeExecutionData",
    "NodeParameter",
    "NodeParameterType",
    "NodeOperationError",
    "NodeApiError",
]
