"""
Node Runner - Executes a single registered node.

Looks the node type up in a NodeRegistry, resolves credential
references against a credential store, builds the
NodeExecutionContext and runs the node.

SYNC-CELERY SAFE: All execution is synchronous.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Callable, Dict, List, Optional

from src.node_registry import NodeRegistry, get_global_registry

from .basenode import BaseNode, NodeExecutionContext
from .errors import NodeOperationError
from .http import HttpClient


logger = logging.getLogger(__name__)

HttpClientFactory = Callable[[], HttpClient]


class NodeRunner:
    """
    Runs nodes from a registry with credentials from a store.

    Credential references given to execute_node() are either the name
    of an entry in the store or an inline credential dict.

    Usage:
        runner = NodeRunner(registry, credential_store={"ci": {...}})
        output = runner.execute_node(
            "jenkins",
            parameters={"resource": "instance", "operation": "restart"},
            credentials={"jenkinsApi": "ci"},
        )
    """

    def __init__(
        self,
        registry: Optional[NodeRegistry] = None,
        credential_store: Optional[Dict[str, Dict[str, Any]]] = None,
        http_client_factory: Optional[HttpClientFactory] = None,
    ):
        """
        Initialize runner.

        Args:
            registry: Node registry (the global one if omitted)
            credential_store: Map of credential name -> credential dict
            http_client_factory: Builds the transport for each run
        """
        self._registry = registry or get_global_registry()
        self._credentials = dict(credential_store or {})
        self._http_client_factory = http_client_factory or HttpClient

    def resolve_credentials(self, references: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
        """Map credential type -> reference into credential type -> values."""
        resolved: Dict[str, Dict[str, Any]] = {}
        for cred_type, cred_ref in references.items():
            if isinstance(cred_ref, dict):
                resolved[cred_type] = cred_ref
            elif isinstance(cred_ref, str) and cred_ref in self._credentials:
                resolved[cred_type] = self._credentials[cred_ref]
            else:
                logger.warning(
                    "Credential reference '%s' for '%s' not found", cred_ref, cred_type
                )
        return resolved

    def create_node(self, node_type: str) -> BaseNode:
        node = self._registry.create_node(node_type)
        if node is None:
            raise NodeOperationError(f"Unknown node type: {node_type}")
        return node

    def execute_node(
        self,
        node_type: str,
        parameters: Dict[str, Any],
        credentials: Optional[Dict[str, Any]] = None,
        input_data: Optional[List[Dict[str, Any]]] = None,
        continue_on_fail: bool = False,
        execution_id: Optional[str] = None,
    ) -> List[List[Dict[str, Any]]]:
        """
        Execute a node by looking it up in the registry.

        Args:
            node_type: Node type identifier
            parameters: Node parameters as set in the workflow
            credentials: Map of credential type -> store name or inline dict
            input_data: Input items from upstream
            continue_on_fail: Record per-item errors instead of raising
            execution_id: Correlation id for logs (generated if omitted)

        Returns:
            Output data: List[List[Dict]] - branches of items

        Raises:
            NodeOperationError: Unknown node type or a failed item
        """
        node = self.create_node(node_type)
        execution_id = execution_id or uuid.uuid4().hex
        log_extra = {"execution_id": execution_id, "node_type": node_type}

        context = NodeExecutionContext(
            parameters=parameters,
            credentials=self.resolve_credentials(credentials or {}),
            input_data=list(input_data or []),
            continue_on_fail=continue_on_fail,
            http_client=self._http_client_factory(),
            node_name=node.description.get("displayName", node_type),
            execution_id=execution_id,
        )
        node.set_context(context)

        logger.info("Executing node %s", node_type, extra=log_extra)
        start_time = time.perf_counter()
        try:
            output = node.execute()
        except NodeOperationError as e:
            logger.error(
                "Node %s failed: %s",
                node_type,
                e,
                extra={**log_extra, "item_index": e.item_index},
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Node %s produced %d item(s) in %.1fms",
            node_type,
            sum(len(branch) for branch in output),
            duration_ms,
            extra=log_extra,
        )
        return output

    def test_credential(self, credential_type: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run the connection test of a registered credential type.

        Returns:
            {"success": bool, "message": str}
        """
        credential_class = self._registry.get_credential_class(credential_type)
        if credential_class is None:
            raise NodeOperationError(f"Unknown credential type: {credential_type}")

        credential = credential_class(data, http_client=self._http_client_factory())
        validation = credential.validate()
        if not validation["valid"]:
            return {"success": False, "message": validation["message"]}
        return credential.test()


__all__ = ["NodeRunner", "HttpClientFactory"]
