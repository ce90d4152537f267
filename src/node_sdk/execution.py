"""
Resource/operation nodes - the per-item execution loop shared by API nodes.

A ResourceNode declares one handler per (resource, operation) pair with the
@operation decorator. execute() then:

1. reads resource, operation and credentials once into an ExecutionConfig,
2. looks the handler up in the class routing table,
3. runs it for every input item in order, one request at a time,
4. flattens list results into separate output items,
5. on failure either records {"error": message} for the item
   (continue_on_fail) or stops and raises.

Items produced before a fatal error are not rolled back; the error simply
propagates to the caller.

SYNC-CELERY SAFE: items are processed sequentially.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple

from .basenode import BaseNode, NodeExecutionData
from .errors import NodeOperationError
from .http import HttpClient
from .items import return_json_array


OperationKey = Tuple[str, str]
OperationHandler = Callable[["ResourceNode", "ExecutionConfig", int], Any]


def operation(resource: str, name: str) -> Callable[[OperationHandler], OperationHandler]:
    """Register a ResourceNode method as the handler of (resource, name)."""

    def decorator(func: OperationHandler) -> OperationHandler:
        keys = list(getattr(func, "_node_operations", []))
        keys.append((resource, name))
        func._node_operations = keys  # type: ignore[attr-defined]
        return func

    return decorator


@dataclass(frozen=True)
class ExecutionConfig:
    """
    Values fixed for a whole node run, resolved before the item loop.

    Resource, operation and credentials are read once (at item 0) and
    never re-read per item.
    """
    resource: str
    operation: str
    credentials: Dict[str, Any] = field(default_factory=dict)
    continue_on_fail: bool = False
    client: Optional[HttpClient] = None


class ResourceNode(BaseNode):
    """
    Base class for API nodes organised by resource and operation.

    Subclasses set `credential_name`, implement `create_client()` to turn
    the decrypted credentials into an authenticated HttpClient, and
    decorate their handlers:

        class JenkinsNode(ResourceNode):
            credential_name = "jenkinsApi"

            @operation("instance", "restart")
            def _restart(self, config, item_index):
                ...
    """

    credential_name: ClassVar[str] = ""
    routes: ClassVar[Dict[OperationKey, str]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        routes: Dict[OperationKey, str] = {}
        for base in reversed(cls.__mro__[1:]):
            routes.update(getattr(base, "routes", {}))
        for attr_name, attr in vars(cls).items():
            for key in getattr(attr, "_node_operations", []):
                routes[key] = attr_name
        cls.routes = routes

    # ==== Hooks ====

    def create_client(self, credentials: Dict[str, Any]) -> HttpClient:
        """Authenticated client for this run. Defaults to the context transport."""
        return self.http

    # ==== Loop ====

    def build_config(self) -> ExecutionConfig:
        resource = self.get_node_parameter("resource", 0)
        operation_name = self.get_node_parameter("operation", 0)
        credentials = self.get_credentials(self.credential_name) if self.credential_name else {}
        return ExecutionConfig(
            resource=resource,
            operation=operation_name,
            credentials=credentials,
            continue_on_fail=self.continue_on_fail,
            client=self.create_client(credentials),
        )

    def resolve_handler(self, config: ExecutionConfig) -> Callable[[ExecutionConfig, int], Any]:
        method_name = self.routes.get((config.resource, config.operation))
        if method_name is None:
            raise NodeOperationError(
                f"The operation '{config.operation}' is not supported "
                f"for resource '{config.resource}'",
                node=self,
            )
        return getattr(self, method_name)

    def execute(self) -> List[List[NodeExecutionData]]:
        items = self.get_input_data() or [{"json": {}}]
        config = self.build_config()
        handler = self.resolve_handler(config)

        self.logger.debug(
            "Running %s:%s over %d item(s)", config.resource, config.operation, len(items)
        )

        results: List[NodeExecutionData] = []
        for i in range(len(items)):
            try:
                response = handler(config, i)
            except Exception as e:
                if config.continue_on_fail:
                    self.logger.warning(
                        "Item %d failed, continuing: %s", i, e, extra={"item_index": i}
                    )
                    results.append({"json": {"error": str(e)}, "pairedItem": {"item": i}})
                    continue
                self.logger.error(
                    "Error executing %s:%s on item %d: %s",
                    config.resource, config.operation, i, e,
                    extra={"item_index": i},
                )
                if isinstance(e, NodeOperationError):
                    if e.item_index is None:
                        e.item_index = i
                    e.partial_results = [results]
                    raise
                error = NodeOperationError(str(e), node=self, item_index=i)
                error.partial_results = [results]
                raise error from e

            results.extend(return_json_array(response, i))

        return [results]


__all__ = [
    "ExecutionConfig",
    "OperationHandler",
    "OperationKey",
    "ResourceNode",
    "operation",
]
