"""
Integration Nodes

Python integration nodes for a workflow-automation platform: each node
declares a parameter schema, turns the selected parameters into HTTP
requests against a third-party API and reshapes the response into items.

Architecture:
- node_sdk/: Node execution semantics (BaseNode, ResourceNode, items, HTTP)
- node_registry/: Node pack discovery and registration
- integration_nodes/: Settings, logging and the command line interface
"""

__version__ = "1.0.0"
