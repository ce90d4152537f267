"""
Integration Nodes application layer.

- config/: Settings loaded from NODES_* environment variables
- observability/: Structured JSON logging with execution context
- cli/: The integration-nodes command line
"""
