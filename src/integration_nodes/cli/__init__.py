"""
Integration Nodes CLI - Command-line interface for running nodes.

Commands:
- nodes: List, describe and run registered nodes
- credentials: Test credentials against their API
"""

from .main import cli, app

__all__ = ["cli", "app"]
