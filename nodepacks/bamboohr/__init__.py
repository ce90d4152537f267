"""
BambooHR Node Pack - BambooHR HR system integration.

- BambooHrNode: employees, employee files, company files
- BambooHrApiCredential: subdomain + API key (Basic Auth)
"""

from .credentials import BambooHrApiCredential
from .node import BambooHrNode
from .manifest import MANIFEST, register_nodes

__all__ = [
    "BambooHrApiCredential",
    "BambooHrNode",
    "MANIFEST",
    "register_nodes",
]
