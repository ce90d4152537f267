"""
BambooHR Node Pack Manifest - Registration function for entry-points.
"""

from src.node_registry.models import NodePackManifest
from .credentials import BambooHrApiCredential
from .node import BambooHrNode


MANIFEST = NodePackManifest(
    name="bamboohr",
    version="1.0.0",
    description="BambooHR: employees, employee files and company files",
    author="integration-nodes",
    license="MIT",
    nodes=["bamboohr"],
    credentials=["bambooHrApi"],
    entry_point="nodepacks.bamboohr",
)


# Node classes by type
NODE_CLASSES = {
    "bamboohr": BambooHrNode,
}

# Credential classes by type name
CREDENTIAL_CLASSES = {
    "bambooHrApi": BambooHrApiCredential,
}


def register_nodes():
    """
    Entry point function for node pack discovery.

    Returns tuple of (manifest, node_classes, credential_classes).
    """
    return MANIFEST, NODE_CLASSES, CREDENTIAL_CLASSES


__all__ = [
    "MANIFEST",
    "NODE_CLASSES",
    "CREDENTIAL_CLASSES",
    "register_nodes",
]
