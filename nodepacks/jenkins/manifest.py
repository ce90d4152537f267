"""
Jenkins Node Pack Manifest - Registration function for entry-points.
"""

from src.node_registry.models import NodePackManifest
from .credentials import JenkinsApiCredential
from .node import JenkinsNode


MANIFEST = NodePackManifest(
    name="jenkins",
    version="1.0.0",
    description="Jenkins CI server: jobs, instance lifecycle and builds",
    author="integration-nodes",
    license="MIT",
    nodes=["jenkins"],
    credentials=["jenkinsApi"],
    entry_point="nodepacks.jenkins",
)


# Node classes by type
NODE_CLASSES = {
    "jenkins": JenkinsNode,
}

# Credential classes by type name
CREDENTIAL_CLASSES = {
    "jenkinsApi": JenkinsApiCredential,
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
