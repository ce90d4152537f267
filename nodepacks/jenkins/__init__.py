"""
Jenkins Node Pack - Jenkins CI server integration.

- JenkinsNode: trigger/copy/create jobs, instance lifecycle, list builds
- JenkinsApiCredential: username + API token (Basic Auth)
"""

from .credentials import JenkinsApiCredential
from .node import JenkinsNode
from .manifest import MANIFEST, register_nodes

__all__ = [
    "JenkinsApiCredential",
    "JenkinsNode",
    "MANIFEST",
    "register_nodes",
]
