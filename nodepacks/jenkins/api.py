"""
Jenkins request builders.

Each function turns node parameters into the OperationRequest for one
Jenkins endpoint. Base URLs are normalized so a configured trailing
slash never produces '//' in the path. Job names are inserted as given.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from src.node_sdk.http import OperationRequest, tolerate_trailing_slash


INSTANCE_OPERATIONS = (
    "cancelQuietDown",
    "quietDown",
    "restart",
    "safeRestart",
    "safeExit",
    "exit",
)

BUILD_FILTERS = ("depth", "tree", "xpath", "exclude")


def params_to_map(params: Optional[List[Mapping[str, Any]]]) -> Dict[str, Any]:
    """Fold [{name, value}, ...] into a mapping; a repeated name keeps its last value."""
    body: Dict[str, Any] = {}
    for param in params or []:
        body[param.get("name", "")] = param.get("value", "")
    return body


def trigger_job(base_url: str, job: str, token: str) -> OperationRequest:
    return OperationRequest(
        method="GET",
        url=f"{tolerate_trailing_slash(base_url)}/job/{job}/build",
        params={"token": token},
    )


def trigger_job_with_params(
    base_url: str,
    job: str,
    token: str,
    params: Optional[List[Mapping[str, Any]]],
) -> OperationRequest:
    return OperationRequest(
        method="GET",
        url=f"{tolerate_trailing_slash(base_url)}/job/{job}/buildWithParameters",
        params={"token": token},
        json={"data": params_to_map(params)},
    )


def copy_job(base_url: str, job: str, new_name: str) -> OperationRequest:
    return OperationRequest(
        method="POST",
        url=f"{tolerate_trailing_slash(base_url)}/createItem",
        params={"name": new_name, "mode": "copy", "from": job},
    )


def create_job(base_url: str, new_name: str, xml: str) -> OperationRequest:
    """Create a job from its config.xml, sent as the raw request body."""
    return OperationRequest(
        method="POST",
        url=f"{tolerate_trailing_slash(base_url)}/createItem",
        params={"name": new_name},
        headers={"content-type": "application/xml"},
        data=xml,
    )


def instance_action(base_url: str, operation: str, reason: Optional[str] = None) -> OperationRequest:
    """
    Lifecycle action on the Jenkins instance.

    Only quietDown takes a reason, and only a non-empty one is sent.
    """
    if operation not in INSTANCE_OPERATIONS:
        raise ValueError(f"Unknown instance operation: {operation}")

    params = None
    if operation == "quietDown" and reason:
        params = {"reason": reason}

    return OperationRequest(
        method="POST",
        url=f"{tolerate_trailing_slash(base_url)}/{operation}",
        params=params,
    )


def list_builds(base_url: str, filters: Optional[Mapping[str, Any]] = None) -> OperationRequest:
    """
    Query the XML API. depth falls back to 1; empty filters are left out.
    """
    filters = filters or {}
    params: Dict[str, Any] = {"depth": filters.get("depth") or 1}
    for name in BUILD_FILTERS[1:]:
        if filters.get(name):
            params[name] = filters[name]

    return OperationRequest(
        method="GET",
        url=f"{tolerate_trailing_slash(base_url)}/api/xml",
        params=params,
    )


__all__ = [
    "BUILD_FILTERS",
    "INSTANCE_OPERATIONS",
    "copy_job",
    "create_job",
    "instance_action",
    "list_builds",
    "params_to_map",
    "trigger_job",
    "trigger_job_with_params",
]
