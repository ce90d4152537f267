"""
BambooHR request builders.

All endpoints live under the company's gateway URL, derived from the
subdomain of the credential. Files exist at two scopes: an employee's
files (/employees/{id}/files) and company files (/files); every file
builder takes an optional employee_id to choose between them.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional

from src.node_sdk.http import OperationRequest
from src.node_sdk.items import BinaryData


GATEWAY_URL = "https://api.bamboohr.com/api/gateway.php"


def base_url(subdomain: str) -> str:
    return f"{GATEWAY_URL}/{subdomain}/v1"


def _files_root(subdomain: str, employee_id: Optional[str]) -> str:
    if employee_id:
        return f"{base_url(subdomain)}/employees/{employee_id}/files"
    return f"{base_url(subdomain)}/files"


# ==== Employees ====

def create_employee(subdomain: str, body: Mapping[str, Any]) -> OperationRequest:
    return OperationRequest(method="POST", url=f"{base_url(subdomain)}/employees", json=dict(body))


def list_employee_fields(subdomain: str) -> OperationRequest:
    return OperationRequest(method="GET", url=f"{base_url(subdomain)}/meta/fields")


def get_employee(subdomain: str, employee_id: str, fields: Iterable[str]) -> OperationRequest:
    return OperationRequest(
        method="GET",
        url=f"{base_url(subdomain)}/employees/{employee_id}",
        params={"fields": ",".join(fields)},
    )


def employee_directory(subdomain: str) -> OperationRequest:
    return OperationRequest(method="GET", url=f"{base_url(subdomain)}/employees/directory")


def update_employee(subdomain: str, employee_id: str, body: Mapping[str, Any]) -> OperationRequest:
    return OperationRequest(
        method="POST",
        url=f"{base_url(subdomain)}/employees/{employee_id}",
        json=dict(body),
    )


# ==== Files ====

def list_files(subdomain: str, employee_id: Optional[str] = None) -> OperationRequest:
    """File categories with their files."""
    return OperationRequest(method="GET", url=f"{_files_root(subdomain, employee_id)}/view")


def delete_file(subdomain: str, file_id: str, employee_id: Optional[str] = None) -> OperationRequest:
    return OperationRequest(method="DELETE", url=f"{_files_root(subdomain, employee_id)}/{file_id}")


def download_file(subdomain: str, file_id: str, employee_id: Optional[str] = None) -> OperationRequest:
    return OperationRequest(
        method="GET",
        url=f"{_files_root(subdomain, employee_id)}/{file_id}",
        headers={"Accept": "*/*"},
    )


def update_file(
    subdomain: str,
    file_id: str,
    fields: Mapping[str, Any],
    employee_id: Optional[str] = None,
) -> OperationRequest:
    body: Dict[str, Any] = dict(fields)
    if "shareWithEmployee" in body:
        body["shareWithEmployee"] = "yes" if body["shareWithEmployee"] else "no"
    return OperationRequest(
        method="POST",
        url=f"{_files_root(subdomain, employee_id)}/{file_id}",
        json=body,
    )


def upload_file(
    subdomain: str,
    binary: BinaryData,
    category_id: str,
    share: bool = True,
    employee_id: Optional[str] = None,
) -> OperationRequest:
    """Multipart upload of one binary attachment into a file category."""
    file_name = binary.file_name or "file"
    return OperationRequest(
        method="POST",
        url=_files_root(subdomain, employee_id),
        data={
            "fileName": file_name,
            "category": category_id,
            "share": "yes" if share else "no",
        },
        files={"file": (file_name, binary.data, binary.mime_type)},
    )


__all__ = [
    "GATEWAY_URL",
    "base_url",
    "create_employee",
    "delete_file",
    "download_file",
    "employee_directory",
    "get_employee",
    "list_employee_fields",
    "list_files",
    "update_employee",
    "update_file",
    "upload_file",
]
