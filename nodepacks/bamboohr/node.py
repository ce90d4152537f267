"""
BambooHR Node - Employees, employee files and company files.

SYNC-CELERY SAFE: one request per item (two for 'get' with all fields).
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from src.node_sdk.errors import NodeOperationError
from src.node_sdk.execution import ExecutionConfig, ResourceNode, operation
from src.node_sdk.http import HttpClient, HttpResponse
from src.node_sdk.items import BinaryData, NodeItem

from . import api
from .credentials import BambooHrApiCredential
from .description import PARAMETERS


_FILENAME = re.compile(r'filename\*?=(?:UTF-8\'\')?"?([^";]+)"?', re.IGNORECASE)


def _file_name_from(response: HttpResponse) -> Optional[str]:
    disposition = response.headers.get("Content-Disposition", "")
    match = _FILENAME.search(disposition)
    return match.group(1) if match else None


class BambooHrNode(ResourceNode):
    """
    BambooHR - Consume the BambooHR API.

    Resources:
    - employees: create, get, getAll, update
    - employeeFiles: delete, download, getAll, update, upload
    - companyFiles: delete, download, getAll, update, upload
    """

    type = "bamboohr"
    version = 1
    credential_name = "bambooHrApi"

    description = {
        "displayName": "BambooHR",
        "name": "bambooHr",
        "icon": "file:bambooHr.svg",
        "group": ["transform"],
        "subtitle": '={{$parameter["operation"] + ": " + $parameter["resource"]}}',
        "description": "Consume BambooHR API",
        "version": 1,
        "defaults": {"name": "BambooHR", "color": "#73c41d"},
        "inputs": ["main"],
        "outputs": ["main"],
    }

    properties = {
        "credentials": [
            {"name": "bambooHrApi", "required": True},
        ],
        "parameters": PARAMETERS,
    }

    def create_client(self, credentials: Dict[str, Any]) -> HttpClient:
        credential = BambooHrApiCredential(credentials, http_client=self.http)
        return self.http.with_auth(headers=credential.get_auth_header())

    def _subdomain(self, config: ExecutionConfig) -> str:
        return config.credentials.get("subdomain", "")

    def _employee_scope(self, config: ExecutionConfig, i: int) -> Optional[str]:
        if config.resource == "employeeFiles":
            return self.get_node_parameter("employeeId", i)
        return None

    def _limit(self, results: List[Any], i: int) -> List[Any]:
        if self.get_node_parameter("returnAll", i, False):
            return results
        return results[: self.get_node_parameter("limit", i, 5)]

    # ==== Employees ====

    @operation("employees", "create")
    def _create_employee(self, config: ExecutionConfig, i: int) -> Any:
        body: Dict[str, Any] = {
            "firstName": self.get_node_parameter("firstName", i),
            "lastName": self.get_node_parameter("lastName", i),
            **self.get_node_parameter("additionalFields", i, {}),
        }
        if self.get_node_parameter("synced", i, False):
            body["synced"] = True

        response = config.client.send(api.create_employee(self._subdomain(config), body))
        location = response.headers.get("Location", "")
        return {"id": location.rstrip("/").rsplit("/", 1)[-1] if location else None}

    @operation("employees", "get")
    def _get_employee(self, config: ExecutionConfig, i: int) -> Any:
        subdomain = self._subdomain(config)
        fields = self.get_node_parameter("fields", i, ["all"])
        if isinstance(fields, str):
            fields = [field.strip() for field in fields.split(",") if field.strip()]
        if "all" in fields:
            available = config.client.send(api.list_employee_fields(subdomain)).body()
            fields = [str(field.get("alias") or field.get("id")) for field in available]

        employee_id = self.get_node_parameter("employeeId", i)
        return config.client.send(api.get_employee(subdomain, employee_id, fields)).body()

    @operation("employees", "getAll")
    def _list_employees(self, config: ExecutionConfig, i: int) -> Any:
        directory = config.client.send(api.employee_directory(self._subdomain(config))).body()
        return self._limit(directory.get("employees", []), i)

    @operation("employees", "update")
    def _update_employee(self, config: ExecutionConfig, i: int) -> Any:
        fields = self.get_node_parameter("updateFields", i, {})
        if not fields:
            raise NodeOperationError("At least one field to update is required", node=self, item_index=i)

        employee_id = self.get_node_parameter("employeeId", i)
        config.client.send(api.update_employee(self._subdomain(config), employee_id, fields))
        return {"success": True}

    # ==== Files ====

    @operation("employeeFiles", "getAll")
    @operation("companyFiles", "getAll")
    def _list_files(self, config: ExecutionConfig, i: int) -> Any:
        request = api.list_files(self._subdomain(config), self._employee_scope(config, i))
        categories = config.client.send(request).body().get("categories", [])

        files = []
        for category in categories:
            for file in category.get("files", []):
                files.append({**file, "categoryId": category.get("id")})
        return self._limit(files, i)

    @operation("employeeFiles", "delete")
    @operation("companyFiles", "delete")
    def _delete_file(self, config: ExecutionConfig, i: int) -> Any:
        request = api.delete_file(
            self._subdomain(config),
            self.get_node_parameter("fileId", i),
            self._employee_scope(config, i),
        )
        config.client.send(request)
        return {"success": True}

    @operation("employeeFiles", "download")
    @operation("companyFiles", "download")
    def _download_file(self, config: ExecutionConfig, i: int) -> Any:
        request = api.download_file(
            self._subdomain(config),
            self.get_node_parameter("fileId", i),
            self._employee_scope(config, i),
        )
        response = config.client.send(request)

        content_type = response.headers.get("Content-Type", "")
        binary = BinaryData.from_bytes(
            response.content,
            file_name=_file_name_from(response),
            mime_type=content_type.split(";")[0].strip() or None,
        )
        items = self.get_input_data()
        json_data = items[i].get("json", {}) if i < len(items) else {}
        return NodeItem(
            json_data=json_data,
            binary={self.get_node_parameter("output", i, "data"): binary},
        )

    @operation("employeeFiles", "update")
    @operation("companyFiles", "update")
    def _update_file(self, config: ExecutionConfig, i: int) -> Any:
        fields = self.get_node_parameter("updateFields", i, {})
        if not fields:
            raise NodeOperationError("At least one field to update is required", node=self, item_index=i)

        request = api.update_file(
            self._subdomain(config),
            self.get_node_parameter("fileId", i),
            fields,
            self._employee_scope(config, i),
        )
        config.client.send(request)
        return {"success": True}

    @operation("employeeFiles", "upload")
    @operation("companyFiles", "upload")
    def _upload_file(self, config: ExecutionConfig, i: int) -> Any:
        property_name = self.get_node_parameter("binaryPropertyName", i, "data")
        items = self.get_input_data()
        binary_entries = (items[i].get("binary") or {}) if i < len(items) else {}
        if property_name not in binary_entries:
            raise NodeOperationError(
                f"No binary data property '{property_name}' exists on item!",
                node=self,
                item_index=i,
            )

        options = self.get_node_parameter("options", i, {})
        request = api.upload_file(
            self._subdomain(config),
            BinaryData.from_item_entry(binary_entries[property_name]),
            self.get_node_parameter("categoryId", i),
            share=options.get("share", True),
            employee_id=self._employee_scope(config, i),
        )
        config.client.send(request)
        return {"success": True}


__all__ = ["BambooHrNode"]
