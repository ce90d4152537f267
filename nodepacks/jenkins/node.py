"""
Jenkins Node - Trigger, copy and create jobs, manage the instance, list builds.

SYNC-CELERY SAFE: one request per item, all through HttpClient timeouts.
"""

from __future__ import annotations

from typing import Any, Dict

from src.node_sdk.execution import ExecutionConfig, ResourceNode, operation
from src.node_sdk.http import HttpClient
from src.node_sdk.xml_parser import parse_xml

from . import api
from .credentials import JenkinsApiCredential


def _show(**conditions: Any) -> Dict[str, Any]:
    return {"show": conditions}


class JenkinsNode(ResourceNode):
    """
    Jenkins - Consume the Jenkins API.

    Resources:
    - job: trigger, triggerParams, copy, create
    - instance: quietDown, cancelQuietDown, restart, safeRestart, exit, safeExit
    - build: build:getAll (XML API, parsed into JSON)
    """

    type = "jenkins"
    version = 1
    credential_name = "jenkinsApi"

    description = {
        "displayName": "Jenkins",
        "name": "jenkins",
        "icon": "file:jenkins.svg",
        "group": ["output"],
        "subtitle": '={{$parameter["operation"] + ": " + $parameter["resource"]}}',
        "description": "Consume Jenkins API",
        "version": 1,
        "defaults": {"name": "Jenkins", "color": "#04AA51"},
        "inputs": ["main"],
        "outputs": ["main"],
    }

    properties = {
        "credentials": [
            {
                "name": "jenkinsApi",
                "required": True,
                "displayOptions": {"hide": {"operation": ["trigger", "triggerParams"]}},
            },
        ],
        "parameters": [
            {
                "displayName": "Resource",
                "name": "resource",
                "type": "options",
                "options": [
                    {"name": "Instance", "value": "instance", "description": "Jenkins instance"},
                    {"name": "Job", "value": "job", "description": "Jenkins job"},
                    {"name": "Build", "value": "build", "description": "List of builds job"},
                ],
                "default": "job",
                "description": "The resource to operate on",
            },
            # ---- Job ----
            {
                "displayName": "Operation",
                "name": "operation",
                "type": "options",
                "displayOptions": _show(resource=["job"]),
                "options": [
                    {"name": "Trigger a Job", "value": "trigger", "description": "Trigger a specific job"},
                    {
                        "name": "Trigger a Job with Parameters",
                        "value": "triggerParams",
                        "description": "Trigger a specific job",
                    },
                    {"name": "Copy a Job", "value": "copy", "description": "Copy a specific job"},
                    {"name": "Create", "value": "create", "description": "Create a new job"},
                ],
                "default": "trigger",
                "description": "Possible operations",
            },
            {
                "displayName": "Job Name",
                "name": "job",
                "type": "string",
                "displayOptions": _show(resource=["job"], operation=["trigger", "triggerParams", "copy"]),
                "required": True,
                "default": "",
                "description": "Name of the jenkins job",
            },
            {
                "displayName": "Job Token",
                "name": "token",
                "type": "string",
                "displayOptions": _show(resource=["job"], operation=["trigger", "triggerParams"]),
                "required": True,
                "default": "",
                "description": "Job token",
            },
            {
                "displayName": "Parameters",
                "name": "param",
                "type": "fixedCollection",
                "placeholder": "Add Parameter",
                "displayOptions": _show(resource=["job"], operation=["triggerParams"]),
                "required": True,
                "default": {},
                "typeOptions": {"multipleValues": True},
                "options": [
                    {
                        "name": "params",
                        "displayName": "Parameters",
                        "values": [
                            {"displayName": "Name", "name": "name", "type": "string", "default": ""},
                            {"displayName": "Value", "name": "value", "type": "string", "default": ""},
                        ],
                    },
                ],
                "description": "Parameters for Jenkins job",
            },
            {
                "displayName": "New Job Name",
                "name": "newJob",
                "type": "string",
                "displayOptions": _show(resource=["job"], operation=["copy", "create"]),
                "required": True,
                "default": "",
                "description": "Name of the new jenkins job",
            },
            {
                "displayName": "XML",
                "name": "xml",
                "type": "string",
                "displayOptions": _show(resource=["job"], operation=["create"]),
                "required": True,
                "default": "",
                "description": "XML of Jenkins config",
            },
            # ---- Instance ----
            {
                "displayName": "Operation",
                "name": "operation",
                "type": "options",
                "displayOptions": _show(resource=["instance"]),
                "options": [
                    {
                        "name": "Cancel Quiet Down Jenkins",
                        "value": "cancelQuietDown",
                        "description": "Cancel quiet down state",
                    },
                    {
                        "name": "Quiet Down Jenkins",
                        "value": "quietDown",
                        "description": "Puts Jenkins in quiet mode, no builds can be started, "
                                       "Jenkins is ready for shutdown",
                    },
                    {
                        "name": "Restart Jenkins",
                        "value": "restart",
                        "description": "Restart Jenkins immediately on environments where it is possible",
                    },
                    {
                        "name": "Safely Restart Jenkins",
                        "value": "safeRestart",
                        "description": "Restart Jenkins once no jobs are running on environments "
                                       "where it is possible",
                    },
                    {
                        "name": "Safely Shutdown Jenkins",
                        "value": "safeExit",
                        "description": "Shutdown once no jobs are running",
                    },
                    {"name": "Shutdown Jenkins", "value": "exit", "description": "Shutdown Jenkins immediately"},
                ],
                "default": "safeRestart",
                "description": "Jenkins operation",
            },
            {
                "displayName": "Reason",
                "name": "reason",
                "type": "string",
                "displayOptions": _show(resource=["instance"], operation=["quietDown"]),
                "required": False,
                "default": "",
                "description": "Freeform reason for quiet down mode",
            },
            # ---- Build ----
            {
                "displayName": "Operation",
                "name": "operation",
                "type": "options",
                "displayOptions": _show(resource=["build"]),
                "options": [
                    {"name": "Get All", "value": "build:getAll", "description": "List Builds"},
                ],
                "default": "build:getAll",
                "description": "Build operation",
            },
            {
                "displayName": "Filters",
                "name": "filters",
                "type": "collection",
                "placeholder": "Add Field",
                "default": {},
                "displayOptions": _show(resource=["build"], operation=["build:getAll"]),
                "options": [
                    {
                        "displayName": "Depth",
                        "name": "depth",
                        "type": "number",
                        "default": 1,
                        "description": "Number depth parameter",
                    },
                    {
                        "displayName": "Tree",
                        "name": "tree",
                        "type": "string",
                        "default": "",
                        "description": "String tree parameter",
                    },
                    {
                        "displayName": "Xpath",
                        "name": "xpath",
                        "type": "string",
                        "default": "",
                        "description": "String xpath parameter",
                    },
                    {
                        "displayName": "Exclude",
                        "name": "exclude",
                        "type": "string",
                        "default": "",
                        "description": "String exclude parameter",
                    },
                ],
            },
        ],
    }

    def create_client(self, credentials: Dict[str, Any]) -> HttpClient:
        """Context transport with the Basic Auth header of the credential."""
        credential = JenkinsApiCredential(credentials, http_client=self.http)
        return self.http.with_auth(headers=credential.get_auth_header())

    def _base_url(self, config: ExecutionConfig) -> str:
        return config.credentials.get("baseUrl", "")

    # ==== Job ====

    @operation("job", "trigger")
    def _trigger(self, config: ExecutionConfig, i: int) -> Any:
        request = api.trigger_job(
            self._base_url(config),
            self.get_node_parameter("job", i),
            self.get_node_parameter("token", i),
        )
        return config.client.send(request).body()

    @operation("job", "triggerParams")
    def _trigger_params(self, config: ExecutionConfig, i: int) -> Any:
        request = api.trigger_job_with_params(
            self._base_url(config),
            self.get_node_parameter("job", i),
            self.get_node_parameter("token", i),
            self.get_node_parameter("param.params", i, []),
        )
        return config.client.send(request).body()

    @operation("job", "copy")
    def _copy(self, config: ExecutionConfig, i: int) -> Any:
        request = api.copy_job(
            self._base_url(config),
            self.get_node_parameter("job", i),
            self.get_node_parameter("newJob", i),
        )
        return config.client.send(request).body()

    @operation("job", "create")
    def _create(self, config: ExecutionConfig, i: int) -> Any:
        request = api.create_job(
            self._base_url(config),
            self.get_node_parameter("newJob", i),
            self.get_node_parameter("xml", i),
        )
        return config.client.send(request).body()

    # ==== Instance ====

    @operation("instance", "quietDown")
    @operation("instance", "cancelQuietDown")
    @operation("instance", "restart")
    @operation("instance", "safeRestart")
    @operation("instance", "exit")
    @operation("instance", "safeExit")
    def _instance_action(self, config: ExecutionConfig, i: int) -> Any:
        reason = None
        if config.operation == "quietDown":
            reason = self.get_node_parameter("reason", i, "")
        request = api.instance_action(self._base_url(config), config.operation, reason)
        return config.client.send(request).body()

    # ==== Build ====

    @operation("build", "build:getAll")
    def _list_builds(self, config: ExecutionConfig, i: int) -> Any:
        filters = self.get_node_parameter("filters", i, {})
        response = config.client.send(api.list_builds(self._base_url(config), filters))
        return parse_xml(response.content)


__all__ = ["JenkinsNode"]
