"""Pytest configuration and fixtures."""
import json
import os
from typing import Any, Dict, List, Optional
from unittest.mock import Mock

import pytest
import requests
from requests.structures import CaseInsensitiveDict

# Set test environment variables
os.environ["NODES_ENV"] = "test"
os.environ["NODES_LOG_FORMAT"] = "text"


JENKINS_CREDENTIALS = {
    "username": "admin",
    "apiKey": "11aa22bb",
    "baseUrl": "https://ci.example.com",
}

BAMBOOHR_CREDENTIALS = {
    "subdomain": "acme",
    "apiKey": "bamboo-key",
}


def build_response(
    status_code: int = 200,
    body: Any = None,
    text: Optional[str] = None,
    content: Optional[bytes] = None,
    headers: Optional[Dict[str, str]] = None,
    url: str = "https://api.example.com/",
    method: str = "GET",
    reason: str = "OK",
) -> requests.Response:
    """Real requests.Response carrying the given status, headers and body."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.url = url
    response.encoding = "utf-8"
    response.headers = CaseInsensitiveDict(headers or {})
    response.request = requests.Request(method, url).prepare()

    if content is not None:
        response._content = content
    elif text is not None:
        response._content = text.encode("utf-8")
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
        response.headers.setdefault("Content-Type", "application/json")
    else:
        response._content = b""
    return response


@pytest.fixture
def make_response():
    """Factory for requests.Response objects."""
    return build_response


@pytest.fixture
def session():
    """Fake requests.Session; set request.return_value / side_effect per test."""
    fake = Mock(spec=requests.Session)
    fake.request.return_value = build_response(body={})
    return fake


@pytest.fixture
def run_node(session):
    """
    Execute a node class against the fake session.

    Returns the output branches; the node instance is kept on the
    function as run_node.node for assertions.
    """
    from src.node_sdk import HttpClient, NodeExecutionContext

    def _run(
        node_class,
        parameters: Dict[str, Any],
        credentials: Optional[Dict[str, Dict[str, Any]]] = None,
        input_data: Optional[List[Dict[str, Any]]] = None,
        continue_on_fail: bool = False,
    ):
        node = node_class()
        context = NodeExecutionContext(
            parameters=parameters,
            credentials=credentials or {},
            input_data=input_data or [],
            continue_on_fail=continue_on_fail,
            http_client=HttpClient(session=session),
        )
        node.set_context(context)
        _run.node = node
        return node.execute()

    return _run


@pytest.fixture
def jenkins_credentials():
    return {"jenkinsApi": dict(JENKINS_CREDENTIALS)}


@pytest.fixture
def bamboohr_credentials():
    return {"bambooHrApi": dict(BAMBOOHR_CREDENTIALS)}


@pytest.fixture(autouse=True)
def _reset_settings():
    """Settings are cached globally; start each test from the environment."""
    from src.integration_nodes.config import reset_settings

    reset_settings()
    yield
    reset_settings()
