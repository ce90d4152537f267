"""Tests for the per-item resource/operation execution loop."""
import pytest

from src.node_sdk.errors import NodeApiError, NodeOperationError
from src.node_sdk.execution import ExecutionConfig, ResourceNode, operation


class EchoNode(ResourceNode):
    """Test node echoing an item-scoped parameter."""

    type = "echo"

    properties = {
        "credentials": [],
        "parameters": [
            {
                "displayName": "Resource",
                "name": "resource",
                "type": "options",
                "options": [{"name": "Thing", "value": "thing"}],
                "default": "thing",
            },
            {
                "displayName": "Operation",
                "name": "operation",
                "type": "options",
                "options": [
                    {"name": "Echo", "value": "echo"},
                    {"name": "List", "value": "list"},
                    {"name": "Crash", "value": "crash"},
                ],
                "default": "echo",
            },
            {"displayName": "Value", "name": "value", "type": "string", "default": ""},
        ],
    }

    calls = 0

    @operation("thing", "echo")
    def _echo(self, config: ExecutionConfig, i: int):
        EchoNode.calls += 1
        value = self.get_node_parameter("value", i)
        if value == "boom":
            raise NodeApiError("HTTP 500: Server Error", status_code=500)
        return {"value": value}

    @operation("thing", "list")
    def _list(self, config: ExecutionConfig, i: int):
        return [{"n": 1}, {"n": 2}]

    @operation("thing", "crash")
    def _crash(self, config: ExecutionConfig, i: int):
        raise ValueError("unexpected payload")


class SecuredEchoNode(EchoNode):
    """Echo node that requires credentials."""

    type = "securedEcho"
    credential_name = "echoApi"


THREE_ITEMS = [
    {"json": {"value": "a"}},
    {"json": {"value": "boom"}},
    {"json": {"value": "c"}},
]


@pytest.fixture(autouse=True)
def _reset_calls():
    EchoNode.calls = 0


class TestRouting:
    """Test the decorator-built operation table."""

    def test_routes_collected(self):
        assert EchoNode.routes == {
            ("thing", "echo"): "_echo",
            ("thing", "list"): "_list",
            ("thing", "crash"): "_crash",
        }

    def test_routes_inherited(self):
        assert SecuredEchoNode.routes == EchoNode.routes

    def test_unknown_operation_fails_before_any_item(self, run_node):
        with pytest.raises(NodeOperationError) as exc_info:
            run_node(EchoNode, {"operation": "explode"}, input_data=THREE_ITEMS)

        assert str(exc_info.value) == "The operation 'explode' is not supported for resource 'thing'"
        assert EchoNode.calls == 0


class TestItemLoop:
    """Test per-item processing and failure tolerance."""

    def test_items_processed_in_order(self, run_node):
        output = run_node(
            EchoNode,
            {"value": "={{ $json.value }}"},
            input_data=[{"json": {"value": "a"}}, {"json": {"value": "b"}}],
        )

        assert output == [[
            {"json": {"value": "a"}, "pairedItem": {"item": 0}},
            {"json": {"value": "b"}, "pairedItem": {"item": 1}},
        ]]

    def test_empty_input_runs_once(self, run_node):
        output = run_node(EchoNode, {"value": "x"})

        assert output == [[{"json": {"value": "x"}, "pairedItem": {"item": 0}}]]

    def test_array_results_are_flattened(self, run_node):
        output = run_node(EchoNode, {"operation": "list"}, input_data=[{"json": {}}, {"json": {}}])

        assert [item["json"]["n"] for item in output[0]] == [1, 2, 1, 2]
        assert [item["pairedItem"]["item"] for item in output[0]] == [0, 0, 1, 1]

    def test_failure_aborts_without_tolerance(self, run_node):
        with pytest.raises(NodeApiError) as exc_info:
            run_node(EchoNode, {"value": "={{ $json.value }}"}, input_data=THREE_ITEMS)

        error = exc_info.value
        assert error.item_index == 1
        assert error.partial_results == [[{"json": {"value": "a"}, "pairedItem": {"item": 0}}]]
        assert EchoNode.calls == 2

    def test_failure_recorded_with_tolerance(self, run_node):
        output = run_node(
            EchoNode,
            {"value": "={{ $json.value }}"},
            input_data=THREE_ITEMS,
            continue_on_fail=True,
        )

        assert output == [[
            {"json": {"value": "a"}, "pairedItem": {"item": 0}},
            {"json": {"error": "HTTP 500: Server Error"}, "pairedItem": {"item": 1}},
            {"json": {"value": "c"}, "pairedItem": {"item": 2}},
        ]]

    def test_unexpected_errors_are_wrapped(self, run_node):
        with pytest.raises(NodeOperationError) as exc_info:
            run_node(EchoNode, {"operation": "crash"})

        assert str(exc_info.value) == "unexpected payload"
        assert exc_info.value.item_index == 0
        assert isinstance(exc_info.value.__cause__, ValueError)


class TestConfig:
    """Test values resolved once before the loop."""

    def test_missing_credentials_fail_even_with_tolerance(self, run_node):
        with pytest.raises(NodeOperationError, match="Credentials 'echoApi' not found"):
            run_node(SecuredEchoNode, {}, input_data=THREE_ITEMS, continue_on_fail=True)

        assert EchoNode.calls == 0

    def test_credentials_resolved_into_config(self, run_node):
        run_node(SecuredEchoNode, {}, credentials={"echoApi": {"token": "t"}})

        config = run_node.node.build_config()
        assert config.credentials == {"token": "t"}
        assert config.resource == "thing"
        assert config.operation == "echo"
        assert config.client is run_node.node.http
