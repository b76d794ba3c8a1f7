"""Tests for NodeRunner and the execution context."""
from unittest.mock import patch

import pytest

from fetias_nodes.node_registry import NodePackManifest, NodeRegistry
from fetias_nodes.node_sdk import (
    NodeCredentialError,
    NodeExecutionContext,
    NodeItem,
    NodeOperationError,
    NodeRunner,
)
from fetias_nodes.nodes import FetiasNode


class TestNodeRunner:
    """Running nodes by type name."""

    def test_unknown_node_type(self, runner):
        with pytest.raises(NodeOperationError, match="Unknown node type: nope"):
            runner.run("nope", parameters={})

    @patch("requests.request")
    def test_credential_reference_from_store(self, mock_request, make_response):
        mock_request.return_value = make_response(200, {"username": "alice"})
        runner = NodeRunner(credential_store={"prod-fetias": {"apiKey": "stored-key"}})

        runner.run("FETIAS", parameters={"operation": "read"}, credentials={"fetiasApi": "prod-fetias"})

        assert mock_request.call_args.kwargs["headers"] == {"Authorization": "fsk stored-key"}

    @patch("requests.request")
    def test_set_credentials(self, mock_request, make_response, runner):
        mock_request.return_value = make_response(200, {})
        runner.set_credentials("later", {"apiKey": "late-key"})

        runner.run("FETIAS", parameters={"operation": "read"}, credentials={"fetiasApi": "later"})

        assert mock_request.call_args.kwargs["headers"]["Authorization"] == "fsk late-key"

    @patch("requests.request")
    def test_unresolved_reference(self, mock_request, runner):
        with pytest.raises(NodeCredentialError):
            runner.run("FETIAS", parameters={"operation": "read"}, credentials={"fetiasApi": "missing"})

        mock_request.assert_not_called()

    @patch("requests.request")
    def test_bare_input_items_are_wrapped(self, mock_request, make_response, runner):
        mock_request.return_value = make_response(200, {"records": [{"id": "r1"}]})

        runner.run(
            "FETIAS",
            parameters={"operation": "create", "workspace": "w", "module": "m"},
            credentials={"fetiasApi": {"apiKey": "k"}},
            input_data=[{"name": "Alice"}],
        )

        assert mock_request.call_args.kwargs["json"] == {"records": [{"fields": {"name": "Alice"}}]}

    @patch("requests.request")
    def test_bare_item_with_json_field_is_sent_whole(self, mock_request, make_response, runner):
        mock_request.return_value = make_response(200, {"records": []})

        runner.run(
            "FETIAS",
            parameters={"operation": "create", "workspace": "w", "module": "m"},
            credentials={"fetiasApi": {"apiKey": "k"}},
            input_data=[{"json": {"x": 1}, "name": "Alice"}],
        )

        assert mock_request.call_args.kwargs["json"] == {
            "records": [{"fields": {"json": {"x": 1}, "name": "Alice"}}]
        }

    @patch("requests.request")
    def test_timeout_from_settings(self, mock_request, make_response, monkeypatch):
        monkeypatch.setenv("FETIAS_NODES_HTTP_TIMEOUT_S", "7")
        mock_request.return_value = make_response(200, {})

        NodeRunner().run("FETIAS", parameters={"operation": "read"}, credentials={"fetiasApi": {"apiKey": "k"}})

        assert mock_request.call_args.kwargs["timeout"] == 7

    def test_custom_registry(self):
        registry = NodeRegistry()
        registry.register_pack(NodePackManifest(name="solo", nodes=["FETIAS"]), {"FETIAS": FetiasNode})
        runner = NodeRunner(registry=registry)

        assert isinstance(runner.create_node("FETIAS"), FetiasNode)
        with pytest.raises(NodeOperationError):
            runner.create_node("haloPSA")


class TestNodeExecutionContext:
    """Parameter and credential access."""

    def make_context(self, **kwargs):
        defaults = {
            "parameters": {
                "operation": "create",
                "additionalFields": {"firstName": "Ada"},
                "fieldsToCreateOrUpdate": {"fields": [{"fieldName": "a", "fieldValue": "1"}]},
            },
            "credentials": {"fetiasApi": {"apiKey": "k"}},
            "input_data": [{"json": {}}],
        }
        defaults.update(kwargs)
        return NodeExecutionContext(**defaults)

    def test_nested_parameters(self):
        context = self.make_context()

        assert context.get_node_parameter("operation") == "create"
        assert context.get_node_parameter("additionalFields.firstName") == "Ada"
        assert context.get_node_parameter("fieldsToCreateOrUpdate.fields.0.fieldName") == "a"
        assert context.get_node_parameter("fieldsToCreateOrUpdate.fields.5", default="x") == "x"
        assert context.get_node_parameter("missing", default=3) == 3

    def test_parameter_resolver(self):
        context = self.make_context(parameter_resolver=lambda name, index, default: f"{name}-{index}")

        assert context.get_node_parameter("module", 2) == "module-2"

    def test_missing_credentials(self):
        context = self.make_context()

        with pytest.raises(NodeCredentialError, match="friendGridApi"):
            context.get_credentials("friendGridApi")

    def test_node_without_context(self):
        node = FetiasNode()

        assert node.get_node_parameter("operation", 0, "read") == "read"
        assert node.get_input_data() == []
        assert node.continue_on_fail is False
        with pytest.raises(NodeOperationError, match="No context set"):
            node.get_credentials("fetiasApi")


class TestNodeItem:
    """Input item normalization."""

    def test_from_any_wrapped(self):
        item = NodeItem.from_any({"json": {"a": 1}, "pairedItem": {"item": 3}})

        assert item.json_data == {"a": 1}
        assert item.to_execution_data() == {"json": {"a": 1}, "pairedItem": {"item": 3, "input": 0}}

    def test_from_any_wrapped_with_binary(self):
        item = NodeItem.from_any({"json": {"a": 1}, "binary": {}})

        assert item.to_execution_data() == {"json": {"a": 1}}

    def test_from_any_bare(self):
        item = NodeItem.from_any({"a": 1})

        assert item.to_execution_data() == {"json": {"a": 1}}

    def test_bare_object_with_json_field_is_kept_whole(self):
        item = NodeItem.from_any({"json": {"x": 1}, "name": "Alice"})

        assert item.to_execution_data() == {"json": {"json": {"x": 1}, "name": "Alice"}}
