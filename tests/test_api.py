"""Tests for the HTTP transport."""

import json

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client(server, settings):
    from mcp_server.main import create_app

    with TestClient(create_app(server=server, settings=settings)) as client:
        yield client


class TestSystemEndpoints:
    """Tests for health and info."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == "1.0.0"
        assert "timestamp" in body

    def test_mcp_info(self, client):
        response = client.get("/mcp/info")

        assert response.json() == {
            "name": "mcp-server",
            "version": "1.0.0",
            "capabilities": ["tools", "resources"],
        }


class TestToolEndpoints:
    """Tests for tool listing and calls."""

    def test_list_tools(self, client):
        response = client.get("/tools/list")

        assert response.status_code == 200
        tools = response.json()["tools"]
        assert [t["name"] for t in tools] == ["calculate", "manage_data"]
        assert "inputSchema" in tools[1]

    def test_call_tool(self, client):
        response = client.post("/tools/call", json={
            "name": "calculate",
            "arguments": {"operation": "divide", "a": 100, "b": 5},
        })

        assert response.status_code == 200
        content = response.json()["content"]
        assert content[0]["type"] == "text"
        assert json.loads(content[0]["text"])["result"] == 20

    def test_manage_data_failure_is_success_response(self, client):
        response = client.post("/tools/call", json={
            "name": "manage_data",
            "arguments": {"action": "read", "type": "user", "id": "non-existent"},
        })

        assert response.status_code == 200
        result = json.loads(response.json()["content"][0]["text"])
        assert result["success"] is False

    @pytest.mark.parametrize("payload, code", [
        ({"name": "unknown_tool", "arguments": {}}, "UNKNOWN_TOOL"),
        ({"name": "calculate", "arguments": {"operation": "add", "a": 1}}, "VALIDATION_ERROR"),
        ({"name": "calculate", "arguments": {"operation": "divide", "a": 1, "b": 0}}, "DIVISION_BY_ZERO"),
    ])
    def test_hard_failures_are_400(self, client, payload, code):
        response = client.post("/tools/call", json=payload)

        assert response.status_code == 400
        assert response.json()["code"] == code
        assert response.json()["error"]


class TestResourceEndpoints:
    """Tests for resource listing and reads."""

    def test_list_resources(self, client):
        resources = client.get("/resources/list").json()["resources"]

        assert len(resources) == 4
        assert resources[0] == {
            "uri": "users://all",
            "name": "All Users",
            "description": "Complete list of users in the system",
            "mimeType": "application/json",
        }

    def test_read_resource(self, client):
        response = client.post("/resources/read", json={"uri": "users://stats"})

        assert response.status_code == 200
        block = response.json()["contents"][0]
        assert block["uri"] == "users://stats"
        assert block["mimeType"] == "application/json"
        assert json.loads(block["text"])["type"] == "user_statistics"

    def test_read_unknown_resource(self, client):
        response = client.post("/resources/read", json={"uri": "invalid://resource"})

        assert response.status_code == 400
        assert response.json()["error"] == 'Resource "invalid://resource" not found'
