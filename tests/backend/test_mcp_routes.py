"""
Tests for the /mcp routes
"""
import io
import json
from unittest.mock import patch

import pytest


class TestDiscover:
    """Test GET /mcp/discover."""

    def test_lists_tools_and_prompts(self, client):
        response = client.get("/mcp/discover")

        assert response.status_code == 200
        body = response.get_json()
        assert [t["name"] for t in body["tools"]] == ["PngToWebpTool", "PngFileToWebpTool"]
        assert [p["name"] for p in body["prompts"]] == [
            "GetWebpFromPngPrompt",
            "GetWebpFromBase64PngPrompt",
            "GetWebpFromPngFilePrompt",
        ]
        assert body["resources"] == []

    def test_png_to_webp_schema(self, client):
        tool = client.get("/mcp/discover").get_json()["tools"][0]
        schema = tool["inputSchema"]

        assert schema["type"] == "object"
        assert schema["required"] == ["imageData"]
        assert schema["properties"]["quality"]["type"] == "number"
        assert schema["properties"]["quality"]["default"] == 80
        assert schema["properties"]["quality"]["optional"] is True
        assert schema["properties"]["lossless"]["default"] is True
        assert schema["properties"]["animated"]["default"] is False
        assert schema["properties"]["imageData"]["type"] == "string"
        assert "optional" not in schema["properties"]["imageData"]

    def test_file_tool_has_no_required_fields(self, client):
        tool = client.get("/mcp/discover").get_json()["tools"][1]

        assert "required" not in tool["inputSchema"]

    def test_reflection_failure_returns_500(self, client):
        with patch("webp_backend.services.mcp_service.reflect", side_effect=RuntimeError("boom")):
            response = client.get("/mcp/discover")

        assert response.status_code == 500
        assert response.get_json() == {
            "error": "Failed to discover tools/prompts.",
            "message": "boom",
        }

    def test_cors_header(self, client):
        response = client.get("/mcp/discover", headers={"Origin": "http://example.com"})

        assert response.headers["Access-Control-Allow-Origin"] == "*"


class TestExecute:
    """Test POST /mcp/execute."""

    def test_png_to_webp(self, client, png_data_url):
        response = client.post("/mcp/execute", json={
            "toolName": "PngToWebpTool",
            "input": {"imageData": png_data_url, "quality": 90},
        })

        assert response.status_code == 200
        body = response.get_json()
        assert body["success"] is True
        assert body["dataUrl"].startswith("data:image/webp;base64,")
        assert body["metadata"]["width"] == 4
        assert body["metadata"]["height"] == 3
        assert body["metadata"]["originalFormat"] == "png"

    def test_input_as_json_string(self, client, png_data_url):
        response = client.post("/mcp/execute", json={
            "toolName": "PngToWebpTool",
            "input": json.dumps({"imageData": png_data_url}),
        })

        assert response.get_json()["success"] is True

    def test_unknown_tool(self, client):
        response = client.post("/mcp/execute", json={"toolName": "UnknownTool", "input": {}})

        assert response.status_code == 400
        assert response.get_json() == {"success": False, "error": "Unknown tool: UnknownTool"}

    def test_missing_tool_name(self, client):
        response = client.post("/mcp/execute", json={"input": {}})

        assert response.status_code == 400
        assert response.get_json()["error"] == "Unknown tool: None"

    def test_validation_error(self, client):
        response = client.post("/mcp/execute", json={
            "toolName": "PngToWebpTool",
            "input": {"quality": 0},
        })

        assert response.status_code == 400
        body = response.get_json()
        assert body["success"] is False
        assert body["error"] == "Invalid input"
        assert [d["path"] for d in body["details"]] == [["imageData"], ["quality"]]

    def test_invalid_json_input(self, client):
        response = client.post("/mcp/execute", data={
            "toolName": "PngFileToWebpTool",
            "input": "{broken",
        })

        assert response.status_code == 400
        assert response.get_json() == {
            "success": False,
            "error": "Invalid JSON input for PngFileToWebpTool",
        }

    def test_form_tool_name_stays_text(self, client):
        response = client.post("/mcp/execute", data={"toolName": "123"})

        assert response.status_code == 400
        assert response.get_json()["error"] == "Unknown tool: 123"

    def test_deeply_nested_form_input(self, client):
        response = client.post(
            "/mcp/execute",
            data={"toolName": "PngToWebpTool", "input": "[" * 100000 + "]" * 100000},
            content_type="multipart/form-data",
        )

        assert response.status_code == 400
        assert response.get_json() == {
            "success": False,
            "error": "Invalid JSON input for PngToWebpTool",
        }

    def test_file_tool_without_file(self, client):
        response = client.post("/mcp/execute", data={"toolName": "PngFileToWebpTool"})

        assert response.status_code == 400
        assert response.get_json() == {
            "success": False,
            "error": "'imageFile' is required for PngFileToWebpTool.",
        }

    def test_file_tool_with_upload(self, client, png_bytes):
        response = client.post(
            "/mcp/execute",
            data={
                "toolName": "PngFileToWebpTool",
                "input": json.dumps({"quality": 70, "lossless": False}),
                "imageFile": (io.BytesIO(png_bytes), "tiny.png", "image/png"),
            },
            content_type="multipart/form-data",
        )

        assert response.status_code == 200
        body = response.get_json()
        assert body["success"] is True
        assert body["webpBase64"].startswith("data:image/webp;base64,")
        assert body["metadata"]["originalSize"] == len(png_bytes)

    def test_corrupt_upload_is_tool_reported(self, client):
        response = client.post(
            "/mcp/execute",
            data={
                "toolName": "PngFileToWebpTool",
                "imageFile": (io.BytesIO(b"not an image"), "bad.png"),
            },
            content_type="multipart/form-data",
        )

        assert response.status_code == 200
        body = response.get_json()
        assert body["success"] is False
        assert body["error"]

    def test_oversized_upload(self, client, config):
        response = client.post(
            "/mcp/execute",
            data={
                "toolName": "PngFileToWebpTool",
                "imageFile": (io.BytesIO(b"x" * (config.max_upload_bytes + 1)), "big.png"),
            },
            content_type="multipart/form-data",
        )

        assert response.status_code == 413
        assert response.get_json()["success"] is False

    def test_unexpected_exception_returns_500(self, client, png_data_url):
        with patch(
            "webp_backend.tools.conversion.encode_webp",
            side_effect=MemoryError("out of memory"),
        ):
            response = client.post("/mcp/execute", json={
                "toolName": "PngToWebpTool",
                "input": {"imageData": png_data_url},
            })

        assert response.status_code == 500
        assert response.get_json() == {"success": False, "error": "out of memory"}

    def test_server_keeps_working_after_failure(self, client, png_data_url):
        with patch("webp_backend.tools.conversion.encode_webp", side_effect=RuntimeError("x")):
            client.post("/mcp/execute", json={
                "toolName": "PngToWebpTool",
                "input": {"imageData": png_data_url},
            })

        response = client.post("/mcp/execute", json={
            "toolName": "PngToWebpTool",
            "input": {"imageData": png_data_url},
        })
        assert response.get_json()["success"] is True

    def test_non_object_json_body(self, client):
        response = client.post("/mcp/execute", json=["PngToWebpTool"])

        assert response.status_code == 400
        assert response.get_json()["success"] is False


class TestPrompt:
    """Test POST /mcp/prompt."""

    def test_renders_prompt(self, client):
        response = client.post("/mcp/prompt", json={
            "promptName": "GetWebpFromPngPrompt",
            "input": {"imageUrl": "https://example.com/cat.png"},
        })

        assert response.status_code == 200
        body = response.get_json()
        assert body["success"] is True
        text = body["messages"][0]["content"]["text"]
        assert "https://example.com/cat.png" in text
        assert "quality 80" in text

    def test_prompt_validation(self, client):
        response = client.post("/mcp/prompt", json={
            "promptName": "GetWebpFromPngPrompt",
            "input": {"imageUrl": "not-a-url"},
        })

        assert response.status_code == 400
        assert response.get_json()["details"][0]["message"] == "Invalid url"

    @pytest.mark.parametrize("name", ["PngToWebpTool", "Missing"])
    def test_tools_are_not_prompts(self, client, name):
        response = client.post("/mcp/prompt", json={"promptName": name, "input": {}})

        assert response.status_code == 400
        assert response.get_json()["error"] == f"Unknown tool: {name}"
