"""Tests for ToolResult and the error hierarchy."""

import json
from datetime import datetime, timezone

from hostwatch.errors import (
    CollectorError,
    ContainerEngineError,
    ToolError,
    UnknownToolError,
    ValidationError,
)
from hostwatch.results import ToolResult


class TestToolResult:
    """Tests for result rendering."""

    def test_string_payload_passed_through(self):
        result = ToolResult.success("Container web restarted successfully.")

        assert result.ok
        assert result.render() == "Container web restarted successfully."

    def test_structured_payload_rendered_as_json(self):
        payload = {"status": "healthy", "score": 100, "issues": []}

        text = ToolResult.success(payload).render()

        assert json.loads(text) == payload
        assert "\n  " in text

    def test_non_ascii_kept(self):
        text = ToolResult.success({"temperature": "70°C"}).render()

        assert "70°C" in text

    def test_datetimes_stringified(self):
        moment = datetime(2024, 1, 1, tzinfo=timezone.utc)

        text = ToolResult.success({"at": moment}).render()

        assert json.loads(text)["at"] == "2024-01-01T00:00:00+00:00"

    def test_failure(self):
        result = ToolResult.failure(ValidationError("containerId is required"))

        assert not result.ok
        assert result.payload is None
        assert result.render() == "Validation error: containerId is required"


class TestToolErrors:
    """Tests for the rendered error prefixes."""

    def test_generic_error(self):
        assert ToolError("boom").render() == "Error: boom"

    def test_unknown_tool(self):
        assert UnknownToolError("frobnicate").render() == "Unknown tool: frobnicate"

    def test_engine_error_is_collector_error(self):
        error = ContainerEngineError("Failed to list containers: refused")

        assert isinstance(error, CollectorError)
        assert isinstance(error, ToolError)
        assert error.render() == "Error: Failed to list containers: refused"
        assert str(error) == "Failed to list containers: refused"
