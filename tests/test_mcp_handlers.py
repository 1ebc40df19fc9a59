"""Tests for MCP handlers module."""

import json
import math
from unittest.mock import MagicMock, patch

import pytest

from hostwatch.errors import ContainerEngineError, UnknownToolError, ValidationError
from hostwatch.mcp_handlers import (
    HANDLERS,
    get_agent,
    handle_analyze_container_logs,
    handle_get_container_logs,
    handle_get_container_stats,
    handle_get_docker_containers,
    handle_get_server_health,
    handle_get_system_info,
    handle_restart_container,
    handle_tool,
    reset_agent,
)
from hostwatch.mcp_tools import TOOLS


class TestGetAgent:
    """Tests for get_agent singleton."""

    def setup_method(self):
        reset_agent()

    def teardown_method(self):
        reset_agent()

    @patch("hostwatch.mcp_handlers.MonitorAgent")
    def test_returns_same_instance(self, mock_agent_class):
        """Test that get_agent returns cached instance."""
        mock_instance = MagicMock()
        mock_agent_class.from_env.return_value = mock_instance

        agent1 = get_agent()
        agent2 = get_agent()

        assert agent1 is agent2
        mock_agent_class.from_env.assert_called_once()

    @patch("hostwatch.mcp_handlers.MonitorAgent")
    def test_reset_clears_cache(self, mock_agent_class):
        """Test that reset_agent clears the cache."""
        mock_agent_class.from_env.side_effect = [MagicMock(), MagicMock()]

        agent1 = get_agent()
        reset_agent()
        agent2 = get_agent()

        assert agent1 is not agent2
        assert mock_agent_class.from_env.call_count == 2


class TestHandleTool:
    """Tests for handle_tool dispatcher."""

    def test_unknown_tool(self):
        """Test that unknown tool returns error."""
        result = handle_tool("unknown_tool", {})

        assert isinstance(result.error, UnknownToolError)
        assert result.render() == "Unknown tool: unknown_tool"

    @patch("hostwatch.mcp_handlers.get_agent")
    def test_unexpected_exception_caught(self, mock_get_agent):
        """Test that an unexpected exception becomes an error result."""
        mock_get_agent.return_value.get_system_info.side_effect = RuntimeError("boom")

        result = handle_tool("get_system_info", {})

        assert not result.ok
        assert result.render() == "Error: Error executing get_system_info: boom"

    @patch("hostwatch.mcp_handlers.get_agent")
    def test_tool_error_passed_through(self, mock_get_agent):
        """Test that collector errors keep their message."""
        mock_get_agent.return_value.get_containers.side_effect = ContainerEngineError(
            "Failed to list containers: daemon down"
        )

        result = handle_tool("get_docker_containers", {})

        assert result.render() == "Error: Failed to list containers: daemon down"

    @patch("hostwatch.mcp_handlers.get_agent")
    def test_none_arguments(self, mock_get_agent):
        mock_get_agent.return_value.get_containers.return_value = []

        result = handle_tool("get_docker_containers", None)

        assert result.ok
        assert result.render() == "[]"

    @pytest.mark.parametrize("name, arguments, expected", [
        ("analyze_container_logs", {"containerId": "web", "hours": math.nan},
         "Validation error: Invalid hours: Hours must be a finite number"),
        ("get_container_logs", {"containerId": "web", "lines": math.inf},
         "Validation error: Invalid lines count: Lines count must be a finite number"),
    ])
    @patch("hostwatch.mcp_handlers.get_agent")
    def test_non_finite_numbers_are_validation_errors(self, mock_get_agent, name, arguments, expected):
        """Test that NaN and infinity are reported as validation errors."""
        result = handle_tool(name, arguments)

        assert isinstance(result.error, ValidationError)
        assert result.render() == expected
        mock_get_agent.assert_not_called()

    def test_all_handlers_registered(self):
        """Test that all expected handlers are in HANDLERS dict."""
        expected_handlers = [
            "get_system_info",
            "get_docker_containers",
            "get_container_stats",
            "get_container_logs",
            "analyze_container_logs",
            "restart_container",
            "get_server_health",
        ]

        for handler_name in expected_handlers:
            assert handler_name in HANDLERS, f"Missing handler: {handler_name}"

    def test_every_tool_has_handler(self):
        assert {tool["name"] for tool in TOOLS} == set(HANDLERS)

    @pytest.mark.parametrize("name", [
        "get_container_stats",
        "get_container_logs",
        "analyze_container_logs",
        "restart_container",
    ])
    @patch("hostwatch.mcp_handlers.get_agent")
    def test_empty_container_id_never_reaches_engine(self, mock_get_agent, name):
        """Test that container tools reject an empty id before any engine call."""
        result = handle_tool(name, {"containerId": ""})

        assert isinstance(result.error, ValidationError)
        assert result.render().startswith("Validation error:")
        mock_get_agent.assert_not_called()


class TestHandlers:
    """Tests for individual handlers."""

    @patch("hostwatch.mcp_handlers.get_agent")
    def test_system_info(self, mock_get_agent, make_system_info):
        mock_get_agent.return_value.get_system_info.return_value = make_system_info()

        result = handle_get_system_info({})

        data = json.loads(result.render())
        assert data["hostname"] == "test-host"
        assert data["memory"]["usedPercentage"] == 40.0

    @patch("hostwatch.mcp_handlers.get_agent")
    def test_containers_all_flag(self, mock_get_agent):
        mock_agent = mock_get_agent.return_value
        mock_agent.get_containers.return_value = []

        handle_get_docker_containers({"all": True})

        mock_agent.get_containers.assert_called_once_with(all=True)

    @patch("hostwatch.mcp_handlers.get_agent")
    def test_containers_invalid_flag(self, mock_get_agent):
        result = handle_get_docker_containers({"all": "yes"})

        assert result.render() == "Validation error: all must be true or false"
        mock_get_agent.assert_not_called()

    @patch("hostwatch.mcp_handlers.get_agent")
    def test_container_stats(self, mock_get_agent):
        mock_agent = mock_get_agent.return_value
        mock_agent.get_container_stats.return_value.to_dict.return_value = {"cpuUsage": 1.5}

        result = handle_get_container_stats({"containerId": "web"})

        mock_agent.get_container_stats.assert_called_once_with("web")
        assert json.loads(result.render()) == {"cpuUsage": 1.5}

    @patch("hostwatch.mcp_handlers.get_agent")
    def test_container_logs_default_lines(self, mock_get_agent):
        mock_agent = mock_get_agent.return_value
        mock_agent.get_container_logs.return_value = "line one\nline two\n"

        result = handle_get_container_logs({"containerId": "web"})

        mock_agent.get_container_logs.assert_called_once_with("web", 100)
        assert result.render() == "line one\nline two\n"

    @pytest.mark.parametrize("lines", [0, 10001, "many", 2.5, math.inf, math.nan])
    @patch("hostwatch.mcp_handlers.get_agent")
    def test_container_logs_invalid_lines(self, mock_get_agent, lines):
        result = handle_get_container_logs({"containerId": "web", "lines": lines})

        assert result.render().startswith("Validation error: Invalid lines count:")
        mock_get_agent.assert_not_called()

    @patch("hostwatch.mcp_handlers.get_agent")
    def test_analyze_default_hours(self, mock_get_agent):
        mock_agent = mock_get_agent.return_value
        mock_agent.analyze_container_logs.return_value.to_dict.return_value = {"containerId": "web"}

        result = handle_analyze_container_logs({"containerId": "web"})

        mock_agent.analyze_container_logs.assert_called_once_with("web", 24)
        assert result.ok

    @pytest.mark.parametrize("hours", [0, -3, 721, "24", math.nan, math.inf])
    @patch("hostwatch.mcp_handlers.get_agent")
    def test_analyze_invalid_hours(self, mock_get_agent, hours):
        result = handle_analyze_container_logs({"containerId": "web", "hours": hours})

        assert result.render().startswith("Validation error: Invalid hours:")
        mock_get_agent.assert_not_called()

    @patch("hostwatch.mcp_handlers.get_agent")
    def test_restart(self, mock_get_agent):
        mock_get_agent.return_value.restart_container.return_value = (
            "Container web restarted successfully."
        )

        result = handle_restart_container({"containerId": "web"})

        assert result.render() == "Container web restarted successfully."

    @patch("hostwatch.mcp_handlers.get_agent")
    def test_server_health(self, mock_get_agent):
        mock_get_agent.return_value.get_health_report.return_value = {
            "health": {"status": "healthy", "score": 100},
        }

        result = handle_get_server_health({})

        assert json.loads(result.render())["health"]["score"] == 100
