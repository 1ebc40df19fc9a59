"""
MCP tool handlers for hostwatch.

Every handler returns a ToolResult; nothing raised by a collector escapes
handle_tool.
"""

from functools import lru_cache
from typing import Any

from shared.logging import get_safe_logger as get_logger

from .agent import MonitorAgent
from .decorators import require_container_id
from .errors import ToolError, UnknownToolError, ValidationError
from .results import ToolResult
from .validation import validate_flag, validate_hours, validate_lines_count


logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_agent() -> MonitorAgent:
    """Get or create the agent instance (thread-safe singleton via lru_cache)."""
    return MonitorAgent.from_env()


def reset_agent() -> None:
    """Reset agent instance so the next call re-reads configuration."""
    get_agent.cache_clear()


def handle_get_system_info(arguments: dict[str, Any]) -> ToolResult:
    """Handle get_system_info tool call."""
    info = get_agent().get_system_info()
    return ToolResult.success(info.to_dict())


def handle_get_docker_containers(arguments: dict[str, Any]) -> ToolResult:
    """Handle get_docker_containers tool call."""
    include_all = arguments.get("all", False)

    valid, reason = validate_flag(include_all, "all")
    if not valid:
        return ToolResult.failure(ValidationError(reason))

    containers = get_agent().get_containers(all=include_all)
    return ToolResult.success([c.to_dict() for c in containers])


@require_container_id
def handle_get_container_stats(arguments: dict[str, Any]) -> ToolResult:
    """Handle get_container_stats tool call."""
    stats = get_agent().get_container_stats(arguments["containerId"])
    return ToolResult.success(stats.to_dict())


@require_container_id
def handle_get_container_logs(arguments: dict[str, Any]) -> ToolResult:
    """Handle get_container_logs tool call."""
    lines = arguments.get("lines", 100)

    valid, reason = validate_lines_count(lines)
    if not valid:
        return ToolResult.failure(ValidationError(f"Invalid lines count: {reason}"))

    logs = get_agent().get_container_logs(arguments["containerId"], int(lines))
    return ToolResult.success(logs)


@require_container_id
def handle_analyze_container_logs(arguments: dict[str, Any]) -> ToolResult:
    """Handle analyze_container_logs tool call."""
    hours = arguments.get("hours", 24)

    valid, reason = validate_hours(hours)
    if not valid:
        return ToolResult.failure(ValidationError(f"Invalid hours: {reason}"))

    analysis = get_agent().analyze_container_logs(arguments["containerId"], hours)
    return ToolResult.success(analysis.to_dict())


@require_container_id
def handle_restart_container(arguments: dict[str, Any]) -> ToolResult:
    """Handle restart_container tool call."""
    message = get_agent().restart_container(arguments["containerId"])
    return ToolResult.success(message)


def handle_get_server_health(arguments: dict[str, Any]) -> ToolResult:
    """Handle get_server_health tool call."""
    return ToolResult.success(get_agent().get_health_report())


# Handler dispatch map
HANDLERS = {
    "get_system_info": handle_get_system_info,
    "get_docker_containers": handle_get_docker_containers,
    "get_container_stats": handle_get_container_stats,
    "get_container_logs": handle_get_container_logs,
    "analyze_container_logs": handle_analyze_container_logs,
    "restart_container": handle_restart_container,
    "get_server_health": handle_get_server_health,
}


def handle_tool(name: str, arguments: dict[str, Any] | None) -> ToolResult:
    """Dispatch tool call to appropriate handler."""
    handler = HANDLERS.get(name)
    if handler is None:
        return ToolResult.failure(UnknownToolError(name))

    try:
        return handler(arguments or {})
    except ToolError as e:
        logger.warning(f"Tool {name} failed: {e.message}")
        return ToolResult.failure(e)
    except Exception as e:
        logger.exception(f"Error executing tool {name}")
        return ToolResult.failure(ToolError(f"Error executing {name}: {e}"))
