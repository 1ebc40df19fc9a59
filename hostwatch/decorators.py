"""
Decorators for hostwatch MCP handlers.

Provides reusable validation patterns to eliminate code duplication.
"""

from functools import wraps
from typing import Any, Callable

from .errors import ValidationError
from .results import ToolResult
from .validation import validate_container_id


Handler = Callable[[dict[str, Any]], ToolResult]


def require_container_id(func: Handler) -> Handler:
    """
    Decorator to validate the containerId argument.

    Returns a validation failure if it is missing or malformed, otherwise
    calls the handler. The container engine is never contacted for a
    rejected request.

    Usage:
        @require_container_id
        def handle_restart_container(arguments: dict[str, Any]) -> ToolResult:
            container_id = arguments["containerId"]
            # ... handler logic
    """
    @wraps(func)
    def wrapper(arguments: dict[str, Any]) -> ToolResult:
        container_id = arguments.get("containerId")
        if container_id is None or container_id == "":
            return ToolResult.failure(ValidationError("containerId is required"))

        valid, reason = validate_container_id(container_id)
        if not valid:
            return ToolResult.failure(ValidationError(f"Invalid containerId: {reason}"))

        return func(arguments)

    return wrapper
