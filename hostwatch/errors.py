"""
Error types surfaced through tool results.
"""


class ToolError(Exception):
    """Base error that a tool call can report back to the client."""

    kind = "Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def render(self) -> str:
        return f"{self.kind}: {self.message}"


class ValidationError(ToolError):
    """Missing or malformed tool arguments."""

    kind = "Validation error"


class UnknownToolError(ToolError):
    """Requested tool is not registered."""

    kind = "Unknown tool"


class CollectorError(ToolError):
    """Host telemetry could not be collected."""


class ContainerEngineError(CollectorError):
    """The container engine rejected or failed a request."""
