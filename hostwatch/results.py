"""
Uniform result type returned by tool handlers.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from .errors import ToolError


def _json_default(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


@dataclass(frozen=True)
class ToolResult:
    """Either a payload or a ToolError, never both."""
    payload: Any = None
    error: Optional[ToolError] = None

    @classmethod
    def success(cls, payload: Any) -> "ToolResult":
        return cls(payload=payload)

    @classmethod
    def failure(cls, error: ToolError) -> "ToolResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def render(self) -> str:
        """Textual form sent back over MCP."""
        if self.error is not None:
            return self.error.render()
        if isinstance(self.payload, str):
            return self.payload
        return json.dumps(self.payload, indent=2, default=_json_default, ensure_ascii=False)
