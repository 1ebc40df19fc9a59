"""
Input validation for tool arguments.

Arguments arrive from an automated client, so every value is checked
before it reaches the container engine.
"""

import math
import re
from typing import Any


MAX_LOG_LINES = 10000
MAX_ANALYSIS_HOURS = 720

# Docker accepts full/short hex IDs and names matching [a-zA-Z0-9][a-zA-Z0-9_.-]+
_CONTAINER_REF = re.compile(r'^[a-zA-Z0-9][a-zA-Z0-9_.-]*$')


def validate_container_id(container_id: Any) -> tuple[bool, str]:
    """
    Validate a container ID or name.

    Valid refs: letters, digits, underscores, dots, hyphens (1-128 chars),
    starting with a letter or digit.
    """
    if not isinstance(container_id, str):
        return False, "containerId must be a string"

    if not container_id:
        return False, "containerId cannot be empty"

    if len(container_id) > 128:
        return False, "containerId too long (max 128 characters)"

    # docker ps prints names with a leading slash; accept it
    if not _CONTAINER_REF.match(container_id.lstrip('/')):
        return False, "containerId must start with a letter or digit and contain only letters, digits, '_', '.', '-'"

    return True, "Valid container reference"


def validate_lines_count(lines: Any) -> tuple[bool, str]:
    """Validate log lines count."""
    if isinstance(lines, bool) or not isinstance(lines, (int, float)):
        return False, "Lines count must be a number"

    if isinstance(lines, float) and not math.isfinite(lines):
        return False, "Lines count must be a finite number"

    if lines != int(lines):
        return False, "Lines count must be a whole number"

    if lines < 1:
        return False, "Lines count must be positive"

    if lines > MAX_LOG_LINES:
        return False, f"Lines count too large (max {MAX_LOG_LINES})"

    return True, "Valid lines count"


def validate_hours(hours: Any) -> tuple[bool, str]:
    """Validate the analysis window length in hours."""
    if isinstance(hours, bool) or not isinstance(hours, (int, float)):
        return False, "Hours must be a number"

    if isinstance(hours, float) and not math.isfinite(hours):
        return False, "Hours must be a finite number"

    if hours <= 0:
        return False, "Hours must be positive"

    if hours > MAX_ANALYSIS_HOURS:
        return False, f"Hours too large (max {MAX_ANALYSIS_HOURS})"

    return True, "Valid hours"


def validate_flag(value: Any, name: str) -> tuple[bool, str]:
    """Validate a boolean switch argument."""
    if not isinstance(value, bool):
        return False, f"{name} must be true or false"

    return True, "Valid flag"
