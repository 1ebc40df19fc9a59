"""
Safe logging utilities for hostwatch.

Provides logging that:
- Sanitizes sensitive data (passwords, tokens, keys)
- Writes to stderr so stdout stays free for the stdio MCP transport
- Respects log levels from environment
"""

from __future__ import annotations

import logging
import os
import re
import sys
from typing import Optional


# Patterns for sensitive data that should be redacted.
# Container logs and Docker errors can echo environment variables verbatim.
SENSITIVE_PATTERNS = [
    # Generic key=value patterns
    (r'(password|passwd|pwd)["\']?\s*[:=]\s*["\']?[^"\'\s,}]+', r'\1=***'),
    (r'(token|api_key|apikey|secret|private_key|secret_key)["\']?\s*[:=]\s*["\']?[^"\'\s,}]+', r'\1=***'),
    # HTTP credentials, before the header rule consumes the scheme word
    (r'Bearer\s+[A-Za-z0-9\-_]+\.?[A-Za-z0-9\-_]*\.?[A-Za-z0-9\-_]*', 'Bearer ***'),
    (r'Basic\s+[A-Za-z0-9+/=]+', 'Basic ***'),
    (r'(Authorization|X-Api-Key|X-Auth-Token|X-Registry-Auth):\s*\S+', r'\1: ***'),
    # Registry and hosting tokens
    (r'ghp_[A-Za-z0-9]{36,}', 'ghp_***'),
    (r'github_pat_[A-Za-z0-9_]{22,}', 'github_pat_***'),
    (r'dckr_pat_[A-Za-z0-9_-]{20,}', 'dckr_pat_***'),
    (r'AKIA[A-Z0-9]{16}', 'AKIA***'),
    # Database connection strings
    (r'(postgres|postgresql|mysql|mongodb)://[^@\s]+@', r'\1://***@'),
    (r'redis://:[^@\s]+@', 'redis://***@'),
    # Private keys (partial match to avoid huge replacements)
    (r'-----BEGIN [A-Z ]+ PRIVATE KEY-----', '-----BEGIN *** PRIVATE KEY-----'),
]

_COMPILED_PATTERNS = [
    (re.compile(pattern, re.IGNORECASE), replacement)
    for pattern, replacement in SENSITIVE_PATTERNS
]


class SafeFormatter(logging.Formatter):
    """Formatter that redacts sensitive information."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        return sanitize_message(message)


def sanitize_message(message: str) -> str:
    """Remove sensitive data from log message."""
    for pattern, replacement in _COMPILED_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def get_safe_logger(
    name: str,
    level: Optional[str] = None,
) -> logging.Logger:
    """
    Get a logger that sanitizes sensitive data.

    Args:
        name: Logger name (usually __name__)
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to env LOG_LEVEL or INFO.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        if level is None:
            level = os.environ.get('LOG_LEVEL', 'INFO').upper()

        numeric_level = getattr(logging, level, logging.INFO)
        logger.setLevel(numeric_level)

        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(numeric_level)

        formatter = SafeFormatter(
            '%(asctime)s - %(levelname)s - %(name)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)

        logger.addHandler(handler)

        # Prevent propagation to root logger
        logger.propagate = False

    return logger
