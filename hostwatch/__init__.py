"""
hostwatch - host and Docker container monitoring over MCP.

Exposes system metrics, container inventory, container logs, log analysis
and a host health score as MCP tools.
"""

__version__ = "1.0.0"

from .agent import MonitorAgent
from .config import MonitorConfig
from .models import LogAnalysis, LogEntry, ServerHealth, Severity, SystemInfo

__all__ = [
    "MonitorAgent",
    "MonitorConfig",
    "LogAnalysis",
    "LogEntry",
    "ServerHealth",
    "Severity",
    "SystemInfo",
]
