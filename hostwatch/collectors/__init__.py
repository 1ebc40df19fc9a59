"""
Data collectors for host and container telemetry.
"""

from .containers import ContainerCollector
from .system import SystemCollector

__all__ = ["ContainerCollector", "SystemCollector"]
