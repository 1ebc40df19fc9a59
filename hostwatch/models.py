"""
Type definitions for host and container telemetry.

Every model exposes ``to_dict()`` producing the JSON form returned to MCP
clients (camelCase keys, ISO-8601 timestamps).
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class Severity(str, Enum):
    """Log line severity tiers, highest first."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    DEBUG = "debug"


class HealthStatus(str, Enum):
    """Overall host health tier."""
    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class LogEntry:
    """Parsed log entry."""
    timestamp: datetime
    level: Severity
    message: str
    source: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.value,
            "message": self.message,
        }
        if self.source is not None:
            data["source"] = self.source
        return data


@dataclass(frozen=True)
class PatternMatch:
    """A recurring error/warning pattern and how often it matched."""
    pattern: str
    count: int
    severity: Severity

    def to_dict(self) -> dict:
        return {
            "pattern": self.pattern,
            "count": self.count,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class TimeRange:
    start: datetime
    end: datetime
    hours: float

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "hours": self.hours,
        }


@dataclass(frozen=True)
class LogSummary:
    total_lines: int
    error_count: int
    warning_count: int
    info_count: int

    def to_dict(self) -> dict:
        return {
            "totalLines": self.total_lines,
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
            "infoCount": self.info_count,
        }


@dataclass
class LogAnalysis:
    """Result of analyzing one container's logs over a time window."""
    container_id: str
    container_name: str
    time_range: TimeRange
    summary: LogSummary
    errors: list[LogEntry] = field(default_factory=list)
    warnings: list[LogEntry] = field(default_factory=list)
    patterns: list[PatternMatch] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "containerId": self.container_id,
            "containerName": self.container_name,
            "timeRange": self.time_range.to_dict(),
            "summary": self.summary.to_dict(),
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "patterns": [p.to_dict() for p in self.patterns],
            "recommendations": list(self.recommendations),
        }


@dataclass
class CpuInfo:
    manufacturer: str
    brand: str
    cores: int
    physical_cores: int
    current_load: float
    temperature: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "manufacturer": self.manufacturer,
            "brand": self.brand,
            "cores": self.cores,
            "physicalCores": self.physical_cores,
            "currentLoad": self.current_load,
            "temperature": self.temperature,
        }


@dataclass
class MemoryInfo:
    total: int
    free: int
    used: int
    used_percentage: float

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "free": self.free,
            "used": self.used,
            "usedPercentage": self.used_percentage,
        }


@dataclass
class DiskInfo:
    size: int
    used: int
    available: int
    used_percentage: float
    mount: str = ""
    filesystem: str = ""

    def to_dict(self) -> dict:
        return {
            "mount": self.mount,
            "filesystem": self.filesystem,
            "size": self.size,
            "used": self.used,
            "available": self.available,
            "usedPercentage": self.used_percentage,
        }


@dataclass
class NetworkInterface:
    interface: str
    ip4: str
    rx_bytes: int = 0
    tx_bytes: int = 0

    def to_dict(self) -> dict:
        return {
            "interface": self.interface,
            "ip4": self.ip4,
            "rx_bytes": self.rx_bytes,
            "tx_bytes": self.tx_bytes,
        }


@dataclass
class SystemInfo:
    """Point-in-time snapshot of host telemetry."""
    cpu: CpuInfo
    memory: MemoryInfo
    disk: list[DiskInfo] = field(default_factory=list)
    network: list[NetworkInterface] = field(default_factory=list)
    uptime: float = 0
    hostname: str = ""
    platform: str = ""
    arch: str = ""

    def to_dict(self) -> dict:
        return {
            "cpu": self.cpu.to_dict(),
            "memory": self.memory.to_dict(),
            "disk": [d.to_dict() for d in self.disk],
            "network": [n.to_dict() for n in self.network],
            "uptime": self.uptime,
            "hostname": self.hostname,
            "platform": self.platform,
            "arch": self.arch,
        }


@dataclass
class ServerHealth:
    status: HealthStatus
    score: int
    issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "issues": list(self.issues),
            "recommendations": list(self.recommendations),
            "score": self.score,
        }


@dataclass
class ContainerInfo:
    """Summary row of the container inventory."""
    id: str
    name: str
    image: str
    status: str
    state: str
    created: datetime
    ports: list[str] = field(default_factory=list)

    @property
    def is_running(self) -> bool:
        return self.state == "running"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "image": self.image,
            "status": self.status,
            "state": self.state,
            "created": self.created.isoformat(),
            "ports": list(self.ports),
        }


@dataclass
class ContainerStats:
    """One-shot resource usage of a container."""
    container_id: str
    name: str
    cpu_usage: float
    memory_used: int
    memory_limit: int
    memory_percentage: float
    network_rx: int
    network_tx: int
    block_read: int
    block_write: int
    timestamp: datetime

    def to_dict(self) -> dict:
        return {
            "containerId": self.container_id,
            "name": self.name,
            "cpuUsage": self.cpu_usage,
            "memoryUsage": {
                "used": self.memory_used,
                "limit": self.memory_limit,
                "percentage": self.memory_percentage,
            },
            "networkIO": {
                "rx": self.network_rx,
                "tx": self.network_tx,
            },
            "blockIO": {
                "read": self.block_read,
                "write": self.block_write,
            },
            "timestamp": self.timestamp.isoformat(),
        }
