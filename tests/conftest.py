"""Pytest fixtures for hostwatch tests."""

from datetime import datetime, timezone

import pytest

from hostwatch.config import MonitorConfig
from hostwatch.models import CpuInfo, DiskInfo, MemoryInfo, NetworkInterface, SystemInfo


@pytest.fixture
def fixed_now():
    """Instant the injected clock always returns."""
    return datetime(2024, 1, 1, 0, 5, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now):
    """Deterministic clock for the log analyzer."""
    return lambda: fixed_now


@pytest.fixture
def monitor_config():
    """Create test monitor configuration."""
    return MonitorConfig(
        docker_host="unix:///var/run/docker.sock",
        docker_timeout=10,
        analysis_log_lines=500,
        cpu_sample_interval=0,
        mcp_host="127.0.0.1",
        mcp_port=8300,
    )


@pytest.fixture
def make_system_info():
    """Factory for SystemInfo snapshots with chosen load figures."""
    def factory(cpu_load=10.0, memory_percent=40.0, disk_percents=(50.0,), temperature=None):
        return SystemInfo(
            cpu=CpuInfo(
                manufacturer="GenuineIntel",
                brand="Intel(R) Xeon(R) CPU",
                cores=8,
                physical_cores=4,
                current_load=cpu_load,
                temperature=temperature,
            ),
            memory=MemoryInfo(
                total=16 * 1024 ** 3,
                free=4 * 1024 ** 3,
                used=int(16 * 1024 ** 3 * memory_percent / 100),
                used_percentage=memory_percent,
            ),
            disk=[
                DiskInfo(
                    size=100 * 1024 ** 3,
                    used=int(100 * 1024 ** 3 * pct / 100),
                    available=int(100 * 1024 ** 3 * (100 - pct) / 100),
                    used_percentage=pct,
                    mount=f"/mnt/disk{i}",
                    filesystem="ext4",
                )
                for i, pct in enumerate(disk_percents)
            ],
            network=[NetworkInterface(interface="eth0", ip4="10.0.0.5", rx_bytes=1000, tx_bytes=2000)],
            uptime=90061,
            hostname="test-host",
            platform="linux",
            arch="x86_64",
        )

    return factory


@pytest.fixture
def raw_container_row():
    """A row as returned by the Docker /containers/json endpoint."""
    return {
        "Id": "3f4e5d6c7b8a9f0e1d2c3b4a5f6e7d8c9b0a1f2e3d4c5b6a7f8e9d0c1b2a3f4e",
        "Names": ["/web"],
        "Image": "nginx:1.25",
        "Status": "Up 2 hours",
        "State": "running",
        "Created": 1700000000,
        "Ports": [
            {"PrivatePort": 80, "PublicPort": 8080, "Type": "tcp"},
            {"PrivatePort": 443, "Type": "tcp"},
        ],
    }
