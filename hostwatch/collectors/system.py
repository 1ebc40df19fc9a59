"""
Host telemetry collector.
"""

import platform
import socket
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

import psutil

from shared.logging import get_safe_logger as get_logger

from ..errors import CollectorError
from ..models import CpuInfo, DiskInfo, MemoryInfo, NetworkInterface, SystemInfo


logger = get_logger(__name__)

# Sensor chips checked first when reading the CPU temperature
CPU_SENSORS = ('coretemp', 'k10temp', 'zenpower', 'cpu_thermal', 'cpu-thermal', 'acpitz')

# Pseudo filesystems that never fill up in a meaningful way
IGNORED_FILESYSTEMS = {'squashfs', 'tmpfs', 'devtmpfs', 'overlay', 'iso9660'}


def _cpu_identity() -> tuple[str, str]:
    """Return (manufacturer, brand) of the CPU."""
    manufacturer = ""
    brand = ""

    cpuinfo = Path('/proc/cpuinfo')
    if cpuinfo.exists():
        for line in cpuinfo.read_text(errors='replace').splitlines():
            key, _, value = line.partition(':')
            key = key.strip()
            if key == 'vendor_id' and not manufacturer:
                manufacturer = value.strip()
            elif key == 'model name' and not brand:
                brand = value.strip()
            if manufacturer and brand:
                break

    return manufacturer or platform.machine(), brand or platform.processor()


class SystemCollector:
    """Collects CPU, memory, disk, network and OS facts from psutil."""

    def __init__(self, cpu_sample_interval: float = 0.5):
        self.cpu_sample_interval = cpu_sample_interval

    def get_system_info(self) -> SystemInfo:
        """
        Collect a full snapshot.

        Independent facts are fetched concurrently. Only the temperature is
        optional; any other failure aborts the snapshot.

        Raises:
            CollectorError: if a required fact could not be read
        """
        try:
            with ThreadPoolExecutor(max_workers=7) as pool:
                identity = pool.submit(_cpu_identity)
                load = pool.submit(self.get_current_load)
                memory = pool.submit(self.get_memory)
                disks = pool.submit(self.get_disks)
                network = pool.submit(self.get_network)
                os_facts = pool.submit(self.get_os_facts)
                temperature = pool.submit(self.get_cpu_temperature_safe)

                manufacturer, brand = identity.result()
                cpu = CpuInfo(
                    manufacturer=manufacturer,
                    brand=brand,
                    cores=psutil.cpu_count(logical=True) or 0,
                    physical_cores=psutil.cpu_count(logical=False) or 0,
                    current_load=load.result(),
                    temperature=temperature.result(),
                )
                uptime, hostname, system, arch = os_facts.result()

                return SystemInfo(
                    cpu=cpu,
                    memory=memory.result(),
                    disk=disks.result(),
                    network=network.result(),
                    uptime=uptime,
                    hostname=hostname,
                    platform=system,
                    arch=arch,
                )
        except (psutil.Error, OSError) as e:
            raise CollectorError(f"Failed to collect system information: {e}") from e

    def get_current_load(self) -> float:
        return round(psutil.cpu_percent(interval=self.cpu_sample_interval), 2)

    def get_memory(self) -> MemoryInfo:
        mem = psutil.virtual_memory()
        used_percentage = round(mem.used / mem.total * 100, 2) if mem.total else 0.0
        return MemoryInfo(
            total=mem.total,
            free=mem.free,
            used=mem.used,
            used_percentage=used_percentage,
        )

    def get_disks(self) -> list[DiskInfo]:
        disks = []
        seen_devices = set()

        for partition in psutil.disk_partitions(all=False):
            if partition.fstype in IGNORED_FILESYSTEMS or partition.device in seen_devices:
                continue

            try:
                usage = psutil.disk_usage(partition.mountpoint)
            except (PermissionError, FileNotFoundError):
                logger.debug(f"Cannot read usage of {partition.mountpoint}")
                continue

            if not usage.total:
                continue

            seen_devices.add(partition.device)
            disks.append(DiskInfo(
                size=usage.total,
                used=usage.used,
                available=usage.free,
                used_percentage=round(usage.used / usage.total * 100, 2),
                mount=partition.mountpoint,
                filesystem=partition.fstype,
            ))

        return disks

    def get_network(self) -> list[NetworkInterface]:
        """External interfaces with an IPv4 address and their byte counters."""
        counters = psutil.net_io_counters(pernic=True)
        interfaces = []

        for name, addresses in psutil.net_if_addrs().items():
            ip4 = next(
                (a.address for a in addresses if a.family == socket.AF_INET),
                None,
            )
            if not ip4 or ip4.startswith('127.'):
                continue

            io = counters.get(name)
            interfaces.append(NetworkInterface(
                interface=name,
                ip4=ip4,
                rx_bytes=io.bytes_recv if io else 0,
                tx_bytes=io.bytes_sent if io else 0,
            ))

        return interfaces

    def get_os_facts(self) -> tuple[float, str, str, str]:
        """Return (uptime seconds, hostname, platform, arch)."""
        uptime = round(time.time() - psutil.boot_time(), 0)
        return uptime, socket.gethostname(), platform.system().lower(), platform.machine()

    def get_cpu_temperature(self) -> Optional[float]:
        # Not available on every platform (missing attribute on macOS/Windows)
        sensors = getattr(psutil, 'sensors_temperatures', None)
        if sensors is None:
            return None

        readings = sensors()
        if not readings:
            return None

        for chip in CPU_SENSORS:
            if readings.get(chip):
                return readings[chip][0].current

        first = next(iter(readings.values()))
        return first[0].current if first else None

    def get_cpu_temperature_safe(self) -> Optional[float]:
        """Temperature is optional: a failing sensor read yields None."""
        try:
            return self.get_cpu_temperature()
        except (psutil.Error, OSError, AttributeError, IndexError) as e:
            logger.debug(f"CPU temperature unavailable: {e}")
            return None
