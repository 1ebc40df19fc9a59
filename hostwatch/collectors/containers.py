"""
Docker container collector.

Talks to the Docker Engine API through the docker SDK's low-level client.
Every engine failure is re-raised as ContainerEngineError naming the
operation that failed.
"""

from datetime import datetime, timezone
from typing import Optional

import docker
from docker.errors import DockerException

from shared.logging import get_safe_logger as get_logger

from ..errors import ContainerEngineError
from ..models import ContainerInfo, ContainerStats


logger = get_logger(__name__)

# requests' connection errors derive from OSError
ENGINE_ERRORS = (DockerException, OSError)


class ContainerCollector:
    """Container inventory, stats, logs and lifecycle."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: int = 30,
        client: Optional[docker.DockerClient] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._client = client

    @property
    def client(self) -> docker.DockerClient:
        """Docker client, connected on first use."""
        if self._client is None:
            try:
                if self.base_url:
                    self._client = docker.DockerClient(base_url=self.base_url, timeout=self.timeout)
                else:
                    self._client = docker.from_env(timeout=self.timeout)
            except ENGINE_ERRORS as e:
                raise ContainerEngineError(f"Failed to connect to Docker: {e}") from e
        return self._client

    def list_containers(self, all: bool = False) -> list[ContainerInfo]:
        """List containers (running only unless ``all``)."""
        try:
            raw = self.client.api.containers(all=all)
        except ENGINE_ERRORS as e:
            raise ContainerEngineError(f"Failed to list containers: {e}") from e

        return [self._parse_container(data) for data in raw]

    def find_container_name(self, container_ref: str) -> str:
        """
        Resolve a container ID prefix or name to its name.

        Falls back to the reference itself when nothing matches.
        """
        for container in self.list_containers(all=True):
            if container.id.startswith(container_ref) or container.name == container_ref:
                return container.name
        return container_ref

    def get_container_stats(self, container_ref: str) -> ContainerStats:
        """One-shot resource usage of a container."""
        try:
            stats = self.client.api.stats(container_ref, stream=False)
            inspect = self.client.api.inspect_container(container_ref)
        except ENGINE_ERRORS as e:
            raise ContainerEngineError(f"Failed to get container stats: {e}") from e

        memory = stats.get('memory_stats') or {}
        memory_used = memory.get('usage', 0) or 0
        memory_limit = memory.get('limit', 0) or 0
        memory_percentage = (memory_used / memory_limit * 100) if memory_limit else 0.0

        rx, tx = self._sum_network(stats.get('networks'))
        read, write = self._sum_block_io(stats.get('blkio_stats'))

        return ContainerStats(
            container_id=inspect.get('Id', container_ref),
            name=inspect.get('Name', container_ref).lstrip('/'),
            cpu_usage=round(self._cpu_percent(stats), 2),
            memory_used=memory_used,
            memory_limit=memory_limit,
            memory_percentage=memory_percentage,
            network_rx=rx,
            network_tx=tx,
            block_read=read,
            block_write=write,
            timestamp=datetime.now(timezone.utc),
        )

    def get_container_logs(self, container_ref: str, lines: int = 100) -> str:
        """Last ``lines`` lines of stdout+stderr, each prefixed with its timestamp."""
        try:
            raw = self.client.api.logs(
                container_ref,
                stdout=True,
                stderr=True,
                timestamps=True,
                tail=lines,
            )
        except ENGINE_ERRORS as e:
            raise ContainerEngineError(f"Failed to get container logs: {e}") from e

        if isinstance(raw, bytes):
            return raw.decode('utf-8', errors='replace')
        return raw

    def restart_container(self, container_ref: str) -> str:
        try:
            self.client.api.restart(container_ref)
        except ENGINE_ERRORS as e:
            raise ContainerEngineError(f"Failed to restart container: {e}") from e

        logger.info(f"Restarted container {container_ref}")
        return f"Container {container_ref} restarted successfully."

    def _parse_container(self, data: dict) -> ContainerInfo:
        """Parse a /containers/json row into ContainerInfo."""
        names = data.get('Names') or []
        name = names[0].lstrip('/') if names else 'unknown'

        ports = []
        for port in data.get('Ports') or []:
            mapping = str(port.get('PrivatePort', ''))
            if port.get('PublicPort'):
                mapping += f":{port['PublicPort']}"
            ports.append(f"{mapping}/{port.get('Type', 'tcp')}")

        return ContainerInfo(
            id=data.get('Id', ''),
            name=name,
            image=data.get('Image', ''),
            status=data.get('Status', ''),
            state=data.get('State', ''),
            created=datetime.fromtimestamp(data.get('Created', 0), tz=timezone.utc),
            ports=ports,
        )

    def _cpu_percent(self, stats: dict) -> float:
        """CPU usage as docker stats computes it (100% = one full core)."""
        cpu = stats.get('cpu_stats') or {}
        precpu = stats.get('precpu_stats') or {}

        cpu_delta = (
            (cpu.get('cpu_usage') or {}).get('total_usage', 0)
            - (precpu.get('cpu_usage') or {}).get('total_usage', 0)
        )
        system_delta = cpu.get('system_cpu_usage', 0) - precpu.get('system_cpu_usage', 0)

        if system_delta <= 0 or cpu_delta < 0:
            return 0.0

        online_cpus = cpu.get('online_cpus') or len(
            (cpu.get('cpu_usage') or {}).get('percpu_usage') or []
        ) or 1

        return cpu_delta / system_delta * online_cpus * 100

    def _sum_network(self, networks: Optional[dict]) -> tuple[int, int]:
        rx = tx = 0
        for iface in (networks or {}).values():
            rx += iface.get('rx_bytes', 0)
            tx += iface.get('tx_bytes', 0)
        return rx, tx

    def _sum_block_io(self, blkio: Optional[dict]) -> tuple[int, int]:
        read = write = 0
        for item in (blkio or {}).get('io_service_bytes_recursive') or []:
            op = str(item.get('op', '')).lower()
            if op == 'read':
                read += item.get('value', 0)
            elif op == 'write':
                write += item.get('value', 0)
        return read, write
