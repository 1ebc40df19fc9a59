"""
Main MonitorAgent - orchestrates collectors and analyzers.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from shared.logging import get_safe_logger as get_logger

from .analyzers import HealthScorer, LogAnalyzer
from .collectors import ContainerCollector, SystemCollector
from .config import MonitorConfig
from .errors import ContainerEngineError
from .models import ContainerInfo, ContainerStats, LogAnalysis, ServerHealth, SystemInfo


logger = get_logger(__name__)


class MonitorAgent:
    """
    Host and container monitoring agent.

    Holds long-lived clients only; every call re-reads live data, so one
    instance can serve any number of independent tool calls.
    """

    def __init__(
        self,
        config: Optional[MonitorConfig] = None,
        system_collector: Optional[SystemCollector] = None,
        container_collector: Optional[ContainerCollector] = None,
        log_analyzer: Optional[LogAnalyzer] = None,
    ):
        self.config = config or MonitorConfig()

        self.system_collector = system_collector or SystemCollector(
            cpu_sample_interval=self.config.cpu_sample_interval,
        )
        self.container_collector = container_collector or ContainerCollector(
            base_url=self.config.docker_host,
            timeout=self.config.docker_timeout,
        )
        self.log_analyzer = log_analyzer or LogAnalyzer()
        self.health_scorer = HealthScorer()

    def get_system_info(self) -> SystemInfo:
        return self.system_collector.get_system_info()

    def get_containers(self, all: bool = False) -> list[ContainerInfo]:
        return self.container_collector.list_containers(all=all)

    def get_container_stats(self, container_id: str) -> ContainerStats:
        return self.container_collector.get_container_stats(container_id)

    def get_container_logs(self, container_id: str, lines: int = 100) -> str:
        return self.container_collector.get_container_logs(container_id, lines)

    def restart_container(self, container_id: str) -> str:
        logger.info(f"Restarting container: {container_id}")
        return self.container_collector.restart_container(container_id)

    def analyze_container_logs(self, container_id: str, hours: float = 24) -> LogAnalysis:
        """
        Fetch recent logs of a container and analyze the last ``hours`` hours.

        Raises:
            ContainerEngineError: if logs or the inventory cannot be read
        """
        try:
            raw_logs = self.container_collector.get_container_logs(
                container_id, self.config.analysis_log_lines,
            )
            container_name = self.container_collector.find_container_name(container_id)
        except ContainerEngineError as e:
            raise ContainerEngineError(f"Log analysis failed: {e.message}") from e

        analysis = self.log_analyzer.analyze(
            raw_logs,
            container_id=container_id,
            container_name=container_name,
            hours=hours,
        )
        logger.info(
            f"Log analysis for {container_name}: "
            f"{analysis.summary.error_count} errors, {analysis.summary.warning_count} warnings"
        )
        return analysis

    def get_server_health(self, system_info: Optional[SystemInfo] = None) -> ServerHealth:
        if system_info is None:
            system_info = self.get_system_info()
        return self.health_scorer.score(system_info)

    def get_health_report(self) -> dict[str, Any]:
        """Combined system, Docker and health snapshot."""
        system_info = self.get_system_info()
        containers = self.get_containers(all=False)
        health = self.get_server_health(system_info)

        logger.info(f"Server health: {health.status.value} (score {health.score})")

        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "system": system_info.to_dict(),
            "docker": {
                "totalContainers": len(containers),
                "runningContainers": sum(1 for c in containers if c.is_running),
                "containers": [
                    {"name": c.name, "status": c.status, "state": c.state}
                    for c in containers
                ],
            },
            "health": health.to_dict(),
        }

    @classmethod
    def from_env(cls) -> "MonitorAgent":
        """Create agent from environment variables."""
        return cls(MonitorConfig.from_env())
