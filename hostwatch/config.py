"""
Configuration for the monitoring agent.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


@dataclass
class MonitorConfig:
    """Container engine and server configuration."""
    docker_host: Optional[str] = None  # None = docker SDK environment discovery
    docker_timeout: int = 30
    analysis_log_lines: int = 10000    # Lines fetched for log analysis
    cpu_sample_interval: float = 0.5   # Seconds psutil samples CPU load over
    mcp_host: str = "127.0.0.1"
    mcp_port: int = 8300

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "MonitorConfig":
        """Load configuration from environment variables."""
        if env_file:
            load_dotenv(env_file)
        else:
            # Try to find .env in parent directory
            load_dotenv(Path(__file__).parent.parent / ".env")

        try:
            return cls(
                docker_host=os.getenv("DOCKER_HOST") or None,
                docker_timeout=int(os.getenv("HOSTWATCH_DOCKER_TIMEOUT", "30")),
                analysis_log_lines=int(os.getenv("HOSTWATCH_ANALYSIS_LINES", "10000")),
                cpu_sample_interval=float(os.getenv("HOSTWATCH_CPU_INTERVAL", "0.5")),
                mcp_host=os.getenv("MCP_HOST", "127.0.0.1"),
                mcp_port=int(os.getenv("MCP_PORT", "8300")),
            )
        except ValueError as e:
            raise ValueError(f"Invalid numeric configuration value: {e}") from e

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []
        if self.docker_timeout < 1:
            errors.append("docker_timeout must be positive")
        if self.analysis_log_lines < 1 or self.analysis_log_lines > 100000:
            errors.append("analysis_log_lines must be between 1 and 100000")
        if self.cpu_sample_interval < 0:
            errors.append("cpu_sample_interval cannot be negative")
        if self.mcp_port < 1 or self.mcp_port > 65535:
            errors.append("mcp_port must be between 1 and 65535")
        return errors
