"""
Host health scoring.
"""

from ..models import HealthStatus, ServerHealth, SystemInfo


class HealthScorer:
    """Turns a SystemInfo snapshot into a 0-100 score with issues and advice."""

    HEALTHY_MIN_SCORE = 80
    WARNING_MIN_SCORE = 60

    def score(self, info: SystemInfo) -> ServerHealth:
        issues: list[str] = []
        recommendations: list[str] = []
        score = 100

        load = info.cpu.current_load
        if load > 90:
            issues.append(f"CPU load is very high ({load:.1f}%, above 90%)")
            recommendations.append("Identify CPU-intensive processes and optimize them")
            score -= 30
        elif load > 70:
            issues.append(f"CPU load is high ({load:.1f}%, above 70%)")
            recommendations.append("Keep monitoring CPU usage")
            score -= 15

        memory = info.memory.used_percentage
        if memory > 90:
            issues.append(f"Memory usage is very high ({memory:.1f}%, above 90%)")
            recommendations.append("Find memory-hungry processes or add more memory")
            score -= 25
        elif memory > 80:
            issues.append(f"Memory usage is high ({memory:.1f}%, above 80%)")
            recommendations.append("Keep monitoring memory usage")
            score -= 10

        # Each volume is judged on its own
        for disk in info.disk:
            label = f" on {disk.mount}" if disk.mount else ""
            if disk.used_percentage > 95:
                issues.append(f"Disk usage is very high{label} ({disk.used_percentage:.1f}%)")
                recommendations.append("Free up disk space or expand the volume")
                score -= 25
            elif disk.used_percentage > 85:
                issues.append(f"Disk usage is high{label} ({disk.used_percentage:.1f}%)")
                recommendations.append("Monitor disk space and clean up old data")
                score -= 10

        temperature = info.cpu.temperature
        if temperature is not None and temperature > 80:
            issues.append(f"CPU temperature is high ({temperature}°C)")
            recommendations.append("Check CPU cooling and remove dust")
            score -= 15

        score = max(0, score)

        return ServerHealth(
            status=self.status_for(score),
            score=score,
            issues=issues,
            recommendations=recommendations,
        )

    @classmethod
    def status_for(cls, score: int) -> HealthStatus:
        if score >= cls.HEALTHY_MIN_SCORE:
            return HealthStatus.HEALTHY
        if score >= cls.WARNING_MIN_SCORE:
            return HealthStatus.WARNING
        return HealthStatus.CRITICAL
