"""
Container log analyzer.

Pipeline: LogParser splits raw ``docker logs --timestamps`` output into
entries inside a time window, LogClassifier tags each with a severity,
PatternAggregator counts recurring error/warning patterns and
RecommendationEngine turns the counts into advice for the operator.
"""

import re
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, Optional

from shared.logging import get_safe_logger as get_logger

from ..models import (
    LogAnalysis,
    LogEntry,
    LogSummary,
    PatternMatch,
    Severity,
    TimeRange,
)


logger = get_logger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


ERROR_PATTERNS = [
    r'error',
    r'exception',
    r'failed',
    r'fatal',
    r'critical',
    r'panic',
    r'crash',
    r'unable to',
    r'connection refused',
    r'timeout',
    r'not found',
    r'access denied',
    r'permission denied',
    r'out of memory',
    r'stack trace',
]

WARNING_PATTERNS = [
    r'warn',
    r'warning',
    r'deprecated',
    r'slow',
    r'retry',
    r'fallback',
    r'performance',
    r'memory leak',
    r'high cpu',
    r'throttle',
]

INFO_PATTERNS = [
    r'info',
    r'started',
    r'stopped',
    r'connected',
    r'disconnected',
    r'initialized',
    r'completed',
    r'success',
]

# Tiers in precedence order; DEBUG is the fallback and has no patterns
SEVERITY_TIERS: dict[Severity, tuple[re.Pattern, ...]] = {
    Severity.ERROR: tuple(re.compile(p, re.IGNORECASE) for p in ERROR_PATTERNS),
    Severity.WARNING: tuple(re.compile(p, re.IGNORECASE) for p in WARNING_PATTERNS),
    Severity.INFO: tuple(re.compile(p, re.IGNORECASE) for p in INFO_PATTERNS),
}

# Only these tiers feed recurring-pattern counts
COUNTED_TIERS = (Severity.ERROR, Severity.WARNING)

# Docker RFC3339Nano prefix: 2024-01-15T10:30:45.123456789Z <message>
_TIMESTAMP_PREFIX = re.compile(
    r'^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})\.(\d+)Z\s+(.*)$'
)

_ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;]*m')

MAX_ERRORS = 50
MAX_WARNINGS = 30
MAX_PATTERNS = 10


def strip_ansi(text: str) -> str:
    """Remove terminal color escape sequences."""
    return _ANSI_ESCAPE.sub('', text)


def display_pattern(source: str) -> str:
    """Pattern source as shown to operators (escaping removed)."""
    return re.sub(r'[\\/]', '', source)


class LogClassifier:
    """Assigns exactly one severity to a message; first matching tier wins."""

    def __init__(self, tiers: Optional[dict[Severity, tuple[re.Pattern, ...]]] = None):
        self.tiers = tiers if tiers is not None else SEVERITY_TIERS

    def classify(self, message: str) -> Severity:
        for severity, patterns in self.tiers.items():
            for pattern in patterns:
                if pattern.search(message):
                    return severity
        return Severity.DEBUG


class LogParser:
    """Parses timestamp-prefixed log text into entries inside a time window."""

    def __init__(
        self,
        classifier: Optional[LogClassifier] = None,
        clock: Clock = utc_now,
    ):
        self.classifier = classifier or LogClassifier()
        self.clock = clock

    def parse(
        self,
        raw_logs: str,
        start: datetime,
        end: datetime,
        fallback_time: Optional[datetime] = None,
        source: Optional[str] = None,
    ) -> list[LogEntry]:
        """
        Parse raw log output.

        Args:
            raw_logs: Newline separated log text
            start: Window start (inclusive)
            end: Window end (inclusive)
            fallback_time: Timestamp for lines without a timestamp prefix.
                Defaults to one clock reading shared by the whole batch.
            source: Optional origin recorded on each entry

        Returns:
            Entries within [start, end], most recent first
        """
        if fallback_time is None:
            fallback_time = self.clock()

        entries = []
        skipped = 0

        # Records are separated by "\n" only; form feeds and Unicode line
        # separators belong to the message
        for line in raw_logs.split('\n'):
            line = line.removesuffix('\r')
            if not line.strip():
                continue

            try:
                entry = self.parse_line(line, fallback_time, source)
            except ValueError as e:
                skipped += 1
                logger.debug(f"Skipping unparseable log line: {e}")
                continue

            if start <= entry.timestamp <= end:
                entries.append(entry)

        if skipped:
            logger.debug(f"Skipped {skipped} unparseable log lines")

        # Stable sort keeps input order among equal timestamps
        entries.sort(key=lambda e: e.timestamp, reverse=True)
        return entries

    def parse_line(
        self,
        line: str,
        fallback_time: datetime,
        source: Optional[str] = None,
    ) -> LogEntry:
        """Parse a single line. Raises ValueError on a malformed timestamp."""
        match = _TIMESTAMP_PREFIX.match(line)

        if match:
            timestamp = self._parse_timestamp(match.group(1), match.group(2))
            message = match.group(3)
        else:
            timestamp = fallback_time
            message = line

        message = strip_ansi(message).strip()

        return LogEntry(
            timestamp=timestamp,
            level=self.classifier.classify(message),
            message=message,
            source=source,
        )

    def _parse_timestamp(self, seconds_part: str, fraction: str) -> datetime:
        """Parse the RFC3339 token; nanoseconds are truncated to microseconds."""
        base = datetime.strptime(seconds_part, '%Y-%m-%dT%H:%M:%S')
        microseconds = int(fraction[:6].ljust(6, '0'))
        return base.replace(microsecond=microseconds, tzinfo=timezone.utc)


class PatternAggregator:
    """Counts recurring error and warning patterns across entries."""

    def __init__(
        self,
        tiers: Optional[dict[Severity, tuple[re.Pattern, ...]]] = None,
        limit: int = MAX_PATTERNS,
    ):
        self.tiers = tiers if tiers is not None else SEVERITY_TIERS
        self.limit = limit

    def aggregate(self, entries: Iterable[LogEntry]) -> list[PatternMatch]:
        # Keyed by pattern source; insertion order breaks count ties
        counts: Counter = Counter()
        severities: dict[str, Severity] = {}

        for entry in entries:
            for severity in COUNTED_TIERS:
                for pattern in self.tiers.get(severity, ()):
                    if pattern.search(entry.message):
                        counts[pattern.pattern] += 1
                        severities.setdefault(pattern.pattern, severity)

        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)

        return [
            PatternMatch(
                pattern=display_pattern(source),
                count=count,
                severity=severities[source],
            )
            for source, count in ranked[:self.limit]
        ]


# Recommendation texts
MANY_ERRORS = "Errors are occurring at a very high rate. Inspect application health."
SOME_ERRORS = "Errors are occurring. Review the logs in detail."
MANY_WARNINGS = "Warnings are occurring at a very high rate. Review performance and configuration."
REPEATED_ERROR = 'Errors matching "{pattern}" keep recurring ({count} times).'
TIMEOUT_ISSUES = "Timeouts detected. Check network latency and service performance."
MEMORY_ISSUES = "Memory-related problems detected. Check memory usage."
CONNECTION_ISSUES = "Connection problems keep recurring. Check the network and the state of external services."
NO_ISSUES = "No significant issues found in the logs."


class RecommendationEngine:
    """Derives operator advice from error/warning counts and top patterns."""

    MANY_ERRORS_THRESHOLD = 100
    SOME_ERRORS_THRESHOLD = 10
    MANY_WARNINGS_THRESHOLD = 200
    REPEATED_ERROR_THRESHOLD = 20
    TIMEOUT_THRESHOLD = 5
    MEMORY_THRESHOLD = 3
    CONNECTION_THRESHOLD = 10

    def recommend(
        self,
        errors: list[LogEntry],
        warnings: list[LogEntry],
        patterns: list[PatternMatch],
    ) -> list[str]:
        recommendations = []

        if len(errors) > self.MANY_ERRORS_THRESHOLD:
            recommendations.append(MANY_ERRORS)
        elif len(errors) > self.SOME_ERRORS_THRESHOLD:
            recommendations.append(SOME_ERRORS)

        if len(warnings) > self.MANY_WARNINGS_THRESHOLD:
            recommendations.append(MANY_WARNINGS)

        for match in patterns:
            if match.severity == Severity.ERROR and match.count > self.REPEATED_ERROR_THRESHOLD:
                recommendations.append(
                    REPEATED_ERROR.format(pattern=match.pattern, count=match.count)
                )

            if 'timeout' in match.pattern and match.count > self.TIMEOUT_THRESHOLD:
                recommendations.append(TIMEOUT_ISSUES)

            if 'memory' in match.pattern and match.count > self.MEMORY_THRESHOLD:
                recommendations.append(MEMORY_ISSUES)

            if 'connection' in match.pattern and match.count > self.CONNECTION_THRESHOLD:
                recommendations.append(CONNECTION_ISSUES)

        if not recommendations:
            recommendations.append(NO_ISSUES)

        return recommendations


class LogAnalyzer:
    """Analyzes raw container logs over a trailing time window."""

    def __init__(
        self,
        clock: Clock = utc_now,
        classifier: Optional[LogClassifier] = None,
    ):
        self.clock = clock
        self.parser = LogParser(classifier or LogClassifier(), clock=clock)
        self.aggregator = PatternAggregator()
        self.recommender = RecommendationEngine()

    def analyze(
        self,
        raw_logs: str,
        container_id: str,
        container_name: str,
        hours: float = 24,
    ) -> LogAnalysis:
        """
        Analyze log text for the last ``hours`` hours.

        Returns:
            LogAnalysis with counts, the most recent 50 errors and 30
            warnings, the top 10 patterns and recommendations.
        """
        end = self.clock()
        start = end - timedelta(hours=hours)

        entries = self.parser.parse(raw_logs, start, end, fallback_time=end)

        errors = [e for e in entries if e.level == Severity.ERROR]
        warnings = [e for e in entries if e.level == Severity.WARNING]
        infos = [e for e in entries if e.level == Severity.INFO]

        patterns = self.aggregator.aggregate(entries)
        recommendations = self.recommender.recommend(errors, warnings, patterns)

        logger.debug(
            f"Analyzed {len(entries)} entries for {container_name}: "
            f"{len(errors)} errors, {len(warnings)} warnings"
        )

        return LogAnalysis(
            container_id=container_id,
            container_name=container_name,
            time_range=TimeRange(start=start, end=end, hours=hours),
            summary=LogSummary(
                total_lines=len(entries),
                error_count=len(errors),
                warning_count=len(warnings),
                info_count=len(infos),
            ),
            errors=errors[:MAX_ERRORS],
            warnings=warnings[:MAX_WARNINGS],
            patterns=patterns,
            recommendations=recommendations,
        )
