"""
CLI interface for hostwatch.

Usage:
    hostwatch info
    hostwatch containers --all
    hostwatch stats web
    hostwatch logs web -n 200
    hostwatch analyze web --hours 6
    hostwatch health
    hostwatch restart web
    hostwatch serve --transport sse
"""

import argparse
import json
import sys

from dotenv import load_dotenv

from .errors import ToolError
from .formatting import format_bytes, format_uptime
from .validation import validate_container_id, validate_hours, validate_lines_count


def main(argv: list[str] | None = None):
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="hostwatch - host and Docker container monitoring",
        prog="hostwatch",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # info command
    info = subparsers.add_parser("info", help="Show host system information")
    info.add_argument("--json", action="store_true", help="Output as JSON")

    # containers command
    containers = subparsers.add_parser("containers", help="List containers")
    containers.add_argument("--all", "-a", action="store_true", help="Include stopped containers")
    containers.add_argument("--json", action="store_true", help="Output as JSON")

    # stats command
    stats = subparsers.add_parser("stats", help="Container resource usage")
    stats.add_argument("container", help="Container ID or name")
    stats.add_argument("--json", action="store_true", help="Output as JSON")

    # logs command
    logs = subparsers.add_parser("logs", help="Get container logs")
    logs.add_argument("container", help="Container ID or name")
    logs.add_argument("--lines", "-n", type=int, default=100, help="Number of lines")

    # analyze command
    analyze = subparsers.add_parser("analyze", help="Analyze container logs")
    analyze.add_argument("container", help="Container ID or name")
    analyze.add_argument("--hours", type=float, default=24, help="Time window in hours")
    analyze.add_argument("--json", action="store_true", help="Output as JSON")

    # health command
    health = subparsers.add_parser("health", help="Server health check")
    health.add_argument("--json", action="store_true", help="Output as JSON")

    # restart command
    restart = subparsers.add_parser("restart", help="Restart a container")
    restart.add_argument("container", help="Container ID or name")
    restart.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    # serve command
    serve = subparsers.add_parser("serve", help="Run the MCP server")
    serve.add_argument("--transport", choices=["stdio", "sse"], default="stdio")
    serve.add_argument("--host", default=None, help="Host to bind (SSE only)")
    serve.add_argument("--port", type=int, default=None, help="Port (SSE only)")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    if args.command == "serve":
        cmd_serve(args)
        return

    error = _validate_args(args)
    if error:
        print(f"Invalid arguments: {error}")
        sys.exit(2)

    # Import agent after parsing to avoid slow startup for --help
    from .agent import MonitorAgent
    from .config import MonitorConfig

    try:
        config = MonitorConfig.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    agent = MonitorAgent(config)

    commands = {
        "info": cmd_info,
        "containers": cmd_containers,
        "stats": cmd_stats,
        "logs": cmd_logs,
        "analyze": cmd_analyze,
        "health": cmd_health,
        "restart": cmd_restart,
    }

    try:
        commands[args.command](agent, args)
    except ToolError as e:
        print(e.render())
        sys.exit(1)


def _validate_args(args) -> str | None:
    """Return a reason string if the parsed arguments are invalid."""
    if hasattr(args, "container"):
        valid, reason = validate_container_id(args.container)
        if not valid:
            return reason
    if hasattr(args, "lines"):
        valid, reason = validate_lines_count(args.lines)
        if not valid:
            return reason
    if hasattr(args, "hours"):
        valid, reason = validate_hours(args.hours)
        if not valid:
            return reason
    return None


def _print_json(data):
    print(json.dumps(data, indent=2, default=str, ensure_ascii=False))


def cmd_info(agent, args):
    """Show system information."""
    info = agent.get_system_info()

    if args.json:
        _print_json(info.to_dict())
        return

    print(f"Host: {info.hostname} ({info.platform}/{info.arch})")
    print(f"Uptime: {format_uptime(info.uptime)}")
    print(f"CPU: {info.cpu.brand or 'unknown'} "
          f"({info.cpu.physical_cores} cores / {info.cpu.cores} threads)")
    print(f"  Load: {info.cpu.current_load}%")
    if info.cpu.temperature is not None:
        print(f"  Temperature: {info.cpu.temperature}°C")
    print(f"Memory: {format_bytes(info.memory.used)} / {format_bytes(info.memory.total)} "
          f"({info.memory.used_percentage}%)")

    if info.disk:
        print("Disks:")
        for disk in info.disk:
            print(f"  {disk.mount or '?'}: {format_bytes(disk.used)} / {format_bytes(disk.size)} "
                  f"({disk.used_percentage}%)")

    if info.network:
        print("Network:")
        for iface in info.network:
            print(f"  {iface.interface} {iface.ip4}: "
                  f"rx {format_bytes(iface.rx_bytes)}, tx {format_bytes(iface.tx_bytes)}")


def cmd_containers(agent, args):
    """List containers."""
    containers = agent.get_containers(all=args.all)

    if args.json:
        _print_json([c.to_dict() for c in containers])
        return

    if not containers:
        print("No containers found")
        return

    for c in containers:
        marker = "[OK]" if c.is_running else "[--]"
        ports = f"  ports: {', '.join(c.ports)}" if c.ports else ""
        print(f"  {marker} {c.name} ({c.id[:12]}) {c.image} - {c.status}{ports}")


def cmd_stats(agent, args):
    """Show container resource usage."""
    stats = agent.get_container_stats(args.container)

    if args.json:
        _print_json(stats.to_dict())
        return

    print(f"Container: {stats.name} ({stats.container_id[:12]})")
    print(f"CPU: {stats.cpu_usage}%")
    print(f"Memory: {format_bytes(stats.memory_used)} / {format_bytes(stats.memory_limit)} "
          f"({stats.memory_percentage:.2f}%)")
    print(f"Network: rx {format_bytes(stats.network_rx)}, tx {format_bytes(stats.network_tx)}")
    print(f"Block I/O: read {format_bytes(stats.block_read)}, write {format_bytes(stats.block_write)}")


def cmd_logs(agent, args):
    """Print container logs."""
    logs = agent.get_container_logs(args.container, args.lines)

    if not logs.strip():
        print(f"No logs found for {args.container}")
        return

    print(logs.rstrip("\n"))


def cmd_analyze(agent, args):
    """Analyze container logs."""
    analysis = agent.analyze_container_logs(args.container, args.hours)

    if args.json:
        _print_json(analysis.to_dict())
        return

    summary = analysis.summary
    print(f"Log analysis: {analysis.container_name} (last {analysis.time_range.hours}h)")
    print(f"  Lines: {summary.total_lines}  errors: {summary.error_count}  "
          f"warnings: {summary.warning_count}  info: {summary.info_count}")

    if analysis.patterns:
        print("\nRecurring patterns:")
        for match in analysis.patterns:
            print(f"  [{match.severity.value.upper()}] {match.pattern}: {match.count}")

    if analysis.errors:
        print("\nRecent errors:")
        for entry in analysis.errors[:5]:
            print(f"  [{entry.timestamp:%Y-%m-%d %H:%M:%S}] {entry.message[:200]}")

    print("\nRecommendations:")
    for rec in analysis.recommendations:
        print(f"  - {rec}")


def cmd_health(agent, args):
    """Server health check."""
    report = agent.get_health_report()

    if args.json:
        _print_json(report)
        return

    health = report["health"]
    docker = report["docker"]

    print(f"Health: {health['status'].upper()} (score {health['score']}/100)")
    print(f"Containers: {docker['runningContainers']} running / {docker['totalContainers']} listed")

    if health["issues"]:
        print("\nIssues:")
        for issue, rec in zip(health["issues"], health["recommendations"]):
            print(f"  [!!] {issue}")
            print(f"       {rec}")


def cmd_restart(agent, args):
    """Restart container."""
    if not args.yes:
        confirm = input(f"Restart {args.container}? [y/N] ")
        if confirm.lower() != 'y':
            print("Cancelled")
            return

    print(agent.restart_container(args.container))


def cmd_serve(args):
    """Run the MCP server."""
    from .mcp_server import main as serve_main

    argv = ["--transport", args.transport]
    if args.host:
        argv += ["--host", args.host]
    if args.port:
        argv += ["--port", str(args.port)]
    serve_main(argv)


if __name__ == "__main__":
    main()
