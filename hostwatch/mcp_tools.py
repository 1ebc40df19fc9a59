"""
MCP tool definitions for hostwatch.
"""

_CONTAINER_ID = {
    "type": "string",
    "description": "Container ID (or unique ID prefix) or container name",
}

TOOLS = [
    {
        "name": "get_system_info",
        "description": """Get host system information.

Returns CPU (model, cores, current load, temperature when available),
memory, per-volume disk usage, external network interfaces, uptime,
hostname, platform and architecture. Byte values are raw numbers.""",
        "inputSchema": {
            "type": "object",
            "properties": {},
            "required": [],
        },
    },
    {
        "name": "get_docker_containers",
        "description": """List Docker containers.

Returns id, name, image, status, state, creation time and port mappings.
Only running containers are listed unless 'all' is true.""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "all": {
                    "type": "boolean",
                    "description": "Include stopped containers",
                    "default": False,
                },
            },
        },
    },
    {
        "name": "get_container_stats",
        "description": """Get resource usage of a container.

Returns CPU %, memory used/limit/%, network rx/tx bytes and block I/O
read/write bytes from a single stats sample.""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "containerId": _CONTAINER_ID,
            },
            "required": ["containerId"],
        },
    },
    {
        "name": "get_container_logs",
        "description": """Get recent logs of a container.

Returns raw stdout+stderr lines, each prefixed with its RFC3339 timestamp.""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "containerId": _CONTAINER_ID,
                "lines": {
                    "type": "number",
                    "description": "Number of log lines to retrieve (default: 100, max: 10000)",
                    "default": 100,
                },
            },
            "required": ["containerId"],
        },
    },
    {
        "name": "analyze_container_logs",
        "description": """Analyze container logs for errors and warnings.

Classifies each line (error/warning/info/debug), counts recurring
error and warning patterns and returns recommendations.
Use this for deep investigation of a misbehaving container.""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "containerId": _CONTAINER_ID,
                "hours": {
                    "type": "number",
                    "description": "Time window to analyze, in hours (default: 24, max: 720)",
                    "default": 24,
                },
            },
            "required": ["containerId"],
        },
    },
    {
        "name": "restart_container",
        "description": """Restart a Docker container.

Use this to recover after investigating the root cause.
The container is stopped gracefully and started again.""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "containerId": _CONTAINER_ID,
            },
            "required": ["containerId"],
        },
    },
    {
        "name": "get_server_health",
        "description": """Comprehensive server health check.

Returns system information, Docker container counts and a health
score (0-100) with status (healthy/warning/critical), issues and
recommendations. Use this as the first step when investigating a server.""",
        "inputSchema": {
            "type": "object",
            "properties": {},
            "required": [],
        },
    },
]
