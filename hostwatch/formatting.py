"""
Human-readable formatting for byte counts and durations.

Display only: callers format a copy of the value, the models keep raw numbers.
"""

import math

_BYTE_UNITS = ['Bytes', 'KB', 'MB', 'GB', 'TB']


def format_bytes(num_bytes: float) -> str:
    """Format a byte count like '1.5 KB' (base 1024, at most two decimals)."""
    if num_bytes <= 0:
        return '0 Bytes'

    k = 1024
    i = min(int(math.floor(math.log(num_bytes) / math.log(k))), len(_BYTE_UNITS) - 1)
    i = max(i, 0)
    value = round(num_bytes / (k ** i), 2)
    # Drop trailing zeros: 1.50 -> 1.5, 2.00 -> 2
    text = f"{value:.2f}".rstrip('0').rstrip('.')
    return f"{text} {_BYTE_UNITS[i]}"


def format_uptime(seconds: float) -> str:
    """Format seconds as 'Xd Yh Zm'."""
    seconds = int(max(seconds, 0))
    days = seconds // 86400
    hours = (seconds % 86400) // 3600
    minutes = (seconds % 3600) // 60
    return f"{days}d {hours}h {minutes}m"
