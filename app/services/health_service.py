# app/services/health_service.py - Process uptime and system metrics for the health endpoints
import platform
import resource
import sys
import time

_STARTED_AT = time.monotonic()


def process_uptime() -> float:
    """Seconds since the application module was first imported"""
    return time.monotonic() - _STARTED_AT


def format_uptime(seconds: float) -> str:
    """
    Render a duration as ``"1d 2h 3m 4s"``.

    Zero-valued units are omitted, so 3600 renders as ``"1h"`` and anything
    under one second renders as an empty string.
    """
    seconds = int(seconds)
    days, rest = divmod(seconds, 24 * 3600)
    hours, rest = divmod(rest, 3600)
    minutes, secs = divmod(rest, 60)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0:
        parts.append(f"{secs}s")
    return " ".join(parts)


def max_rss_megabytes() -> float:
    # ru_maxrss is kilobytes on Linux, bytes on macOS
    usage = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    divisor = 1024 * 1024 if sys.platform == "darwin" else 1024
    return round(usage / divisor, 2)


def system_info() -> dict:
    uptime = process_uptime()
    return {
        "memory": {"max_rss": max_rss_megabytes(), "unit": "MB"},
        "uptime": {"seconds": round(uptime), "formatted": format_uptime(uptime)},
        "python_version": platform.python_version(),
        "platform": sys.platform,
    }
