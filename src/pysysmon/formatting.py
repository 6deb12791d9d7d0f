"""Text fragments shared by the log record and the display."""

import math

from pysysmon.models import DiskUsage, NetworkUsage

# Memory and swap arrive in KiB; the "TB" label is kept for log compatibility.
MEMORY_DIVISOR = 1_048_576
MEMORY_UNIT = "TB"
DISK_DIVISOR = 1_073_741_824
DISK_UNIT = "GB"
NETWORK_DIVISOR = 1024
NETWORK_UNIT = "KB"


def fixed2(value: float) -> str:
    """Format a float with two decimals, spelling NaN as ``NaN``."""
    if math.isnan(value):
        return "NaN"
    return f"{value:.2f}"


def usage_line(label: str, used: int, total: int, percent: float) -> str:
    """Format a memory or swap line, e.g. ``Memory: used 0.50 TB / ...``."""
    return (
        f"{label}: used {fixed2(used / MEMORY_DIVISOR)} {MEMORY_UNIT} / "
        f"total {fixed2(total / MEMORY_DIVISOR)} {MEMORY_UNIT} ({fixed2(percent)}%)"
    )


def cpu_entry(index: int, usage: float) -> str:
    """Format one core; ``index`` is zero-based, the label is one-based."""
    return f"CPU {index + 1}: {fixed2(usage)}%"


def disk_entry(disk: DiskUsage) -> str:
    return (
        f"{disk.name}: {fixed2(disk.used_space / DISK_DIVISOR)} {DISK_UNIT} used / "
        f"{fixed2(disk.total_space / DISK_DIVISOR)} {DISK_UNIT} total "
        f"({fixed2(disk.percent)}%)"
    )


def network_entry(net: NetworkUsage) -> str:
    return (
        f"{net.name}: received {net.received // NETWORK_DIVISOR} {NETWORK_UNIT} / "
        f"transmitted {net.transmitted // NETWORK_DIVISOR} {NETWORK_UNIT}"
    )
