"""Data models for pysysmon."""

import math
from dataclasses import dataclass


def usage_percent(used: int, total: int) -> float:
    """
    Return ``used / total * 100`` with IEEE float semantics.

    A zero total is not guarded: ``0 / 0`` gives NaN and ``x / 0`` gives
    an infinity carrying the sign of ``x``.
    """
    if total == 0:
        if used == 0:
            return math.nan
        return math.copysign(math.inf, used)
    return used / total * 100.0


@dataclass(slots=True, frozen=True)
class DiskUsage:
    """Immutable usage figures for one disk."""

    name: str
    total_space: int  # Bytes
    used_space: int  # Bytes, total minus available

    @property
    def percent(self) -> float:
        return usage_percent(self.used_space, self.total_space)


@dataclass(slots=True, frozen=True)
class NetworkUsage:
    """Immutable cumulative traffic counters for one interface."""

    name: str
    received: int  # Bytes since boot
    transmitted: int  # Bytes since boot


@dataclass(slots=True, frozen=True)
class SystemSnapshot:
    """Immutable sample of all tracked host metrics."""

    cpu_usages: tuple[float, ...]
    used_memory: int  # KiB
    total_memory: int  # KiB
    used_swap: int  # KiB
    total_swap: int  # KiB
    disks: tuple[DiskUsage, ...]
    networks: tuple[NetworkUsage, ...]

    @property
    def memory_percent(self) -> float:
        return usage_percent(self.used_memory, self.total_memory)

    @property
    def swap_percent(self) -> float:
        return usage_percent(self.used_swap, self.total_swap)
