"""Host metrics sampling for pysysmon."""

from typing import Protocol

import psutil

from pysysmon.models import DiskUsage, NetworkUsage, SystemSnapshot


class MetricsProvider(Protocol):
    """Source of raw host metrics consumed by :class:`SnapshotBuilder`."""

    def cpu_percents(self) -> list[float]:
        """Per-core utilization percentages in core enumeration order."""
        ...

    def memory(self) -> tuple[int, int]:
        """Used and total memory, in the provider's native unit."""
        ...

    def swap(self) -> tuple[int, int]:
        """Used and total swap, in the same unit as :meth:`memory`."""
        ...

    def disks(self) -> list[tuple[str, int, int]]:
        """``(name, total_bytes, available_bytes)`` for each disk."""
        ...

    def networks(self) -> list[tuple[str, int, int]]:
        """``(name, received_bytes, transmitted_bytes)`` for each interface."""
        ...


class PsutilProvider:
    """
    Metrics provider backed by psutil.

    Memory and swap are reported in kibibytes. Disks that cannot be read
    (permission denied, stale mounts) are skipped rather than raising, and
    any device class psutil cannot enumerate is reported as empty or zero.
    """

    def __init__(self) -> None:
        # Initialize CPU percent (first call returns 0.0)
        psutil.cpu_percent(percpu=True)

    def cpu_percents(self) -> list[float]:
        return psutil.cpu_percent(percpu=True)

    def memory(self) -> tuple[int, int]:
        try:
            mem = psutil.virtual_memory()
        except OSError:
            return 0, 0
        return (mem.total - mem.available) // 1024, mem.total // 1024

    def swap(self) -> tuple[int, int]:
        try:
            swap = psutil.swap_memory()
        except OSError:
            return 0, 0
        return swap.used // 1024, swap.total // 1024

    def disks(self) -> list[tuple[str, int, int]]:
        try:
            partitions = psutil.disk_partitions(all=False)
        except OSError:
            return []

        disks: list[tuple[str, int, int]] = []
        for part in partitions:
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except OSError:
                # PermissionError included; unreadable mounts are omitted
                continue
            disks.append((part.device, usage.total, usage.free))
        return disks

    def networks(self) -> list[tuple[str, int, int]]:
        try:
            counters = psutil.net_io_counters(pernic=True)
        except OSError:
            return []
        return [(name, nic.bytes_recv, nic.bytes_sent) for name, nic in counters.items()]


class SnapshotBuilder:
    """Turns raw provider output into a normalized :class:`SystemSnapshot`."""

    def __init__(self, provider: MetricsProvider | None = None) -> None:
        """
        Initialize the SnapshotBuilder.

        Args:
            provider: Source of raw metrics. Defaults to a PsutilProvider.
        """
        self._provider = provider if provider is not None else PsutilProvider()

    @property
    def provider(self) -> MetricsProvider:
        """Get the metrics provider."""
        return self._provider

    def build(self) -> SystemSnapshot:
        """Sample the provider once and return a new snapshot."""
        provider = self._provider

        used_memory, total_memory = provider.memory()
        used_swap, total_swap = provider.swap()

        disks = tuple(
            DiskUsage(name=name, total_space=total, used_space=total - available)
            for name, total, available in provider.disks() or ()
        )
        networks = tuple(
            NetworkUsage(name=name, received=received, transmitted=transmitted)
            for name, received, transmitted in provider.networks() or ()
        )

        return SystemSnapshot(
            cpu_usages=tuple(float(usage) for usage in provider.cpu_percents()),
            used_memory=used_memory,
            total_memory=total_memory,
            used_swap=used_swap,
            total_swap=total_swap,
            disks=disks,
            networks=networks,
        )
