"""Shared fixtures for pysysmon tests."""

from dataclasses import dataclass, field

import pytest

from pysysmon.monitor import SnapshotBuilder


@dataclass
class FakeProvider:
    """Metrics provider returning fixed values."""

    cpu: list[float] = field(default_factory=lambda: [10.0, 20.0])
    mem: tuple[int, int] = (512, 1024)
    swp: tuple[int, int] = (0, 0)
    disk_list: list[tuple[str, int, int]] = field(
        default_factory=lambda: [("sda", 1073741824, 536870912)]
    )
    net_list: list[tuple[str, int, int]] = field(default_factory=lambda: [("eth0", 2048, 4096)])
    calls: int = 0

    def cpu_percents(self) -> list[float]:
        self.calls += 1
        return list(self.cpu)

    def memory(self) -> tuple[int, int]:
        return self.mem

    def swap(self) -> tuple[int, int]:
        return self.swp

    def disks(self) -> list[tuple[str, int, int]]:
        return list(self.disk_list)

    def networks(self) -> list[tuple[str, int, int]]:
        return list(self.net_list)


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def builder(provider: FakeProvider) -> SnapshotBuilder:
    return SnapshotBuilder(provider)


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "system_info.txt"
