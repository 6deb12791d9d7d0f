"""Verification Test: Append-only log and memory stability over many refreshes.

Every refresh appends exactly one record and never rewrites earlier ones,
so the log file grows monotonically and each earlier state of the file is
a prefix of every later one. Repeated sampling with the real psutil
provider must also not grow the process's memory without bound.
"""

import gc

import psutil

from pysysmon.monitor import PsutilProvider, SnapshotBuilder
from pysysmon.state import Loaded, StateMachine, Trigger


def get_current_memory_mb() -> float:
    """Get current process memory usage in MB."""
    process = psutil.Process()
    return process.memory_info().rss / (1024 * 1024)


class TestAppendOnly:
    """Append-only verification suite tests."""

    def test_log_grows_monotonically(self, provider, builder, log_path):
        """Each refresh keeps all earlier content as an unchanged prefix."""
        machine = StateMachine(builder, log_path=log_path)
        previous = log_path.read_text(encoding="utf-8")

        for i in range(50):
            provider.cpu = [float(i % 100)]
            provider.net_list = [(f"veth{i}", i * 1024, 0)]
            machine.dispatch(Trigger.REFRESH)

            current = log_path.read_text(encoding="utf-8")
            assert current.startswith(previous)
            assert len(current) > len(previous)
            previous = current

        assert previous.count("Time: ") == 51
        assert "veth49: received 49 KB" in previous
        # Only the latest interface is in the latest snapshot
        assert [n.name for n in machine.state.snapshot.networks] == ["veth49"]

    def test_toggles_between_refreshes_do_not_write(self, builder, log_path):
        machine = StateMachine(builder, log_path=log_path)

        for _ in range(20):
            machine.dispatch(Trigger.TOGGLE_CPU_USAGE)
            machine.dispatch(Trigger.REFRESH)

        assert log_path.read_text(encoding="utf-8").count("Time: ") == 21


class TestMemoryStability:
    """Memory verification suite tests."""

    def test_repeated_sampling_no_leak(self, tmp_path):
        """
        Test that repeated real refreshes do not leak memory.

        Only the latest snapshot is held, so memory should stay flat. A relaxed
        threshold absorbs allocator and pytest noise.
        """
        machine = StateMachine(
            SnapshotBuilder(PsutilProvider()),
            log_path=tmp_path / "system_info.txt",
        )

        # Warm up caches before measuring
        for _ in range(10):
            machine.dispatch(Trigger.REFRESH)
        gc.collect()
        initial_memory = get_current_memory_mb()

        for _ in range(200):
            machine.dispatch(Trigger.REFRESH)

        gc.collect()
        memory_delta = get_current_memory_mb() - initial_memory

        assert isinstance(machine.state, Loaded)
        max_delta_mb = 5.0
        assert memory_delta < max_delta_mb, (
            f"Memory increased by {memory_delta:.2f}MB over 200 refreshes, "
            f"expected < {max_delta_mb}MB"
        )
