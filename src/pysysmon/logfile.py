"""Append-only text log of system snapshots."""

import os
from datetime import datetime

from pysysmon.formatting import cpu_entry, disk_entry, network_entry, usage_line
from pysysmon.models import SystemSnapshot

DEFAULT_LOG_PATH = "system_info.txt"


def format_record(snapshot: SystemSnapshot, now: datetime | None = None) -> str:
    """
    Format one log record for a snapshot.

    Args:
        snapshot: The snapshot to serialize.
        now: Timestamp for the ``Time:`` line. Defaults to local wall-clock time.

    Returns:
        The record text, ending with a blank line.
    """
    if now is None:
        now = datetime.now()

    cpu_usage = ", ".join(cpu_entry(i, usage) for i, usage in enumerate(snapshot.cpu_usages))
    disk_usage = ", ".join(disk_entry(disk) for disk in snapshot.disks)
    network_usage = ", ".join(network_entry(net) for net in snapshot.networks)

    lines = [
        f"Time: {now.hour:02d}:{now.minute:02d}",
        usage_line("Memory", snapshot.used_memory, snapshot.total_memory, snapshot.memory_percent),
        usage_line("Swap", snapshot.used_swap, snapshot.total_swap, snapshot.swap_percent),
        f"CPU Usage: {cpu_usage}",
        f"Disk Usage: {disk_usage}",
        f"Network Usage: {network_usage}",
    ]
    return "\n".join(lines) + "\n\n"


def append_record(
    path: str | os.PathLike[str],
    snapshot: SystemSnapshot,
    now: datetime | None = None,
) -> None:
    """
    Append one record to the log file, creating it if needed.

    Existing content is never truncated or rewritten.

    Raises:
        OSError: If the file cannot be opened or written.
    """
    record = format_record(snapshot, now)
    try:
        log_file = open(path, "a", encoding="utf-8", errors="replace", newline="")
    except ValueError as err:
        # Embedded NUL bytes in the path
        raise OSError(f"Invalid log path {path!r}: {err}") from err
    with log_file:
        log_file.write(record)
