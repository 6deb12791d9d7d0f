"""Application state and its transitions."""

import logging
import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable

from pysysmon.logfile import DEFAULT_LOG_PATH, append_record
from pysysmon.models import SystemSnapshot
from pysysmon.monitor import SnapshotBuilder

logger = logging.getLogger(__name__)


class Trigger(Enum):
    """External triggers accepted by the state machine."""

    REFRESH = "refresh"
    TOGGLE_CPU_USAGE = "toggle_cpu_usage"


@dataclass(slots=True, frozen=True)
class NotLoaded:
    """No snapshot has been taken yet."""


@dataclass(slots=True, frozen=True)
class Loaded:
    """A snapshot is available for display."""

    snapshot: SystemSnapshot
    show_cpu_usage: bool = False


ApplicationState = NotLoaded | Loaded


def toggle_cpu_usage(state: ApplicationState) -> ApplicationState:
    """Flip per-core CPU detail. Has no effect before the first load."""
    if isinstance(state, Loaded):
        return replace(state, show_cpu_usage=not state.show_cpu_usage)
    return state


class StateMachine:
    """
    Owns the application state and applies triggers to it.

    Every transition runs to completion on the caller's thread. A refresh
    samples the host, appends a record to the log file and replaces the
    state. Log write failures are logged and kept on ``last_error``; they
    never prevent the state from updating.
    """

    def __init__(
        self,
        builder: SnapshotBuilder | None = None,
        log_path: str | os.PathLike[str] = DEFAULT_LOG_PATH,
        eager: bool = True,
        writer: Callable[[str | os.PathLike[str], SystemSnapshot], None] = append_record,
    ) -> None:
        """
        Initialize the StateMachine.

        Args:
            builder: Snapshot builder to sample with. Defaults to psutil.
            log_path: File that receives one record per refresh.
            eager: Refresh immediately so the first state is already loaded.
            writer: Function that appends a snapshot to ``log_path``.
        """
        self._builder = builder if builder is not None else SnapshotBuilder()
        self._log_path = log_path
        self._writer = writer
        self._state: ApplicationState = NotLoaded()
        self.last_error: OSError | None = None
        if eager:
            self.dispatch(Trigger.REFRESH)

    @property
    def state(self) -> ApplicationState:
        """Get the current state."""
        return self._state

    @property
    def log_path(self) -> str | os.PathLike[str]:
        """Get the log file path."""
        return self._log_path

    def apply(self, state: ApplicationState, trigger: Trigger) -> ApplicationState:
        """
        Compute the state that follows ``state`` under ``trigger``.

        A refresh samples the provider but writes nothing; logging happens
        in :meth:`dispatch`.
        """
        if trigger is Trigger.REFRESH:
            return Loaded(snapshot=self._builder.build(), show_cpu_usage=False)
        if trigger is Trigger.TOGGLE_CPU_USAGE:
            return toggle_cpu_usage(state)
        raise ValueError(f"Unknown trigger: {trigger!r}")

    def dispatch(self, trigger: Trigger) -> ApplicationState:
        """Apply ``trigger`` to the held state and return the new state."""
        new_state = self.apply(self._state, trigger)
        if trigger is Trigger.REFRESH:
            self._append(new_state.snapshot)
        self._state = new_state
        return self._state

    def _append(self, snapshot: SystemSnapshot) -> None:
        try:
            self._writer(self._log_path, snapshot)
        except OSError as err:
            logger.warning(f"Error writing to file: {err}")
            self.last_error = err
        else:
            self.last_error = None
