"""pysysmon - Main Textual application."""

import os

from textual.app import App, ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Button, Footer, Static

from pysysmon.formatting import cpu_entry, disk_entry, network_entry, usage_line
from pysysmon.logfile import DEFAULT_LOG_PATH
from pysysmon.models import SystemSnapshot
from pysysmon.monitor import SnapshotBuilder
from pysysmon.state import ApplicationState, Loaded, StateMachine, Trigger

LOADING_TEXT = "Loading..."
TITLE_TEXT = "System Monitor"


def memory_lines(snapshot: SystemSnapshot) -> list[str]:
    """Get the memory and swap lines."""
    return [
        usage_line("Memory", snapshot.used_memory, snapshot.total_memory, snapshot.memory_percent),
        usage_line("Swap", snapshot.used_swap, snapshot.total_swap, snapshot.swap_percent),
    ]


def cpu_lines(snapshot: SystemSnapshot) -> list[str]:
    """Get one line per core."""
    return [cpu_entry(i, usage) for i, usage in enumerate(snapshot.cpu_usages)]


def disk_lines(snapshot: SystemSnapshot) -> list[str]:
    return [disk_entry(disk) for disk in snapshot.disks]


def network_lines(snapshot: SystemSnapshot) -> list[str]:
    return [network_entry(net) for net in snapshot.networks]


class SnapshotView(VerticalScroll):
    """Renders the application state: a loading line or the full snapshot."""

    DEFAULT_CSS = """
    SnapshotView {
        height: 1fr;
        padding: 1 2;
    }

    SnapshotView #title {
        text-style: bold;
        content-align: center middle;
        width: 100%;
    }

    SnapshotView .section {
        text-style: bold;
        margin-top: 1;
    }

    SnapshotView .entries {
        padding-left: 4;
    }
    """

    # Widgets only shown once a snapshot is loaded
    LOADED_IDS = (
        "title",
        "memory",
        "toggle-cpu",
        "cpu-usage",
        "disk-title",
        "disk-usage",
        "network-title",
        "network-usage",
        "refresh",
    )

    def compose(self) -> ComposeResult:
        """Compose the snapshot layout."""
        yield Static(LOADING_TEXT, id="loading")
        yield Static(TITLE_TEXT, id="title")
        yield Static("", id="memory", markup=False)
        yield Button("CPU Usage", id="toggle-cpu")
        yield Static("", id="cpu-usage", classes="entries", markup=False)
        yield Static("Disk usage:", id="disk-title", classes="section")
        yield Static("", id="disk-usage", classes="entries", markup=False)
        yield Static("Network usage:", id="network-title", classes="section")
        yield Static("", id="network-usage", classes="entries", markup=False)
        yield Button("Refresh", id="refresh")

    def show_state(self, state: ApplicationState) -> None:
        """Render ``state``. The state is only read, never modified."""
        loaded = isinstance(state, Loaded)
        self.query_one("#loading", Static).display = not loaded
        for widget_id in self.LOADED_IDS:
            self.query_one(f"#{widget_id}").display = loaded
        if not loaded:
            return

        snapshot = state.snapshot
        self.query_one("#memory", Static).update("\n".join(memory_lines(snapshot)))

        cpu_usage = self.query_one("#cpu-usage", Static)
        cpu_usage.update("\n".join(cpu_lines(snapshot)))
        cpu_usage.display = state.show_cpu_usage

        self.query_one("#disk-usage", Static).update("\n".join(disk_lines(snapshot)))
        self.query_one("#network-usage", Static).update("\n".join(network_lines(snapshot)))


class SysmonApp(App):
    """Main pysysmon application."""

    TITLE = TITLE_TEXT
    SUB_TITLE = "pysysmon"

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("r", "refresh", "Refresh"),
        ("c", "toggle_cpu", "CPU Usage"),
    ]

    def __init__(
        self,
        builder: SnapshotBuilder | None = None,
        log_path: str | os.PathLike[str] = DEFAULT_LOG_PATH,
    ) -> None:
        """
        Initialize the SysmonApp.

        Args:
            builder: Snapshot builder to sample with. Defaults to psutil.
            log_path: File that receives one record per refresh.
        """
        super().__init__()
        # Takes the first sample before anything is shown
        self._machine = StateMachine(builder, log_path=log_path)

    @property
    def state(self) -> ApplicationState:
        """Get the current application state."""
        return self._machine.state

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield SnapshotView(id="snapshot")
        yield Footer()

    def on_mount(self) -> None:
        """Render the state loaded during construction."""
        self._render_state()
        self._report_write_error()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Route button presses to triggers."""
        if event.button.id == "refresh":
            self.action_refresh()
        elif event.button.id == "toggle-cpu":
            self.action_toggle_cpu()

    def action_refresh(self) -> None:
        """Take a new sample, log it and redraw."""
        try:
            self._machine.dispatch(Trigger.REFRESH)
        except Exception as err:
            # The app must never crash; the previous state stays on screen
            self.notify(f"Refresh failed: {err}", severity="error")
            return
        self._render_state()
        self._report_write_error()

    def action_toggle_cpu(self) -> None:
        """Show or hide per-core CPU usage."""
        self._machine.dispatch(Trigger.TOGGLE_CPU_USAGE)
        self._render_state()

    def _render_state(self) -> None:
        """Pass the current state to the view."""
        try:
            view = self.query_one("#snapshot", SnapshotView)
            view.show_state(self._machine.state)
        except Exception:
            pass  # Widget not mounted yet

    def _report_write_error(self) -> None:
        if self._machine.last_error is not None:
            self.notify(
                f"Error writing to file: {self._machine.last_error}",
                severity="warning",
            )


def main() -> None:
    """Entry point for pysysmon application."""
    app = SysmonApp()
    app.run()


if __name__ == "__main__":
    main()
