from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Footer, ProgressBar, Static

from booktimer.session.state import DashboardSnapshot
from booktimer.session.timer import TimerState

if TYPE_CHECKING:
    from booktimer.app import BooktimerApp

TIMER_LABELS = {
    TimerState.RUNNING: "READING",
    TimerState.PAUSED: "PAUSED",
    TimerState.STOPPED: "STOPPED",
}


def format_clock(seconds: float) -> str:
    """HH:MM:SS for the live timer."""
    total = int(seconds)
    return f"{total // 3600:02}:{total % 3600 // 60:02}:{total % 60:02}"


def format_total(seconds: int) -> str:
    return f"{seconds // 3600}h {seconds % 3600 // 60}m"


class DashboardScreen(Screen):
    BINDINGS = [
        Binding("space", "toggle_timer", "Start/Pause"),
        Binding("s,S", "stop_timer", "Stop"),
        Binding("up", "jump_forward", "+Jump"),
        Binding("down", "jump_back", "-Jump"),
        Binding("right", "next_page", "+1"),
        Binding("left", "prev_page", "-1"),
        Binding("b,B", "book_select", "Books"),
        Binding("q,Q", "quit_app", "Quit"),
    ]

    @property
    def bt(self) -> BooktimerApp:
        return self.app  # type: ignore[return-value]

    def compose(self) -> ComposeResult:
        with Vertical(id="dashboard-body"):
            yield Static("", id="dash-title", classes="dash-panel")
            yield Static("", id="dash-timer", classes="dash-panel")
            yield Static("", id="dash-pages", classes="dash-panel")
            with Vertical(id="dash-completion"):
                yield ProgressBar(total=100, show_eta=False, id="dash-progress")
            yield Static("", id="dash-stats")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#dash-title", Static).border_title = "Book Tracker"
        self.query_one("#dash-timer", Static).border_title = "Time"
        self.query_one("#dash-pages", Static).border_title = "Progress"
        self.query_one("#dash-completion").border_title = "Completion"
        self.query_one("#dash-stats", Static).border_title = "Statistics"
        self._update_view()
        self.set_interval(self.bt.config.refresh_interval, self._update_view)

    def _update_view(self) -> None:
        snap = self.bt.controller.snapshot()
        if snap is None:
            return
        self._draw(snap)

    def _draw(self, snap: DashboardSnapshot) -> None:
        self.query_one("#dash-title", Static).update(Text(snap.book_title))

        timer = self.query_one("#dash-timer", Static)
        label = TIMER_LABELS[snap.timer_state]
        timer.update(f"{label} {format_clock(snap.elapsed_secs)}")
        for state in TimerState:
            timer.set_class(state is snap.timer_state, state.value)

        self.query_one("#dash-pages", Static).update(
            f"Page {snap.current_page} of {snap.total_pages}"
        )
        self.query_one("#dash-progress", ProgressBar).update(
            progress=snap.progress * 100
        )
        self.query_one("#dash-stats", Static).update(
            f"Total time: {format_total(snap.total_time_secs)}"
            f"  Sessions: {snap.total_sessions}\n"
            f"Pages this session: {snap.pages_read_this_session}\n"
            f"Pages remaining: {snap.pages_remaining}"
        )

    # ── Actions ─────────────────────────────────

    def action_toggle_timer(self) -> None:
        self.bt.controller.toggle_timer()
        self._update_view()

    def action_stop_timer(self) -> None:
        self.bt.controller.stop_timer()
        self._update_view()

    def action_jump_forward(self) -> None:
        self.bt.controller.jump_forward()
        self._update_view()

    def action_jump_back(self) -> None:
        self.bt.controller.jump_back()
        self._update_view()

    def action_next_page(self) -> None:
        self.bt.controller.next_page()
        self._update_view()

    def action_prev_page(self) -> None:
        self.bt.controller.prev_page()
        self._update_view()

    def action_book_select(self) -> None:
        self.bt.controller.back_to_selection()
        self.app.pop_screen()

    async def action_quit_app(self) -> None:
        await self.bt.action_quit()
