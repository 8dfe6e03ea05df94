"""Textual CSS themes for booktimer."""

APP_CSS = """
/* ── Global ────────────────────────────────── */
Screen {
    background: $surface;
}

/* ── Library Screen ────────────────────────── */
#library-header {
    dock: top;
    height: 3;
    padding: 1 2;
    background: $primary;
    color: $text;
    text-style: bold;
    text-align: center;
}

#book-list {
    height: 1fr;
    padding: 1 2;
    border: solid $primary;
    border-title-color: $text;
}

#new-book-panel {
    height: 6;
    padding: 1 2;
    border: solid $primary;
}

.entry-line {
    height: 1;
}

.entry-line.active {
    color: $warning;
    text-style: bold;
}

#library-controls {
    dock: bottom;
    height: 3;
    padding: 1 2;
    color: $accent;
    text-align: center;
}

/* ── Dashboard Screen ──────────────────────── */
#dashboard-body {
    height: 1fr;
    padding: 1 2;
}

.dash-panel {
    height: 3;
    border: solid $primary;
    text-align: center;
    content-align: center middle;
}

#dash-title {
    color: $accent;
    text-style: bold;
}

#dash-timer {
    text-style: bold;
}

#dash-timer.running {
    color: $success;
}

#dash-timer.paused {
    color: $warning;
}

#dash-timer.stopped {
    color: $error;
}

#dash-completion {
    height: 3;
    border: solid $primary;
    padding: 0 2;
}

#dash-completion Bar {
    width: 1fr;
}

#dash-stats {
    height: 1fr;
    min-height: 5;
    border: solid $primary;
    padding: 0 2;
    text-align: center;
}
"""
