"""Booktimer - terminal reading timer and progress tracker."""

from __future__ import annotations

import logging

from textual.app import App

from booktimer.config import AppConfig, load_config
from booktimer.controller import ReadingController
from booktimer.library.storage import LibraryStore
from booktimer.ui.screens.dashboard_screen import DashboardScreen
from booktimer.ui.screens.library_screen import LibraryScreen
from booktimer.ui.themes import APP_CSS


class BooktimerApp(App):
    """Times reading sessions and tracks page progress per book."""

    TITLE = "Booktimer"
    CSS = APP_CSS

    def __init__(self, config: AppConfig | None = None) -> None:
        super().__init__()
        self.config = config or load_config()
        self.store = LibraryStore(self.config.library_path)
        self.controller = ReadingController(
            self.store, page_jump=self.config.page_jump
        )

    def on_mount(self) -> None:
        self.controller.reporter = self._report_error
        self.push_screen(LibraryScreen())

    def _report_error(self, message: str) -> None:
        self.notify(message, severity="error")

    def show_dashboard(self) -> None:
        """Switch to the reading dashboard. Called from LibraryScreen."""
        self.push_screen(DashboardScreen())

    async def action_quit(self) -> None:
        self.controller.quit()
        self.exit()


def _setup_logging(config: AppConfig) -> None:
    handler = logging.FileHandler(config.log_path, encoding="utf-8")
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    root = logging.getLogger("booktimer")
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)


def main() -> None:
    config = load_config()
    _setup_logging(config)

    app = BooktimerApp(config=config)
    app.run()


if __name__ == "__main__":
    main()
