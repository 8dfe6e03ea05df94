"""Turns input events into timer, page, and persistence operations."""

from __future__ import annotations

import logging
import sys
import time
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from booktimer.config import DEFAULT_PAGE_JUMP
from booktimer.library.models import Library
from booktimer.library.storage import LibraryStore
from booktimer.selection import BookSelector, InputMode
from booktimer.session.state import (
    DashboardSnapshot,
    ReadingState,
    Reporter,
    local_now,
)
from booktimer.session.timer import Clock, TimerState

log = logging.getLogger(__name__)


class AppMode(Enum):
    BOOK_SELECTION = "book_selection"
    READING = "reading"


def _stderr_reporter(message: str) -> None:
    print(message, file=sys.stderr)


class ReadingController:
    def __init__(
        self,
        store: LibraryStore,
        page_jump: int = DEFAULT_PAGE_JUMP,
        clock: Clock = time.monotonic,
        now: Callable[[], datetime] = local_now,
        reporter: Optional[Reporter] = None,
    ) -> None:
        self.store = store
        self.page_jump = page_jump
        self._clock = clock
        self._now = now
        self.reporter: Reporter = reporter or _stderr_reporter
        self.mode = AppMode.BOOK_SELECTION
        self.selector = BookSelector()
        self.reading: Optional[ReadingState] = None
        self.library = Library()
        self.reload_library()

    def _report(self, message: str) -> None:
        # The UI replaces self.reporter once it is mounted.
        self.reporter(message)

    def reload_library(self) -> Library:
        try:
            self.library = self.store.load()
        except OSError as e:
            log.error("Error loading library: %s", e)
            self._report(f"Error loading library: {e}")
        return self.library

    # ── Book selection ─────────────────────────────────

    def select_next(self) -> None:
        self.selector.select_next(self.library)

    def select_prev(self) -> None:
        self.selector.select_prev(self.library)

    def open_selected(self) -> bool:
        index = self.selector.selected_index
        book = self.library.get(index)
        if book is None:
            return False
        if self.reading is None:
            self.reading = ReadingState(
                self.store,
                index,
                book,
                clock=self._clock,
                now=self._now,
                reporter=self._report,
            )
        else:
            self.reading.load_book(index, book)
        self.mode = AppMode.READING
        log.info("Opened %r (index %d)", book.book_title, index)
        return True

    def begin_new_book(self) -> None:
        self.selector.begin_new_book()

    def type_char(self, char: str) -> None:
        self.selector.type_char(char)

    def backspace(self) -> None:
        self.selector.backspace()

    def cancel_entry(self) -> None:
        self.selector.cancel()

    def confirm_entry(self) -> bool:
        """Enter pressed while typing. Returns True once a book was added."""
        if self.selector.input_mode is InputMode.ENTERING_TITLE:
            self.selector.confirm_title()
            return False
        if self.selector.input_mode is InputMode.ENTERING_PAGES:
            return self.confirm_pages()
        return False

    def confirm_pages(self) -> bool:
        pages = self.selector.parsed_pages()
        if pages is None:
            return False
        try:
            index = self.store.add_book(self.selector.new_book_title, pages)
        except OSError as e:
            log.error("Error adding book: %s", e)
            self._report(f"Error adding book: {e}")
            return False
        self.reload_library()
        self.selector.finish_new_book(index)
        return True

    # ── Reading ────────────────────────────────────────

    def toggle_timer(self) -> None:
        if self.reading:
            self.reading.toggle()

    def stop_timer(self) -> None:
        if self.reading:
            self.reading.stop()

    def next_page(self) -> None:
        self._move(lambda r: r.increment_page())

    def prev_page(self) -> None:
        self._move(lambda r: r.decrement_page())

    def jump_forward(self) -> None:
        self._move(lambda r: r.add_pages(self.page_jump))

    def jump_back(self) -> None:
        self._move(lambda r: r.add_pages(-self.page_jump))

    def _move(self, step: Callable[[ReadingState], None]) -> None:
        if self.reading is None:
            return
        step(self.reading)
        self.reading.save_page()

    def _close_session(self) -> None:
        if self.reading is None:
            return
        if self.reading.timer_state is not TimerState.STOPPED:
            self.reading.stop()
        else:
            self.reading.save_page()

    def back_to_selection(self) -> None:
        self._close_session()
        self.reload_library()
        self.mode = AppMode.BOOK_SELECTION

    def quit(self) -> None:
        """Best-effort final save before the process exits."""
        if self.mode is AppMode.READING:
            self._close_session()

    def snapshot(self) -> Optional[DashboardSnapshot]:
        if self.mode is not AppMode.READING or self.reading is None:
            return None
        return self.reading.snapshot()
