"""Working state for the book being read: timer, page position, totals."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from booktimer.library.models import BookProgress, ReadingSession, statistics
from booktimer.library.storage import LibraryStore
from booktimer.session.timer import Clock, SessionTimer, TimerState

log = logging.getLogger(__name__)

Reporter = Callable[[str], None]


def local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the dashboard needs to draw one frame."""

    book_title: str
    timer_state: TimerState
    elapsed_secs: float
    current_page: int
    total_pages: int
    progress: float
    total_time_secs: int
    total_sessions: int
    pages_read_this_session: int

    @property
    def pages_remaining(self) -> int:
        return max(0, self.total_pages - self.current_page)


class ReadingState:
    def __init__(
        self,
        store: LibraryStore,
        book_index: int,
        progress: BookProgress,
        clock: Clock = time.monotonic,
        now: Callable[[], datetime] = local_now,
        reporter: Optional[Reporter] = None,
    ) -> None:
        self._store = store
        self._now = now
        self._reporter = reporter
        self.timer = SessionTimer(clock)
        self.book_index = book_index
        self.book_title = ""
        self.total_pages = 0
        self.current_page = 0
        self.session_start_page = 0
        self.total_time_secs = 0
        self.total_sessions = 0
        self.load_book(book_index, progress)

    @property
    def timer_state(self) -> TimerState:
        return self.timer.state

    def elapsed(self) -> float:
        return self.timer.elapsed()

    def load_book(self, book_index: int, progress: BookProgress) -> None:
        """Mirror another book. Any open session is dropped, not saved."""
        self.book_index = book_index
        self.book_title = progress.book_title
        self.total_pages = progress.total_pages
        self.current_page = progress.current_page
        self.session_start_page = self.current_page
        self.total_time_secs, self.total_sessions = statistics(progress)
        self.timer.reset()

    # ── Timer ──────────────────────────────────────────

    def start(self) -> None:
        if self.timer.start():
            self.session_start_page = self.current_page

    def pause(self) -> None:
        self.timer.pause()

    def toggle(self) -> None:
        if self.timer_state is TimerState.RUNNING:
            self.pause()
        else:
            self.start()

    def stop(self) -> Optional[ReadingSession]:
        """End the session and persist it.

        Returns the recorded session, or None when no time was accumulated
        (only the page is saved) or when the commit failed.
        """
        accumulated = self.timer.finish()
        recorded: Optional[ReadingSession] = None

        if accumulated > 0:
            session = ReadingSession(
                book_title=self.book_title,
                start_page=self.session_start_page,
                end_page=self.current_page,
                duration_secs=int(accumulated),
                timestamp=self._now(),
            )
            try:
                self._store.commit_session(self.book_index, session)
            except OSError as e:
                self._report(f"Error saving session: {e}")
            else:
                self.total_time_secs += session.duration_secs
                self.total_sessions += 1
                recorded = session
        else:
            self.save_page()

        self.timer.reset()
        self.session_start_page = self.current_page
        return recorded

    def save_page(self) -> bool:
        try:
            self._store.commit_page(self.book_index, self.current_page)
        except OSError as e:
            self._report(f"Error saving current page: {e}")
            return False
        return True

    def _report(self, message: str) -> None:
        log.error(message)
        if self._reporter:
            self._reporter(message)

    # ── Pages ──────────────────────────────────────────

    def increment_page(self) -> None:
        if self.current_page < self.total_pages:
            self.current_page += 1

    def decrement_page(self) -> None:
        if self.current_page > 0:
            self.current_page -= 1

    def add_pages(self, delta: int) -> None:
        self.current_page = min(max(self.current_page + delta, 0), self.total_pages)

    def progress(self) -> float:
        if self.total_pages == 0:
            return 0.0
        return min(self.current_page / self.total_pages, 1.0)

    def pages_read_this_session(self) -> int:
        return self.current_page - self.session_start_page

    def snapshot(self) -> DashboardSnapshot:
        return DashboardSnapshot(
            book_title=self.book_title,
            timer_state=self.timer_state,
            elapsed_secs=self.elapsed(),
            current_page=self.current_page,
            total_pages=self.total_pages,
            progress=self.progress(),
            total_time_secs=self.total_time_secs,
            total_sessions=self.total_sessions,
            pages_read_this_session=self.pages_read_this_session(),
        )
