"""JSON document store for the library, reading progress, and session history.

Every write re-reads the document first and rewrites it in full. Nothing
guards against another process editing the file between that load and the
save; such edits are lost. The tool assumes a single user and process.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from pathlib import Path

from .models import BookProgress, Library, ReadingSession

log = logging.getLogger(__name__)


class LibraryStore:
    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _init_storage(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)

    # ── Whole document ─────────────────────────────────

    def load(self) -> Library:
        """Read the library, or an empty one if missing or unparseable.

        A corrupt document is discarded, not repaired: the next save
        overwrites it with whatever the caller holds.
        """
        self._init_storage()
        if not self._path.exists():
            return Library()

        raw = self._path.read_bytes()
        try:
            data = json.loads(raw.decode("utf-8"))
            library = Library.from_dict(data)
        except (ValueError, RecursionError) as e:
            log.warning("Discarding unreadable library document %s: %s", self._path, e)
            return Library()

        log.debug("Loaded %d books from %s", len(library.books), self._path)
        return library

    def save(self, library: Library) -> None:
        self._init_storage()
        payload = json.dumps(library.to_dict(), indent=2, ensure_ascii=False)

        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.chmod(tmp_name, self._document_mode())
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        log.debug("Saved %d books to %s", len(library.books), self._path)

    def _document_mode(self) -> int:
        # mkstemp creates 0600; keep the existing mode or the umask default
        try:
            return stat.S_IMODE(self._path.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    # ── Books ──────────────────────────────────────────

    def add_book(self, book_title: str, total_pages: int) -> int:
        library = self.load()
        library.books.append(BookProgress(book_title=book_title, total_pages=total_pages))
        index = len(library.books) - 1
        self.save(library)
        log.info("Added book %r (%d pages) at index %d", book_title, total_pages, index)
        return index

    def update_book(self, book_index: int, progress: BookProgress) -> None:
        library = self.load()
        if library.get(book_index) is None:
            return
        library.books[book_index] = progress
        self.save(library)

    # ── Reading Progress ───────────────────────────────

    def commit_session(self, book_index: int, session: ReadingSession) -> None:
        library = self.load()
        book = library.get(book_index)
        if book is None:
            log.debug("Ignoring session for unknown book index %d", book_index)
            return
        book.current_page = session.end_page
        book.sessions.append(session)
        self.save(library)
        log.info(
            "Recorded %ds session for %r (pages %d-%d)",
            session.duration_secs,
            book.book_title,
            session.start_page,
            session.end_page,
        )

    def commit_page(self, book_index: int, current_page: int) -> None:
        library = self.load()
        book = library.get(book_index)
        if book is None:
            log.debug("Ignoring page for unknown book index %d", book_index)
            return
        book.current_page = current_page
        self.save(library)
