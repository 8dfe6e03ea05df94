"""Tests for the JSON library store."""

from __future__ import annotations

import json
import os
import stat
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from booktimer.library.models import BookProgress, Library, ReadingSession
from booktimer.library.storage import LibraryStore

STAMP = datetime(2024, 1, 2, 19, 45, 12, tzinfo=timezone(timedelta(hours=-5)))


def _session(title: str = "Book", start: int = 0, end: int = 10, secs: int = 300):
    return ReadingSession(
        book_title=title,
        start_page=start,
        end_page=end,
        duration_secs=secs,
        timestamp=STAMP,
    )


def _library_of(sizes: list[int]) -> Library:
    """One book per entry, each with that many sessions."""
    books = []
    for i, count in enumerate(sizes):
        sessions = [_session(f"Book {i}", n, n + 3, 60 * (n + 1)) for n in range(count)]
        books.append(
            BookProgress(
                book_title=f"Book {i}",
                total_pages=100 + i,
                current_page=3 * count,
                sessions=sessions,
            )
        )
    return Library(books=books)


class TestLoadSave:
    def test_missing_document_is_empty(self, store: LibraryStore):
        assert store.load() == Library()

    def test_load_creates_directory(self, store: LibraryStore, library_path: Path):
        assert not library_path.parent.exists()
        store.load()
        assert library_path.parent.is_dir()
        assert not library_path.exists()

    @pytest.mark.parametrize(
        "sizes",
        [[], [0], [1], [5], [0, 1, 7]],
        ids=["no-books", "one-empty", "one-session", "many-sessions", "mixed"],
    )
    def test_round_trip(self, store: LibraryStore, sizes: list[int]):
        library = _library_of(sizes)
        store.save(library)
        assert store.load() == library

    def test_document_shape(self, store: LibraryStore, library_path: Path):
        store.save(_library_of([1]))
        data = json.loads(library_path.read_text(encoding="utf-8"))
        assert list(data) == ["books"]
        book = data["books"][0]
        assert set(book) == {"book_title", "total_pages", "current_page", "sessions"}
        assert set(book["sessions"][0]) == {
            "book_title",
            "start_page",
            "end_page",
            "duration_secs",
            "timestamp",
        }

    def test_loads_existing_document(self, store: LibraryStore, library_path: Path):
        library_path.parent.mkdir(parents=True)
        library_path.write_text(
            json.dumps(
                {
                    "books": [
                        {
                            "book_title": "Kafka on the Shore",
                            "total_pages": 467,
                            "current_page": 52,
                            "sessions": [
                                {
                                    "book_title": "Kafka on the Shore",
                                    "start_page": 30,
                                    "end_page": 52,
                                    "duration_secs": 1843,
                                    "timestamp": "2024-11-03T22:10:41.518204137+01:00",
                                }
                            ],
                        }
                    ]
                }
            ),
            encoding="utf-8",
        )
        library = store.load()
        book = library.books[0]
        assert book.current_page == 52
        assert book.sessions[0].duration_secs == 1843
        assert book.sessions[0].timestamp.utcoffset() == timedelta(hours=1)

    def test_non_ascii_titles(self, store: LibraryStore, library_path: Path):
        store.save(Library(books=[BookProgress(book_title="百年孤独", total_pages=360)]))
        assert "百年孤独" in library_path.read_text(encoding="utf-8")
        assert store.load().books[0].book_title == "百年孤独"

    def test_save_leaves_no_temp_files(self, store: LibraryStore, library_path: Path):
        store.save(_library_of([2]))
        store.save(_library_of([3]))
        assert os.listdir(library_path.parent) == ["library.json"]

    def test_save_keeps_document_mode(self, store: LibraryStore, library_path: Path):
        store.save(_library_of([1]))
        os.chmod(library_path, 0o640)
        store.add_book("Another", 12)
        assert stat.S_IMODE(library_path.stat().st_mode) == 0o640

    def test_new_document_uses_umask(self, store: LibraryStore, library_path: Path):
        old_umask = os.umask(0o022)
        try:
            store.save(_library_of([0]))
        finally:
            os.umask(old_umask)
        assert stat.S_IMODE(library_path.stat().st_mode) == 0o644


class TestCorruptDocument:
    """A damaged document is replaced by an empty library: its data is lost."""

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            "",
            '{"books": "nope"}',
            '{"books": [{"book_title": "A"}]}',
            '{"books": [{"book_title": "A", "total_pages": -4, "current_page": 0, "sessions": []}]}',
            "[]",
            pytest.param(
                '{"books": [{"book_title": "A", "total_pages": ' + "9" * 5000 + "}]}",
                id="oversized-integer",
            ),
            pytest.param("[" * 100_000 + "]" * 100_000, id="deeply-nested"),
        ],
    )
    def test_load_returns_empty(self, store: LibraryStore, library_path: Path, content: str):
        library_path.parent.mkdir(parents=True)
        library_path.write_text(content, encoding="utf-8")
        assert store.load() == Library()

    def test_invalid_utf8(self, store: LibraryStore, library_path: Path):
        library_path.parent.mkdir(parents=True)
        library_path.write_bytes(b'{"books": ["\xff\xfe"]}')
        assert store.load() == Library()

    def test_next_write_discards_old_data(self, store: LibraryStore, library_path: Path):
        library_path.parent.mkdir(parents=True)
        library_path.write_text('{"books": [{"book_title": "Lost"', encoding="utf-8")
        store.add_book("Fresh", 10)
        titles = [b.book_title for b in store.load().books]
        assert titles == ["Fresh"]

    def test_logs_warning(self, store: LibraryStore, library_path: Path, caplog):
        library_path.parent.mkdir(parents=True)
        library_path.write_text("garbage", encoding="utf-8")
        with caplog.at_level("WARNING", logger="booktimer"):
            store.load()
        assert "Discarding unreadable library document" in caplog.text


class TestBooks:
    def test_add_book_returns_index(self, store: LibraryStore):
        assert store.add_book("First", 120) == 0
        assert store.add_book("Second", 80) == 1
        library = store.load()
        assert library.books[1] == BookProgress(book_title="Second", total_pages=80)

    def test_update_book(self, store: LibraryStore):
        store.add_book("First", 120)
        replacement = BookProgress(
            book_title="First", total_pages=120, current_page=7, sessions=[_session()]
        )
        store.update_book(0, replacement)
        assert store.load().books[0] == replacement

    def test_update_book_invalid_index(self, store: LibraryStore, library_path: Path):
        store.add_book("First", 120)
        before = library_path.read_text(encoding="utf-8")
        store.update_book(3, BookProgress(book_title="X", total_pages=1))
        assert library_path.read_text(encoding="utf-8") == before


class TestCommits:
    def test_commit_session(self, store: LibraryStore):
        store.add_book("First", 120)
        store.add_book("Second", 80)
        session = _session("Second", 0, 15, 600)
        store.commit_session(1, session)

        library = store.load()
        assert library.books[1].current_page == 15
        assert library.books[1].sessions == [session]
        assert library.books[0].sessions == []

    def test_commit_session_appends(self, store: LibraryStore):
        store.add_book("First", 120)
        store.commit_session(0, _session("First", 0, 10, 100))
        store.commit_session(0, _session("First", 10, 25, 200))
        book = store.load().books[0]
        assert [s.end_page for s in book.sessions] == [10, 25]
        assert book.current_page == 25

    def test_commit_session_invalid_index(self, store: LibraryStore):
        store.add_book("First", 120)
        store.commit_session(5, _session())
        assert store.load().books[0].sessions == []

    def test_commit_page(self, store: LibraryStore):
        store.add_book("First", 120)
        store.commit_page(0, 33)
        book = store.load().books[0]
        assert book.current_page == 33
        assert book.sessions == []

    def test_commit_page_invalid_index(self, store: LibraryStore):
        store.commit_page(0, 33)
        assert store.load() == Library()

    def test_write_failure_raises(self, store: LibraryStore, monkeypatch):
        store.add_book("First", 120)

        def broken_replace(src, dst):
            raise PermissionError("read-only filesystem")

        monkeypatch.setattr(os, "replace", broken_replace)
        with pytest.raises(OSError):
            store.commit_page(0, 40)
        monkeypatch.undo()
        assert store.load().books[0].current_page == 0
        assert os.listdir(store.path.parent) == ["library.json"]
