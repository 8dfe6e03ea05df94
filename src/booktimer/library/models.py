"""Data models for the reading library and its JSON document shape."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


class LibraryFormatError(ValueError):
    """The library document does not have the expected shape."""


@dataclass(frozen=True)
class ReadingSession:
    book_title: str
    start_page: int
    end_page: int
    duration_secs: int
    timestamp: datetime  # timezone-aware, local offset

    def to_dict(self) -> dict[str, Any]:
        return {
            "book_title": self.book_title,
            "start_page": self.start_page,
            "end_page": self.end_page,
            "duration_secs": self.duration_secs,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> ReadingSession:
        if not isinstance(data, dict):
            raise LibraryFormatError(f"session must be an object, got {data!r}")
        return cls(
            book_title=_require_str(data, "book_title"),
            start_page=_require_count(data, "start_page"),
            end_page=_require_count(data, "end_page"),
            duration_secs=_require_count(data, "duration_secs"),
            timestamp=parse_timestamp(_require(data, "timestamp")),
        )


@dataclass
class BookProgress:
    book_title: str
    total_pages: int
    current_page: int = 0
    sessions: list[ReadingSession] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "book_title": self.book_title,
            "total_pages": self.total_pages,
            "current_page": self.current_page,
            "sessions": [s.to_dict() for s in self.sessions],
        }

    @classmethod
    def from_dict(cls, data: Any) -> BookProgress:
        if not isinstance(data, dict):
            raise LibraryFormatError(f"book must be an object, got {data!r}")
        sessions = _require(data, "sessions")
        if not isinstance(sessions, list):
            raise LibraryFormatError("'sessions' must be an array")
        return cls(
            book_title=_require_str(data, "book_title"),
            total_pages=_require_count(data, "total_pages"),
            current_page=_require_count(data, "current_page"),
            sessions=[ReadingSession.from_dict(s) for s in sessions],
        )


@dataclass
class Library:
    """Ordered books; a book's position is its identity."""

    books: list[BookProgress] = field(default_factory=list)

    def get(self, index: int) -> BookProgress | None:
        if 0 <= index < len(self.books):
            return self.books[index]
        return None

    def to_dict(self) -> dict[str, Any]:
        return {"books": [b.to_dict() for b in self.books]}

    @classmethod
    def from_dict(cls, data: Any) -> Library:
        if not isinstance(data, dict):
            raise LibraryFormatError("library document must be an object")
        books = _require(data, "books")
        if not isinstance(books, list):
            raise LibraryFormatError("'books' must be an array")
        return cls(books=[BookProgress.from_dict(b) for b in books])


def statistics(progress: BookProgress) -> tuple[int, int]:
    """Return ``(total_time_secs, total_sessions)`` for a book."""
    total_time = sum(s.duration_secs for s in progress.sessions)
    return total_time, len(progress.sessions)


# ── Field helpers ──────────────────────────────────────

_FRACTION = re.compile(r"(\.\d{6})\d+")


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 string or epoch seconds into an aware datetime."""
    if isinstance(value, bool):
        raise LibraryFormatError(f"invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value).astimezone()
        except (OverflowError, OSError, ValueError) as e:
            raise LibraryFormatError(f"invalid timestamp: {value!r}") from e
    if not isinstance(value, str):
        raise LibraryFormatError(f"invalid timestamp: {value!r}")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    # fromisoformat() only keeps microseconds
    text = _FRACTION.sub(r"\1", text)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise LibraryFormatError(f"invalid timestamp: {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def _require(data: dict[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise LibraryFormatError(f"missing field '{key}'") from None


def _require_str(data: dict[str, Any], key: str) -> str:
    value = _require(data, key)
    if not isinstance(value, str):
        raise LibraryFormatError(f"'{key}' must be a string")
    return value


def _require_count(data: dict[str, Any], key: str) -> int:
    value = _require(data, key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise LibraryFormatError(f"'{key}' must be a non-negative integer")
    return value
