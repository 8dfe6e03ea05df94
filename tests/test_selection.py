"""Tests for the book list cursor and new-book form."""

from __future__ import annotations

from booktimer.library.models import BookProgress, Library
from booktimer.selection import BookSelector, InputMode


def _library(count: int) -> Library:
    return Library(
        books=[BookProgress(book_title=f"B{i}", total_pages=10) for i in range(count)]
    )


class TestCursor:
    def test_wraps_forward(self):
        selector = BookSelector()
        library = _library(3)
        for _ in range(3):
            selector.select_next(library)
        assert selector.selected_index == 0

    def test_wraps_backward(self):
        selector = BookSelector()
        selector.select_prev(_library(3))
        assert selector.selected_index == 2

    def test_empty_library(self):
        selector = BookSelector()
        selector.select_next(Library())
        selector.select_prev(Library())
        assert selector.selected_index == 0


class TestNewBookForm:
    def test_title_then_pages(self):
        selector = BookSelector()
        selector.begin_new_book()
        assert selector.input_mode is InputMode.ENTERING_TITLE
        for ch in "Emma":
            selector.type_char(ch)
        assert selector.confirm_title() is True
        assert selector.input_mode is InputMode.ENTERING_PAGES
        for ch in "4x7a4":
            selector.type_char(ch)
        assert selector.new_book_title == "Emma"
        assert selector.new_book_pages == "474"
        assert selector.parsed_pages() == 474

    def test_empty_title_not_confirmed(self):
        selector = BookSelector()
        selector.begin_new_book()
        assert selector.confirm_title() is False
        assert selector.input_mode is InputMode.ENTERING_TITLE

    def test_zero_pages_rejected(self):
        selector = BookSelector()
        selector.begin_new_book()
        selector.type_char("X")
        selector.confirm_title()
        assert selector.parsed_pages() is None
        selector.type_char("0")
        assert selector.parsed_pages() is None

    def test_backspace(self):
        selector = BookSelector()
        selector.begin_new_book()
        selector.type_char("a")
        selector.type_char("b")
        selector.backspace()
        assert selector.new_book_title == "a"
        selector.backspace()
        selector.backspace()
        assert selector.new_book_title == ""

    def test_typing_ignored_in_selection(self):
        selector = BookSelector()
        selector.type_char("q")
        assert selector.new_book_title == ""

    def test_begin_clears_buffers(self):
        selector = BookSelector()
        selector.begin_new_book()
        selector.type_char("Old")
        selector.cancel()
        assert selector.input_mode is InputMode.SELECTION
        selector.begin_new_book()
        assert selector.new_book_title == ""
        assert selector.new_book_pages == ""
