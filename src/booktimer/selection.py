"""Book list cursor and the two-step new-book entry form."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from booktimer.library.models import Library


class InputMode(Enum):
    SELECTION = "selection"
    ENTERING_TITLE = "entering_title"
    ENTERING_PAGES = "entering_pages"


class BookSelector:
    def __init__(self) -> None:
        self.selected_index = 0
        self.input_mode = InputMode.SELECTION
        self.new_book_title = ""
        self.new_book_pages = ""

    def select_next(self, library: Library) -> None:
        if not library.books:
            return
        self.selected_index = (self.selected_index + 1) % len(library.books)

    def select_prev(self, library: Library) -> None:
        if not library.books:
            return
        if self.selected_index <= 0:
            self.selected_index = len(library.books) - 1
        else:
            self.selected_index -= 1

    def begin_new_book(self) -> None:
        self.input_mode = InputMode.ENTERING_TITLE
        self.new_book_title = ""
        self.new_book_pages = ""

    def type_char(self, char: str) -> None:
        if self.input_mode is InputMode.ENTERING_TITLE:
            self.new_book_title += char
        elif self.input_mode is InputMode.ENTERING_PAGES:
            if len(char) == 1 and char in "0123456789":
                self.new_book_pages += char

    def backspace(self) -> None:
        if self.input_mode is InputMode.ENTERING_TITLE:
            self.new_book_title = self.new_book_title[:-1]
        elif self.input_mode is InputMode.ENTERING_PAGES:
            self.new_book_pages = self.new_book_pages[:-1]

    def confirm_title(self) -> bool:
        if self.input_mode is not InputMode.ENTERING_TITLE or not self.new_book_title:
            return False
        self.input_mode = InputMode.ENTERING_PAGES
        return True

    def parsed_pages(self) -> Optional[int]:
        if not self.new_book_pages:
            return None
        pages = int(self.new_book_pages)
        return pages if pages > 0 else None

    def cancel(self) -> None:
        self.input_mode = InputMode.SELECTION

    def finish_new_book(self, book_index: int) -> None:
        self.selected_index = book_index
        self.input_mode = InputMode.SELECTION
