from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Static

from booktimer.selection import InputMode

if TYPE_CHECKING:
    from booktimer.app import BooktimerApp

CONTROLS = {
    InputMode.SELECTION: "↑/↓: Select | Enter: Open Book | N: New Book | Q: Quit",
    InputMode.ENTERING_TITLE: "Type title, then Enter | Esc: Cancel",
    InputMode.ENTERING_PAGES: "Type number of pages, then Enter | Esc: Cancel",
}
EMPTY_CONTROLS = "N: New Book | Q: Quit"


class LibraryScreen(Screen):
    """Book list plus the new-book form. Keys go straight to the controller."""

    @property
    def bt(self) -> BooktimerApp:
        return self.app  # type: ignore[return-value]

    def compose(self) -> ComposeResult:
        yield Static("Book Library", id="library-header")
        yield Static("", id="book-list")
        with Vertical(id="new-book-panel"):
            yield Static("", id="entry-title", classes="entry-line")
            yield Static("", id="entry-pages", classes="entry-line")
        yield Static("", id="library-controls")

    def on_mount(self) -> None:
        self.query_one("#book-list", Static).border_title = "Books"
        self.query_one("#new-book-panel").border_title = "Add New Book"
        self._update_view()

    def on_screen_resume(self) -> None:
        self._update_view()

    def _update_view(self) -> None:
        controller = self.bt.controller
        library = controller.library
        selector = controller.selector

        lines = Text()
        for i, book in enumerate(library.books):
            pct = 0
            if book.total_pages > 0:
                pct = int(book.current_page / book.total_pages * 100)
            style = "bold yellow" if i == selector.selected_index else ""
            if i:
                lines.append("\n")
            lines.append(
                f"{book.book_title} - {book.current_page}/{book.total_pages} pages ({pct}%)",
                style=style,
            )
        self.query_one("#book-list", Static).update(lines)

        title_line = self.query_one("#entry-title", Static)
        pages_line = self.query_one("#entry-pages", Static)
        title_line.update(Text(f"Title: {selector.new_book_title}"))
        pages_line.update(Text(f"Total Pages: {selector.new_book_pages}"))
        title_line.set_class(selector.input_mode is InputMode.ENTERING_TITLE, "active")
        pages_line.set_class(selector.input_mode is InputMode.ENTERING_PAGES, "active")

        controls = CONTROLS[selector.input_mode]
        if selector.input_mode is InputMode.SELECTION and not library.books:
            controls = EMPTY_CONTROLS
        self.query_one("#library-controls", Static).update(controls)

    async def on_key(self, event: events.Key) -> None:
        controller = self.bt.controller
        mode = controller.selector.input_mode

        if mode is InputMode.SELECTION:
            if event.key == "up":
                controller.select_prev()
            elif event.key == "down":
                controller.select_next()
            elif event.key == "enter":
                if controller.open_selected():
                    self.bt.show_dashboard()
            elif event.key in ("n", "N"):
                controller.begin_new_book()
            elif event.key in ("q", "Q"):
                event.stop()
                await self.bt.action_quit()
                return
            else:
                return
        elif event.key == "enter":
            if controller.confirm_entry():
                book = controller.library.get(controller.selector.selected_index)
                if book:
                    self.notify(f"Added: {book.book_title}")
        elif event.key == "escape":
            controller.cancel_entry()
        elif event.key == "backspace":
            controller.backspace()
        elif event.is_printable and event.character:
            controller.type_char(event.character)
        else:
            return

        event.stop()
        event.prevent_default()
        self._update_view()
