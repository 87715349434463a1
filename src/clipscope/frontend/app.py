"""Main Textual app for browsing and searching cliphist history."""

from __future__ import annotations

from typing import Any, Optional

from rich.text import Text
from textual import on, work
from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.timer import Timer
from textual.widgets import DataTable, Footer, Input, Static

from clipscope.adapters.commands import CommandResult, HistoryCommands

from .constants import ACCENT, PREVIEW_COLUMN_WIDTH, TYPE_BADGES
from .modals import DeleteEntryScreen, EntryContentScreen
from .state import HistoryViewState


class ClipscopeApp(App):
    """History browser: search box, entry table, and status line.

    Every store call runs in a thread worker. Search input is debounced and
    stale responses are dropped by request sequence number, so a slow
    earlier search never overwrites a newer one.
    """

    CSS_PATH = "app.tcss"

    BINDINGS = [
        ("ctrl+r", "reload", "Reload"),
        ("ctrl+d", "delete_entry", "Delete"),
        ("delete", "delete_entry", "Delete"),
        ("ctrl+o", "show_entry", "View"),
        ("escape", "clear_search", "Clear"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, commands: HistoryCommands, debounce_ms: int = 150, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.commands = commands
        self.view_state = HistoryViewState()
        self._debounce = max(debounce_ms, 0) / 1000
        self._search_timer: Optional[Timer] = None

    def compose(self) -> ComposeResult:
        with Horizontal(id="header"):
            yield Static(self._title_text(), id="title")
            yield Static("", id="header-status")
        yield Input(placeholder="Search clipboard history", id="search")
        yield DataTable(id="history-table", cursor_type="row")
        yield Static("", id="status")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#history-table", DataTable)
        table.add_column("id", key="id", width=8)
        table.add_column("type", key="type", width=5)
        table.add_column("preview", key="preview", width=PREVIEW_COLUMN_WIDTH)
        table.zebra_stripes = True
        self._check_available()
        self._request_listing("")

    @on(Input.Changed, "#search")
    def _on_search_changed(self, event: Input.Changed) -> None:
        if self._search_timer is not None:
            self._search_timer.stop()
        query = event.value
        self._search_timer = self.set_timer(self._debounce, lambda: self._request_listing(query))

    @on(Input.Submitted, "#search")
    def _on_search_submitted(self) -> None:
        self.query_one("#history-table", DataTable).focus()

    @on(DataTable.RowSelected, "#history-table")
    def _on_row_selected(self, event: DataTable.RowSelected) -> None:
        entry_id = event.row_key.value
        if entry_id:
            self._copy(entry_id)

    def action_reload(self) -> None:
        self._request_listing(self.view_state.query)

    def action_clear_search(self) -> None:
        search = self.query_one("#search", Input)
        if search.value:
            search.value = ""
        else:
            self.exit()

    def action_delete_entry(self) -> None:
        entry = self._selected_entry()
        if entry is None:
            return

        def _confirmed(confirmed: Optional[bool]) -> None:
            if confirmed:
                self._delete(entry["id"])

        self.push_screen(DeleteEntryScreen(entry["preview"]), _confirmed)

    def action_show_entry(self) -> None:
        entry = self._selected_entry()
        if entry is not None:
            self._show(entry["id"])

    def _request_listing(self, query: str) -> None:
        self.view_state.query = query
        self._load(self.view_state.next_request(), query)

    @work(thread=True, exclusive=True, group="history")
    def _load(self, request_id: int, query: str) -> None:
        result = self.commands.search_history(query)
        self.call_from_thread(self._apply_listing, request_id, result)

    @work(thread=True, group="availability")
    def _check_available(self) -> None:
        result = self.commands.check_available()
        self.call_from_thread(self._apply_availability, bool(result.data))

    @work(thread=True, group="actions")
    def _copy(self, entry_id: str) -> None:
        result = self.commands.copy_entry(entry_id)
        self.call_from_thread(self._apply_action, result, f"copied entry {entry_id}")

    @work(thread=True, group="actions")
    def _delete(self, entry_id: str) -> None:
        result = self.commands.delete_entry(entry_id)
        self.call_from_thread(self._apply_action, result, f"deleted entry {entry_id}")
        if result.ok:
            self.call_from_thread(self.action_reload)

    @work(thread=True, group="actions")
    def _show(self, entry_id: str) -> None:
        result = self.commands.get_entry_content(entry_id)
        if result.ok:
            self.call_from_thread(self.push_screen, EntryContentScreen(entry_id, result.data))
        else:
            self.call_from_thread(self._apply_action, result, "")

    def _apply_listing(self, request_id: int, result: CommandResult) -> None:
        if not self.view_state.is_current(request_id):
            return
        if not result.ok:
            # Keep the current table; only surface the message.
            self._set_status(result.error.message if result.error else "request failed", error=True)
            return
        self.view_state.entries = list(result.data)
        table = self.query_one("#history-table", DataTable)
        table.clear()
        for entry in self.view_state.entries:
            table.add_row(
                entry["id"],
                TYPE_BADGES.get(entry["content_type"], entry["content_type"]),
                entry["preview"],
                key=entry["id"],
            )
        label = "entries" if not self.view_state.query.strip() else "matches"
        self._set_status(f"{len(self.view_state.entries)} {label}")

    def _apply_availability(self, available: bool) -> None:
        status = self.query_one("#header-status", Static)
        status.update("cliphist: ready" if available else "cliphist: not installed")

    def _apply_action(self, result: CommandResult, success_message: str) -> None:
        if result.ok:
            self._set_status(success_message)
            return
        message = result.error.message if result.error else "operation failed"
        self._set_status(message, error=True)

    def _selected_entry(self) -> Optional[dict[str, Any]]:
        table = self.query_one("#history-table", DataTable)
        if not self.view_state.entries or table.cursor_row < 0:
            return None
        if table.cursor_row >= len(self.view_state.entries):
            return None
        return self.view_state.entries[table.cursor_row]

    def _set_status(self, message: str, error: bool = False) -> None:
        status = self.query_one("#status", Static)
        status.set_class(error, "status-error")
        status.update(message)

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("CLIP", ACCENT),
            ("SCOPE > History", "bold"),
        )
