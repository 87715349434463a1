"""Modal dialogs for the history browser."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Static, TextArea


class DeleteEntryScreen(ModalScreen[bool]):
    """Confirm deletion of a history entry."""

    def __init__(self, preview: str) -> None:
        super().__init__()
        self._preview = preview or "(empty entry)"

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Delete entry?", classes="modal-title"),
            Static(self._preview, classes="modal-body"),
            Horizontal(
                Button("Delete", id="delete-confirm", variant="error"),
                Button("Cancel", id="delete-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "delete-confirm":
            self.dismiss(True)
        else:
            self.dismiss(False)


class EntryContentScreen(ModalScreen[None]):
    """Read-only view of an entry's full content."""

    BINDINGS = [("escape", "close", "Close")]

    def __init__(self, entry_id: str, content: str) -> None:
        super().__init__()
        self._entry_id = entry_id
        self._content = content

    def compose(self) -> ComposeResult:
        yield Container(
            Static(f"Entry {self._entry_id}", classes="modal-title"),
            TextArea(self._content, read_only=True, id="content-view"),
            Horizontal(
                Button("Close", id="content-close"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--content",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)
