from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no dialog shown before an invoice changes status."""

    DEFAULT_CSS = """
    #confirm-dialog {
        width: 56;
        height: auto;
        background: $surface;
        border: thick $warning;
        padding: 1 2;
    }
    #confirm-dialog .button-bar Button {
        margin-left: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Annuler"),
        Binding("y", "confirm", show=False),
    ]

    def __init__(self, message: str, confirm_label: str = "Confirmer") -> None:
        super().__init__()
        self._message = message
        self._confirm_label = confirm_label

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog"):
            yield Static(self._message, id="confirm-message")
            with Horizontal(classes="button-bar"):
                yield Button("Annuler", id="btn-cancel")
                yield Button(self._confirm_label, id="btn-confirm", variant="success")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "btn-confirm")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
