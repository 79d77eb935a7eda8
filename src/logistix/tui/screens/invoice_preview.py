from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, RichLog, Static

from logistix.models.audit import AuditAction


class InvoicePreviewScreen(ModalScreen):
    """Shows an invoice exactly as it is printed or emailed."""

    BINDINGS = [
        Binding("escape", "go_back", "Retour"),
    ]

    def __init__(self, invoice_id: int) -> None:
        super().__init__()
        self.invoice_id = invoice_id

    def compose(self) -> ComposeResult:
        with Vertical(id="modal-dialog"):
            with Horizontal(id="modal-title-bar"):
                yield Static(f"Facture #{self.invoice_id}", id="header-bar")
                yield Button("✕", id="btn-modal-close")
            yield RichLog(id="invoice-content", wrap=False, markup=False)
            with Horizontal(classes="button-bar"):
                yield Button("✕ Fermer", id="btn-fermer")

    def on_mount(self) -> None:
        from logistix.services.documents import render_invoice
        from logistix.services.exceptions import RecordNotFoundError
        from logistix.services.invoicing import get_invoice
        from logistix.utils.audit import log_action

        log = self.query_one("#invoice-content", RichLog)
        try:
            invoice = get_invoice(self.invoice_id)
        except RecordNotFoundError as e:
            log.write(str(e))
            return
        self.query_one("#header-bar", Static).update(f"Facture {invoice.invoice_number}")
        for line in render_invoice(invoice).splitlines():
            log.write(line)
        log_action(
            AuditAction.VIEW_INVOICE,
            resource_type="invoice",
            resource_id=invoice.id,
            resource_name=invoice.invoice_number,
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id in ("btn-fermer", "btn-modal-close"):
            self.app.pop_screen()

    def action_go_back(self) -> None:
        self.app.pop_screen()
