from __future__ import annotations

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.events import Key
from textual.screen import Screen
from textual.widgets import Button, DataTable, Footer, Label, Select, Static

from logistix.models.invoice import Invoice, InvoiceStatus

STATUS_LABELS = {
    InvoiceStatus.DRAFT: "[yellow]brouillon[/yellow]",
    InvoiceStatus.SENT: "[blue]envoyée[/blue]",
    InvoiceStatus.PAID: "[green]payée[/green]",
}


class DashboardScreen(Screen):
    """Invoice list shown on startup."""

    BINDINGS = [
        Binding("s", "mark_sent", "Envoyée", show=False),
        Binding("p", "mark_paid", "Payée", show=False),
        Binding("r", "refresh", "Rafraîchir"),
        Binding("h", "help", "Aide"),
        Binding("q", "quit", "Quitter"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._all_invoices: list[Invoice] = []

    def compose(self) -> ComposeResult:
        with Horizontal(id="top-bar"):
            yield Static("Logistix · Livraison d'urée", id="app-title")

        with Horizontal(id="info-bar"):
            with Vertical(id="card-pricing", classes="info-card"):
                yield Label("Tarification", classes="card-title")
                yield Label("…", id="pricing-info", classes="card-value")
            with Vertical(id="card-unpaid", classes="info-card"):
                yield Label("Impayées", classes="card-title")
                yield Label("…", id="unpaid-info", classes="card-value")
            with Vertical(id="card-overdue", classes="info-card"):
                yield Label("En retard", classes="card-title")
                yield Label("…", id="overdue-info", classes="card-value")

        with Horizontal(id="filter-bar"):
            yield Static("Factures", id="section-title")
            yield Select(
                [
                    ("Toutes", "toutes"),
                    ("Brouillons", InvoiceStatus.DRAFT.value),
                    ("Envoyées", InvoiceStatus.SENT.value),
                    ("Payées", InvoiceStatus.PAID.value),
                ],
                value="toutes",
                allow_blank=False,
                id="filter-status",
            )

        with Horizontal(id="action-bar"):
            yield Button("▶ Aperçu", id="btn-preview", variant="primary")
            yield Button("✉ Envoyée", id="btn-sent")
            yield Button("✓ Payée", id="btn-paid", variant="success")
            yield Button("↻ Rafraîchir", id="btn-refresh")

        yield DataTable(id="invoice-table", cursor_type="row")

        yield Static(
            "Aucune facture.\n"
            "Les factures apparaissent ici une fois créées à partir d'une livraison.",
            id="empty-state",
        )

        yield Footer()

    def on_mount(self) -> None:
        self._load_pricing()
        self._load_invoices()
        self.query_one("#invoice-table", DataTable).focus()

    def on_key(self, event: Key) -> None:
        table = self.query_one("#invoice-table", DataTable)
        match event.key:
            case "j":
                table.action_cursor_down()
            case "k":
                table.action_cursor_up()
            case "enter":
                self._open_selected()
            case _:
                return
        event.prevent_default()
        event.stop()

    # --- Data loading ---

    @work(thread=True)
    def _load_pricing(self) -> None:
        try:
            from logistix.services.invoicing import default_calculator
            from logistix.utils.formatters import format_money, format_rate

            cfg = default_calculator().config
            text = (
                f"{format_money(cfg.price_per_liter)}/L · "
                f"TPS {format_rate(cfg.gst_rate)} · TVQ {format_rate(cfg.qst_rate)}\n"
                f"Frais {format_money(cfg.service_fee)} sous {cfg.service_fee_threshold} L"
            )
        except Exception as e:
            text = f"erreur - {e}"
        self.app.call_from_thread(self._update_label, "pricing-info", text)

    def _load_invoices(self) -> None:
        from logistix.services.invoicing import list_invoices, overdue_invoices
        from logistix.utils.formatters import format_money

        invoices = sorted(list_invoices(), key=lambda i: (i.invoice_date, i.id), reverse=True)
        self._all_invoices = invoices

        unpaid = [i for i in invoices if i.status != InvoiceStatus.PAID]
        unpaid_total = sum((i.breakdown.total for i in unpaid), start=0)
        self._update_label("unpaid-info", f"{len(unpaid)} · {format_money(unpaid_total)}")
        self._update_label("overdue-info", str(len(overdue_invoices())))
        self._apply_filter()

    def _update_label(self, label_id: str, text: str) -> None:
        self.query_one(f"#{label_id}", Label).update(text)

    # --- Filtering ---

    def _apply_filter(self) -> None:
        value = self.query_one("#filter-status", Select).value
        filtered = self._all_invoices
        if value != "toutes":
            filtered = [i for i in filtered if i.status == value]
        self._populate_table(filtered)

    def _populate_table(self, invoices: list[Invoice]) -> None:
        from logistix.utils.formatters import format_liters, format_money

        table = self.query_one("#invoice-table", DataTable)
        table.clear(columns=True)
        table.add_columns("Numéro", "Date", "Client", "Litres", "Total", "Statut")

        for inv in invoices:
            table.add_row(
                inv.invoice_number,
                inv.invoice_date,
                inv.client_name,
                format_liters(inv.liters_delivered),
                format_money(inv.breakdown.total),
                STATUS_LABELS.get(inv.status, str(inv.status)),
                key=str(inv.id),
            )

        has_rows = table.row_count > 0
        table.display = has_rows
        self.query_one("#empty-state", Static).display = not has_rows

    # --- Event handlers ---

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "filter-status":
            self._apply_filter()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        match event.button.id:
            case "btn-preview":
                self._open_selected()
            case "btn-sent":
                self.action_mark_sent()
            case "btn-paid":
                self.action_mark_paid()
            case "btn-refresh":
                self.action_refresh()

    def _selected_id(self) -> int | None:
        """Return the id of the currently selected invoice, or None if the table is empty."""
        table = self.query_one("#invoice-table", DataTable)
        if table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return int(row_key.value)

    def _open_selected(self) -> None:
        invoice_id = self._selected_id()
        if invoice_id is None:
            return
        from logistix.tui.screens.invoice_preview import InvoicePreviewScreen

        self.app.push_screen(InvoicePreviewScreen(invoice_id))

    def _change_status(self, status: InvoiceStatus, question: str) -> None:
        invoice_id = self._selected_id()
        if invoice_id is None:
            self.notify("Aucune facture sélectionnée", severity="warning", timeout=3)
            return
        from logistix.tui.screens.confirm import ConfirmScreen

        def _on_confirm(confirmed: bool | None) -> None:
            if not confirmed:
                return
            from logistix.services.exceptions import RecordNotFoundError
            from logistix.services.invoicing import set_status

            try:
                invoice = set_status(invoice_id, status)
            except RecordNotFoundError as e:
                # deleted elsewhere (CLI, another TUI) since it was selected
                self.notify(str(e), severity="error", timeout=5)
                self._load_invoices()
                return
            self.notify(f"{invoice.invoice_number}: {status.value}", timeout=2)
            self._load_invoices()

        self.app.push_screen(ConfirmScreen(question), _on_confirm)

    # --- Actions ---

    def action_mark_sent(self) -> None:
        self._change_status(InvoiceStatus.SENT, "Marquer la facture comme envoyée?")

    def action_mark_paid(self) -> None:
        self._change_status(InvoiceStatus.PAID, "Marquer la facture comme payée?")

    def action_refresh(self) -> None:
        self._load_invoices()

    def action_help(self) -> None:
        from logistix.tui.screens.help import HelpScreen

        self.app.push_screen(HelpScreen())

    def action_quit(self) -> None:
        self.app.exit()
