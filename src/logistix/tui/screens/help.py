from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, RichLog, Static

from logistix.config import OVERDUE_DAYS


class HelpScreen(ModalScreen):
    """Keyboard shortcuts and pricing rules."""

    BINDINGS = [
        Binding("escape", "go_back", "Retour"),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(id="modal-dialog"):
            with Horizontal(id="modal-title-bar"):
                yield Static("Aide", id="header-bar")
                yield Button("✕", id="btn-modal-close")
            yield RichLog(id="help-content", wrap=True, markup=True)
            with Horizontal(classes="button-bar"):
                yield Button("✕ Fermer", id="btn-fermer")

    def on_mount(self) -> None:
        log = self.query_one("#help-content", RichLog)

        log.write("[bold]Logistix[/bold]")
        log.write("")
        log.write("Suivi des factures de livraison d'urée (TPS/TVQ).")
        log.write("")
        log.write("[bold]Raccourcis clavier[/bold]")
        log.write("")
        log.write("  [bold cyan]enter[/bold cyan]  Aperçu de la facture sélectionnée")
        log.write("  [bold cyan]s[/bold cyan]      Marquer comme envoyée")
        log.write("  [bold cyan]p[/bold cyan]      Marquer comme payée")
        log.write("  [bold cyan]r[/bold cyan]      Rafraîchir la liste")
        log.write("  [bold cyan]j / k[/bold cyan]  Ligne suivante / précédente")
        log.write("  [bold cyan]h[/bold cyan]      Cette aide")
        log.write("  [bold cyan]q[/bold cyan]      Quitter")
        log.write("")
        log.write("[bold]Tarification[/bold]")
        log.write("")
        log.write(
            "Frais de service fixes sous le seuil de volume, prix au litre, puis "
            "TPS et TVQ calculées chacune sur le sous-total arrondi au cent."
        )
        log.write("")
        log.write(
            f"Les factures non payées depuis plus de [bold yellow]{OVERDUE_DAYS} jours[/bold yellow] "
            "sont signalées en retard."
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id in ("btn-fermer", "btn-modal-close"):
            self.app.pop_screen()

    def action_go_back(self) -> None:
        self.app.pop_screen()
