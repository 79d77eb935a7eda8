from __future__ import annotations

from textual.app import App
from textual.binding import Binding


class LogistixApp(App):
    """Logistix TUI application."""

    CSS_PATH = "app.tcss"
    TITLE = "Logistix"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("q", "quit", "Quitter", priority=True),
    ]

    def on_mount(self) -> None:
        from logistix.tui.screens.dashboard import DashboardScreen

        self.push_screen(DashboardScreen())
