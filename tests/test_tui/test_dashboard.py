from __future__ import annotations

import pytest

from logistix.models.invoice import InvoiceStatus
from logistix.tui.app import LogistixApp
from logistix.tui.screens.dashboard import DashboardScreen


def _label_text(app, selector: str) -> str:
    return app.screen.query_one(selector).render().plain


@pytest.mark.asyncio
async def test_dashboard_empty_state(mock_config):
    from textual.widgets import DataTable, Static

    app = LogistixApp()
    async with app.run_test() as pilot:
        await pilot.pause()
        table = app.screen.query_one("#invoice-table", DataTable)
        assert table.row_count == 0
        assert table.display is False
        assert app.screen.query_one("#empty-state", Static).display is True


@pytest.mark.asyncio
async def test_dashboard_loads_pricing(mock_config):
    app = LogistixApp()
    async with app.run_test() as pilot:
        await app.workers.wait_for_complete()
        await pilot.pause()
        text = _label_text(app, "#pricing-info")
        assert "2.00$/L" in text
        assert "TVQ 9.975%" in text


@pytest.mark.asyncio
async def test_dashboard_lists_invoices_newest_first(invoices):
    from textual.widgets import DataTable

    recent, old = invoices
    app = LogistixApp()
    async with app.run_test() as pilot:
        await pilot.pause()
        table = app.screen.query_one("#invoice-table", DataTable)
        assert table.row_count == 2
        assert table.get_row_at(0)[0] == recent.invoice_number
        assert table.get_row_at(1)[0] == old.invoice_number
        assert table.get_row_at(0)[4] == "287.44$"


@pytest.mark.asyncio
async def test_dashboard_summary_cards(invoices):
    app = LogistixApp()
    async with app.run_test() as pilot:
        await pilot.pause()
        assert _label_text(app, "#unpaid-info") == "2 · 574.88$"
        assert _label_text(app, "#overdue-info") == "1"


@pytest.mark.asyncio
async def test_dashboard_vim_j_k_navigation(invoices):
    from textual.widgets import DataTable

    app = LogistixApp()
    async with app.run_test() as pilot:
        await pilot.pause()
        table = app.screen.query_one("#invoice-table", DataTable)
        initial_row = table.cursor_coordinate.row
        await pilot.press("j")
        assert table.cursor_coordinate.row == initial_row + 1
        await pilot.press("k")
        assert table.cursor_coordinate.row == initial_row


@pytest.mark.asyncio
async def test_dashboard_enter_opens_preview(invoices):
    from logistix.tui.screens.invoice_preview import InvoicePreviewScreen

    recent, _old = invoices
    app = LogistixApp()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("enter")
        assert isinstance(app.screen, InvoicePreviewScreen)
        assert app.screen.invoice_id == recent.id


@pytest.mark.asyncio
async def test_dashboard_filter_by_status(invoices):
    from textual.widgets import DataTable, Select

    app = LogistixApp()
    async with app.run_test() as pilot:
        await pilot.pause()
        app.screen.query_one("#filter-status", Select).value = InvoiceStatus.PAID.value
        await pilot.pause()
        table = app.screen.query_one("#invoice-table", DataTable)
        assert table.row_count == 0

        app.screen.query_one("#filter-status", Select).value = InvoiceStatus.DRAFT.value
        await pilot.pause()
        assert table.row_count == 2


@pytest.mark.asyncio
async def test_dashboard_mark_paid_confirmed(invoices):
    from logistix.services.invoicing import get_invoice
    from logistix.tui.screens.confirm import ConfirmScreen

    recent, _old = invoices
    app = LogistixApp()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("p")
        assert isinstance(app.screen, ConfirmScreen)
        await pilot.press("y")
        await pilot.pause()
        assert isinstance(app.screen, DashboardScreen)
        assert get_invoice(recent.id).status is InvoiceStatus.PAID
        assert _label_text(app, "#unpaid-info") == "1 · 287.44$"


@pytest.mark.asyncio
async def test_dashboard_mark_sent_cancelled(invoices):
    from logistix.services.invoicing import get_invoice

    recent, _old = invoices
    app = LogistixApp()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("s")
        await pilot.press("escape")
        await pilot.pause()
        assert isinstance(app.screen, DashboardScreen)
        assert get_invoice(recent.id).status is InvoiceStatus.DRAFT


@pytest.mark.asyncio
async def test_dashboard_sent_button(invoices):
    from textual.widgets import Button

    from logistix.services.invoicing import get_invoice

    recent, _old = invoices
    app = LogistixApp()
    async with app.run_test() as pilot:
        await pilot.pause()
        app.screen.query_one("#btn-sent", Button).press()
        await pilot.pause()
        app.screen.query_one("#btn-confirm", Button).press()
        await pilot.pause()
        assert get_invoice(recent.id).status is InvoiceStatus.SENT


@pytest.mark.asyncio
async def test_dashboard_status_change_without_selection(mock_config):
    app = LogistixApp()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("p")
        await pilot.pause()
        assert isinstance(app.screen, DashboardScreen)


@pytest.mark.asyncio
async def test_dashboard_refresh_picks_up_new_invoices(mock_config, recorded_delivery):
    from textual.widgets import DataTable

    from logistix.services.invoicing import create_invoice

    app = LogistixApp()
    async with app.run_test() as pilot:
        await pilot.pause()
        table = app.screen.query_one("#invoice-table", DataTable)
        assert table.row_count == 0
        create_invoice(recorded_delivery.id)
        await pilot.press("r")
        await pilot.pause()
        assert table.row_count == 1


@pytest.mark.asyncio
async def test_dashboard_status_change_on_deleted_invoice(invoices):
    from unittest.mock import patch

    from textual.widgets import DataTable

    from logistix.services.invoicing import delete_invoice

    recent, _old = invoices
    app = LogistixApp()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("p")
        delete_invoice(recent.id)
        with patch.object(DashboardScreen, "notify") as notify:
            await pilot.press("y")
            await app.workers.wait_for_complete()
            await pilot.pause()
        assert isinstance(app.screen, DashboardScreen)
        assert notify.call_args.kwargs["severity"] == "error"
        assert "introuvable" in notify.call_args.args[0]
        assert app.screen.query_one("#invoice-table", DataTable).row_count == 1
