from __future__ import annotations

from datetime import date

import pytest


@pytest.fixture
def mock_config(data_dir, config_dir):
    """Run the TUI against empty temporary config and data dirs."""
    yield


@pytest.fixture
def invoices(mock_config, recorded_delivery, units):
    """Two draft invoices: an old overdue one and one issued today (listed first)."""
    from logistix.services import deliveries, invoicing

    other = deliveries.record_delivery(recorded_delivery.client_id, units)
    old = invoicing.create_invoice(other.id, today=date(2020, 1, 1))
    recent = invoicing.create_invoice(recorded_delivery.id, today=date.today())
    return recent, old
