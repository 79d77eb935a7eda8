from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import patch

import pytest

from logistix.models.delivery import DeliveryUnit


@pytest.fixture
def data_dir(tmp_path):
    """Point every store, sequence and audit file at a temporary data dir."""
    d = tmp_path / "data"
    with patch("logistix.config.get_data_dir", return_value=d):
        yield d


@pytest.fixture
def config_dir(tmp_path):
    """Empty config dir: built-in pricing and company defaults apply."""
    d = tmp_path / "config"
    d.mkdir()
    with patch("logistix.config.get_config_dir", return_value=d):
        yield d


@pytest.fixture
def pricing_dict() -> dict:
    return {
        "price_per_liter": "2.00",
        "gst_rate": "0.05",
        "qst_rate": "0.09975",
        "service_fee": "50",
        "service_fee_threshold": "500",
    }


@pytest.fixture
def company() -> dict:
    return {
        "name": "SP Logistix",
        "tagline": "Livraison d'urée",
        "payment_terms_days": 15,
    }


@pytest.fixture
def client_fields() -> dict:
    return {
        "name": "Société Générale",
        "company": "Énergie Québec",
        "phone": "514-555-0199",
        "address": "1 rue du Port, Montréal",
        "email": "compta@energie-quebec.example",
    }


@pytest.fixture
def units() -> list[DeliveryUnit]:
    return [
        DeliveryUnit(unit_name="Réservoir A", liters=Decimal("60")),
        DeliveryUnit(unit_name="Citerne B", liters=Decimal("40")),
    ]


@pytest.fixture
def delivery_times() -> tuple[datetime, datetime]:
    start = datetime(2026, 2, 17, 9, 0, tzinfo=UTC)
    end = datetime(2026, 2, 17, 10, 5, 30, tzinfo=UTC)
    return start, end


@pytest.fixture
def recorded_delivery(data_dir, config_dir, client_fields, units, delivery_times):
    """A client with one site and a 100 L delivery, persisted in the temp data dir."""
    from logistix.services import clients, deliveries

    client = clients.add_client(**client_fields)
    site = clients.add_site(client.id, "Entrepôt Montréal", address="9 boul. Industriel")
    start, end = delivery_times
    return deliveries.record_delivery(
        client.id,
        units,
        site_id=site.id,
        driver_name="Jean-François Côté",
        start_time=start,
        end_time=end,
    )
