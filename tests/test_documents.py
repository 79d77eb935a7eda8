from __future__ import annotations

import dataclasses
from datetime import date, datetime
from decimal import Decimal

import pytest

from logistix.services import documents, invoicing
from logistix.utils.accents import ACCENT_MAP


def _accent_free(text: str) -> bool:
    return not any(c in ACCENT_MAP for c in text)


@pytest.fixture
def invoice(recorded_delivery):
    return invoicing.create_invoice(recorded_delivery.id, today=date(2026, 2, 17))


class TestDeliveryReport:
    def test_content(self, recorded_delivery):
        text = documents.render_delivery_report(
            recorded_delivery, generated_at=datetime(2026, 2, 17, 10, 10)
        )
        lines = text.splitlines()
        assert lines[0] == "RAPPORT DE LIVRAISON D'UREE"
        assert "CLIENT: Societe Generale" in lines
        assert "ENTREPRISE: Energie Quebec" in lines
        assert "SITE: Entrepot Montreal" in lines
        assert "LIVREUR: Jean-Francois Cote" in lines
        assert "DATE: 2026-02-17 09:00" in lines
        assert "DUREE: 1h 5min" in lines
        assert "  • Reservoir A: 60 L" in lines
        assert "  • Citerne B: 40 L" in lines
        assert "TOTAL LIVRE: 100 litres" in lines
        assert lines[-1] == "Rapport genere le 2026-02-17 10:10"

    def test_accent_free(self, recorded_delivery):
        assert _accent_free(documents.render_delivery_report(recorded_delivery))

    def test_missing_optional_fields(self, recorded_delivery):
        bare = dataclasses.replace(
            recorded_delivery, client_company="", site_name="", driver_name=None
        )
        lines = documents.render_delivery_report(bare).splitlines()
        assert "ENTREPRISE: N/A" in lines
        assert "SITE: Non specifie" in lines
        assert "LIVREUR: Non specifie" in lines


class TestInvoiceDocument:
    def test_header_and_billing(self, invoice, company):
        lines = documents.render_invoice(invoice, company).splitlines()
        assert lines[0] == "FACTURE DE LIVRAISON D'UREE"
        assert f"Numero de facture: {invoice.invoice_number}" in lines
        assert "Date: 2026-02-17" in lines
        i = lines.index("FACTURATION A:")
        assert lines[i + 1 : i + 4] == [
            "Societe Generale",
            "1 rue du Port, Montreal",
            "compta@energie-quebec.example",
        ]
        assert "Site: Entrepot Montreal" in lines
        assert "Quantite livree: 100 litres" in lines

    def test_amount_lines(self, invoice, company):
        lines = documents.render_invoice(invoice, company).splitlines()
        assert "Frais de service:".ljust(28) + "50.00$" in lines
        assert "Livraison (100 L @ 2.00$/L):200.00$" in lines
        assert "Sous-total:".ljust(28) + "250.00$" in lines
        assert "TPS (5%):".ljust(28) + "12.50$" in lines
        assert "TVQ (9.975%):".ljust(28) + "24.94$" in lines
        assert "TOTAL A PAYER:".ljust(28) + "287.44$" in lines

    def test_terms_and_company(self, invoice):
        company = {"name": "Urée Express", "payment_terms_days": 30}
        text = documents.render_invoice(invoice, company)
        assert "dans les 30 jours suivant" in text
        assert text.splitlines()[-1] == "Uree Express"

    def test_rates_from_invoice(self, recorded_delivery, config_dir, company):
        (config_dir / "pricing.yaml").write_text("qst_rate: '0'\n")
        invoice = invoicing.create_invoice(recorded_delivery.id)
        (config_dir / "pricing.yaml").write_text("qst_rate: '0.1'\n")
        lines = documents.render_invoice(invoice, company).splitlines()
        assert "TPS (5%):".ljust(28) + "12.50$" in lines
        assert "TVQ (0%):".ljust(28) + "0.00$" in lines
        assert "TOTAL A PAYER:".ljust(28) + "262.50$" in lines

    def test_rates_follow_stored_record(self, invoice, company):
        relabeled = dataclasses.replace(invoice, qst_rate=Decimal("0.1"))
        assert "TVQ (10%):" in documents.render_invoice(relabeled, company)

    def test_accent_free(self, invoice, company):
        assert _accent_free(documents.render_invoice(invoice, company))

    def test_default_company_from_config(self, invoice, config_dir):
        (config_dir / "company.yaml").write_text("name: Transports Lévis\n")
        assert documents.render_invoice(invoice).splitlines()[-1] == "Transports Levis"

    def test_optional_billing_lines_skipped(self, invoice, company):
        bare = dataclasses.replace(invoice, client_address=None, client_email=None)
        lines = documents.render_invoice(bare, company).splitlines()
        i = lines.index("FACTURATION A:")
        assert lines[i + 1 : i + 3] == ["Societe Generale", ""]


class TestEmail:
    def test_subject(self, invoice, company):
        assert documents.email_subject(invoice, company) == (
            f"Facture {invoice.invoice_number} - SP Logistix"
        )

    def test_body(self, invoice, company):
        body = documents.render_email_body(invoice, company)
        lines = body.splitlines()
        assert lines[0] == "Bonjour Societe Generale,"
        assert "- Quantite livree: 100 litres" in lines
        assert "- Montant total: 287.44$" in lines
        assert "- Site: Entrepot Montreal" in lines
        assert lines[-1] == "Livraison d'uree"
        assert _accent_free(body)
