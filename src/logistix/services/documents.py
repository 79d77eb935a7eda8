"""Plain-text delivery reports, invoices and email bodies.

Documents are composed in French and then passed through remove_accents as a
whole, so labels and free text (client, site, driver and unit names) come out
accent-free for receipt printers and legacy renderers.
"""

from __future__ import annotations

from datetime import datetime

from logistix import config as _config
from logistix.models.delivery import Delivery
from logistix.models.invoice import Invoice
from logistix.services.invoice_calculator import round2
from logistix.utils.accents import remove_accents
from logistix.utils.formatters import (
    format_datetime,
    format_duration,
    format_liters,
    format_money,
    format_rate,
)

RULE = "=" * 50
THIN_RULE = "-" * 50
NOT_SPECIFIED = "Non spécifié"


def _line(label: str, amount: str) -> str:
    return f"{label:<28}{amount}"


def render_delivery_report(delivery: Delivery, generated_at: datetime | None = None) -> str:
    generated = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M")
    units = "\n".join(f"  • {u.unit_name}: {format_liters(u.liters)}" for u in delivery.units)
    text = "\n".join(
        [
            "RAPPORT DE LIVRAISON D'URÉE",
            RULE,
            "",
            f"CLIENT: {delivery.client_name}",
            f"ENTREPRISE: {delivery.client_company or 'N/A'}",
            f"SITE: {delivery.site_name or NOT_SPECIFIED}",
            f"LIVREUR: {delivery.driver_name or NOT_SPECIFIED}",
            "",
            f"DATE: {format_datetime(delivery.start_time)}",
            f"DURÉE: {format_duration(delivery.duration_seconds)}",
            "",
            "DÉTAIL DES UNITÉS:",
            units,
            "",
            f"TOTAL LIVRÉ: {format_liters(delivery.liters_delivered, 'litres')}",
            "",
            RULE,
            f"Rapport généré le {generated}",
        ]
    )
    return remove_accents(text)


def render_invoice(invoice: Invoice, company: dict | None = None) -> str:
    """Invoice text; tax labels show the rates the invoice was priced with."""
    company = company or _config.load_company()
    b = invoice.breakdown
    billing = [invoice.client_name]
    billing += [v for v in (invoice.client_address, invoice.client_email) if v]
    terms_days = company.get("payment_terms_days", 15)

    text = "\n".join(
        [
            "FACTURE DE LIVRAISON D'URÉE",
            RULE,
            "",
            f"Numéro de facture: {invoice.invoice_number}",
            f"Date: {invoice.invoice_date}",
            "",
            "FACTURATION À:",
            *billing,
            "",
            "DÉTAILS DE LA LIVRAISON:",
            f"Site: {invoice.site_name or NOT_SPECIFIED}",
            f"Quantité livrée: {format_liters(invoice.liters_delivered, 'litres')}",
            "",
            "DÉTAIL DE LA FACTURATION:",
            THIN_RULE,
            _line("Frais de service:", format_money(b.service_fee)),
            _line(
                f"Livraison ({format_liters(invoice.liters_delivered)} "
                f"@ {format_money(b.price_per_liter)}/L):",
                format_money(round2(b.delivery_cost)),
            ),
            _line("Sous-total:", format_money(b.subtotal)),
            _line(f"TPS ({format_rate(invoice.gst_rate)}):", format_money(b.gst)),
            _line(f"TVQ ({format_rate(invoice.qst_rate)}):", format_money(b.qst)),
            _line("TOTAL À PAYER:", format_money(b.total)),
            THIN_RULE,
            "CONDITIONS DE PAIEMENT:",
            f"Le paiement doit être effectué dans les {terms_days} jours suivant",
            "la date de cette facture.",
            THIN_RULE,
            "Merci de votre confiance!",
            company.get("name", ""),
        ]
    )
    return remove_accents(text)


def email_subject(invoice: Invoice, company: dict | None = None) -> str:
    company = company or _config.load_company()
    return remove_accents(f"Facture {invoice.invoice_number} - {company.get('name', '')}")


def render_email_body(invoice: Invoice, company: dict | None = None) -> str:
    company = company or _config.load_company()
    text = "\n".join(
        [
            f"Bonjour {invoice.client_name},",
            "",
            "Veuillez trouver ci-joint votre facture de livraison d'urée.",
            "",
            "Détails de la livraison:",
            f"- Numéro de facture: {invoice.invoice_number}",
            f"- Site: {invoice.site_name or NOT_SPECIFIED}",
            f"- Quantité livrée: {format_liters(invoice.liters_delivered, 'litres')}",
            f"- Montant total: {format_money(invoice.breakdown.total)}",
            "",
            "Merci de votre confiance!",
            "",
            "Cordialement,",
            company.get("name", ""),
            company.get("tagline", ""),
        ]
    )
    return remove_accents(text)
