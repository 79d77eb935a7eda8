"""Turn deliveries into priced invoice records and track their status."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from logistix import config as _config
from logistix.models.audit import AuditAction
from logistix.models.delivery import Delivery
from logistix.models.invoice import Invoice, InvoiceStatus
from logistix.models.pricing import PricingConfig
from logistix.services.clients import get_client
from logistix.services.deliveries import get_delivery
from logistix.services.exceptions import DuplicateInvoiceError, RecordNotFoundError
from logistix.services.invoice_calculator import InvoiceCalculator
from logistix.utils import store
from logistix.utils.audit import log_action
from logistix.utils.sequence import next_id

logger = logging.getLogger(__name__)

_INVOICE_NUMBER_SEQUENCE = "invoice_number"


def default_calculator() -> InvoiceCalculator:
    """Calculator bound to config/pricing.yaml (built-in rates when absent)."""
    return InvoiceCalculator(PricingConfig.from_dict(_config.load_pricing()))


def invoice_number(delivery: Delivery, seq: int) -> str:
    """INV-YYYYMMDD-NNNN, dated from the delivery."""
    day = datetime.fromisoformat(delivery.created_at or delivery.end_time).date()
    return f"INV-{day:%Y%m%d}-{seq:04d}"


def _reject_duplicate(delivery_id: int, records: list[dict]) -> None:
    for r in records:
        if r.get("delivery_id") == delivery_id:
            raise DuplicateInvoiceError(delivery_id, r["invoice_number"])


def create_invoice(
    delivery_id: int,
    *,
    calculator: InvoiceCalculator | None = None,
    today: date | None = None,
) -> Invoice:
    """Price a delivery and persist a draft invoice holding the breakdown verbatim."""
    delivery = get_delivery(delivery_id)
    # checked again under the store lock, right before the append
    _reject_duplicate(delivery_id, store.list_records(store.INVOICES))

    try:
        client = get_client(delivery.client_id)
    except RecordNotFoundError:
        logger.warning("Client #%s of delivery #%s is gone", delivery.client_id, delivery_id)
        client = None

    calculator = calculator or default_calculator()
    breakdown = calculator.calculate(delivery.liters_delivered)
    number = invoice_number(delivery, next_id(_INVOICE_NUMBER_SEQUENCE))
    record = store.add_record(
        store.INVOICES,
        {
            "invoice_number": number,
            "invoice_date": (today or date.today()).isoformat(),
            "delivery_id": delivery.id,
            "client_id": delivery.client_id,
            "client_name": client.name if client else delivery.client_name,
            "client_email": client.email if client else None,
            "client_address": client.address if client else None,
            "site_name": delivery.site_name,
            "liters_delivered": str(delivery.liters_delivered),
            "status": str(InvoiceStatus.DRAFT),
            "gst_rate": str(calculator.config.gst_rate),
            "qst_rate": str(calculator.config.qst_rate),
            **breakdown.to_dict(),
        },
        guard=lambda records: _reject_duplicate(delivery_id, records),
    )
    invoice = Invoice.from_dict(record)
    log_action(
        AuditAction.CREATE_INVOICE,
        resource_type="invoice",
        resource_id=invoice.id,
        resource_name=invoice.invoice_number,
        details={"delivery_id": delivery.id, "total": str(breakdown.total)},
    )
    return invoice


def list_invoices(status: InvoiceStatus | None = None) -> list[Invoice]:
    invoices = [Invoice.from_dict(d) for d in store.list_records(store.INVOICES)]
    if status is not None:
        invoices = [i for i in invoices if i.status == status]
    return invoices


def get_invoice(invoice_id: int) -> Invoice:
    record = store.get_record(store.INVOICES, invoice_id)
    if record is None:
        raise RecordNotFoundError(store.INVOICES, invoice_id)
    return Invoice.from_dict(record)


def invoices_for_delivery(delivery_id: int) -> list[Invoice]:
    records = store.list_records(store.INVOICES, lambda r: r.get("delivery_id") == delivery_id)
    return [Invoice.from_dict(d) for d in records]


def set_status(invoice_id: int, status: InvoiceStatus) -> Invoice:
    record = store.update_record(store.INVOICES, invoice_id, {"status": str(status)})
    if record is None:
        raise RecordNotFoundError(store.INVOICES, invoice_id)
    invoice = Invoice.from_dict(record)
    log_action(
        AuditAction.UPDATE_INVOICE,
        resource_type="invoice",
        resource_id=invoice.id,
        resource_name=invoice.invoice_number,
        details={"status": str(status)},
    )
    return invoice


def mark_sent(invoice_id: int) -> Invoice:
    return set_status(invoice_id, InvoiceStatus.SENT)


def mark_paid(invoice_id: int) -> Invoice:
    return set_status(invoice_id, InvoiceStatus.PAID)


def mark_unpaid(invoice_id: int) -> Invoice:
    """Revert a paid invoice to sent."""
    return set_status(invoice_id, InvoiceStatus.SENT)


def unpaid_invoices() -> list[Invoice]:
    return [i for i in list_invoices() if i.status != InvoiceStatus.PAID]


def overdue_invoices(days: int | None = None, today: date | None = None) -> list[Invoice]:
    """Unpaid invoices dated strictly before ``today - days``."""
    limit = _config.OVERDUE_DAYS if days is None else days
    cutoff = (today or date.today()) - timedelta(days=limit)
    return [i for i in unpaid_invoices() if date.fromisoformat(i.invoice_date) < cutoff]


def delete_invoice(invoice_id: int) -> bool:
    return store.remove_record(store.INVOICES, invoice_id)
