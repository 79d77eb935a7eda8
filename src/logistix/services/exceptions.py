from __future__ import annotations


class LogistixError(Exception):
    """Base class for domain errors raised by the services layer."""


class RecordNotFoundError(LogistixError, LookupError):
    """A referenced client, site, delivery, invoice or driver does not exist."""

    def __init__(self, collection: str, record_id: int) -> None:
        super().__init__(f"{collection} #{record_id} introuvable")
        self.collection = collection
        self.record_id = record_id


class DuplicateInvoiceError(LogistixError):
    """The delivery already has an invoice."""

    def __init__(self, delivery_id: int, invoice_number: str) -> None:
        super().__init__(
            f"La livraison #{delivery_id} est deja facturee ({invoice_number})"
        )
        self.delivery_id = delivery_id
        self.invoice_number = invoice_number
