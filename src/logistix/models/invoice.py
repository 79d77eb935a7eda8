from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal
from enum import StrEnum

from logistix.models.pricing import DEFAULT_PRICING


class InvoiceStatus(StrEnum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"


BREAKDOWN_FIELDS = (
    "service_fee",
    "price_per_liter",
    "delivery_cost",
    "subtotal",
    "gst",
    "qst",
    "total",
)


@dataclass(frozen=True)
class InvoiceBreakdown:
    """Priced lines derived from a single liters quantity.

    ``delivery_cost`` is the unrounded ``liters × price_per_liter``; every other
    amount is finalized to the cent.
    """

    service_fee: Decimal
    price_per_liter: Decimal
    delivery_cost: Decimal
    subtotal: Decimal
    gst: Decimal
    qst: Decimal
    total: Decimal

    def to_dict(self) -> dict[str, str]:
        return {name: str(getattr(self, name)) for name in BREAKDOWN_FIELDS}

    @classmethod
    def from_dict(cls, d: dict) -> InvoiceBreakdown:
        return cls(**{name: Decimal(str(d[name])) for name in BREAKDOWN_FIELDS})


@dataclass(frozen=True)
class Invoice:
    """Persisted invoice record: identity, parties and a verbatim breakdown."""

    id: int
    invoice_number: str
    invoice_date: str  # YYYY-MM-DD
    delivery_id: int
    client_id: int
    client_name: str
    liters_delivered: str
    breakdown: InvoiceBreakdown
    status: InvoiceStatus = InvoiceStatus.DRAFT
    client_email: str | None = None
    client_address: str | None = None
    site_name: str = ""
    # rates the breakdown was priced with, kept so later pricing changes never relabel it
    gst_rate: Decimal = DEFAULT_PRICING.gst_rate
    qst_rate: Decimal = DEFAULT_PRICING.qst_rate
    created_at: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> Invoice:
        """Create an Invoice from a stored record, where breakdown fields are flattened."""
        return cls(
            id=int(d["id"]),
            invoice_number=d["invoice_number"],
            invoice_date=d["invoice_date"],
            delivery_id=int(d["delivery_id"]),
            client_id=int(d["client_id"]),
            client_name=d["client_name"],
            liters_delivered=str(d["liters_delivered"]),
            breakdown=InvoiceBreakdown.from_dict(d),
            status=InvoiceStatus(d.get("status", InvoiceStatus.DRAFT)),
            client_email=d.get("client_email"),
            client_address=d.get("client_address"),
            site_name=d.get("site_name", ""),
            gst_rate=Decimal(str(d.get("gst_rate", DEFAULT_PRICING.gst_rate))),
            qst_rate=Decimal(str(d.get("qst_rate", DEFAULT_PRICING.qst_rate))),
            created_at=d.get("created_at", ""),
        )

    def to_dict(self) -> dict:
        d = asdict(self)
        del d["breakdown"]
        d["status"] = str(self.status)
        d["gst_rate"] = str(self.gst_rate)
        d["qst_rate"] = str(self.qst_rate)
        d.update(self.breakdown.to_dict())
        return d
