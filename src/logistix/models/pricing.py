from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


def _dec(value: object) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)  # type: ignore[arg-type]


@dataclass(frozen=True)
class PricingConfig:
    """Per-jurisdiction pricing: per-liter rate, sales taxes and small-order fee."""

    price_per_liter: Decimal = Decimal("2.00")
    gst_rate: Decimal = Decimal("0.05")
    qst_rate: Decimal = Decimal("0.09975")
    service_fee: Decimal = Decimal("50")
    service_fee_threshold: Decimal = Decimal("500")  # liters; fee waived at or above

    @classmethod
    def from_dict(cls, d: dict) -> PricingConfig:
        """Create a PricingConfig from a YAML-loaded dict, applying defaults for missing keys."""
        default = cls()
        return cls(
            price_per_liter=_dec(d.get("price_per_liter", default.price_per_liter)),
            gst_rate=_dec(d.get("gst_rate", default.gst_rate)),
            qst_rate=_dec(d.get("qst_rate", default.qst_rate)),
            service_fee=_dec(d.get("service_fee", default.service_fee)),
            service_fee_threshold=_dec(
                d.get("service_fee_threshold", default.service_fee_threshold)
            ),
        )


DEFAULT_PRICING = PricingConfig()
