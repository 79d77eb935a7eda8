"""Invoice breakdown for a delivered liters quantity.

The calculation is a fixed formula: a flat service fee below a volume
threshold, a per-liter delivery cost, then GST and QST each taken from the
same rounded subtotal. Amounts are exact ``Decimal`` values finalized to the
cent with :func:`round2`.

Inputs are deliberately not validated: negative quantities yield negative
invoices and NaN yields NaN amounts. Callers that need business validation
use :func:`logistix.utils.validators.validate_liters` first.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

from logistix.models.invoice import InvoiceBreakdown
from logistix.models.pricing import DEFAULT_PRICING, PricingConfig

CENT = Decimal("0.01")

Quantity = int | float | str | Decimal


def round2(value: Decimal) -> Decimal:
    """Round to the nearest cent, halves away from zero.

    NaN and infinities are returned unchanged.
    """
    if not value.is_finite():
        return value
    with localcontext() as ctx:
        # quantize must keep every integer digit of very large amounts
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _exact_prec(*values: Decimal) -> int:
    """Digits that hold products and sums of ``values`` without rounding."""
    digits = 0
    for v in values:
        if v.is_finite():
            digits += max(v.adjusted(), 0) + 1 + max(-v.as_tuple().exponent, 0)
    return digits + 4


def to_decimal(value: Quantity) -> Decimal:
    """Convert a quantity to Decimal; floats go through str() so 499.99 stays 499.99."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


class InvoiceCalculator:
    """Stateless calculator bound to one immutable :class:`PricingConfig`."""

    def __init__(self, config: PricingConfig = DEFAULT_PRICING) -> None:
        self._config = config

    @property
    def config(self) -> PricingConfig:
        return self._config

    def service_fee(self, liters: Decimal) -> Decimal:
        # NaN is not below the threshold (no ordering comparison on NaN)
        if not liters.is_nan() and liters < self._config.service_fee_threshold:
            return round2(self._config.service_fee)
        return round2(Decimal(0))

    def calculate(self, liters_delivered: Quantity) -> InvoiceBreakdown:
        cfg = self._config
        liters = to_decimal(liters_delivered)

        with localcontext() as ctx:
            # the 28-digit default would round half-even before round2 rounds half-up
            ctx.prec = max(
                ctx.prec,
                _exact_prec(
                    liters, cfg.price_per_liter, cfg.service_fee, cfg.gst_rate, cfg.qst_rate
                ),
            )
            service_fee = self.service_fee(liters)
            delivery_cost = liters * cfg.price_per_liter
            subtotal = round2(service_fee + delivery_cost)
            gst = round2(subtotal * cfg.gst_rate)
            qst = round2(subtotal * cfg.qst_rate)
            total = round2(subtotal + gst + qst)

        return InvoiceBreakdown(
            service_fee=service_fee,
            price_per_liter=cfg.price_per_liter,
            delivery_cost=delivery_cost,
            subtotal=subtotal,
            gst=gst,
            qst=qst,
            total=total,
        )


_DEFAULT_CALCULATOR = InvoiceCalculator()


def calculate_invoice(
    liters_delivered: Quantity, config: PricingConfig | None = None
) -> InvoiceBreakdown:
    """Compute the invoice breakdown for ``liters_delivered`` under ``config``."""
    if config is None:
        return _DEFAULT_CALCULATOR.calculate(liters_delivered)
    return InvoiceCalculator(config).calculate(liters_delivered)
