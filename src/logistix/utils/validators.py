from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from logistix.models.invoice import InvoiceStatus

_EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
_PHONE_RE = re.compile(r"\+?[\d\s().-]{7,20}")


def _parse_decimal(value: object, message: str) -> Decimal:
    try:
        d = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(message) from None
    if not d.is_finite():
        raise ValueError(message)
    return d


def validate_liters(value: object) -> Decimal:
    """Validate a delivered quantity: finite and non-negative.

    Returns the quantity as a Decimal.
    Raises ValueError for invalid or negative values.
    """
    d = _parse_decimal(value, f"Quantite invalide: '{value}'")
    if d < 0:
        raise ValueError(f"Quantite negative: '{value}'")
    return d


def validate_rate(value: object) -> Decimal:
    """Validate a tax rate expressed as a fraction (0 <= rate < 1)."""
    d = _parse_decimal(value, f"Taux invalide: '{value}'")
    if d < 0 or d >= 1:
        raise ValueError("Taux doit etre entre 0 et 1")
    return d


def validate_required(value: str | None, label: str) -> str:
    """Strip and require a non-empty text field."""
    stripped = (value or "").strip()
    if not stripped:
        raise ValueError(f"{label}: champ obligatoire")
    return stripped


def validate_email(value: str) -> str:
    value = value.strip()
    if not _EMAIL_RE.fullmatch(value):
        raise ValueError(f"Courriel invalide: '{value}'")
    return value


def validate_phone(value: str) -> str:
    value = value.strip()
    if not _PHONE_RE.fullmatch(value) or sum(c.isdigit() for c in value) < 7:
        raise ValueError(f"Telephone invalide: '{value}'")
    return value


def validate_status(value: str) -> InvoiceStatus:
    try:
        return InvoiceStatus(value)
    except ValueError:
        raise ValueError(f"Statut invalide: '{value}'") from None
