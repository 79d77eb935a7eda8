from __future__ import annotations

from datetime import datetime
from decimal import Decimal


def _dec(value: object) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def format_cad(value: object) -> str:
    """Format an amount the Québec way: 1 234,56 $."""
    d = _dec(value)
    formatted = f"{d:,.2f}".replace(",", " ").replace(".", ",")
    return f"{formatted} $"


def format_money(value: object) -> str:
    """Format an amount as receipts print it: 287.44$."""
    return f"{_dec(value):.2f}$"


def format_liters(value: object, unit: str = "L") -> str:
    """Format a quantity in liters, dropping a zero fractional part: 800 L, 12.5 L."""
    d = _dec(value)
    if d == d.to_integral_value():
        return f"{d.to_integral_value():f} {unit}"
    return f"{d.normalize():f} {unit}"


def format_duration(seconds: int) -> str:
    """Format a duration as 1h 5min, 5min 3s or 42s."""
    hours, rest = divmod(max(0, int(seconds)), 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}h {minutes}min"
    if minutes > 0:
        return f"{minutes}min {secs}s"
    return f"{secs}s"


def format_rate(rate: object) -> str:
    """Format a fractional rate as a percentage: 0.09975 -> 9.975%."""
    pct = (_dec(rate) * 100).normalize()
    return f"{pct:f}%"


def format_datetime(value: str) -> str:
    """Format an ISO datetime as YYYY-MM-DD HH:MM (fr-CA order)."""
    return datetime.fromisoformat(value).strftime("%Y-%m-%d %H:%M")
