from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class DeliveryUnit:
    """One tank, truck or reservoir filled during a delivery."""

    unit_name: str
    liters: Decimal

    @classmethod
    def from_dict(cls, d: dict) -> DeliveryUnit:
        return cls(unit_name=d["unit_name"], liters=Decimal(str(d["liters"])))

    def to_dict(self) -> dict:
        return {"unit_name": self.unit_name, "liters": str(self.liters)}


@dataclass(frozen=True)
class Delivery:
    id: int
    client_id: int
    client_name: str
    site_id: int | None
    site_name: str
    start_time: str  # ISO datetime
    end_time: str  # ISO datetime
    units: tuple[DeliveryUnit, ...]
    liters_delivered: Decimal
    client_company: str = ""
    driver_name: str | None = None
    photos: tuple[str, ...] = field(default_factory=tuple)
    created_at: str = ""

    @property
    def duration_seconds(self) -> int:
        """Whole seconds between start and end, never negative."""
        start = datetime.fromisoformat(self.start_time)
        end = datetime.fromisoformat(self.end_time)
        return max(0, int((end - start).total_seconds()))

    @classmethod
    def from_dict(cls, d: dict) -> Delivery:
        """Create a Delivery from a stored record, applying defaults for optional fields."""
        site_id = d.get("site_id")
        return cls(
            id=int(d["id"]),
            client_id=int(d["client_id"]),
            client_name=d["client_name"],
            site_id=int(site_id) if site_id is not None else None,
            site_name=d.get("site_name") or "",
            start_time=d["start_time"],
            end_time=d["end_time"],
            units=tuple(DeliveryUnit.from_dict(u) for u in d.get("units", ())),
            liters_delivered=Decimal(str(d["liters_delivered"])),
            client_company=d.get("client_company") or "",
            driver_name=d.get("driver_name") or None,
            photos=tuple(d.get("photos") or ()),
            created_at=d.get("created_at", ""),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "client_id": self.client_id,
            "client_name": self.client_name,
            "client_company": self.client_company,
            "site_id": self.site_id,
            "site_name": self.site_name,
            "driver_name": self.driver_name,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "units": [u.to_dict() for u in self.units],
            "liters_delivered": str(self.liters_delivered),
            "photos": list(self.photos),
            "created_at": self.created_at,
        }
