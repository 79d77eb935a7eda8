from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Equipment:
    """Tank or dispenser that can be assigned to clients."""

    id: int
    name: str
    capacity: Decimal | None = None  # liters
    created_at: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> Equipment:
        capacity = d.get("capacity")
        return cls(
            id=int(d["id"]),
            name=d["name"],
            capacity=Decimal(str(capacity)) if capacity is not None else None,
            created_at=d.get("created_at", ""),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "capacity": str(self.capacity) if self.capacity is not None else None,
            "created_at": self.created_at,
        }
