from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class Client:
    """Customer billed for deliveries."""

    id: int
    name: str
    company: str = ""
    phone: str = ""
    address: str = ""
    email: str | None = None
    notes: str = ""
    equipment_ids: tuple[int, ...] = field(default_factory=tuple)
    created_at: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> Client:
        """Create a Client from a stored record, applying defaults for optional fields."""
        return cls(
            id=int(d["id"]),
            name=d["name"],
            company=d.get("company") or "",
            phone=d.get("phone") or "",
            address=d.get("address") or "",
            email=d.get("email") or None,
            notes=d.get("notes") or "",
            equipment_ids=tuple(int(i) for i in d.get("equipment_ids") or ()),
            created_at=d.get("created_at", ""),
        )

    def to_dict(self) -> dict:
        d = asdict(self)
        d["equipment_ids"] = list(self.equipment_ids)
        return d


@dataclass(frozen=True)
class Site:
    """Delivery location belonging to a client."""

    id: int
    client_id: int
    name: str
    address: str = ""
    created_at: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> Site:
        return cls(
            id=int(d["id"]),
            client_id=int(d["client_id"]),
            name=d["name"],
            address=d.get("address") or "",
            created_at=d.get("created_at", ""),
        )

    def to_dict(self) -> dict:
        return asdict(self)
