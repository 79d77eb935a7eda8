from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Driver:
    id: int
    name: str
    created_at: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> Driver:
        return cls(id=int(d["id"]), name=d["name"], created_at=d.get("created_at", ""))

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Shift:
    """Working period of a driver. At most one shift per driver is active."""

    id: int
    driver_id: int
    driver_name: str
    start_time: str
    end_time: str | None = None
    is_active: bool = True

    @classmethod
    def from_dict(cls, d: dict) -> Shift:
        return cls(
            id=int(d["id"]),
            driver_id=int(d["driver_id"]),
            driver_name=d["driver_name"],
            start_time=d["start_time"],
            end_time=d.get("end_time"),
            is_active=bool(d.get("is_active", False)),
        )

    def to_dict(self) -> dict:
        return asdict(self)
