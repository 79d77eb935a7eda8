from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any


class AuditAction(StrEnum):
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    CREATE_CLIENT = "CREATE_CLIENT"
    UPDATE_CLIENT = "UPDATE_CLIENT"
    DELETE_CLIENT = "DELETE_CLIENT"
    CREATE_SITE = "CREATE_SITE"
    UPDATE_SITE = "UPDATE_SITE"
    DELETE_SITE = "DELETE_SITE"
    START_DELIVERY = "START_DELIVERY"
    COMPLETE_DELIVERY = "COMPLETE_DELIVERY"
    ADD_PHOTO = "ADD_PHOTO"
    CREATE_INVOICE = "CREATE_INVOICE"
    UPDATE_INVOICE = "UPDATE_INVOICE"
    CREATE_DRIVER = "CREATE_DRIVER"
    UPDATE_DRIVER = "UPDATE_DRIVER"
    DELETE_DRIVER = "DELETE_DRIVER"
    VIEW_INVOICE = "VIEW_INVOICE"
    ACCESS_DENIED = "ACCESS_DENIED"


@dataclass(frozen=True)
class AuditEntry:
    id: str
    timestamp: str  # ISO datetime, UTC
    user_id: str
    user_name: str
    user_role: str
    action: AuditAction
    resource_type: str | None = None
    resource_id: str | None = None
    resource_name: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    status: str = "success"
    error_message: str | None = None

    @classmethod
    def from_dict(cls, d: dict) -> AuditEntry:
        return cls(
            id=d["id"],
            timestamp=d["timestamp"],
            user_id=d["user_id"],
            user_name=d["user_name"],
            user_role=d["user_role"],
            action=AuditAction(d["action"]),
            resource_type=d.get("resource_type"),
            resource_id=d.get("resource_id"),
            resource_name=d.get("resource_name"),
            details=d.get("details") or {},
            status=d.get("status", "success"),
            error_message=d.get("error_message"),
        )

    def to_dict(self) -> dict:
        d = asdict(self)
        d["action"] = str(self.action)
        return d
