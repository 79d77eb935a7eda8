"""Audit trail of user actions, capped to the most recent entries."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import UTC, datetime
from typing import Any

from logistix import config as _config
from logistix.models.audit import AuditAction, AuditEntry
from logistix.utils.store import AUDIT, list_records, replace_records

logger = logging.getLogger(__name__)

SYSTEM_USER = ("system", "system", "admin")


def log_action(
    action: AuditAction,
    *,
    user_id: str = SYSTEM_USER[0],
    user_name: str = SYSTEM_USER[1],
    user_role: str = SYSTEM_USER[2],
    resource_type: str | None = None,
    resource_id: str | int | None = None,
    resource_name: str | None = None,
    details: dict[str, Any] | None = None,
    status: str = "success",
    error_message: str | None = None,
) -> AuditEntry | None:
    """Append an entry to the audit trail.

    Persisting the trail never fails the audited operation: errors are logged
    and None is returned.
    """
    now = datetime.now(UTC)
    entry = AuditEntry(
        id=f"{int(now.timestamp() * 1000)}-{uuid.uuid4().hex[:9]}",
        timestamp=now.isoformat(timespec="milliseconds"),
        user_id=user_id,
        user_name=user_name,
        user_role=user_role,
        action=action,
        resource_type=resource_type,
        resource_id=str(resource_id) if resource_id is not None else None,
        resource_name=resource_name,
        details=details or {},
        status=status,
        error_message=error_message,
    )
    limit = _config.MAX_AUDIT_ENTRIES

    def _append(entries: list[dict]) -> list[dict]:
        entries.append(entry.to_dict())
        return entries[-limit:]

    try:
        replace_records(AUDIT, _append)
    except Exception:
        logger.warning("Failed to record audit action %s", action, exc_info=True)
        return None
    logger.info("[AUDIT] %s by %s (%s)", action, user_name, user_role)
    return entry


def list_entries() -> list[AuditEntry]:
    return [AuditEntry.from_dict(d) for d in list_records(AUDIT)]


def entries_by_user(user_id: str) -> list[AuditEntry]:
    return [e for e in list_entries() if e.user_id == user_id]


def entries_by_action(action: AuditAction) -> list[AuditEntry]:
    return [e for e in list_entries() if e.action == action]


def entries_by_date_range(start: datetime, end: datetime) -> list[AuditEntry]:
    """Entries whose timestamp falls within [start, end] (inclusive)."""
    return [e for e in list_entries() if start <= datetime.fromisoformat(e.timestamp) <= end]


def clear_entries() -> None:
    replace_records(AUDIT, lambda _entries: [])
    logger.info("[AUDIT] All entries cleared")


def export_entries() -> str:
    """Serialize the whole trail as pretty-printed JSON."""
    return json.dumps([e.to_dict() for e in list_entries()], indent=2, ensure_ascii=False)
