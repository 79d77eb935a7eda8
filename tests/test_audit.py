from __future__ import annotations

import json
import logging
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

from logistix.models.audit import AuditAction
from logistix.utils import audit


def test_log_action_persists_entry(data_dir):
    entry = audit.log_action(
        AuditAction.CREATE_CLIENT,
        resource_type="client",
        resource_id=7,
        resource_name="Acme",
    )
    assert entry is not None
    entries = audit.list_entries()
    assert len(entries) == 1
    assert entries[0] == entry
    assert entries[0].resource_id == "7"
    assert entries[0].user_id == "system"
    assert entries[0].status == "success"


def test_log_action_logs_info(data_dir, caplog):
    with caplog.at_level(logging.INFO, logger="logistix.utils.audit"):
        audit.log_action(AuditAction.LOGIN, user_name="Luc", user_role="driver")
    assert "[AUDIT] LOGIN by Luc (driver)" in caplog.text


def test_trail_is_capped(data_dir):
    with patch("logistix.config.MAX_AUDIT_ENTRIES", 3):
        for i in range(5):
            audit.log_action(AuditAction.VIEW_INVOICE, resource_id=i)
    ids = [e.resource_id for e in audit.list_entries()]
    assert ids == ["2", "3", "4"]


def test_failure_does_not_raise(data_dir, caplog):
    with (
        patch("logistix.utils.audit.replace_records", side_effect=OSError("disk full")),
        caplog.at_level(logging.WARNING, logger="logistix.utils.audit"),
    ):
        result = audit.log_action(AuditAction.CREATE_INVOICE)
    assert result is None
    assert "Failed to record audit action" in caplog.text


def test_filters(data_dir):
    audit.log_action(AuditAction.LOGIN, user_id="u1")
    audit.log_action(AuditAction.CREATE_INVOICE, user_id="u2")
    audit.log_action(AuditAction.LOGOUT, user_id="u1")
    assert [e.action for e in audit.entries_by_user("u1")] == [
        AuditAction.LOGIN,
        AuditAction.LOGOUT,
    ]
    assert [e.user_id for e in audit.entries_by_action(AuditAction.CREATE_INVOICE)] == ["u2"]


def test_entries_by_date_range(data_dir):
    audit.log_action(AuditAction.LOGIN)
    now = datetime.now(UTC)
    assert len(audit.entries_by_date_range(now - timedelta(minutes=1), now + timedelta(minutes=1))) == 1
    assert audit.entries_by_date_range(now + timedelta(hours=1), now + timedelta(hours=2)) == []


def test_clear_and_export(data_dir):
    audit.log_action(AuditAction.ADD_PHOTO, details={"uri": "photo://1"})
    exported = json.loads(audit.export_entries())
    assert exported[0]["action"] == "ADD_PHOTO"
    assert exported[0]["details"] == {"uri": "photo://1"}
    audit.clear_entries()
    assert audit.list_entries() == []
