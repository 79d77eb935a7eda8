"""Local JSON record store, one file per collection under the data dir.

Every read-modify-write happens under an exclusive file lock and files are
replaced atomically, so the CLI and the TUI can share the same data dir.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from filelock import FileLock

from logistix import config as _config
from logistix.utils.sequence import next_id

logger = logging.getLogger(__name__)

CLIENTS = "clients"
SITES = "sites"
DELIVERIES = "deliveries"
INVOICES = "invoices"
DRIVERS = "drivers"
SHIFTS = "shifts"
EQUIPMENT = "equipment"
AUDIT = "audit"

COLLECTIONS = frozenset({CLIENTS, SITES, DELIVERIES, INVOICES, DRIVERS, SHIFTS, EQUIPMENT, AUDIT})

Record = dict[str, Any]


def now_iso() -> str:
    return datetime.now(UTC).isoformat(timespec="seconds")


def _collection_path(collection: str) -> Path:
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection: {collection!r}")
    return _config.get_data_dir() / f"{collection}.json"


def _state_path() -> Path:
    return _config.get_data_dir() / "state.json"


def _backup_corrupt(path: Path) -> Path:
    """Rename a corrupt file to a timestamped backup before it gets overwritten."""
    ts = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
    backup = path.with_name(f"{path.name}.corrupt.{ts}")
    path.rename(backup)
    logger.warning("Corrupt file backed up: %s → %s", path, backup)
    return backup


@contextmanager
def _locked(path: Path) -> Iterator[None]:
    """Hold an exclusive file lock during read-modify-write of ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with FileLock(path.with_suffix(".lock")):
        yield


def _read_json(path: Path, default: Any) -> Any:
    if not path.exists():
        return default
    try:
        return json.loads(path.read_text())
    except (json.JSONDecodeError, ValueError):
        _backup_corrupt(path)
        return default


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(".tmp")
    tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n")
    os.replace(tmp, path)


# --- Collections ---


def list_records(
    collection: str, where: Callable[[Record], bool] | None = None
) -> list[Record]:
    """Return all records of a collection, optionally filtered by ``where``."""
    path = _collection_path(collection)
    with _locked(path):
        records = _read_json(path, [])
    if where is not None:
        records = [r for r in records if where(r)]
    return records


def get_record(collection: str, record_id: int) -> Record | None:
    """Look up a single record by id."""
    for r in list_records(collection):
        if r.get("id") == record_id:
            return r
    return None


def add_record(
    collection: str,
    data: Record,
    guard: Callable[[list[Record]], None] | None = None,
) -> Record:
    """Append a record, assigning ``id`` and ``created_at``.

    ``guard`` sees the current records under the same lock as the append and
    may raise to abort it, which makes uniqueness checks race-free across
    processes.
    """
    path = _collection_path(collection)
    with _locked(path):
        records = _read_json(path, [])
        if guard is not None:
            guard(records)
        record = {"id": next_id(collection), **data, "created_at": now_iso()}
        records.append(record)
        _write_json(path, records)
    logger.debug("Added %s #%s", collection, record["id"])
    return record


def update_record(collection: str, record_id: int, updates: Record) -> Record | None:
    """Merge ``updates`` into a record. Returns the updated record, or None if not found.

    ``id`` and ``created_at`` are never overwritten.
    """
    path = _collection_path(collection)
    with _locked(path):
        records = _read_json(path, [])
        target = next((r for r in records if r.get("id") == record_id), None)
        if target is None:
            return None
        changes = {k: v for k, v in updates.items() if k not in ("id", "created_at")}
        if any(target.get(k) != v for k, v in changes.items()):
            target.update(changes)
            _write_json(path, records)
    return target


def replace_records(collection: str, transform: Callable[[list[Record]], list[Record]]) -> None:
    """Rewrite a whole collection through ``transform`` under a single lock."""
    path = _collection_path(collection)
    with _locked(path):
        records = _read_json(path, [])
        _write_json(path, transform(records))


def remove_record(collection: str, record_id: int) -> bool:
    """Remove a record by id. Returns False when nothing matched."""
    return remove_where(collection, lambda r: r.get("id") == record_id) > 0


def remove_where(collection: str, predicate: Callable[[Record], bool]) -> int:
    """Remove every record matching ``predicate``; returns how many were removed."""
    path = _collection_path(collection)
    with _locked(path):
        records = _read_json(path, [])
        kept = [r for r in records if not predicate(r)]
        removed = len(records) - len(kept)
        if removed:
            _write_json(path, kept)
    return removed


# --- Key/value state (current driver, etc.) ---


def get_state(key: str) -> Any:
    path = _state_path()
    with _locked(path):
        return _read_json(path, {}).get(key)


def set_state(key: str, value: Any) -> None:
    """Persist ``value`` under ``key``; None deletes the key."""
    path = _state_path()
    with _locked(path):
        data = _read_json(path, {})
        if value is None:
            data.pop(key, None)
        else:
            data[key] = value
        _write_json(path, data)
