"""Named integer counters backing record ids and invoice numbers."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from pathlib import Path

from filelock import FileLock

from logistix import config as _config

logger = logging.getLogger(__name__)

Counters = dict[str, int]


def _sequence_file() -> Path:
    return _config.get_data_dir() / "sequence.json"


def _lock(sf: Path) -> FileLock:
    sf.parent.mkdir(parents=True, exist_ok=True)
    return FileLock(sf.with_suffix(".lock"))


def _read(sf: Path) -> Counters:
    if not sf.exists():
        return {}
    return {name: int(value) for name, value in json.loads(sf.read_text()).items()}


def _apply(name: str, change: Callable[[int], int] | None = None) -> int:
    """Return counter ``name`` after ``change``, persisting only when a change is given."""
    sf = _sequence_file()
    with _lock(sf):
        counters = _read(sf)
        value = counters.get(name, 0)
        if change is None:
            return value
        counters[name] = change(value)
        tmp = sf.with_suffix(".tmp")
        tmp.write_text(json.dumps(counters, indent=2, sort_keys=True))
        os.replace(tmp, sf)
    logger.debug("Sequence %s -> %d", name, counters[name])
    return counters[name]


def current_id(name: str) -> int:
    return _apply(name)


def next_id(name: str) -> int:
    return _apply(name, lambda n: n + 1)


def peek_next_id(name: str) -> int:
    """Return the next id without persisting it."""
    return _apply(name) + 1


def set_id(name: str, value: int) -> None:
    _apply(name, lambda _current: value)
