from __future__ import annotations

from logistix.models.audit import AuditAction
from logistix.models.driver import Driver, Shift
from logistix.utils import store
from logistix.utils.audit import log_action
from logistix.utils.validators import validate_required

_CURRENT_DRIVER_KEY = "current_driver"


def list_drivers() -> list[Driver]:
    return [Driver.from_dict(d) for d in store.list_records(store.DRIVERS)]


def add_driver(name: str) -> Driver:
    driver = Driver.from_dict(
        store.add_record(store.DRIVERS, {"name": validate_required(name, "Livreur")})
    )
    log_action(
        AuditAction.CREATE_DRIVER,
        resource_type="driver",
        resource_id=driver.id,
        resource_name=driver.name,
    )
    return driver


def delete_driver(driver_id: int) -> bool:
    removed = store.remove_record(store.DRIVERS, driver_id)
    if removed:
        current = current_driver()
        if current is not None and current.id == driver_id:
            set_current_driver(None)
        log_action(AuditAction.DELETE_DRIVER, resource_type="driver", resource_id=driver_id)
    return removed


# --- Shifts ---


def _is_active_for(driver_id: int):
    return lambda r: r.get("driver_id") == driver_id and r.get("is_active")


def active_shift(driver_id: int) -> Shift | None:
    records = store.list_records(store.SHIFTS, _is_active_for(driver_id))
    return Shift.from_dict(records[0]) if records else None


def end_shift(driver_id: int) -> Shift | None:
    """Close the driver's active shift, if any, and return it."""
    ended: list[dict] = []
    now = store.now_iso()

    def _close(records: list[dict]) -> list[dict]:
        for r in records:
            if _is_active_for(driver_id)(r):
                r["is_active"] = False
                r["end_time"] = now
                ended.append(r)
        return records

    store.replace_records(store.SHIFTS, _close)
    return Shift.from_dict(ended[-1]) if ended else None


def start_shift(driver: Driver) -> Shift:
    """Start a new shift, ending any shift the driver left open."""
    end_shift(driver.id)
    record = store.add_record(
        store.SHIFTS,
        {
            "driver_id": driver.id,
            "driver_name": driver.name,
            "start_time": store.now_iso(),
            "end_time": None,
            "is_active": True,
        },
    )
    return Shift.from_dict(record)


# --- Current driver on this device ---


def current_driver() -> Driver | None:
    data = store.get_state(_CURRENT_DRIVER_KEY)
    return Driver.from_dict(data) if data else None


def set_current_driver(driver: Driver | None) -> None:
    store.set_state(_CURRENT_DRIVER_KEY, driver.to_dict() if driver else None)
