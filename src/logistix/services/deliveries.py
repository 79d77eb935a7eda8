from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from decimal import Decimal

from logistix.models.audit import AuditAction
from logistix.models.delivery import Delivery, DeliveryUnit
from logistix.services.clients import get_client, get_site
from logistix.services.exceptions import RecordNotFoundError
from logistix.utils import store
from logistix.utils.audit import log_action
from logistix.utils.validators import validate_liters, validate_required

logger = logging.getLogger(__name__)


def _units(units: Iterable[DeliveryUnit | dict]) -> list[DeliveryUnit]:
    result = []
    for u in units:
        unit = u if isinstance(u, DeliveryUnit) else DeliveryUnit.from_dict(u)
        result.append(
            DeliveryUnit(
                unit_name=validate_required(unit.unit_name, "Unite"),
                liters=validate_liters(unit.liters),
            )
        )
    return result


def total_liters(units: Iterable[DeliveryUnit]) -> Decimal:
    return sum((u.liters for u in units), Decimal(0))


def record_delivery(
    client_id: int,
    units: Iterable[DeliveryUnit | dict],
    *,
    site_id: int | None = None,
    driver_name: str | None = None,
    start_time: datetime | None = None,
    end_time: datetime | None = None,
    photos: Iterable[str] = (),
) -> Delivery:
    """Persist a completed delivery; total liters is the sum of its units."""
    client = get_client(client_id)
    site = get_site(site_id) if site_id is not None else None
    if site is not None and site.client_id != client.id:
        raise ValueError(f"Le site #{site.id} n'appartient pas au client #{client.id}")

    unit_list = _units(units)
    if end_time is None:
        # a naive start means local wall-clock time; keep the end comparable
        end = datetime.now(start_time.tzinfo if start_time else UTC)
    else:
        end = end_time
    start = start_time or end
    if (start.tzinfo is None) != (end.tzinfo is None):
        raise ValueError("Debut et fin: fuseau horaire sur les deux ou sur aucune")
    if end < start:
        raise ValueError("Heure de fin anterieure a l'heure de debut")

    record = store.add_record(
        store.DELIVERIES,
        {
            "client_id": client.id,
            "client_name": client.name,
            "client_company": client.company,
            "site_id": site.id if site else None,
            "site_name": site.name if site else "",
            "driver_name": driver_name,
            "start_time": start.isoformat(timespec="seconds"),
            "end_time": end.isoformat(timespec="seconds"),
            "units": [u.to_dict() for u in unit_list],
            "liters_delivered": str(total_liters(unit_list)),
            "photos": list(photos),
        },
    )
    delivery = Delivery.from_dict(record)
    log_action(
        AuditAction.COMPLETE_DELIVERY,
        user_name=driver_name or "system",
        user_role="driver" if driver_name else "admin",
        resource_type="delivery",
        resource_id=delivery.id,
        resource_name=client.name,
        details={"liters": str(delivery.liters_delivered), "site": delivery.site_name},
    )
    return delivery


def list_deliveries() -> list[Delivery]:
    return [Delivery.from_dict(d) for d in store.list_records(store.DELIVERIES)]


def get_delivery(delivery_id: int) -> Delivery:
    record = store.get_record(store.DELIVERIES, delivery_id)
    if record is None:
        raise RecordNotFoundError(store.DELIVERIES, delivery_id)
    return Delivery.from_dict(record)


def deliveries_for_client(client_id: int) -> list[Delivery]:
    records = store.list_records(store.DELIVERIES, lambda r: r.get("client_id") == client_id)
    return [Delivery.from_dict(d) for d in records]


def update_units(delivery_id: int, units: Iterable[DeliveryUnit | dict]) -> Delivery:
    """Replace a delivery's units and recompute its total."""
    unit_list = _units(units)
    record = store.update_record(
        store.DELIVERIES,
        delivery_id,
        {
            "units": [u.to_dict() for u in unit_list],
            "liters_delivered": str(total_liters(unit_list)),
        },
    )
    if record is None:
        raise RecordNotFoundError(store.DELIVERIES, delivery_id)
    return Delivery.from_dict(record)


def add_photo(delivery_id: int, uri: str) -> Delivery:
    delivery = get_delivery(delivery_id)
    record = store.update_record(
        store.DELIVERIES, delivery_id, {"photos": [*delivery.photos, uri]}
    )
    if record is None:
        raise RecordNotFoundError(store.DELIVERIES, delivery_id)
    log_action(AuditAction.ADD_PHOTO, resource_type="delivery", resource_id=delivery_id)
    return Delivery.from_dict(record)


def delete_delivery(delivery_id: int) -> bool:
    return store.remove_record(store.DELIVERIES, delivery_id)
