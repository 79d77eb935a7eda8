"""Clients, their delivery sites and the equipment assigned to them."""

from __future__ import annotations

import logging
from decimal import Decimal

from logistix.models.audit import AuditAction
from logistix.models.client import Client, Site
from logistix.models.equipment import Equipment
from logistix.services.exceptions import RecordNotFoundError
from logistix.utils import store
from logistix.utils.audit import log_action
from logistix.utils.validators import (
    validate_email,
    validate_liters,
    validate_phone,
    validate_required,
)

logger = logging.getLogger(__name__)


def _clean_client_fields(fields: dict) -> dict:
    cleaned = dict(fields)
    if "name" in cleaned:
        cleaned["name"] = validate_required(cleaned["name"], "Nom")
    if cleaned.get("email"):
        cleaned["email"] = validate_email(cleaned["email"])
    if cleaned.get("phone"):
        cleaned["phone"] = validate_phone(cleaned["phone"])
    return cleaned


# --- Clients ---


def list_clients() -> list[Client]:
    return [Client.from_dict(d) for d in store.list_records(store.CLIENTS)]


def get_client(client_id: int) -> Client:
    record = store.get_record(store.CLIENTS, client_id)
    if record is None:
        raise RecordNotFoundError(store.CLIENTS, client_id)
    return Client.from_dict(record)


def add_client(
    name: str,
    *,
    company: str = "",
    phone: str = "",
    address: str = "",
    email: str | None = None,
    notes: str = "",
) -> Client:
    fields = _clean_client_fields(
        {
            "name": name,
            "company": company,
            "phone": phone,
            "address": address,
            "email": email,
            "notes": notes,
            "equipment_ids": [],
        }
    )
    client = Client.from_dict(store.add_record(store.CLIENTS, fields))
    log_action(
        AuditAction.CREATE_CLIENT,
        resource_type="client",
        resource_id=client.id,
        resource_name=client.name,
    )
    return client


def update_client(client_id: int, **updates: object) -> Client:
    record = store.update_record(store.CLIENTS, client_id, _clean_client_fields(updates))
    if record is None:
        raise RecordNotFoundError(store.CLIENTS, client_id)
    client = Client.from_dict(record)
    log_action(
        AuditAction.UPDATE_CLIENT,
        resource_type="client",
        resource_id=client.id,
        resource_name=client.name,
        details={"fields": sorted(updates)},
    )
    return client


def delete_client(client_id: int) -> bool:
    """Delete a client together with its sites."""
    if not store.remove_record(store.CLIENTS, client_id):
        return False
    removed_sites = store.remove_where(store.SITES, lambda r: r.get("client_id") == client_id)
    logger.debug("Deleted client #%s and %d site(s)", client_id, removed_sites)
    log_action(AuditAction.DELETE_CLIENT, resource_type="client", resource_id=client_id)
    return True


# --- Sites ---


def sites_for_client(client_id: int) -> list[Site]:
    records = store.list_records(store.SITES, lambda r: r.get("client_id") == client_id)
    return [Site.from_dict(d) for d in records]


def get_site(site_id: int) -> Site:
    record = store.get_record(store.SITES, site_id)
    if record is None:
        raise RecordNotFoundError(store.SITES, site_id)
    return Site.from_dict(record)


def add_site(client_id: int, name: str, *, address: str = "") -> Site:
    get_client(client_id)
    site = Site.from_dict(
        store.add_record(
            store.SITES,
            {
                "client_id": client_id,
                "name": validate_required(name, "Site"),
                "address": address,
            },
        )
    )
    log_action(
        AuditAction.CREATE_SITE, resource_type="site", resource_id=site.id, resource_name=site.name
    )
    return site


def update_site(site_id: int, *, name: str | None = None, address: str | None = None) -> Site:
    updates: dict = {}
    if name is not None:
        updates["name"] = validate_required(name, "Site")
    if address is not None:
        updates["address"] = address
    record = store.update_record(store.SITES, site_id, updates)
    if record is None:
        raise RecordNotFoundError(store.SITES, site_id)
    site = Site.from_dict(record)
    log_action(
        AuditAction.UPDATE_SITE, resource_type="site", resource_id=site.id, resource_name=site.name
    )
    return site


def delete_site(site_id: int) -> bool:
    removed = store.remove_record(store.SITES, site_id)
    if removed:
        log_action(AuditAction.DELETE_SITE, resource_type="site", resource_id=site_id)
    return removed


# --- Equipment ---


def list_equipment() -> list[Equipment]:
    return [Equipment.from_dict(d) for d in store.list_records(store.EQUIPMENT)]


def add_equipment(name: str, capacity: object | None = None) -> Equipment:
    cap: Decimal | None = validate_liters(capacity) if capacity is not None else None
    record = store.add_record(
        store.EQUIPMENT,
        {
            "name": validate_required(name, "Equipement"),
            "capacity": str(cap) if cap is not None else None,
        },
    )
    return Equipment.from_dict(record)


def update_equipment(equipment: Equipment) -> Equipment:
    record = store.update_record(
        store.EQUIPMENT,
        equipment.id,
        {"name": validate_required(equipment.name, "Equipement"), **_capacity(equipment)},
    )
    if record is None:
        raise RecordNotFoundError(store.EQUIPMENT, equipment.id)
    return Equipment.from_dict(record)


def _capacity(equipment: Equipment) -> dict:
    cap = equipment.capacity
    return {"capacity": str(cap) if cap is not None else None}


def delete_equipment(equipment_id: int) -> bool:
    """Delete equipment and unassign it from every client."""
    if not store.remove_record(store.EQUIPMENT, equipment_id):
        return False

    def _unassign(records: list[dict]) -> list[dict]:
        for r in records:
            ids = r.get("equipment_ids") or []
            if equipment_id in ids:
                r["equipment_ids"] = [i for i in ids if i != equipment_id]
        return records

    store.replace_records(store.CLIENTS, _unassign)
    return True


def assign_equipment(client_id: int, equipment_ids: list[int]) -> Client:
    """Replace the set of equipment assigned to a client (unknown ids are dropped)."""
    known = {e.id for e in list_equipment()}
    kept = [i for i in dict.fromkeys(equipment_ids) if i in known]
    if len(kept) != len(set(equipment_ids)):
        logger.warning("Ignoring unknown equipment ids for client #%s", client_id)
    record = store.update_record(store.CLIENTS, client_id, {"equipment_ids": kept})
    if record is None:
        raise RecordNotFoundError(store.CLIENTS, client_id)
    return Client.from_dict(record)


def client_equipment(client_id: int) -> list[Equipment]:
    client = get_client(client_id)
    wanted = set(client.equipment_ids)
    return [e for e in list_equipment() if e.id in wanted]
