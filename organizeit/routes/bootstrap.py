"""
Store bootstrap.

  GET /init/status  -- Has /init/data run against this store?
  POST /init/data   -- Write every seed collection in one go

Neither route needs an Authorization header; the front end calls them
before the user has signed in. Both always answer 200. If the store is
down the backend is still reported as usable ("in-memory mode"), since
every read route has its own fallback.
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends

from organizeit import seeds
from organizeit.auth import get_clock, get_store
from organizeit.config import DATA_VERSION, SERVICE_VERSION
from organizeit.errors import masked
from organizeit.models.schemas import InitStatus
from organizeit.store import KVStore, StoreError
from organizeit.telemetry import iso

logger = logging.getLogger(__name__)

router = APIRouter(tags=["System"])

INITIALIZED_KEY = "system:initialized"


async def seed_collection(
    store: KVStore,
    prefix: str,
    records: list[dict],
    list_key: str,
    *aggregate_keys: str,
) -> int:
    """Write each record under <prefix>:<id>, the id list under `list_key`,
    and the whole array under every key in `aggregate_keys`."""
    items = {f"{prefix}:{r['id']}": r for r in records}
    items[list_key] = [r["id"] for r in records]
    for key in aggregate_keys:
        items[key] = records
    await store.mset(items)
    return len(records)


@router.get(
    "/init/status",
    response_model=InitStatus,
    summary="Initialization status",
)
@masked(lambda clock, **_: {
    "initialized": True,
    "timestamp": iso(clock()),
    "version": SERVICE_VERSION,
    "status": "Backend operational (in-memory mode)",
    "kv_store_available": False,
})
async def init_status(
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    marker = await store.get(INITIALIZED_KEY) or {}
    return {
        "initialized": bool(marker),
        "timestamp": marker.get("timestamp") or iso(clock()),
        "version": marker.get("version") or SERVICE_VERSION,
        "status": "Backend operational",
        "kv_store_available": bool(marker),
    }


@router.post(
    "/init/data",
    summary="Seed the store",
    description=(
        "Writes base metrics, alerts, services, projects, notifications, users "
        "and audit events. Safe to call repeatedly; each call overwrites the "
        "previous seed."
    ),
)
@masked(lambda clock, **_: {
    "success": True,
    "message": "Backend initialized (limited functionality)",
    "timestamp": iso(clock()),
    "version": DATA_VERSION,
    "kv_store_available": False,
    "mode": "fallback",
    "warning": "Some features may have limited functionality",
})
async def init_data(
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    timestamp = iso(now)
    logger.info("Initializing OrganizeIT data...")

    kv_store_working = True
    try:
        await store.set("system:base_metrics", seeds.base_metrics())
    except StoreError as e:
        logger.warning("Store not available (%s), continuing in in-memory mode", e)
        kv_store_working = False

    collections = [
        ("alerts", "alert", seeds.alerts(now), "alerts:list", ["alerts:current"]),
        ("services", "service", seeds.services(now), "services:list", ["services:health"]),
        ("projects", "project", seeds.projects(), "projects:list", ["projects:current"]),
        ("notifications", "notification", seeds.notifications(now), "notifications:list",
         ["notifications:current"]),
        ("users", "user", seeds.identity_users(now), "users:list", ["identity:users"]),
        ("audit_events", "audit", seeds.audit_events(now), "audit:list", ["audit:events"]),
    ]
    counts = {}
    for name, prefix, records, list_key, aggregates in collections:
        counts[name] = await seed_collection(store, prefix, records, list_key, *aggregates)

    try:
        await store.set(INITIALIZED_KEY, {
            "timestamp": timestamp,
            "version": DATA_VERSION,
            "data_version": "1.0",
            "initialized_by": "system",
            "kv_store_available": kv_store_working,
        })
    except StoreError as e:
        logger.warning("Could not persist initialization status (%s), continuing anyway", e)

    if kv_store_working:
        message = "OrganizeIT data initialization complete with KV store"
    else:
        message = "OrganizeIT backend initialized (in-memory mode - KV store unavailable)"
    logger.info(message)

    return {
        "success": True,
        "message": message,
        "timestamp": timestamp,
        "version": DATA_VERSION,
        "kv_store_available": kv_store_working,
        "mode": "persistent" if kv_store_working else "in-memory",
        "counts": counts,
    }
