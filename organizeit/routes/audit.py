"""
Audit trail.

The event log is one array under audit:events, seeded on first read.
Search, filter and export all read through the same seed so they work
against a cold store. Events are immutable; there is no write route.
"""

from typing import Callable

from fastapi import APIRouter, Depends, Query

from organizeit import seeds
from organizeit.auth import get_clock, get_store, require_authorization
from organizeit.errors import masked
from organizeit.models.schemas import AuditExport, AuditFilter, AuditSearch
from organizeit.store import KVStore, get_or_seed
from organizeit.telemetry import iso

router = APIRouter(dependencies=[Depends(require_authorization)], tags=["Compliance"])

EVENTS_KEY = "audit:events"

SEARCHABLE_FIELDS = ("action", "user", "resource", "details")


async def _events(store: KVStore, now: float) -> list[dict]:
    return await get_or_seed(store, EVENTS_KEY, lambda: seeds.audit_events(now))


def matches(event: dict, query: str) -> bool:
    """Case-insensitive substring match over the event's searchable text."""
    text = " ".join(str(event.get(f) or "") for f in SEARCHABLE_FIELDS)
    return query.lower() in text.lower()


@router.get(
    "/audit/events",
    summary="Recent audit events",
    description="Newest first, truncated to `limit`. `total` counts the whole log.",
)
async def list_events(
    limit: int = Query(default=50, ge=0),
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    events = await _events(store, now)
    return {
        "events": events[:limit],
        "total": len(events),
        "limit": limit,
        "last_updated": iso(now),
    }


@router.post("/audit/search", summary="Search the audit log")
async def search_events(
    req: AuditSearch,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    events = await _events(store, clock())
    results = [e for e in events if matches(e, req.query)]
    return {"results": results, "query": req.query, "total": len(results)}


@router.post(
    "/audit/filter",
    summary="Filter the audit log",
    description="Keeps events whose risk level, user and service are in the given lists. Empty lists match everything.",
)
async def filter_events(
    req: AuditFilter,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    events = await _events(store, clock())

    if req.risk_levels:
        events = [e for e in events if e.get("risk_level") in req.risk_levels]
    if req.users:
        events = [e for e in events if e.get("user") in req.users]
    if req.services:
        events = [e for e in events if e.get("service") in req.services]

    return {"events": events, "total": len(events)}


@router.post("/audit/export", summary="Export the audit log")
async def export_events(
    req: AuditExport,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    return {
        "events": await _events(store, now),
        "format": req.format,
        "exported_at": iso(now),
        "message": "Audit logs exported successfully",
    }


@router.get(
    "/audit/{event_id}/details",
    summary="Retrieve an audit event",
    description="Unknown ids return a placeholder system event rather than a 404.",
)
@masked(lambda event_id, clock, **_: {
    "event": {"id": event_id, "timestamp": iso(clock())},
    "message": "Log details retrieved",
})
async def event_details(
    event_id: str,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    events = await store.get(EVENTS_KEY) or []
    event = next((e for e in events if e.get("id") == event_id), None)

    if event is None:
        event = {
            "id": event_id,
            "timestamp": iso(clock()),
            "event_type": "system_event",
            "status": "success",
            "message": "Event details retrieved",
        }

    return {"event": event, "message": "Log details retrieved"}
