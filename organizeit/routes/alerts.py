"""
Alert endpoints for the IT operations page.

  GET /alerts/current       -- Active alert list (seeded on first read)
  POST /alerts/create       -- Prepend a new alert
  PUT /alerts/{id}/status   -- Change an alert's status

All alerts live in a single array under alerts:current. Status updates for
an id that isn't in the array are accepted and reported as successful:
the UI treats the store as optional and must not show an error for it.
"""

import logging
import random
from typing import Any, Callable

from fastapi import APIRouter, Body, Depends

from organizeit import seeds
from organizeit.auth import get_clock, get_store, require_authorization
from organizeit.errors import masked
from organizeit.models.schemas import AlertStatusUpdate
from organizeit.store import KVStore, get_or_seed
from organizeit.telemetry import iso

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_authorization)])

ALERTS_KEY = "alerts:current"


@router.get(
    "/alerts/current",
    summary="List current alerts",
    description="Returns the alert list, seeding three realistic alerts into an empty store.",
    tags=["Operations"],
)
@masked(lambda clock, **_: seeds.alerts_fallback(clock()))
async def current_alerts(
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    alerts = await get_or_seed(store, ALERTS_KEY, lambda: seeds.alerts(now))
    return {"alerts": alerts, "count": len(alerts)}


@router.post(
    "/alerts/create",
    summary="Create an alert",
    description="Any fields in the body are kept on the alert and may override the defaults.",
    tags=["Operations"],
)
async def create_alert(
    alert_data: dict[str, Any] = Body(default_factory=dict),
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    alerts = await store.get(ALERTS_KEY) or []

    new_alert = {
        "id": f"ALT-{int(now * 1000)}-{random.randint(0, 999)}",
        "timestamp": iso(now),
        "status": "Active",
        **alert_data,
    }
    alerts.insert(0, new_alert)
    await store.set(ALERTS_KEY, alerts)

    logger.info("Alert %s created (%s)", new_alert["id"], new_alert.get("severity", "unknown severity"))
    return {"alert": new_alert, "message": "Alert created successfully"}


@router.put(
    "/alerts/{alert_id}/status",
    summary="Update alert status",
    description=(
        "Sets status (and optional resolution) on the matching alert. "
        "Unknown ids are a no-op that still reports success."
    ),
    tags=["Operations"],
)
@masked({"message": "Alert status updated successfully", "success": True})
async def update_alert_status(
    alert_id: str,
    update: AlertStatusUpdate,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    updated_at = iso(clock())
    alerts = await store.get(ALERTS_KEY) or []

    for alert in alerts:
        if alert.get("id") == alert_id:
            alert["status"] = update.status
            alert["updated_at"] = updated_at
            if update.resolution:
                alert["resolution"] = update.resolution
            await store.set(ALERTS_KEY, alerts)
            break
    else:
        logger.info("Status update for unknown alert %s ignored", alert_id)

    return {
        "alert": {
            "id": alert_id,
            "status": update.status,
            "resolution": update.resolution,
            "updated_at": updated_at,
        },
        "message": "Alert status updated successfully",
        "success": True,
    }
