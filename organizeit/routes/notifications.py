"""
Notification centre.

GET /notifications rebuilds the whole list from the seed on every call so
timestamps always read "30 minutes ago", "2 hours ago"... relative to now.
A side effect is that read flags set through PUT /notifications/{id}/read
only last until the next GET.
"""

from typing import Callable

from fastapi import APIRouter, Depends

from organizeit import seeds
from organizeit.auth import get_clock, get_store, require_authorization
from organizeit.errors import masked
from organizeit.models.schemas import NotificationPreferences
from organizeit.store import KVStore
from organizeit.telemetry import iso

router = APIRouter(dependencies=[Depends(require_authorization)], tags=["Notifications"])

NOTIFICATIONS_KEY = "notifications:current"


@router.get("/notifications", summary="List notifications")
@masked(lambda clock, **_: seeds.notifications_fallback(clock()))
async def list_notifications(
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    stamp = iso(now)
    notifications = [{**n, "updated_at": stamp} for n in seeds.notifications(now)]
    await store.set(NOTIFICATIONS_KEY, notifications)

    return {
        "notifications": notifications,
        "unread_count": sum(1 for n in notifications if not n["read"]),
        "total_count": len(notifications),
        "last_updated": stamp,
    }


@router.put("/notifications/{notification_id}/read", summary="Mark a notification read")
@masked({"message": "Notification marked as read"})
async def mark_read(
    notification_id: str,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    read_at = iso(clock())
    notifications = await store.get(NOTIFICATIONS_KEY) or []

    note = next((n for n in notifications if n.get("id") == notification_id), None)
    if note is not None:
        note["read"] = True
        note["read_at"] = read_at
        await store.set(NOTIFICATIONS_KEY, notifications)

    return {
        "notification": {"id": notification_id, "read": True, "read_at": read_at},
        "message": "Notification marked as read",
    }


@router.post("/notifications/configure", summary="Save notification preferences")
async def configure_notifications(
    prefs: NotificationPreferences,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    await store.set("notifications:config", {
        "channels": prefs.channels,
        "frequency": prefs.frequency,
        "types": prefs.types,
        "updated_at": iso(clock()),
    })
    return {"message": "Notification preferences configured successfully"}
