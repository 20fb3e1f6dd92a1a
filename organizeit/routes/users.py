"""
GET /user/{user_id}/dashboard -- Personal landing page for a signed-in user.

Only users with a stored profile (user_profile:<id>) have a dashboard;
the demo profile is written by /auth/signin. Anyone else gets a 404.
The assembled dashboard is kept under user_dashboard:<id>.
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends

from organizeit import seeds
from organizeit.auth import get_clock, get_store, require_authorization
from organizeit.errors import NotFound
from organizeit.store import KVStore
from organizeit.telemetry import iso

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_authorization)], tags=["User"])


@router.get(
    "/user/{user_id}/dashboard",
    summary="Personal dashboard",
    description="404 until the user has a profile (the demo profile is written at sign-in).",
)
async def user_dashboard(
    user_id: str,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    profile = await store.get(f"user_profile:{user_id}")
    if not profile:
        logger.info("No profile for user %s", user_id)
        raise NotFound("User")

    now = clock()
    dashboard = {
        "user": profile,
        "metrics": seeds.user_metrics(now),
        "recent_activities": seeds.recent_activities(now),
        "last_updated": iso(now),
    }
    await store.set(f"user_dashboard:{user_id}", dashboard)
    return dashboard
