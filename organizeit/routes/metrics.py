"""
GET /metrics/dashboard   -- Headline KPIs for the landing page.
GET /metrics/performance -- Hourly utilisation series for the ops charts.

There is no monitoring feed behind these numbers. The dashboard snapshot
is jittered from the base metrics (system:base_metrics, or the built-in
seed before /init/data has run) and reused for a minute so that every
widget on a page load agrees. Each regeneration is also kept under
metrics:historical:<timestamp>, newest HISTORY_LIMIT only.

Both routes answer 200 with fallback data if the store is unavailable.
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends, Query

from organizeit import seeds
from organizeit.auth import get_clock, get_store, require_authorization
from organizeit.errors import masked
from organizeit.store import KVStore, record_snapshot
from organizeit.telemetry import performance_series, synthesize

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_authorization)])

METRICS_KEY = "metrics:dashboard:current"
BASE_METRICS_KEY = "system:base_metrics"


@router.get(
    "/metrics/dashboard",
    summary="Current dashboard metrics",
    description=(
        "System health, monthly spend, carbon footprint, uptime, MTTD/MTTR and "
        "open alert count. Regenerated at most once per freshness window."
    ),
    tags=["Metrics"],
)
@masked(lambda clock, **_: seeds.metrics_fallback(clock()))
async def dashboard_metrics(
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    previous = await store.get(METRICS_KEY)
    seed = await store.get(BASE_METRICS_KEY) or seeds.base_metrics()

    snapshot = synthesize(seed, previous, now)
    if snapshot is not previous:
        logger.info("Dashboard metrics regenerated (health=%.2f)", snapshot["system_health"])
        await store.set(METRICS_KEY, snapshot)
        await record_snapshot(store, "metrics:historical", snapshot["last_updated"], snapshot)

    return snapshot


@router.get(
    "/metrics/performance",
    summary="Hourly performance series",
    description="CPU, memory, disk and network utilisation for the last `hours` hours.",
    tags=["Metrics"],
)
@masked(lambda hours, clock, **_: {"data": performance_series(hours, clock()), "hours": hours})
async def performance_metrics(
    hours: int = Query(default=24, ge=0, le=720, description="How many hours back to chart."),
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    data = performance_series(hours, now)
    await record_snapshot(store, f"performance:{hours}h", int(now * 1000), data)
    return {"data": data, "hours": hours}
