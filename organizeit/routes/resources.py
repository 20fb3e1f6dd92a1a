"""
Resource optimization: right-sizing, cleanup and carbon-aware scheduling.

None of the actions change infrastructure. Each one is recorded in the
store and acknowledged.
"""

from typing import Callable

from fastapi import APIRouter, Depends

from organizeit import seeds
from organizeit.auth import get_clock, get_store, require_authorization
from organizeit.models.schemas import (
    ApplyAllRecommendations,
    AutoScale,
    Cleanup,
    ImplementRecommendation,
    ScheduleOptimization,
    WorkloadConfig,
)
from organizeit.store import KVStore
from organizeit.telemetry import iso

router = APIRouter(dependencies=[Depends(require_authorization)], tags=["Resources"])


@router.get("/optimization/resources", summary="Resource utilisation and recommendations")
async def resource_overview(store: KVStore = Depends(get_store)) -> dict:
    await store.set("optimization:resources:current", seeds.RESOURCE_OPTIMIZATION)
    return seeds.RESOURCE_OPTIMIZATION


@router.post("/resources/auto-scale", summary="Configure auto-scaling")
async def auto_scale(
    req: AutoScale,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    await store.set(f"autoscale:{req.resource_type}", {
        "resource_type": req.resource_type,
        "scaling_policy": req.scaling_policy,
        "enabled": True,
        "configured_at": iso(clock()),
    })
    return {"message": "Auto-scaling configured successfully"}


@router.post("/resources/cleanup", summary="Clean up unused resources")
async def cleanup(
    req: Cleanup,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    cleanup_id = f"CLEANUP-{int(now * 1000)}"
    await store.set(cleanup_id, {
        "id": cleanup_id,
        "resource_types": req.resource_types,
        "status": "In Progress",
        "started_at": iso(now),
    })
    return {"cleanup_id": cleanup_id, "message": "Resource cleanup initiated successfully"}


@router.post("/resources/workload-configure", summary="Configure workload scheduling")
async def workload_configure(
    req: WorkloadConfig,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    await store.set(f"workload:{req.workload_name}", {
        "workload_name": req.workload_name,
        "schedule_config": req.schedule_config,
        "carbon_aware": req.carbon_aware,
        "cost_optimization": req.cost_optimization,
        "configured_at": iso(clock()),
    })
    return {"message": "Workload scheduling configured successfully"}


# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------

@router.post("/resources/apply-all-recommendations", summary="Apply every recommendation")
async def apply_all(
    req: ApplyAllRecommendations,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    await store.set("optimization:apply_all", {
        "status": "In Progress",
        "confirm_apply": req.confirm_apply,
        "exclude_high_risk": req.exclude_high_risk,
        "started_at": iso(clock()),
    })
    return {"message": "Applying all recommendations. This may take several minutes."}


@router.post("/resources/schedule-optimization", summary="Schedule an optimization run")
async def schedule_optimization(
    req: ScheduleOptimization,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    schedule_id = f"SCHED-{int(now * 1000)}"
    await store.set(schedule_id, {
        "id": schedule_id,
        "optimization_type": req.optimization_type,
        "schedule_time": req.schedule_time,
        "resources": req.resources,
        "parameters": req.parameters,
        "status": "Scheduled",
        "created_at": iso(now),
    })
    return {"schedule_id": schedule_id, "message": "Optimization scheduled successfully"}


@router.post("/resources/recommendations/{recommendation_id}/implement", summary="Implement a recommendation")
async def implement_recommendation(
    recommendation_id: str,
    req: ImplementRecommendation,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    await store.set(f"recommendation:{recommendation_id}:implementation", {
        "recommendationId": recommendation_id,
        "confirm_implementation": req.confirm_implementation,
        "rollback_plan": req.rollback_plan,
        "status": "Implementing",
        "started_at": iso(clock()),
    })
    return {"message": "Recommendation implementation started successfully"}


@router.get("/resources/recommendations/{recommendation_id}/details", summary="Recommendation details")
async def recommendation_details(recommendation_id: str) -> dict:
    return {
        "recommendation": {
            "id": recommendation_id,
            "title": "Right-size EC2 Instances",
            "description": "Detailed analysis of oversized instances",
            "potential_savings": 24000,
            "effort": "Low",
            "impact": "High",
            "implementation_steps": list(seeds.RECOMMENDATION_STEPS),
        }
    }
