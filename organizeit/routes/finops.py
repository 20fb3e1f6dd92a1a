"""
FinOps: cloud spend and savings opportunities.

Cost history is generated fresh on every call (see telemetry.cost_series);
the store keeps a copy of the most recent series for the audit trail.
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends, Query

from organizeit import seeds
from organizeit.auth import get_clock, get_store, require_authorization
from organizeit.errors import masked
from organizeit.models.schemas import ApplyOptimization, BudgetAlert, FinOpsReport
from organizeit.store import KVStore, record_snapshot
from organizeit.telemetry import cost_series, iso

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_authorization)], tags=["FinOps"])


@router.get(
    "/finops/costs",
    summary="Monthly cloud spend",
    description="Six months of AWS/Azure/GCP spend, oldest first. `period` is echoed back.",
)
@masked(lambda **_: seeds.costs_fallback())
async def costs(
    period: str = Query(default="6m", examples=["6m"]),
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    data = cost_series(now)
    await record_snapshot(store, f"finops:costs:{period}", int(now * 1000), data)
    return {"data": data, "period": period}


@router.get("/finops/optimization", summary="Savings opportunities")
async def optimization(store: KVStore = Depends(get_store)) -> dict:
    opportunities = seeds.OPTIMIZATION_OPPORTUNITIES
    await store.set("finops:optimization:current", opportunities)
    return {
        "opportunities": opportunities,
        "total_savings": sum(o["potential_savings"] for o in opportunities),
    }


@router.post("/finops/apply-optimization", summary="Apply an opportunity")
async def apply_optimization(
    req: ApplyOptimization,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    await store.set(f"finops:optimization:{req.optimization_id}:applied", {
        "optimizationId": req.optimization_id,
        "status": "Applied",
        "applied_at": iso(clock()),
    })
    logger.info("Optimization %s applied", req.optimization_id)
    return {"message": "Cost optimization applied successfully"}


@router.post("/finops/set-budget-alert", summary="Configure the budget alert")
async def set_budget_alert(
    req: BudgetAlert,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    await store.set("finops:budget_alert", {
        "threshold": req.threshold,
        "email": req.email,
        "enabled": True,
        "created_at": iso(clock()),
    })
    return {"message": "Budget alert configured successfully"}


@router.post("/finops/export-report", summary="Export a FinOps report")
async def export_report(
    req: FinOpsReport,
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    return {
        "report_id": f"FIN-REPORT-{int(now * 1000)}",
        "type": req.report_type,
        "format": req.format,
        "status": "Ready",
        "generated_at": iso(now),
    }
