"""
ESG monitoring: carbon footprint and sustainability programme.

Both reads return fixed reference figures and snapshot them under
esg:<name>:current.
"""

from typing import Callable

from fastapi import APIRouter, Depends

from organizeit import seeds
from organizeit.auth import get_clock, get_store, require_authorization
from organizeit.errors import masked
from organizeit.models.schemas import EsgReport, EsgTarget
from organizeit.store import KVStore
from organizeit.telemetry import iso

router = APIRouter(dependencies=[Depends(require_authorization)], tags=["ESG"])


@router.get("/esg/carbon", summary="Carbon footprint")
@masked(seeds.CARBON)
async def carbon(store: KVStore = Depends(get_store)) -> dict:
    await store.set("esg:carbon:current", seeds.CARBON)
    return seeds.CARBON


@router.get("/esg/sustainability", summary="Sustainability metrics and initiatives")
async def sustainability(store: KVStore = Depends(get_store)) -> dict:
    await store.set("esg:sustainability:current", seeds.SUSTAINABILITY)
    return seeds.SUSTAINABILITY


@router.post("/esg/update-target", summary="Update an ESG target")
async def update_target(
    req: EsgTarget,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    await store.set(f"esg:target:{req.target}", {
        "target": req.target,
        "value": req.value,
        "updated_at": iso(clock()),
    })
    return {"message": "ESG target updated successfully"}


@router.post(
    "/esg/generate-report",
    summary="Generate an ESG report",
    description="The report record is kept under its id (ESG-REPORT-<epoch_ms>).",
)
async def generate_report(
    req: EsgReport,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    report_id = f"ESG-REPORT-{int(now * 1000)}"
    report = {
        "report_id": report_id,
        "period": req.period,
        "scope": req.scope,
        "status": "Ready",
        "generated_at": iso(now),
    }
    await store.set(report_id, report)
    return {**report, "message": "ESG report generated successfully"}
