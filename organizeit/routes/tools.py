"""Cross-module tools: global search, export and bulk actions."""

from typing import Callable

from fastapi import APIRouter, Depends

from organizeit import seeds
from organizeit.auth import get_clock, get_store, require_authorization
from organizeit.models.schemas import BulkAction, ExportRequest, SearchRequest
from organizeit.store import KVStore
from organizeit.telemetry import iso

router = APIRouter(dependencies=[Depends(require_authorization)], tags=["Tools"])


@router.post("/search", summary="Global search")
async def search(req: SearchRequest) -> dict:
    results = seeds.SEARCH_RESULTS
    return {"results": results, "query": req.query, "total": len(results)}


@router.post("/export", summary="Export a module's data")
async def export(
    req: ExportRequest,
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    return {
        "export_id": f"EXPORT-{int(now * 1000)}",
        "module": req.module,
        "format": req.format,
        "status": "Ready",
        "generated_at": iso(now),
        "download_url": "#",
    }


@router.post("/bulk-actions", summary="Run an action over many items")
async def bulk_actions(
    req: BulkAction,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    bulk_id = f"BULK-{int(now * 1000)}"
    await store.set(bulk_id, {
        "id": bulk_id,
        "action": req.action,
        "items": req.items,
        "parameters": req.parameters,
        "status": "In Progress",
        "started_at": iso(now),
    })
    return {"bulk_id": bulk_id, "message": f"Bulk {req.action} initiated for {len(req.items)} items"}
