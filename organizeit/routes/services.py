"""
Service health and operations.

Restart and scale don't touch anything real; they record the request
under service:<id>:restart / service:<id>:scale so the operations page
can show it, and always report success.
"""

from typing import Callable

from fastapi import APIRouter, Depends

from organizeit import seeds
from organizeit.auth import get_clock, get_store, require_authorization
from organizeit.errors import masked
from organizeit.models.schemas import ServiceRestart, ServiceScale
from organizeit.store import KVStore, get_or_seed
from organizeit.telemetry import iso

router = APIRouter(dependencies=[Depends(require_authorization)], tags=["Operations"])

SERVICES_KEY = "services:health"


@router.get("/services/health", summary="Service health board")
@masked(lambda clock, **_: seeds.services_fallback(clock()))
async def services_health(
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    services = await get_or_seed(store, SERVICES_KEY, lambda: seeds.services(now))
    return {"services": services, "count": len(services)}


@router.post("/services/restart", summary="Restart a service")
@masked({"message": "Service restart initiated successfully", "success": True})
async def restart_service(
    req: ServiceRestart,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    await store.set(f"service:{req.service_id}:restart", {
        "serviceId": req.service_id,
        "status": "Restarting",
        "initiated_at": iso(clock()),
    })
    return {"message": f"Service {req.service_id} restart initiated successfully", "success": True}


@router.post("/services/scale", summary="Scale a service")
@masked({"message": "Service scaling initiated successfully", "success": True})
async def scale_service(
    req: ServiceScale,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    await store.set(f"service:{req.service_id}:scale", {
        "serviceId": req.service_id,
        "target_instances": req.instances,
        "status": "Scaling",
        "initiated_at": iso(clock()),
    })
    return {
        "message": f"Service {req.service_id} scaling to {req.instances} instances",
        "success": True,
    }
