"""
AI operations page.

No model runs behind any of these. Analyses, optimizations and reports
come back "completed" or "started" immediately with fixed figures;
training, retraining and deployment requests are recorded in the store
so the UI can list them.
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends

from organizeit import seeds
from organizeit.auth import get_clock, get_store, require_authorization
from organizeit.models.schemas import (
    AiReportRequest,
    AnalyzeRequest,
    DeployModel,
    InsightDismiss,
    InsightImplement,
    OptimizeRequest,
    RetrainModel,
    TrainModel,
)
from organizeit.store import KVStore
from organizeit.telemetry import iso

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_authorization)], tags=["AI"])


@router.get("/ai/insights", summary="AI insights overview")
async def insights(store: KVStore = Depends(get_store)) -> dict:
    await store.set("ai:insights:current", seeds.AI_INSIGHTS)
    return seeds.AI_INSIGHTS


@router.post("/ai/analyze", summary="Run an analysis")
async def analyze(
    req: AnalyzeRequest,
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    return {
        "analysis_id": f"ANALYSIS-{int(now * 1000)}",
        "data_type": req.data_type,
        "status": "Completed",
        "findings": {"anomalies": 3, "patterns_identified": 7, "recommendations": 5},
        "confidence": 94,
        "completed_at": iso(now),
    }


@router.post("/ai/optimize", summary="Start an optimization")
async def optimize(
    req: OptimizeRequest,
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    return {
        "optimization_id": f"OPT-{int(now * 1000)}",
        "type": req.optimization_type,
        "target_metric": req.target_metric,
        "status": "In Progress",
        "expected_improvement": "25-35%",
        "started_at": iso(now),
    }


@router.post("/ai/generate-report", summary="Generate an AI report")
async def generate_report(
    req: AiReportRequest,
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    return {
        "report_id": f"REPORT-{int(now * 1000)}",
        "type": req.report_type,
        "period": req.time_period,
        "generated_at": iso(now),
        "status": "Ready",
        "includes_predictions": req.include_predictions,
        "download_url": "#",
    }


@router.post("/ai/dismiss-insight", summary="Dismiss an insight")
async def dismiss_insight(
    req: InsightDismiss,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    await store.set(f"insight:{req.insight_id}:dismissed", {
        "insightId": req.insight_id,
        "reason": req.reason,
        "timestamp": iso(clock()),
    })
    return {"message": "Insight dismissed successfully"}


@router.post("/ai/implement-insight", summary="Act on an insight")
async def implement_insight(
    req: InsightImplement,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    await store.set(f"insight:{req.insight_id}:implemented", {
        "insightId": req.insight_id,
        "implementation_plan": req.implementation_plan,
        "status": "In Progress",
        "timestamp": iso(clock()),
    })
    return {"message": "Insight implementation started successfully"}


# ---------------------------------------------------------------------------
# Model lifecycle
# ---------------------------------------------------------------------------

@router.post("/ai/train-model", summary="Train a model")
async def train_model(
    req: TrainModel,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    training_id = f"TRAIN-{int(now * 1000)}"
    await store.set(training_id, {
        "id": training_id,
        "model_name": req.model_name,
        "status": "Training",
        "started_at": iso(now),
        "parameters": req.parameters,
    })
    logger.info("Training %s queued for model %s", training_id, req.model_name)
    return {
        "training_id": training_id,
        "message": "Model training initiated successfully",
        "estimated_completion": "15-30 minutes",
    }


@router.post("/ai/models/{model_id}/retrain", summary="Retrain a model")
async def retrain_model(
    model_id: str,
    req: RetrainModel,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    retraining_id = f"RETRAIN-{int(now * 1000)}"
    await store.set(retraining_id, {
        "id": retraining_id,
        "model_id": model_id,
        "status": "Retraining",
        "started_at": iso(now),
        "use_latest_data": req.use_latest_data,
        "training_parameters": req.training_parameters,
    })
    return {"retraining_id": retraining_id, "message": "Model retraining initiated successfully"}


@router.post("/ai/models/{model_id}/deploy", summary="Deploy a model")
async def deploy_model(
    model_id: str,
    req: DeployModel,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    await store.set(f"model:{model_id}:deployment", {
        "model_id": model_id,
        "environment": req.environment,
        "rollout_strategy": req.rollout_strategy,
        "status": "Deploying",
        "started_at": iso(clock()),
    })
    return {"message": "Model deployment initiated successfully"}
