"""
OrganizeIT Backend -- Application entry point.

Run with:
    uvicorn organizeit.main:app --reload

Then open http://localhost:8000/docs for the interactive Swagger UI.
Every route lives under API_PREFIX (default /make-server-efc8e70a).

This file:
  1. Configures logging and creates the FastAPI application
  2. Adds CORS and request-logging middleware
  3. Translates the error taxonomy into JSON responses
  4. Installs the store and clock on app.state
  5. Mounts all route modules and defines the health/root endpoints
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from organizeit.config import API_PREFIX, CORS_ORIGINS, LOG_LEVEL, SERVICE_NAME, SERVICE_VERSION
from organizeit.errors import GENERIC_SUCCESS, AuthorizationRequired, NotFound
from organizeit.models.schemas import HealthResponse
from organizeit.routes import (
    admin,
    ai,
    alerts,
    audit,
    auth,
    bootstrap,
    chat,
    esg,
    finops,
    identity,
    metrics,
    notifications,
    projects,
    resources,
    services,
    tools,
    users,
)
from organizeit.store import KVStore, StoreError
from organizeit.telemetry import iso

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger("organizeit")

# ---------------------------------------------------------------------------
# Create the FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(
    title="OrganizeIT Backend API",
    version=SERVICE_VERSION,
    description=(
        "Backend for the OrganizeIT enterprise dashboard: IT operations, FinOps, "
        "ESG, projects, identity, audit and AI insights.\n\n"
        "---\n\n"
        "All data is synthetic. Metrics are jittered from fixed baselines, the "
        "assistant answers from canned replies, and every collection seeds itself "
        "on first read. Protected routes only check that an `Authorization` "
        "header is present.\n\n"
        "**Status:** demo mode (in-memory store)."
    ),
)

# Shared state. Tests swap both out.
app.state.store = KVStore()
app.state.clock = time.time

# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("%s %s -> %d (%.1fms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


# ---------------------------------------------------------------------------
# Error handlers
#
# Only 401 and 404 are ever surfaced. A StoreError that a route didn't
# mask itself still answers 200 so the dashboard keeps rendering.
# ---------------------------------------------------------------------------

@app.exception_handler(AuthorizationRequired)
async def authorization_required(request: Request, exc: AuthorizationRequired):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(NotFound)
async def not_found(request: Request, exc: NotFound):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StoreError)
async def store_unavailable(request: Request, exc: StoreError):
    logger.warning("%s %s: store unavailable (%s), answering generic success",
                   request.method, request.url.path, exc)
    return JSONResponse(status_code=200, content=dict(GENERIC_SUCCESS))


# ---------------------------------------------------------------------------
# Mount route modules
# ---------------------------------------------------------------------------

for module in (
    bootstrap, auth, chat, metrics, alerts, finops, esg, projects, services,
    notifications, users, ai, identity, audit, resources, admin, tools,
):
    app.include_router(module.router, prefix=API_PREFIX)


# ---------------------------------------------------------------------------
# Health check and index
# ---------------------------------------------------------------------------

@app.get(
    f"{API_PREFIX}/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns the current status of the API. Use this for uptime monitoring.",
    tags=["System"],
)
async def health():
    return {
        "status": "healthy",
        "timestamp": iso(app.state.clock()),
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@app.get(f"{API_PREFIX}/", summary="API index", tags=["System"])
async def root():
    return {
        "message": "OrganizeIT Backend API",
        "status": "running",
        "endpoints": {
            "health": f"{API_PREFIX}/health",
            "auth": f"{API_PREFIX}/auth/*",
            "metrics": f"{API_PREFIX}/metrics/*",
            "projects": f"{API_PREFIX}/projects",
            "ai": f"{API_PREFIX}/ai/*",
        },
    }
