"""
Runtime configuration for the OrganizeIT backend.

Everything is read from the environment once at import time, with demo
defaults so `uvicorn organizeit.main:app` works with no setup at all.
"""

import os

# ---------------------------------------------------------------------------
# Service identity
# ---------------------------------------------------------------------------

SERVICE_NAME = os.getenv("SERVICE_NAME", "OrganizeIT Backend")
SERVICE_VERSION = os.getenv("SERVICE_VERSION", "1.0.0")

# Every route is mounted under this prefix. The default matches the path the
# dashboard front end was built against.
API_PREFIX = os.getenv("API_PREFIX", "/make-server-efc8e70a").rstrip("/")

# ---------------------------------------------------------------------------
# HTTP / logging
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Comma-separated list. "*" keeps the demo open to any origin.
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# ---------------------------------------------------------------------------
# Mock data synthesis
# ---------------------------------------------------------------------------

# How long a synthesized dashboard snapshot is reused before regenerating.
METRICS_FRESHNESS_SECONDS = float(os.getenv("METRICS_FRESHNESS_SECONDS", "60"))

# Timestamped snapshots kept per history (metrics, performance, costs).
HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "100"))

# Version stamped into system:initialized by /init/data.
DATA_VERSION = "1.0.0"

# ---------------------------------------------------------------------------
# Demo login
# ---------------------------------------------------------------------------

DEMO_EMAIL = os.getenv("DEMO_EMAIL", "demo@organizeit.com")
DEMO_PASSWORD = os.getenv("DEMO_PASSWORD", "demo123")
DEMO_USER_ID = "demo-user-id"

# ---------------------------------------------------------------------------
# Diagnostic harness
# ---------------------------------------------------------------------------

API_URL = os.getenv("ORGANIZEIT_API_URL", "http://localhost:8000")
API_KEY = os.getenv("ORGANIZEIT_API_KEY", "demo-token")
DIAGNOSTIC_TIMEOUT = float(os.getenv("DIAGNOSTIC_TIMEOUT", "5.0"))
