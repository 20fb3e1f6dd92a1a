"""
Mock telemetry synthesis.

The dashboard has no real monitoring feed. Instead each read either reuses
a recently generated snapshot or builds a new one from a static seed plus
random variance, so refreshing the page shows numbers that move a little
but always stay plausible.

Everything in this module is a pure function of (seed, previous, now) and
an injectable random source -- no store, no clock -- so the routes stay
thin and the numbers are testable with a seeded Random.
"""

import calendar
import random
from dataclasses import dataclass
from datetime import datetime, timezone

from organizeit.config import METRICS_FRESHNESS_SECONDS


def iso(epoch_seconds: float) -> str:
    """Epoch seconds -> '2024-01-15T10:30:00.000Z'."""
    stamp = datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)
    return stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# Jitter policy
#
# pct is the half-width of the uniform variance as a fraction of the seed
# value (0.05 = +/- 5%). lower/upper clamp the result into a range that
# still looks like a healthy production estate.
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Jitter:
    pct: float
    lower: float | None = None
    upper: float | None = None
    integer: bool = False


DASHBOARD_SEED = {
    "system_health": 98.7,
    "monthly_spend": 285000,
    "carbon_footprint": 42.3,
    "active_projects": 24,
    "uptime": 99.87,
    "mttd": 8.2,
    "mttr": 24.5,
    "alerts_count": 3,
}

DASHBOARD_POLICY = {
    "system_health": Jitter(0.004, lower=95, upper=100),
    "monthly_spend": Jitter(0.035, lower=0, integer=True),
    "carbon_footprint": Jitter(0.05, lower=30),
    "active_projects": Jitter(0.08, lower=0, integer=True),
    "uptime": Jitter(0.0015, lower=99, upper=100),
    "mttd": Jitter(0.12, lower=5),
    "mttr": Jitter(0.16, lower=15),
    "alerts_count": Jitter(0.5, lower=0, integer=True),
}


def clamp(value: float, lower: float | None = None, upper: float | None = None) -> float:
    if lower is not None:
        value = max(lower, value)
    if upper is not None:
        value = min(upper, value)
    return value


def vary(value: int | float, pct: float, rng: random.Random | None = None) -> float:
    """Add random variance of +/- pct of the value's magnitude."""
    rng = rng or random
    return value + abs(value) * rng.uniform(-pct, pct)


def jitter(seed: dict, policy: dict[str, Jitter], rng: random.Random | None = None) -> dict:
    """Copy `seed`, perturbing every numeric field the policy names.

    Fields without a rule, and non-numeric values, are copied unchanged.
    """
    out = dict(seed)
    for field, rule in policy.items():
        value = seed.get(field)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        varied = vary(value, rule.pct, rng)
        varied = int(round(varied)) if rule.integer else round(varied, 2)
        out[field] = clamp(varied, rule.lower, rule.upper)
    return out


def is_fresh(previous: dict | None, now: float, window: float = METRICS_FRESHNESS_SECONDS) -> bool:
    """True while `previous` is no older than `window` seconds."""
    if not previous:
        return False
    stamp = previous.get("last_updated")
    if isinstance(stamp, bool) or not isinstance(stamp, (int, float)):
        return False
    return now * 1000 - stamp <= window * 1000


def synthesize(
    seed: dict,
    previous: dict | None,
    now: float,
    policy: dict[str, Jitter] = DASHBOARD_POLICY,
    window: float = METRICS_FRESHNESS_SECONDS,
    rng: random.Random | None = None,
) -> dict:
    """Seed-if-empty, jitter-if-stale.

    Returns `previous` itself while it is fresh; otherwise a new snapshot
    jittered from `seed` and stamped with `now`. Callers persist the result
    only when it is not `previous`.
    """
    if is_fresh(previous, now, window):
        return previous

    snapshot = jitter(seed, policy, rng)
    snapshot["timestamp"] = iso(now)
    snapshot["last_updated"] = int(now * 1000)
    return snapshot


# ---------------------------------------------------------------------------
# Time series
# ---------------------------------------------------------------------------

BUSINESS_HOURS = range(9, 18)


def performance_series(hours: int, now: float, rng: random.Random | None = None) -> list[dict]:
    """Hourly cpu/memory/disk/network utilisation from now-hours up to now.

    Load follows office hours (UTC): ~70% from 09:00 to 17:59, ~40% outside.
    """
    rng = rng or random
    points = []
    for i in range(hours, -1, -1):
        ts = now - i * 3600
        hour = datetime.fromtimestamp(ts, tz=timezone.utc).hour
        base = 70 if hour in BUSINESS_HOURS else 40
        points.append({
            "timestamp": iso(ts),
            "time": f"{hour:02d}:00",
            "cpu": round(clamp(base + rng.uniform(-15, 15), 20, 95), 1),
            "memory": round(clamp(base + rng.uniform(-12.5, 12.5), 30, 90), 1),
            "disk": round(clamp(base * 0.6 + rng.uniform(-10, 10), 10, 80), 1),
            "network": round(clamp(base * 0.4 + rng.uniform(-7.5, 7.5), 5, 70), 1),
        })
    return points


# Monthly baseline and growth per month, by provider.
CLOUD_BASELINES = {
    "aws": (125000, 2000, 5000),
    "azure": (87000, 1500, 4000),
    "gcp": (45000, 1000, 2500),
}


def cost_series(now: float, months: int = 6, rng: random.Random | None = None) -> list[dict]:
    """Monthly spend per cloud provider, oldest month first.

    Each provider grows linearly month over month; the reported bill is
    jittered by up to the provider's spread. `total` is the un-jittered
    baseline sum, which is what the budget line on the chart tracks.
    """
    rng = rng or random
    today = datetime.fromtimestamp(now, tz=timezone.utc)
    points = []
    for i in range(months - 1, -1, -1):
        year, month = today.year, today.month - i
        while month < 1:
            year, month = year - 1, month + 12
        first = datetime(year, month, 1, tzinfo=timezone.utc)

        step = months - 1 - i
        point = {"month": calendar.month_abbr[month], "date": iso(first.timestamp())}
        total = 0
        for provider, (base, growth, spread) in CLOUD_BASELINES.items():
            baseline = base + step * growth
            point[provider] = baseline + int(rng.uniform(-spread, spread))
            total += baseline
        point["total"] = total
        points.append(point)
    return points
