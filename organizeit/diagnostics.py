#!/usr/bin/env python3
"""
Backend diagnostics -- probe the main read endpoints of a running backend.

Usage:
    python -m organizeit.diagnostics

Environment variables:
    ORGANIZEIT_API_URL  -- Server root (default: http://localhost:8000)
    ORGANIZEIT_API_KEY  -- Sent as the bearer token (default: demo-token)
    DIAGNOSTIC_TIMEOUT  -- Per-probe timeout in seconds (default: 5)

Probes run one after another. A probe that fails, times out or can't
connect is reported as an error result; run_diagnostics() itself never
raises for a network problem.
"""

import asyncio
import sys
from dataclasses import asdict, dataclass, field
from typing import Any

import httpx

from organizeit.config import API_KEY, API_PREFIX, API_URL, DIAGNOSTIC_TIMEOUT

PROBES = [
    ("Health Check", "/health"),
    ("Metrics Dashboard", "/metrics/dashboard"),
    ("Projects List", "/projects"),
    ("Alerts", "/alerts/current"),
    ("Notifications", "/notifications"),
    ("Services Health", "/services/health"),
    ("FinOps Costs", "/finops/costs"),
    ("ESG Carbon", "/esg/carbon"),
]


@dataclass
class ProbeResult:
    name: str
    endpoint: str
    status: str  # "success" | "error"
    message: str
    details: Any = field(default=None)

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> dict:
        return asdict(self)


async def probe(
    client: httpx.AsyncClient,
    name: str,
    endpoint: str,
    base_url: str,
    token: str,
    timeout: float = DIAGNOSTIC_TIMEOUT,
) -> ProbeResult:
    """GET one endpoint and describe the outcome.

    `timeout` bounds the whole request, not each connect or read step.
    """
    request = client.get(
        f"{base_url}{endpoint}",
        headers={"Authorization": f"Bearer {token}", "Content-Type": "application/json"},
        timeout=timeout,
    )
    try:
        r = await asyncio.wait_for(request, timeout)
    except (asyncio.TimeoutError, httpx.TimeoutException):
        return ProbeResult(name, endpoint, "error", f"Timed out after {timeout:g}s")
    except httpx.HTTPError as e:
        return ProbeResult(name, endpoint, "error", f"{type(e).__name__}: {e}")

    if r.is_success:
        try:
            details = r.json()
        except ValueError:
            details = r.text
        return ProbeResult(name, endpoint, "success", f"Success ({r.status_code})", details)

    return ProbeResult(
        name, endpoint, "error",
        f"Error {r.status_code}: {r.reason_phrase}",
        r.text,
    )


async def run_diagnostics(
    base_url: str | None = None,
    token: str = API_KEY,
    client: httpx.AsyncClient | None = None,
    timeout: float = DIAGNOSTIC_TIMEOUT,
) -> list[ProbeResult]:
    """Run every probe in order against `base_url` (server root + API prefix).

    Pass `client` to reuse an existing httpx client, e.g. one bound to an
    ASGI app in tests. It is left open.
    """
    if base_url is None:
        base_url = f"{API_URL.rstrip('/')}{API_PREFIX}"

    if client is not None:
        return [await probe(client, n, ep, base_url, token, timeout) for n, ep in PROBES]

    async with httpx.AsyncClient() as own:
        return [await probe(own, n, ep, base_url, token, timeout) for n, ep in PROBES]


def print_report(results: list[ProbeResult]) -> None:
    passed = sum(1 for r in results if r.ok)

    print("=" * 72)
    print("  OrganizeIT Backend Diagnostics")
    print("=" * 72)
    print()
    for r in results:
        mark = "PASS" if r.ok else "FAIL"
        print(f"  [{mark}] {r.name:<20} {r.endpoint:<22} {r.message}")
        if not r.ok and r.details:
            print(f"         {str(r.details)[:200]}")
    print()
    print(f"  {passed}/{len(results)} endpoints healthy")
    print("=" * 72)


def main() -> int:
    base_url = f"{API_URL.rstrip('/')}{API_PREFIX}"
    print(f"Probing {base_url} (timeout {DIAGNOSTIC_TIMEOUT:g}s per endpoint)...\n")
    results = asyncio.run(run_diagnostics(base_url))
    print_report(results)
    return 0 if all(r.ok for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
