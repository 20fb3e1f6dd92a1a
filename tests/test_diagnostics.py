"""Tests for the backend diagnostics harness, run against the app in-process."""

import asyncio
import time

import httpx

from organizeit.config import API_PREFIX
from organizeit.diagnostics import PROBES, print_report, probe, run_diagnostics
from organizeit.main import app

BASE = f"http://testserver{API_PREFIX}"


def diagnose(transport, **kwargs):
    async def go():
        async with httpx.AsyncClient(transport=transport) as client:
            return await run_diagnostics(BASE, client=client, **kwargs)

    return asyncio.run(go())


class TestAgainstApp:

    def test_every_endpoint_passes(self):
        results = diagnose(httpx.ASGITransport(app=app))
        assert [r.endpoint for r in results] == [ep for _, ep in PROBES]
        assert all(r.ok for r in results), [r.message for r in results if not r.ok]
        assert results[0].details["status"] == "healthy"
        assert results[0].message == "Success (200)"

    def test_details_carry_response_body(self):
        results = {r.name: r for r in diagnose(httpx.ASGITransport(app=app))}
        assert results["Projects List"].details["count"] == 3
        assert results["FinOps Costs"].details["period"] == "6m"
        assert results["Metrics Dashboard"].to_dict()["status"] == "success"


class TestFailures:

    def test_timeout_becomes_error_result(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        results = diagnose(httpx.MockTransport(handler), timeout=5.0)
        assert len(results) == len(PROBES)
        assert all(r.status == "error" for r in results)
        assert results[0].message == "Timed out after 5s"

    def test_connect_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        results = diagnose(httpx.MockTransport(handler))
        assert results[0].message.startswith("ConnectError")

    def test_http_error_status(self):
        def handler(request):
            return httpx.Response(401, json={"error": "Authorization required"})

        results = diagnose(httpx.MockTransport(handler))
        assert results[1].status == "error"
        assert results[1].message == "Error 401: Unauthorized"
        assert "Authorization required" in results[1].details

    def test_report_prints_summary(self, capsys):
        def handler(request):
            if request.url.path == f"{API_PREFIX}/health":
                return httpx.Response(200, json={"status": "healthy"})
            return httpx.Response(500, text="boom")

        print_report(diagnose(httpx.MockTransport(handler)))
        out = capsys.readouterr().out
        assert "1/8 endpoints healthy" in out
        assert "[FAIL]" in out


class TestDeadline:

    def test_trickling_server_is_cut_off(self):
        """A server that keeps every read under the timeout still can't run past it."""
        chunks = [
            b"HTTP/1.1 200 OK\r\n",
            b"Content-Type: application/json\r\n",
            b"Content-Length: 2\r\n",
            b"\r\n",
            b"{}",
        ]

        async def trickle(reader, writer):
            await reader.readuntil(b"\r\n\r\n")
            try:
                for chunk in chunks:
                    await asyncio.sleep(0.1)
                    writer.write(chunk)
                    await writer.drain()
            except ConnectionError:
                pass
            finally:
                writer.close()

        async def go():
            server = await asyncio.start_server(trickle, "127.0.0.1", 0)
            port = server.sockets[0].getsockname()[1]
            try:
                async with httpx.AsyncClient(trust_env=False) as client:
                    started = time.monotonic()
                    result = await probe(
                        client, "Health Check", "/health",
                        f"http://127.0.0.1:{port}", "demo-token", timeout=0.3,
                    )
                    return result, time.monotonic() - started
            finally:
                server.close()

        result, elapsed = asyncio.run(go())
        assert result.status == "error"
        assert result.message == "Timed out after 0.3s"
        assert elapsed < 0.45
