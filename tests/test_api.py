"""
End-to-end tests for the dashboard API through FastAPI's TestClient.

Every test gets a fresh in-memory store and a FakeClock (see conftest).
"""

import asyncio

import pytest

from organizeit.assistant import COST_RESPONSE, ESG_RESPONSE
from organizeit.config import SERVICE_NAME, SERVICE_VERSION

from conftest import AUTH, url


def stored(store, key):
    return asyncio.run(store.get(key))


class TestSystem:

    def test_health_needs_no_auth(self, client):
        r = client.get(url("/health"))
        assert r.status_code == 200
        body = r.json()
        assert body["status"] == "healthy"
        assert body["service"] == SERVICE_NAME
        assert body["version"] == SERVICE_VERSION
        assert body["timestamp"] == "2024-06-10T14:00:00.000Z"

    def test_index(self, client):
        r = client.get(url("/"))
        assert r.status_code == 200
        assert r.json()["status"] == "running"
        assert r.json()["endpoints"]["health"] == url("/health")


class TestAuthorization:

    @pytest.mark.parametrize("method,path", [
        ("get", "/metrics/dashboard"),
        ("get", "/alerts/current"),
        ("get", "/projects"),
        ("post", "/chat/message"),
        ("get", "/user/demo-user-id/dashboard"),
        ("get", "/audit/events"),
        ("post", "/admin/run-audit"),
    ])
    def test_missing_header_is_401(self, client, method, path):
        r = getattr(client, method)(url(path))
        assert r.status_code == 401
        assert r.json() == {"error": "Authorization required"}

    def test_empty_header_is_401(self, client):
        r = client.get(url("/projects"), headers={"Authorization": ""})
        assert r.status_code == 401

    def test_any_token_is_accepted(self, client):
        r = client.get(url("/projects"), headers={"Authorization": "whatever"})
        assert r.status_code == 200

    def test_unprotected_routes(self, client):
        assert client.get(url("/init/status")).status_code == 200
        assert client.post(url("/init/data")).status_code == 200


class TestSignIn:

    def test_demo_login(self, client, store):
        r = client.post(url("/auth/signin"), json={"email": "demo@organizeit.com", "password": "demo123"})
        assert r.status_code == 200
        body = r.json()
        assert body["session"] == {"access_token": "demo-token"}
        assert body["user"]["id"] == "demo-user-id"
        assert stored(store, "user_profile:demo-user-id")["email"] == "demo@organizeit.com"

    def test_wrong_password(self, client, store):
        r = client.post(url("/auth/signin"), json={"email": "demo@organizeit.com", "password": "nope"})
        assert r.status_code == 401
        assert "error" in r.json()
        assert stored(store, "user_profile:demo-user-id") is None


class TestUserDashboard:

    def test_unknown_user_is_404(self, client):
        r = client.get(url("/user/demo-user-id/dashboard"), headers=AUTH)
        assert r.status_code == 404
        assert r.json() == {"error": "User not found"}

    def test_missing_profile_is_logged(self, client, caplog):
        with caplog.at_level("INFO", logger="organizeit.routes.users"):
            client.get(url("/user/ghost/dashboard"), headers=AUTH)
        assert "No profile for user ghost" in caplog.text

    def test_after_signin(self, client, store):
        client.post(url("/auth/signin"), json={"email": "demo@organizeit.com", "password": "demo123"})
        r = client.get(url("/user/demo-user-id/dashboard"), headers=AUTH)
        assert r.status_code == 200
        body = r.json()
        assert body["user"]["name"] == "Demo User"
        assert body["metrics"]["tasks_completed"] == 47
        assert len(body["recent_activities"]) == 3
        assert stored(store, "user_dashboard:demo-user-id") == body


class TestDashboardMetrics:

    def test_reused_within_window(self, client, clock):
        first = client.get(url("/metrics/dashboard"), headers=AUTH).json()
        clock.advance(59)
        second = client.get(url("/metrics/dashboard"), headers=AUTH).json()
        assert first == second

    def test_regenerated_after_window(self, client, clock, store):
        first = client.get(url("/metrics/dashboard"), headers=AUTH).json()
        clock.advance(61)
        second = client.get(url("/metrics/dashboard"), headers=AUTH).json()

        assert second["last_updated"] == first["last_updated"] + 61000
        assert 95 <= second["system_health"] <= 100
        assert 99 <= second["uptime"] <= 100
        assert stored(store, f"metrics:historical:{first['last_updated']}") == first
        assert stored(store, f"metrics:historical:{second['last_updated']}") == second

    def test_jitters_from_base_metrics(self, client, store):
        asyncio.run(store.set("system:base_metrics", {"system_health": 50.0, "monthly_spend": 1000}))
        body = client.get(url("/metrics/dashboard"), headers=AUTH).json()
        assert body["system_health"] == 95  # clamped
        assert 950 <= body["monthly_spend"] <= 1050

    def test_performance_series(self, client):
        body = client.get(url("/metrics/performance?hours=6"), headers=AUTH).json()
        assert body["hours"] == 6
        assert len(body["data"]) == 7


class TestChat:

    def test_cost_reply(self, client):
        r = client.post(url("/chat/message"), headers=AUTH,
                        json={"message": "How can I reduce cost?", "userId": "u1"})
        assert r.status_code == 200
        assert r.json()["response"] == COST_RESPONSE.content
        assert r.json()["suggestions"] == list(COST_RESPONSE.suggestions)

    def test_carbon_reply(self, client):
        r = client.post(url("/chat/message"), headers=AUTH, json={"message": "carbon?"})
        assert r.json()["response"] == ESG_RESPONSE.content

    def test_default_reply(self, client):
        r = client.post(url("/chat/message"), headers=AUTH, json={"message": "hello"})
        assert 'asking about "hello"' in r.json()["response"]

    def test_both_sides_stored(self, client, store):
        client.post(url("/chat/message"), headers=AUTH, json={"message": "save money", "userId": "u1"})
        ms = 1718028000000
        assert stored(store, f"chat:u1:{ms}")["type"] == "user"
        bot = stored(store, f"chat:u1:{ms + 1}")
        assert bot["type"] == "bot"
        assert bot["message"] == COST_RESPONSE.content

    def test_message_required(self, client):
        r = client.post(url("/chat/message"), headers=AUTH, json={"userId": "u1"})
        assert r.status_code == 422


class TestAlerts:

    def test_cold_seed(self, client):
        body = client.get(url("/alerts/current"), headers=AUTH).json()
        assert body["count"] == 3
        assert [a["id"] for a in body["alerts"]] == ["ALT-001", "ALT-002", "ALT-003"]

    def test_create_prepends(self, client):
        client.get(url("/alerts/current"), headers=AUTH)
        r = client.post(url("/alerts/create"), headers=AUTH,
                        json={"severity": "Low", "title": "Disk at 70%"})
        alert = r.json()["alert"]
        assert alert["status"] == "Active"
        assert alert["id"].startswith("ALT-1718028000000-")

        body = client.get(url("/alerts/current"), headers=AUTH).json()
        assert body["count"] == 4
        assert body["alerts"][0]["title"] == "Disk at 70%"

    def test_update_status(self, client):
        client.get(url("/alerts/current"), headers=AUTH)
        r = client.put(url("/alerts/ALT-002/status"), headers=AUTH,
                       json={"status": "Resolved", "resolution": "Restarted pods"})
        assert r.json()["success"] is True

        alerts = client.get(url("/alerts/current"), headers=AUTH).json()["alerts"]
        alt = next(a for a in alerts if a["id"] == "ALT-002")
        assert alt["status"] == "Resolved"
        assert alt["resolution"] == "Restarted pods"

    def test_unknown_id_still_succeeds(self, client):
        r = client.put(url("/alerts/ALT-999/status"), headers=AUTH, json={"status": "Resolved"})
        assert r.status_code == 200
        assert r.json()["success"] is True
        assert r.json()["alert"]["id"] == "ALT-999"


class TestProjects:

    def test_cold_seed_is_stable(self, client):
        first = client.get(url("/projects"), headers=AUTH).json()
        second = client.get(url("/projects"), headers=AUTH).json()
        assert first["count"] == 3
        assert first == second

    def test_create_is_sequential(self, client):
        client.get(url("/projects"), headers=AUTH)
        r = client.post(url("/projects"), headers=AUTH, json={"name": "Data Lake"})
        project = r.json()["project"]
        assert project["id"] == "PROJ-004"
        assert project["status"] == "Planning"
        assert project["progress"] == 0

    def test_details_unknown_id_placeholder(self, client):
        r = client.get(url("/projects/PROJ-777/details"), headers=AUTH)
        assert r.status_code == 200
        assert r.json()["project"]["id"] == "PROJ-777"

    def test_details_known_id_has_milestones(self, client):
        project = client.get(url("/projects/PROJ-001/details"), headers=AUTH).json()["project"]
        assert project["milestones"]

    def test_update_status_unknown_id(self, client):
        r = client.post(url("/projects/update-status"), headers=AUTH,
                        json={"projectId": "PROJ-404", "status": "Done"})
        assert r.status_code == 200
        assert r.json()["project"]["status"] == "Done"

    def test_tasks(self, client):
        r = client.post(url("/projects/create-task"), headers=AUTH, json={"title": "Write runbook"})
        assert r.json()["task"]["id"] == "TASK-001"
        r = client.post(url("/projects/tasks/TASK-001/edit"), headers=AUTH, json={"status": "Done"})
        assert r.json()["task"]["status"] == "Done"

    def test_team_message(self, client, store):
        client.post(url("/team/message"), headers=AUTH, json={"message": "hi"})
        assert stored(store, "MSG-1718028000000")["channel"] == "general"


class TestInit:

    def test_status_before_init(self, client):
        body = client.get(url("/init/status")).json()
        assert body["initialized"] is False
        assert body["status"] == "Backend operational"

    def test_init_seeds_everything(self, client, store):
        body = client.post(url("/init/data")).json()
        assert body["success"] is True
        assert body["mode"] == "persistent"
        assert body["counts"] == {
            "alerts": 3, "services": 7, "projects": 3,
            "notifications": 6, "users": 3, "audit_events": 4,
        }
        assert stored(store, "alerts:list") == ["ALT-001", "ALT-002", "ALT-003"]
        assert stored(store, "audit:AUD-004")["risk_level"] == "Critical"
        assert len(stored(store, "identity:users")) == 3

    def test_init_twice_keeps_version(self, client, store):
        client.post(url("/init/data"))
        client.post(url("/init/data"))
        assert stored(store, "system:initialized")["version"] == "1.0.0"
        status = client.get(url("/init/status")).json()
        assert status["initialized"] is True
        assert status["kv_store_available"] is True


class TestStoreUnavailable:
    """A store that raises on every call must never surface an error."""

    def test_metrics_fallback(self, client, failing_store):
        r = client.get(url("/metrics/dashboard"), headers=AUTH)
        assert r.status_code == 200
        assert r.json()["system_health"] == 98.7

    def test_alerts_fallback(self, client, failing_store):
        assert client.get(url("/alerts/current"), headers=AUTH).json()["count"] == 1

    def test_projects_fallback(self, client, failing_store):
        assert client.get(url("/projects"), headers=AUTH).json()["count"] == 1

    def test_services_fallback(self, client, failing_store):
        assert client.get(url("/services/health"), headers=AUTH).json()["count"] == 3

    def test_costs_fallback(self, client, failing_store):
        body = client.get(url("/finops/costs"), headers=AUTH).json()
        assert body["period"] == "6m"
        assert all(p["total"] == 285000 for p in body["data"])

    def test_carbon_fallback(self, client, failing_store):
        assert client.get(url("/esg/carbon"), headers=AUTH).json()["current_footprint"] == 42.3

    def test_notifications_fallback(self, client, failing_store):
        body = client.get(url("/notifications"), headers=AUTH).json()
        assert body["unread_count"] == 1
        assert body["total_count"] == 1

    def test_init_status(self, client, failing_store):
        body = client.get(url("/init/status")).json()
        assert body["initialized"] is True
        assert body["kv_store_available"] is False

    def test_init_data(self, client, failing_store):
        r = client.post(url("/init/data"))
        assert r.status_code == 200
        assert r.json()["success"] is True
        assert r.json()["mode"] == "fallback"

    def test_chat_still_answers(self, client, failing_store):
        r = client.post(url("/chat/message"), headers=AUTH, json={"message": "cost"})
        assert r.json()["response"] == COST_RESPONSE.content

    def test_unmasked_route_gets_generic_success(self, client, failing_store):
        r = client.post(url("/esg/update-target"), headers=AUTH, json={"target": "renewable", "value": 90})
        assert r.status_code == 200
        assert r.json() == {"success": True, "message": "Request accepted"}

    def test_user_dashboard(self, client, failing_store):
        r = client.get(url("/user/demo-user-id/dashboard"), headers=AUTH)
        assert r.status_code == 200
        assert r.json()["success"] is True
