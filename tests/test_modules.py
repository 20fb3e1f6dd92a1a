"""
Tests for the per-page dashboard modules: operations, notifications,
FinOps, ESG, AI, identity, audit, resources, admin and global tools.
"""

import asyncio

from organizeit.config import HISTORY_LIMIT

from conftest import AUTH, url


def stored(store, key):
    return asyncio.run(store.get(key))


class TestServices:

    def test_health_board(self, client):
        body = client.get(url("/services/health"), headers=AUTH).json()
        assert body["count"] == 7
        assert body["services"][2]["status"] == "degraded"

    def test_restart_and_scale_recorded(self, client, store):
        r = client.post(url("/services/restart"), headers=AUTH, json={"serviceId": "SVC-003"})
        assert r.json() == {"message": "Service SVC-003 restart initiated successfully", "success": True}
        assert stored(store, "service:SVC-003:restart")["status"] == "Restarting"

        r = client.post(url("/services/scale"), headers=AUTH, json={"serviceId": "SVC-003", "instances": 6})
        assert r.json()["message"] == "Service SVC-003 scaling to 6 instances"
        assert stored(store, "service:SVC-003:scale")["target_instances"] == 6

    def test_negative_instances_rejected(self, client):
        r = client.post(url("/services/scale"), headers=AUTH, json={"serviceId": "SVC-003", "instances": -1})
        assert r.status_code == 422


class TestNotifications:

    def test_list(self, client):
        body = client.get(url("/notifications"), headers=AUTH).json()
        assert body["total_count"] == 6
        assert body["unread_count"] == 4
        assert all(n["updated_at"] == body["last_updated"] for n in body["notifications"])

    def test_mark_read(self, client, store):
        client.get(url("/notifications"), headers=AUTH)
        r = client.put(url("/notifications/NOT-001/read"), headers=AUTH)
        assert r.json()["notification"] == {"id": "NOT-001", "read": True, "read_at": "2024-06-10T14:00:00.000Z"}
        note = next(n for n in stored(store, "notifications:current") if n["id"] == "NOT-001")
        assert note["read"] is True

    def test_get_regenerates_wholesale(self, client):
        client.get(url("/notifications"), headers=AUTH)
        client.put(url("/notifications/NOT-001/read"), headers=AUTH)
        assert client.get(url("/notifications"), headers=AUTH).json()["unread_count"] == 4

    def test_configure(self, client, store):
        r = client.post(url("/notifications/configure"), headers=AUTH,
                        json={"channels": ["email"], "frequency": "daily", "types": ["cost"]})
        assert r.status_code == 200
        assert stored(store, "notifications:config")["frequency"] == "daily"


class TestFinOps:

    def test_costs_echo_period(self, client):
        body = client.get(url("/finops/costs?period=12m"), headers=AUTH).json()
        assert body["period"] == "12m"
        assert len(body["data"]) == 6

    def test_optimization_total(self, client):
        body = client.get(url("/finops/optimization"), headers=AUTH).json()
        assert len(body["opportunities"]) == 3
        assert body["total_savings"] == 71000

    def test_actions(self, client, store):
        client.post(url("/finops/apply-optimization"), headers=AUTH, json={"optimizationId": "OPT-002"})
        assert stored(store, "finops:optimization:OPT-002:applied")["status"] == "Applied"

        client.post(url("/finops/set-budget-alert"), headers=AUTH, json={"threshold": 250000})
        assert stored(store, "finops:budget_alert")["enabled"] is True

        r = client.post(url("/finops/export-report"), headers=AUTH, json={"reportType": "monthly", "format": "pdf"})
        assert r.json()["report_id"] == "FIN-REPORT-1718028000000"
        assert r.json()["type"] == "monthly"

    def test_cost_history_is_capped(self, client, clock, store):
        for _ in range(HISTORY_LIMIT + 5):
            client.get(url("/finops/costs"), headers=AUTH)
            clock.advance(1)

        index = stored(store, "finops:costs:6m:index")
        assert len(index) == HISTORY_LIMIT
        assert stored(store, "finops:costs:6m:1718028000000") is None
        assert stored(store, f"finops:costs:6m:{index[-1]}") is not None


class TestEsg:

    def test_carbon(self, client, store):
        body = client.get(url("/esg/carbon"), headers=AUTH).json()
        assert body["renewable_percentage"] == 68
        assert stored(store, "esg:carbon:current") == body

    def test_sustainability(self, client):
        body = client.get(url("/esg/sustainability"), headers=AUTH).json()
        assert body["compliance_status"]["iso14001"] == "Certified"

    def test_report_is_persisted(self, client, store):
        r = client.post(url("/esg/generate-report"), headers=AUTH, json={"period": "Q3 2024"})
        body = r.json()
        assert body["report_id"] == "ESG-REPORT-1718028000000"
        assert body["status"] == "Ready"
        assert stored(store, body["report_id"])["period"] == "Q3 2024"

    def test_update_target(self, client, store):
        client.post(url("/esg/update-target"), headers=AUTH, json={"target": "renewable", "value": 85})
        assert stored(store, "esg:target:renewable")["value"] == 85


class TestAi:

    def test_insights(self, client):
        body = client.get(url("/ai/insights"), headers=AUTH).json()
        assert body["cost_optimization"]["total_savings_identified"] == 79500

    def test_analyze(self, client):
        body = client.post(url("/ai/analyze"), headers=AUTH, json={"dataType": "performance"}).json()
        assert body["analysis_id"] == "ANALYSIS-1718028000000"
        assert body["data_type"] == "performance"
        assert body["confidence"] == 94

    def test_model_lifecycle(self, client, store):
        r = client.post(url("/ai/train-model"), headers=AUTH, json={"model_name": "anomaly"})
        training_id = r.json()["training_id"]
        assert stored(store, training_id)["status"] == "Training"

        r = client.post(url("/ai/models/M-1/retrain"), headers=AUTH, json={"use_latest_data": True})
        assert stored(store, r.json()["retraining_id"])["model_id"] == "M-1"

        client.post(url("/ai/models/M-1/deploy"), headers=AUTH, json={"environment": "staging"})
        assert stored(store, "model:M-1:deployment")["environment"] == "staging"

    def test_insight_actions(self, client, store):
        client.post(url("/ai/dismiss-insight"), headers=AUTH, json={"insightId": "REC-001", "reason": "n/a"})
        client.post(url("/ai/implement-insight"), headers=AUTH, json={"insightId": "REC-002"})
        assert stored(store, "insight:REC-001:dismissed")["reason"] == "n/a"
        assert stored(store, "insight:REC-002:implemented")["status"] == "In Progress"


class TestIdentity:

    def test_directory(self, client):
        body = client.get(url("/identity/users"), headers=AUTH).json()
        assert body["total"] == 3
        assert body["active"] == 3

    def test_add_user(self, client):
        client.get(url("/identity/users"), headers=AUTH)
        r = client.post(url("/identity/add-user"), headers=AUTH, json={"name": "Ana", "status": "Invited"})
        user = r.json()["user"]
        assert user["id"] == "USR-004"
        assert user["status"] == "Invited"
        assert user["mfa_enabled"] is False

    def test_manage_user(self, client):
        client.get(url("/identity/users"), headers=AUTH)
        r = client.post(url("/identity/users/USR-002/manage"), headers=AUTH,
                        json={"action": "suspend", "status": "Suspended"})
        assert r.json()["message"] == "User suspend successfully"
        assert client.get(url("/identity/users"), headers=AUTH).json()["active"] == 2

    def test_update_permissions_unknown_user(self, client):
        r = client.post(url("/identity/update-permissions"), headers=AUTH,
                        json={"userId": "USR-404", "permissions": ["read"]})
        assert r.status_code == 200
        assert r.json()["user"]["permissions"] == ["read"]

    def test_reset_password(self, client, store):
        client.post(url("/identity/reset-password"), headers=AUTH, json={"userId": "USR-001"})
        assert stored(store, "password:reset:USR-001")["reset_token"] == "RST-1718028000000"

    def test_credentials(self, client, store):
        client.post(url("/identity/credentials/C-1/verify"), headers=AUTH, json={})
        client.post(url("/identity/credentials/C-1/renew"), headers=AUTH, json={"auto_renew": True})
        assert stored(store, "credential:C-1:verification")["status"] == "Verified"
        assert stored(store, "credential:C-1:renewal")["auto_renew"] is True


class TestAudit:

    def test_events_limit(self, client):
        body = client.get(url("/audit/events?limit=2"), headers=AUTH).json()
        assert len(body["events"]) == 2
        assert body["total"] == 4
        assert body["limit"] == 2

    def test_search_is_case_insensitive(self, client):
        body = client.post(url("/audit/search"), headers=AUTH, json={"query": "payment-API"}).json()
        assert [e["id"] for e in body["results"]] == ["AUD-002"]

    def test_search_matches_details(self, client):
        body = client.post(url("/audit/search"), headers=AUTH, json={"query": "failed password"}).json()
        assert body["total"] == 1

    def test_filter(self, client):
        body = client.post(url("/audit/filter"), headers=AUTH,
                           json={"risk_levels": ["High", "Critical"]}).json()
        assert sorted(e["id"] for e in body["events"]) == ["AUD-003", "AUD-004"]

        body = client.post(url("/audit/filter"), headers=AUTH,
                           json={"risk_levels": ["High", "Critical"], "users": ["unknown@external.com"]}).json()
        assert [e["id"] for e in body["events"]] == ["AUD-004"]

    def test_empty_filter_keeps_everything(self, client):
        assert client.post(url("/audit/filter"), headers=AUTH, json={}).json()["total"] == 4

    def test_details(self, client):
        client.get(url("/audit/events"), headers=AUTH)
        assert client.get(url("/audit/AUD-001/details"), headers=AUTH).json()["event"]["action"] == "SUCCESSFUL_LOGIN"
        placeholder = client.get(url("/audit/AUD-999/details"), headers=AUTH).json()["event"]
        assert placeholder["event_type"] == "system_event"


class TestResources:

    def test_overview(self, client):
        body = client.get(url("/optimization/resources"), headers=AUTH).json()
        assert body["summary"]["total_resources"] == 156

    def test_recommendation_details(self, client):
        rec = client.get(url("/resources/recommendations/OPT-009/details"), headers=AUTH).json()["recommendation"]
        assert rec["id"] == "OPT-009"
        assert len(rec["implementation_steps"]) == 5

    def test_actions_recorded(self, client, store):
        client.post(url("/resources/auto-scale"), headers=AUTH, json={"resource_type": "ec2"})
        client.post(url("/resources/workload-configure"), headers=AUTH, json={"workload_name": "etl", "carbon_aware": True})
        client.post(url("/resources/apply-all-recommendations"), headers=AUTH, json={"confirm_apply": True})
        client.post(url("/resources/recommendations/OPT-001/implement"), headers=AUTH, json={})
        r = client.post(url("/resources/cleanup"), headers=AUTH, json={"resource_types": ["snapshot"]})
        s = client.post(url("/resources/schedule-optimization"), headers=AUTH, json={"optimization_type": "cost"})

        assert stored(store, "autoscale:ec2")["enabled"] is True
        assert stored(store, "workload:etl")["carbon_aware"] is True
        assert stored(store, "optimization:apply_all")["status"] == "In Progress"
        assert stored(store, "recommendation:OPT-001:implementation")["status"] == "Implementing"
        assert stored(store, r.json()["cleanup_id"])["resource_types"] == ["snapshot"]
        assert stored(store, s.json()["schedule_id"])["status"] == "Scheduled"

    def test_auto_scale_requires_resource_type(self, client):
        assert client.post(url("/resources/auto-scale"), headers=AUTH, json={}).status_code == 422


class TestAdmin:

    def test_resolve_issues(self, client):
        client.get(url("/alerts/current"), headers=AUTH)
        body = client.post(url("/admin/resolve-issues"), headers=AUTH, json={"auto_resolve": True}).json()
        assert body["critical_alerts"] == 1
        assert body["resolved_count"] == 1

        alerts = client.get(url("/alerts/current"), headers=AUTH).json()["alerts"]
        assert alerts[0]["status"] == "In Progress"

    def test_resolve_without_auto(self, client):
        client.get(url("/alerts/current"), headers=AUTH)
        body = client.post(url("/admin/resolve-issues"), headers=AUTH, json={}).json()
        assert body["resolved_count"] == 0
        assert body["auto_resolve"] is False

    def test_queued_jobs(self, client, store):
        audit = client.post(url("/admin/run-audit"), headers=AUTH, json={"audit_type": "security"}).json()
        backup = client.post(url("/admin/start-backup"), headers=AUTH, json={"backup_type": "full"}).json()
        report = client.post(url("/admin/generate-reports"), headers=AUTH, json={"report_types": ["cost"]}).json()

        assert stored(store, audit["audit_id"])["audit_type"] == "security"
        assert backup["estimated_size"] == "2.4 GB"
        assert report["report_types"] == ["cost"]

    def test_configure_system(self, client, store):
        client.post(url("/admin/configure-system"), headers=AUTH, json={"settings": {"maintenance": True}})
        config = stored(store, "system:configuration")
        assert config["maintenance"] is True
        assert config["updated_by"] == "admin"

    def test_manage_users(self, client):
        client.get(url("/identity/users"), headers=AUTH)
        body = client.post(url("/admin/manage-users"), headers=AUTH, json={"action": "list"}).json()
        assert body["total_users"] == 3


class TestTools:

    def test_search(self, client):
        body = client.post(url("/search"), headers=AUTH, json={"query": "cpu"}).json()
        assert body["query"] == "cpu"
        assert body["total"] == 2

    def test_export(self, client):
        body = client.post(url("/export"), headers=AUTH, json={"module": "finops", "format": "csv"}).json()
        assert body["export_id"] == "EXPORT-1718028000000"
        assert body["download_url"] == "#"

    def test_bulk(self, client, store):
        body = client.post(url("/bulk-actions"), headers=AUTH,
                           json={"action": "acknowledge", "items": ["ALT-001", "ALT-002"]}).json()
        assert body["message"] == "Bulk acknowledge initiated for 2 items"
        assert stored(store, body["bulk_id"])["items"] == ["ALT-001", "ALT-002"]
