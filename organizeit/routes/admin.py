"""
Admin console actions.

Audits, backups and report runs are queued as records keyed by their id
(AUDIT-, BACKUP-, REPORT-<epoch_ms>). resolve-issues is the one action
with a visible effect: with auto_resolve it moves every High severity
alert to "In Progress".
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends

from organizeit.auth import get_clock, get_store, require_authorization
from organizeit.models.schemas import (
    AdminBackup,
    AdminConfigure,
    AdminManageUsers,
    AdminReports,
    AdminResolveIssues,
    AdminRunAudit,
)
from organizeit.store import KVStore
from organizeit.telemetry import iso

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_authorization)], tags=["Admin"])


@router.post("/admin/manage-users", summary="Open user management")
async def manage_users(req: AdminManageUsers, store: KVStore = Depends(get_store)) -> dict:
    users = await store.get("identity:users") or []
    return {
        "users": users,
        "action": req.action,
        "total_users": len(users),
        "message": "User management interface opened successfully",
    }


@router.post("/admin/run-audit", summary="Start a security audit")
async def run_audit(
    req: AdminRunAudit,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    audit_id = f"AUDIT-{int(now * 1000)}"
    await store.set(audit_id, {
        "id": audit_id,
        "audit_type": req.audit_type,
        "scope": req.scope,
        "status": "In Progress",
        "started_at": iso(now),
        "estimated_completion": "15-30 minutes",
    })
    return {
        "audit_id": audit_id,
        "message": "Security audit scan initiated successfully",
        "estimated_completion": "15-30 minutes",
    }


@router.post("/admin/start-backup", summary="Start a backup")
async def start_backup(
    req: AdminBackup,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    backup_id = f"BACKUP-{int(now * 1000)}"
    await store.set(backup_id, {
        "id": backup_id,
        "backup_type": req.backup_type,
        "include_databases": req.include_databases,
        "include_files": req.include_files,
        "status": "In Progress",
        "started_at": iso(now),
        "estimated_size": "2.4 GB",
        "estimated_completion": "45-60 minutes",
    })
    return {
        "backup_id": backup_id,
        "message": "System backup initiated successfully",
        "estimated_completion": "45-60 minutes",
        "estimated_size": "2.4 GB",
    }


@router.post("/admin/configure-system", summary="Update system settings")
async def configure_system(
    req: AdminConfigure,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    await store.set("system:configuration", {
        **req.settings,
        "updated_at": iso(clock()),
        "updated_by": "admin",
    })
    return {"message": "System configuration updated successfully", "settings": req.settings}


@router.post("/admin/generate-reports", summary="Generate system reports")
async def generate_reports(
    req: AdminReports,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    report_id = f"REPORT-{int(now * 1000)}"
    await store.set(report_id, {
        "id": report_id,
        "report_types": req.report_types,
        "status": "Generating",
        "started_at": iso(now),
        "estimated_completion": "5-10 minutes",
    })
    return {
        "report_id": report_id,
        "message": "Comprehensive system reports generation started",
        "report_types": req.report_types,
        "estimated_completion": "5-10 minutes",
    }


@router.post("/admin/resolve-issues", summary="Resolve critical issues")
async def resolve_issues(
    req: AdminResolveIssues,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    alerts = await store.get("alerts:current") or []
    critical = [a for a in alerts if a.get("severity") == "High"]

    resolved = 0
    if req.auto_resolve:
        started = iso(clock())
        for alert in critical:
            alert["status"] = "In Progress"
            alert["auto_resolution_started"] = started
            resolved += 1
        await store.set("alerts:current", alerts)
        logger.info("Auto-resolution started for %d critical alerts", resolved)

    return {
        "message": f"Critical issues resolution initiated for {len(critical)} alerts",
        "resolved_count": resolved,
        "auto_resolve": req.auto_resolve,
        "critical_alerts": len(critical),
    }
