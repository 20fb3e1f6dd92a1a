"""
Identity management.

The directory is one array under identity:users. Like the other update
routes, manage and update-permissions answer success for ids the
directory doesn't hold, echoing back what was asked for.
"""

import logging
from typing import Any, Callable

from fastapi import APIRouter, Body, Depends

from organizeit import seeds
from organizeit.auth import get_clock, get_store, require_authorization
from organizeit.errors import masked
from organizeit.models.schemas import (
    CredentialRenew,
    CredentialVerify,
    ExportUsers,
    ManageUser,
    PasswordReset,
    PermissionUpdate,
)
from organizeit.store import KVStore, get_or_seed
from organizeit.telemetry import iso

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_authorization)], tags=["Identity"])

USERS_KEY = "identity:users"


def _find(users: list[dict], user_id: str) -> dict | None:
    return next((u for u in users if u.get("id") == user_id), None)


@router.get("/identity/users", summary="User directory")
async def list_users(
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    users = await get_or_seed(store, USERS_KEY, lambda: seeds.identity_users(now))
    return {
        "users": users,
        "total": len(users),
        "active": sum(1 for u in users if u.get("status") == "Active"),
    }


@router.post("/identity/add-user", summary="Add a user")
async def add_user(
    user_data: dict[str, Any] = Body(default_factory=dict),
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    users = await store.get(USERS_KEY) or []

    new_user = {
        "id": f"USR-{len(users) + 1:03d}",
        "created_at": iso(clock()),
        "status": "Active",
        "last_login": None,
        "mfa_enabled": False,
        **user_data,
    }
    users.append(new_user)
    await store.set(USERS_KEY, users)

    logger.info("User %s added", new_user["id"])
    return {"user": new_user, "message": "User added successfully"}


@router.post("/identity/users/{user_id}/manage", summary="Change a user's role, status or permissions")
@masked({"message": "User managed successfully"})
async def manage_user(
    user_id: str,
    req: ManageUser,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    updated_at = iso(clock())
    users = await store.get(USERS_KEY) or []

    user = _find(users, user_id)
    if user is not None:
        if req.permissions:
            user["permissions"] = req.permissions
        if req.role:
            user["role"] = req.role
        if req.status:
            user["status"] = req.status
        user["updated_at"] = updated_at
        await store.set(USERS_KEY, users)

    return {
        "user": {
            "id": user_id,
            "permissions": req.permissions,
            "role": req.role,
            "status": req.status,
            "updated_at": updated_at,
        },
        "message": f"User {req.action or 'managed'} successfully",
    }


@router.post("/identity/update-permissions", summary="Replace a user's permissions")
@masked({"message": "User permissions updated successfully"})
async def update_permissions(
    req: PermissionUpdate,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    updated_at = iso(clock())
    users = await store.get(USERS_KEY) or []

    user = _find(users, req.user_id)
    if user is not None:
        user["permissions"] = req.permissions
        user["updated_at"] = updated_at
        await store.set(USERS_KEY, users)

    return {
        "user": {"id": req.user_id, "permissions": req.permissions, "updated_at": updated_at},
        "message": "User permissions updated successfully",
    }


@router.post("/identity/export-users", summary="Export the directory")
async def export_users(
    req: ExportUsers,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    users = await store.get(USERS_KEY) or []
    return {
        "users": users,
        "format": req.format,
        "exported_at": iso(clock()),
        "message": "Users exported successfully",
    }


@router.post("/identity/reset-password", summary="Send a password reset")
async def reset_password(
    req: PasswordReset,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    await store.set(f"password:reset:{req.user_id}", {
        "userId": req.user_id,
        "email": req.email,
        "reset_token": f"RST-{int(now * 1000)}",
        "requested_at": iso(now),
    })
    return {"message": "Password reset email sent successfully"}


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------

@router.post("/identity/credentials/{credential_id}/verify", summary="Verify a credential")
async def verify_credential(
    credential_id: str,
    req: CredentialVerify,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    await store.set(f"credential:{credential_id}:verification", {
        "credentialId": credential_id,
        "verification_method": req.verification_method,
        "status": "Verified",
        "verified_at": iso(clock()),
    })
    return {"message": "Credential verified successfully"}


@router.post("/identity/credentials/{credential_id}/renew", summary="Renew a credential")
async def renew_credential(
    credential_id: str,
    req: CredentialRenew,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    await store.set(f"credential:{credential_id}:renewal", {
        "credentialId": credential_id,
        "renewal_period": req.renewal_period,
        "auto_renew": req.auto_renew,
        "renewed_at": iso(clock()),
    })
    return {"message": "Credential renewed successfully"}
