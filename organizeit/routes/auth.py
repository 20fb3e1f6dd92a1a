"""
POST /auth/signin -- demo login.

Only the demo account is accepted. A successful sign-in (re)writes the
demo profile under user_profile:demo-user-id, which is what makes
GET /user/demo-user-id/dashboard answer instead of 404.
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from organizeit import seeds
from organizeit.auth import get_clock, get_store
from organizeit.config import DEMO_EMAIL, DEMO_PASSWORD, DEMO_USER_ID
from organizeit.models.schemas import SignInRequest
from organizeit.store import KVStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post(
    "/auth/signin",
    summary="Sign in",
    description="Accepts the demo credentials and returns a session with a static access token.",
)
async def signin(
    req: SignInRequest,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
):
    logger.info("Sign in attempt for %s", req.email)

    if req.email != DEMO_EMAIL or req.password != DEMO_PASSWORD:
        return JSONResponse(status_code=401, content={"error": "Invalid login credentials"})

    profile = seeds.demo_profile(clock())
    await store.set(f"user_profile:{DEMO_USER_ID}", profile)

    return {
        "user": profile,
        "session": {"access_token": "demo-token"},
        "message": "Demo login successful",
    }
