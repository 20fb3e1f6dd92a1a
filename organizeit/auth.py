"""
Authorization gate and shared request dependencies.

The dashboard only checks that an Authorization header is present. The
token itself is never validated -- identity lives with the external auth
provider, which is out of scope for the demo backend.
"""

from typing import Callable

from fastapi import Header, Request

from organizeit.errors import AuthorizationRequired
from organizeit.store import KVStore


async def require_authorization(
    authorization: str | None = Header(default=None),
) -> str:
    if not authorization:
        raise AuthorizationRequired()
    return authorization


def get_store(request: Request) -> KVStore:
    """The store installed on the running app (swapped out in tests)."""
    return request.app.state.store


def get_clock(request: Request) -> Callable[[], float]:
    """Wall clock in epoch seconds. Tests replace it to move time forward."""
    return request.app.state.clock
