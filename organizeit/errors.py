"""
Error taxonomy for the dashboard API.

Only two failures are ever surfaced to the caller:

  - AuthorizationRequired -> 401 {"error": "Authorization required"}
  - NotFound              -> 404 {"error": "<what> not found"}

Everything the store throws is masked: routes that have a sensible
fallback payload wrap themselves with @masked(...), and the application
registers a last-resort StoreError handler that answers 200 with a
generic success body. The demo UI never sees a failed read.
"""

import copy
import functools
import logging
from typing import Any, Callable

from organizeit.store import StoreError

logger = logging.getLogger(__name__)

GENERIC_SUCCESS = {"success": True, "message": "Request accepted"}


class AuthorizationRequired(Exception):
    """The request carried no Authorization header."""

    status_code = 401

    def __init__(self, message: str = "Authorization required") -> None:
        super().__init__(message)
        self.message = message


class NotFound(Exception):
    """A record the route cannot answer without is missing."""

    status_code = 404

    def __init__(self, what: str) -> None:
        super().__init__(f"{what} not found")
        self.message = f"{what} not found"


def masked(fallback: dict | Callable[..., dict]):
    """Return `fallback` with HTTP 200 when the wrapped route hits a StoreError.

    `fallback` is either a static payload (deep-copied per use) or a callable
    that receives the route's keyword arguments, for fallbacks that echo a
    path parameter back.
    """

    def decorator(endpoint: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(endpoint)
        async def wrapper(*args, **kwargs):
            try:
                return await endpoint(*args, **kwargs)
            except StoreError as e:
                logger.warning("%s: store unavailable (%s), serving fallback", endpoint.__name__, e)
                if callable(fallback):
                    return fallback(**kwargs)
                return copy.deepcopy(fallback)

        return wrapper

    return decorator
