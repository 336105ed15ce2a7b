"""Caller Identity — FastAPI dependency for authenticated RPC endpoints.

Invariants:
    - Caller id comes from the header named by settings.caller_header
      (set by the authenticating gateway in front of this service)
    - Missing or blank header -> UnauthenticatedError (401) before any handler runs
"""

from fastapi import Request

from tastebud.config import get_settings
from tastebud.core.errors import UnauthenticatedError


async def get_caller_id(request: Request) -> str:
    """Authenticated caller's user id."""
    caller_id = request.headers.get(get_settings().caller_header, "").strip()
    if not caller_id:
        raise UnauthenticatedError()
    return caller_id
