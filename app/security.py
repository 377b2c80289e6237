"""
Shared-secret check for mutating routes.

Clients send the configured key in the ``x-api-key`` header. This is a
static string comparison, not a credential system.
"""

import hmac
from typing import Optional

from fastapi import Header, Request

from .core import UnauthorizedError


def require_api_key(request: Request, x_api_key: Optional[str] = Header(None)) -> None:
    """FastAPI dependency raising ``UnauthorizedError`` on a missing or wrong key."""
    expected = request.app.state.settings.API_KEY
    if not x_api_key or not hmac.compare_digest(x_api_key.encode(), expected.encode()):
        raise UnauthorizedError()
