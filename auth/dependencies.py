"""
FastAPI dependency functions for authentication.

These can be used in routes with Depends() to protect endpoints.
"""

from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from .service import AuthGate

# Raw Authorization header; the gate does its own scheme check so the
# 401 body stays under our control.
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


def build_require_auth(gate: AuthGate):
    """
    Build a dependency bound to `gate`.

    The returned dependency authenticates the request, stores the user record
    on `request.state.user` for downstream handlers and returns it.
    """

    async def require_auth(
        request: Request,
        authorization: Optional[str] = Depends(authorization_header),
    ) -> Dict[str, Any]:
        user = await gate.authenticate(authorization)
        request.state.user = user
        return user

    return require_auth
