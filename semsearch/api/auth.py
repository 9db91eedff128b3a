"""
Bearer-token access gate for the /v1 API.

Every denial produces the same 401 ``{"error": "Unauthorized"}`` response;
the cause is only visible in the server log. The gate runs as HTTP
middleware, so a denied request never reaches routing or body parsing.
"""

import hmac
from typing import Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..util.logging import logger

UNAUTHORIZED_BODY = {"error": "Unauthorized"}


class AuthGate:
    """Stateless check of an Authorization header against a shared secret."""

    def __init__(self, secret: Optional[str]):
        self._secret = secret or None

    def check(self, authorization: Optional[str]) -> Tuple[bool, str]:
        """
        Decide on one header value.

        Returns:
            (allowed, reason) where reason names the denial cause for logging
        """
        if not authorization:
            return False, "missing_header"

        parts = authorization.split(" ")
        if len(parts) != 2 or parts[0] != "Bearer":
            return False, "invalid_scheme"

        if not self._secret:
            return False, "secret_not_configured"

        # Constant-time comparison
        if not hmac.compare_digest(parts[1].encode(), self._secret.encode()):
            return False, "invalid_token"

        return True, ""


def _is_gated(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def install_bearer_gate(app: FastAPI, gate: AuthGate, prefix: str = "/v1") -> None:
    """Deny every request under ``prefix`` unless its bearer token matches."""

    @app.middleware("http")
    async def bearer_gate(request: Request, call_next):
        if not _is_gated(request.url.path, prefix):
            return await call_next(request)

        allowed, reason = gate.check(request.headers.get("authorization"))
        logger.log_auth_event(allowed, reason, request.url.path)
        if not allowed:
            return JSONResponse(status_code=401, content=UNAUTHORIZED_BODY)

        return await call_next(request)
