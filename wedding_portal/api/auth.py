"""Bearer-token guard for the admin console routes.

  ADMIN_API_KEY set + valid token    -> allow
  ADMIN_API_KEY set + wrong/missing  -> 401
  ADMIN_API_KEY empty + ENV dev/local -> allow
  ADMIN_API_KEY empty otherwise       -> 403
"""

from __future__ import annotations

import hmac
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from wedding_portal.core.config import settings

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


def require_admin_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> None:
    key = settings.ADMIN_API_KEY

    if not key:
        if settings.ENV.lower() in {"dev", "local"}:
            return
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin API key not configured. Set ADMIN_API_KEY in .env.",
        )

    if credentials is None or not hmac.compare_digest(credentials.credentials, key):
        logger.warning("Rejected admin request")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing admin token.",
            headers={"WWW-Authenticate": "Bearer"},
        )
