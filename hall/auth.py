from __future__ import annotations

import hmac
import logging
from typing import Optional

from fastapi import Header, Request

from .config import AdminKey, Config
from .errors import ADMIN_DISABLED_MESSAGE, INVALID_KEY_MESSAGE, AdminAccessDenied, ErrorKind, Outcome

logger = logging.getLogger("hall.auth")


def _same_secret(presented: str, configured: str) -> bool:
    return hmac.compare_digest(presented.encode("utf-8"), configured.encode("utf-8"))


def check_admin_permissions(config: Config, auth_key: Optional[str]) -> AdminKey:
    """
    Return the AdminKey whose secret equals `auth_key` exactly.

    Raises AdminAccessDenied (403) with "disabled" when no keys are
    configured, or "Invalid key" when the token is missing or unknown.
    """
    if not config.admin_keys:
        raise AdminAccessDenied(Outcome.error(ErrorKind.AUTH, ADMIN_DISABLED_MESSAGE))
    if auth_key is None:
        raise AdminAccessDenied(Outcome.error(ErrorKind.AUTH, INVALID_KEY_MESSAGE))
    for admin_key in config.admin_keys:
        if _same_secret(auth_key, admin_key.key):
            return admin_key
    logger.warning("Rejected admin request with an invalid key")
    raise AdminAccessDenied(Outcome.error(ErrorKind.AUTH, INVALID_KEY_MESSAGE))


def require_admin(
    request: Request,
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> AdminKey:
    """FastAPI dependency: the raw Authorization header is the admin key."""
    return check_admin_permissions(request.app.state.ctx.config, authorization)
