from __future__ import annotations

import hmac
import logging

from fastapi import Header, HTTPException

from app.core.config import settings


logger = logging.getLogger(__name__)


def verify_admin_token(provided: str | None, expected: str | None, env: str) -> bool:
    if not expected:
        if env.lower() in {"dev", "local", "test"}:
            logger.warning("ADMIN_API_TOKEN not set; accepting admin request in %s mode", env)
            return True
        logger.error("ADMIN_API_TOKEN not set; refusing admin request")
        return False

    if not provided:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def require_admin(x_admin_token: str | None = Header(None)) -> None:
    """Role gate for the admin views. Identity itself is established upstream."""
    if not verify_admin_token(x_admin_token, settings.ADMIN_API_TOKEN, settings.ENV):
        raise HTTPException(status_code=403, detail="Admin access required")


def current_user_id(x_user_id: str | None = Header(None)) -> str | None:
    """The signed-in user's id as forwarded by the auth layer, if any."""
    if x_user_id is None:
        return None
    return x_user_id.strip() or None


def require_user_id(x_user_id: str | None = Header(None)) -> str:
    user_id = current_user_id(x_user_id)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Sign in to view your submissions")
    return user_id
