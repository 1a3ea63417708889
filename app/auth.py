import logging
import secrets
from typing import Optional

from fastapi import Header, HTTPException, status

from . import config

logger = logging.getLogger(__name__)

ADMIN_PASSKEY_HEADER = "X-Admin-Passkey"


async def require_admin(x_admin_passkey: Optional[str] = Header(None)) -> None:
    """
    Gate admin dashboard endpoints behind the shared admin passkey.
    Uses a constant-time comparison to avoid timing attacks.
    """
    if not x_admin_passkey:
        logger.warning("⚠️ Admin request without passkey")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {ADMIN_PASSKEY_HEADER} header",
        )

    if not secrets.compare_digest(x_admin_passkey.encode(), config.ADMIN_PASSKEY.encode()):
        logger.warning("❌ Admin request with invalid passkey")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin passkey",
        )
