import logging
from typing import Optional

from fastapi import Header, HTTPException

logger = logging.getLogger(__name__)


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """
    Resolve the caller's user id.

    Tokens are verified by the gateway in front of this service, which forwards
    the verified login id in the X-User-Id header.
    """
    if not x_user_id or not x_user_id.strip():
        logger.debug("Request without X-User-Id header")
        raise HTTPException(status_code=401, detail="UNAUTHORIZED: Missing X-User-Id header")
    return x_user_id.strip()
