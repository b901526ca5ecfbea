from typing import Optional

from fastapi import Header

from src.config import DEFAULT_USER_ID


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Resolve the calling user from the X-User-Id header."""
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    return DEFAULT_USER_ID
