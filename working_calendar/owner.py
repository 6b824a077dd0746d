# working_calendar/owner.py
"""Resolves the calling owner from the identity the auth layer forwards."""

from typing import Optional

from fastapi import Header, HTTPException

OWNER_HEADER = "X-Owner-Id"


def get_owner_id(owner_id: Optional[str] = Header(default=None, alias=OWNER_HEADER)) -> str:
    """Return the opaque owner id, or reject the request as unauthenticated."""
    if owner_id is None or not owner_id.strip():
        raise HTTPException(status_code=401, detail="Missing owner identity")
    return owner_id.strip()
