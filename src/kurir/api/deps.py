"""Request dependencies shared by the authenticated routers."""

from __future__ import annotations

import logging

from fastapi import Header, HTTPException, status

from ..db.supabase import require_supabase_client


def get_current_user_id(authorization: str | None = Header(default=None)) -> str:
    """Resolve the Supabase user behind the request's bearer token."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    supabase = require_supabase_client()
    try:
        response = supabase.auth.get_user(token.strip())
    except Exception as exc:
        logging.warning(f"Token verification failed: {exc}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired session") from exc

    user = getattr(response, "user", None)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired session")
    return str(user.id)
