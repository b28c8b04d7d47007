"""Shared helpers for Supabase table access."""

from __future__ import annotations

from datetime import datetime, timezone


class RecordNotFoundError(LookupError):
    """No row with the requested id exists for the calling user."""


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def first_row(data: list[dict] | None, description: str) -> dict:
    if not data:
        raise RecordNotFoundError(f"{description} not found")
    return data[0]
