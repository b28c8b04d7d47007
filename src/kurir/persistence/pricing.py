"""Pricing tier persistence (pricing_config table)."""

from __future__ import annotations

from typing import Any

from ..db.supabase import require_supabase_client
from ..models.domain import PricingTier
from .records import first_row, utc_now_iso

TABLE = "pricing_config"


def list_pricing_tiers(user_id: str, active_only: bool = False) -> list[PricingTier]:
    """Return the user's tiers sorted ascending by min_distance."""
    supabase = require_supabase_client()
    query = supabase.table(TABLE).select("*").eq("user_id", user_id)
    if active_only:
        query = query.eq("is_active", True)
    response = query.order("min_distance", desc=False).execute()
    tiers = [PricingTier.from_row(row) for row in (response.data or [])]
    return sorted(tiers, key=lambda tier: tier.min_distance)


def create_pricing_tier(user_id: str, fields: dict[str, Any]) -> PricingTier:
    supabase = require_supabase_client()
    record = {**fields, "user_id": user_id, "is_active": True}
    response = supabase.table(TABLE).insert(record).execute()
    return PricingTier.from_row(first_row(response.data, "Inserted pricing tier"))


def set_pricing_tier_active(user_id: str, tier_id: str, is_active: bool) -> PricingTier:
    supabase = require_supabase_client()
    response = (
        supabase.table(TABLE)
        .update({"is_active": is_active, "updated_at": utc_now_iso()})
        .eq("id", tier_id)
        .eq("user_id", user_id)
        .execute()
    )
    return PricingTier.from_row(first_row(response.data, f"Pricing tier {tier_id}"))


def delete_pricing_tier(user_id: str, tier_id: str) -> None:
    supabase = require_supabase_client()
    response = supabase.table(TABLE).delete().eq("id", tier_id).eq("user_id", user_id).execute()
    first_row(response.data, f"Pricing tier {tier_id}")
