"""Distance-tier pricing helpers."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..models.domain import PricingTier
from ..persistence import pricing as pricing_store


class PricingValidationError(ValueError):
    """A tier definition or quote request is not acceptable."""


def find_tier(tiers: Sequence[PricingTier], distance_km: float) -> Optional[PricingTier]:
    """Return the active tier whose [min, max) band contains ``distance_km``."""
    for tier in sorted(tiers, key=lambda item: item.min_distance):
        if tier.is_active and tier.covers(distance_km):
            return tier
    return None


def price_for(tier: PricingTier, distance_km: float) -> float:
    return round(tier.base_price + tier.price_per_km * distance_km, 2)


def _bands_overlap(
    min_a: float, max_a: Optional[float], min_b: float, max_b: Optional[float]
) -> bool:
    upper_a = float("inf") if max_a is None else max_a
    upper_b = float("inf") if max_b is None else max_b
    return min_a < upper_b and min_b < upper_a


def validate_tier(
    min_distance: float,
    max_distance: Optional[float],
    existing: Sequence[PricingTier],
) -> None:
    if min_distance < 0:
        raise PricingValidationError("min_distance must not be negative")
    if max_distance is not None and max_distance <= min_distance:
        raise PricingValidationError("max_distance must be greater than min_distance")
    for tier in existing:
        if tier.is_active and _bands_overlap(min_distance, max_distance, tier.min_distance, tier.max_distance):
            upper = "∞" if tier.max_distance is None else f"{tier.max_distance:g}"
            raise PricingValidationError(
                f"Distance band overlaps existing tier {tier.min_distance:g}-{upper} km"
            )


def create_tier(
    user_id: str,
    min_distance: float,
    max_distance: Optional[float],
    base_price: float,
    price_per_km: float,
) -> PricingTier:
    existing = pricing_store.list_pricing_tiers(user_id, active_only=True)
    validate_tier(min_distance, max_distance, existing)
    return pricing_store.create_pricing_tier(
        user_id,
        {
            "min_distance": min_distance,
            "max_distance": max_distance,
            "base_price": base_price,
            "price_per_km": price_per_km,
        },
    )


def set_tier_active(user_id: str, tier_id: str, is_active: bool) -> PricingTier:
    """Toggle a tier; reactivation is refused when it would overlap another active tier."""
    if is_active:
        tiers = pricing_store.list_pricing_tiers(user_id)
        target = next((tier for tier in tiers if tier.id == tier_id), None)
        if target is not None and not target.is_active:
            others = [tier for tier in tiers if tier.id != tier_id]
            validate_tier(target.min_distance, target.max_distance, others)
    return pricing_store.set_pricing_tier_active(user_id, tier_id, is_active)


def quote(user_id: str, distance_km: float) -> tuple[Optional[PricingTier], Optional[float]]:
    """Price ``distance_km`` with the user's active tiers.

    Returns (None, None) when no tier covers the distance.
    """
    if distance_km < 0:
        raise PricingValidationError("distance must not be negative")
    tier = find_tier(pricing_store.list_pricing_tiers(user_id, active_only=True), distance_km)
    if tier is None:
        logging.info(f"No active pricing tier covers {distance_km} km for user {user_id}")
        return None, None
    return tier, price_for(tier, distance_km)
