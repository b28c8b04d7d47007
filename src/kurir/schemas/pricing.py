"""Pricing tier schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class PricingTierModel(BaseModel):
    id: str
    min_distance: float
    max_distance: Optional[float] = None
    base_price: float
    price_per_km: float
    is_active: bool
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class PricingTierCreateRequest(BaseModel):
    min_distance: float = Field(..., ge=0)
    max_distance: Optional[float] = Field(default=None, description="Leave empty for an unbounded tier.")
    base_price: float = Field(..., ge=0)
    price_per_km: float = Field(..., ge=0)


class PricingTierActiveUpdate(BaseModel):
    is_active: bool


class PriceQuoteResponse(BaseModel):
    distance_km: float
    price: float
    tier: PricingTierModel
