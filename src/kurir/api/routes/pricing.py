"""Pricing tier endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ...persistence import pricing as pricing_store
from ...schemas.pricing import (
    PriceQuoteResponse,
    PricingTierActiveUpdate,
    PricingTierCreateRequest,
    PricingTierModel,
)
from ...services import pricing as pricing_service
from ..deps import get_current_user_id

router = APIRouter(prefix="/pricing", tags=["pricing"])


def _to_model(tier) -> PricingTierModel:
    return PricingTierModel(**asdict(tier))


@router.get("", response_model=List[PricingTierModel], status_code=status.HTTP_200_OK)
def list_tiers(user_id: str = Depends(get_current_user_id)) -> List[PricingTierModel]:
    return [_to_model(tier) for tier in pricing_store.list_pricing_tiers(user_id)]


@router.post("", response_model=PricingTierModel, status_code=status.HTTP_201_CREATED)
def create_tier(payload: PricingTierCreateRequest, user_id: str = Depends(get_current_user_id)) -> PricingTierModel:
    try:
        tier = pricing_service.create_tier(
            user_id,
            min_distance=payload.min_distance,
            max_distance=payload.max_distance,
            base_price=payload.base_price,
            price_per_km=payload.price_per_km,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_model(tier)


@router.get("/quote", response_model=PriceQuoteResponse, status_code=status.HTTP_200_OK)
def quote_price(
    distance_km: float = Query(..., ge=0, description="Route distance in kilometres"),
    user_id: str = Depends(get_current_user_id),
) -> PriceQuoteResponse:
    tier, price = pricing_service.quote(user_id, distance_km)
    if tier is None or price is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No active pricing tier covers {distance_km:g} km",
        )
    return PriceQuoteResponse(distance_km=distance_km, price=price, tier=_to_model(tier))


@router.patch("/{tier_id}", response_model=PricingTierModel, status_code=status.HTTP_200_OK)
def set_tier_active(
    tier_id: str,
    payload: PricingTierActiveUpdate,
    user_id: str = Depends(get_current_user_id),
) -> PricingTierModel:
    try:
        tier = pricing_service.set_tier_active(user_id, tier_id, payload.is_active)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_model(tier)


@router.delete("/{tier_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tier(tier_id: str, user_id: str = Depends(get_current_user_id)) -> Response:
    pricing_store.delete_pricing_tier(user_id, tier_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
