"""Route-ordering request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class RouteOptimizationRequest(BaseModel):
    destinations: List[Optional[str]] = Field(default_factory=list)


class RouteOptimizationResponse(BaseModel):
    optimizedRoute: List[str]
    outcome: Literal["ordered", "fallback"]
