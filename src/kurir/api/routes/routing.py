"""Route-ordering endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Response, status

from ...schemas.routing import RouteOptimizationRequest, RouteOptimizationResponse
from ...services.routing.gateway import GatewayNotConfiguredError, UpstreamServiceError
from ...services.routing.service import RouteValidationError, clean_destinations, optimize_route

router = APIRouter(tags=["routing"])


@router.options("/optimize-route", status_code=status.HTTP_200_OK)
def optimize_route_preflight() -> Response:
    return Response(status_code=status.HTTP_200_OK)


@router.post("/optimize-route", response_model=RouteOptimizationResponse, status_code=status.HTTP_200_OK)
def optimize(payload: RouteOptimizationRequest) -> RouteOptimizationResponse:
    destinations = clean_destinations(payload.destinations)
    try:
        result = optimize_route(destinations)
    except RouteValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except (GatewayNotConfiguredError, UpstreamServiceError) as exc:
        logging.error(f"Error in optimize-route: {exc}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error in optimize-route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}",
        ) from exc
    return RouteOptimizationResponse(optimizedRoute=result.route, outcome=result.outcome)
