"""Order endpoints."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ...models.domain import Order, OrderStatus
from ...persistence import orders as orders_store
from ...schemas.orders import (
    DestinationStatusUpdate,
    OrderCreateRequest,
    OrderDestinationModel,
    OrderModel,
    OrderStatusUpdate,
)
from ...schemas.routing import RouteOptimizationResponse
from ...services import orders as orders_service
from ...services.routing.gateway import GatewayNotConfiguredError, UpstreamServiceError
from ..deps import get_current_user_id

router = APIRouter(prefix="/orders", tags=["orders"])


def _to_model(order: Order) -> OrderModel:
    return OrderModel(**asdict(order))


@router.get("", response_model=List[OrderModel], status_code=status.HTTP_200_OK)
def list_orders(
    status_filter: OrderStatus | None = Query(default=None, alias="status", description="Optional status filter"),
    user_id: str = Depends(get_current_user_id),
) -> List[OrderModel]:
    return [_to_model(order) for order in orders_store.list_orders(user_id, status=status_filter)]


@router.post("", response_model=OrderModel, status_code=status.HTTP_201_CREATED)
def create_order(payload: OrderCreateRequest, user_id: str = Depends(get_current_user_id)) -> OrderModel:
    try:
        order = orders_service.create_order(user_id, payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_model(order)


@router.get("/{order_id}", response_model=OrderModel, status_code=status.HTTP_200_OK)
def get_order(order_id: str, user_id: str = Depends(get_current_user_id)) -> OrderModel:
    return _to_model(orders_store.get_order(user_id, order_id))


@router.patch("/{order_id}/status", response_model=OrderModel, status_code=status.HTTP_200_OK)
def update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    user_id: str = Depends(get_current_user_id),
) -> OrderModel:
    return _to_model(orders_store.update_order_status(user_id, order_id, payload.status))


@router.patch(
    "/{order_id}/destinations/{destination_id}/status",
    response_model=OrderDestinationModel,
    status_code=status.HTTP_200_OK,
)
def update_destination_status(
    order_id: str,
    destination_id: str,
    payload: DestinationStatusUpdate,
    user_id: str = Depends(get_current_user_id),
) -> OrderDestinationModel:
    destination = orders_store.update_destination_status(user_id, order_id, destination_id, payload.delivery_status)
    return OrderDestinationModel(**asdict(destination))


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(order_id: str, user_id: str = Depends(get_current_user_id)) -> Response:
    orders_store.delete_order(user_id, order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{order_id}/optimize-route", response_model=RouteOptimizationResponse, status_code=status.HTTP_200_OK)
def optimize_order_route(order_id: str, user_id: str = Depends(get_current_user_id)) -> RouteOptimizationResponse:
    """Suggest a visiting order for a stored order's destinations."""
    try:
        result = orders_service.optimize_order_route(user_id, order_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except (GatewayNotConfiguredError, UpstreamServiceError) as exc:
        logging.error(f"Error optimizing route for order {order_id}: {exc}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return RouteOptimizationResponse(optimizedRoute=result.route, outcome=result.outcome)
