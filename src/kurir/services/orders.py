"""Order creation and route ordering for stored orders."""

from __future__ import annotations

import time
from typing import Optional

from ..models.domain import DeliveryType, Order
from ..persistence import customers as customers_store
from ..persistence import orders as orders_store
from ..persistence.records import RecordNotFoundError
from ..schemas.orders import OrderCreateRequest
from . import pricing
from .routing.service import RouteOptimization, clean_destinations, optimize_route

MAX_ORDER_DESTINATIONS = 10


class OrderValidationError(ValueError):
    """The order form cannot be stored as submitted."""


def generate_order_number() -> str:
    return f"ORD-{int(time.time() * 1000)}"


def _validate(payload: OrderCreateRequest) -> None:
    if not payload.pickup_address.strip():
        raise OrderValidationError("pickup address is required")
    if not payload.destinations:
        raise OrderValidationError("at least 1 destination required")
    if len(payload.destinations) > MAX_ORDER_DESTINATIONS:
        raise OrderValidationError(f"at most {MAX_ORDER_DESTINATIONS} destinations allowed")
    if any(not destination.address.strip() for destination in payload.destinations):
        raise OrderValidationError("every destination needs an address")


def create_order(user_id: str, payload: OrderCreateRequest) -> Order:
    """Store a new pending order and its destinations in entry order."""
    _validate(payload)
    if payload.customer_id:
        try:
            customers_store.get_customer(user_id, payload.customer_id)
        except RecordNotFoundError as exc:
            raise OrderValidationError(f"customer {payload.customer_id} not found") from exc

    total_price: Optional[float] = None
    if payload.total_distance is not None:
        _, total_price = pricing.quote(user_id, payload.total_distance)

    fields = {
        "customer_id": payload.customer_id or None,
        "order_number": generate_order_number(),
        "pickup_address": payload.pickup_address.strip(),
        "pickup_time": payload.pickup_time,
        "delivery_type": (payload.delivery_type or DeliveryType.DIRECT).value,
        "status": "pending",
        "notes": payload.notes or None,
        "total_distance": payload.total_distance,
        "total_price": total_price,
    }
    destinations = [
        {
            "address": destination.address.strip(),
            "contact_name": destination.contact_name,
            "contact_phone": destination.contact_phone,
            "notes": destination.notes,
        }
        for destination in payload.destinations
    ]
    return orders_store.create_order(user_id, fields, destinations)


def optimize_order_route(user_id: str, order_id: str) -> RouteOptimization:
    """Run route ordering over a stored order's destinations.

    Stored sequence numbers are left untouched.
    """
    order = orders_store.get_order(user_id, order_id)
    addresses = clean_destinations(destination.address for destination in order.destinations)
    return optimize_route(addresses)
