"""Order and destination persistence."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..db.supabase import require_supabase_client
from ..models.domain import DeliveryStatus, Order, OrderDestination, OrderStatus
from .records import first_row, utc_now_iso

ORDERS_TABLE = "orders"
DESTINATIONS_TABLE = "order_destinations"


def list_orders(user_id: str, status: Optional[OrderStatus] = None) -> list[Order]:
    """Return the user's orders, newest first, without destinations."""
    supabase = require_supabase_client()
    query = supabase.table(ORDERS_TABLE).select("*").eq("user_id", user_id)
    if status is not None:
        query = query.eq("status", status.value)
    response = query.order("created_at", desc=True).execute()
    return [Order.from_row(row) for row in (response.data or [])]


def list_destinations(order_id: str) -> list[OrderDestination]:
    supabase = require_supabase_client()
    response = (
        supabase.table(DESTINATIONS_TABLE)
        .select("*")
        .eq("order_id", order_id)
        .order("sequence_number", desc=False)
        .execute()
    )
    return [OrderDestination.from_row(row) for row in (response.data or [])]


def get_order(user_id: str, order_id: str, with_destinations: bool = True) -> Order:
    supabase = require_supabase_client()
    response = (
        supabase.table(ORDERS_TABLE)
        .select("*")
        .eq("id", order_id)
        .eq("user_id", user_id)
        .limit(1)
        .execute()
    )
    row = first_row(response.data, f"Order {order_id}")
    destinations = list_destinations(order_id) if with_destinations else []
    return Order.from_row(row, destinations)


def create_order(user_id: str, fields: dict[str, Any], destinations: list[dict[str, Any]]) -> Order:
    """Insert an order, then its destinations numbered 1..N in the given order.

    The two inserts are separate requests. When the destination insert fails
    the order row is deleted again before the error is re-raised.
    """
    supabase = require_supabase_client()
    response = supabase.table(ORDERS_TABLE).insert({**fields, "user_id": user_id}).execute()
    order_row = first_row(response.data, "Inserted order")
    order_id = order_row["id"]

    destination_rows = [
        {
            "order_id": order_id,
            "sequence_number": index,
            "address": destination["address"],
            "contact_name": destination.get("contact_name") or None,
            "contact_phone": destination.get("contact_phone") or None,
            "notes": destination.get("notes") or None,
            "delivery_status": DeliveryStatus.PENDING.value,
        }
        for index, destination in enumerate(destinations, start=1)
    ]

    try:
        inserted = supabase.table(DESTINATIONS_TABLE).insert(destination_rows).execute()
    except Exception:
        logging.exception(f"Destination insert failed for order {order_id}; removing the order row")
        try:
            supabase.table(ORDERS_TABLE).delete().eq("id", order_id).eq("user_id", user_id).execute()
        except Exception as cleanup_exc:
            logging.error(f"Failed to remove order {order_id} after destination insert failure: {cleanup_exc}")
        raise

    saved = sorted(
        (OrderDestination.from_row(row) for row in (inserted.data or [])),
        key=lambda destination: destination.sequence_number,
    )
    return Order.from_row(order_row, saved)


def update_order_status(user_id: str, order_id: str, status: OrderStatus) -> Order:
    supabase = require_supabase_client()
    response = (
        supabase.table(ORDERS_TABLE)
        .update({"status": status.value, "updated_at": utc_now_iso()})
        .eq("id", order_id)
        .eq("user_id", user_id)
        .execute()
    )
    return Order.from_row(first_row(response.data, f"Order {order_id}"))


def update_destination_status(
    user_id: str,
    order_id: str,
    destination_id: str,
    status: DeliveryStatus,
) -> OrderDestination:
    # Destinations carry no user_id; ownership is checked through the order.
    get_order(user_id, order_id, with_destinations=False)
    supabase = require_supabase_client()
    delivered_at = utc_now_iso() if status is DeliveryStatus.DELIVERED else None
    response = (
        supabase.table(DESTINATIONS_TABLE)
        .update({"delivery_status": status.value, "delivered_at": delivered_at})
        .eq("id", destination_id)
        .eq("order_id", order_id)
        .execute()
    )
    return OrderDestination.from_row(first_row(response.data, f"Destination {destination_id}"))


def delete_order(user_id: str, order_id: str) -> None:
    get_order(user_id, order_id, with_destinations=False)
    supabase = require_supabase_client()
    supabase.table(DESTINATIONS_TABLE).delete().eq("order_id", order_id).execute()
    supabase.table(ORDERS_TABLE).delete().eq("id", order_id).eq("user_id", user_id).execute()


def list_order_summaries(user_id: str) -> list[dict]:
    """Status, price and timestamps of every order, for dashboard aggregation."""
    supabase = require_supabase_client()
    response = (
        supabase.table(ORDERS_TABLE)
        .select("id,status,total_price,created_at,updated_at")
        .eq("user_id", user_id)
        .execute()
    )
    return list(response.data or [])
