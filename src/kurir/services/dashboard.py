"""Dashboard aggregation."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from ..models.domain import ACTIVE_ORDER_STATUSES, OrderStatus
from ..persistence.customers import count_customers
from ..persistence.orders import list_order_summaries


def _price(row: dict) -> float:
    try:
        return float(row.get("total_price") or 0)
    except (TypeError, ValueError):
        return 0.0


def compute_dashboard_stats(user_id: str, today: Optional[date] = None) -> dict:
    today_iso = (today or datetime.now(timezone.utc).date()).isoformat()
    orders = list_order_summaries(user_id)
    active_values = {status.value for status in ACTIVE_ORDER_STATUSES}

    active_orders = sum(1 for row in orders if row.get("status") in active_values)
    completed_today = sum(
        1
        for row in orders
        if row.get("status") == OrderStatus.DELIVERED.value and (row.get("updated_at") or "") >= today_iso
    )
    total_revenue = sum(_price(row) for row in orders)
    today_revenue = sum(_price(row) for row in orders if (row.get("created_at") or "") >= today_iso)

    return {
        "totalOrders": len(orders),
        "activeOrders": active_orders,
        "totalCustomers": count_customers(user_id),
        "completedToday": completed_today,
        "todayRevenue": round(today_revenue, 2),
        "totalRevenue": round(total_revenue, 2),
    }
