"""Route group exports."""

from . import customers, dashboard, health, orders, pricing, routing

__all__ = ["customers", "dashboard", "health", "orders", "pricing", "routing"]
