"""Domain models for customers, orders and pricing tiers."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class OrderStatus(str, Enum):
    PENDING = "pending"
    PICKED_UP = "picked_up"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def normalize(cls, value: Any) -> "OrderStatus":
        """Map a stored status onto the known set; unknown values read as pending."""
        try:
            return cls(value)
        except ValueError:
            logging.warning(f"Unknown order status {value!r}, treating as pending")
            return cls.PENDING


ACTIVE_ORDER_STATUSES = (OrderStatus.PENDING, OrderStatus.PICKED_UP, OrderStatus.IN_TRANSIT)


class DeliveryType(str, Enum):
    DIRECT = "direct"
    RELAY = "relay"

    @classmethod
    def normalize(cls, value: Any) -> "DeliveryType":
        try:
            return cls(value)
        except ValueError:
            logging.warning(f"Unknown delivery type {value!r}, treating as direct")
            return cls.DIRECT


class DeliveryStatus(str, Enum):
    PENDING = "pending"
    DELIVERED = "delivered"
    FAILED = "failed"

    @classmethod
    def normalize(cls, value: Any) -> "DeliveryStatus":
        try:
            return cls(value)
        except ValueError:
            logging.warning(f"Unknown delivery status {value!r}, treating as pending")
            return cls.PENDING


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


@dataclass(slots=True)
class Customer:
    """A delivery customer owned by a single user."""

    id: str
    user_id: str
    name: str
    phone: str
    address: str
    notes: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "Customer":
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            name=row.get("name") or "",
            phone=row.get("phone") or "",
            address=row.get("address") or "",
            notes=row.get("notes"),
            latitude=_optional_float(row.get("latitude")),
            longitude=_optional_float(row.get("longitude")),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )


@dataclass(slots=True)
class OrderDestination:
    """One stop of a multi-stop order; sequence_number follows entry order."""

    id: str
    order_id: str
    sequence_number: int
    address: str
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    notes: Optional[str] = None
    delivery_status: DeliveryStatus = DeliveryStatus.PENDING
    delivered_at: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "OrderDestination":
        return cls(
            id=str(row["id"]),
            order_id=str(row["order_id"]),
            sequence_number=int(row["sequence_number"]),
            address=row.get("address") or "",
            contact_name=row.get("contact_name"),
            contact_phone=row.get("contact_phone"),
            notes=row.get("notes"),
            delivery_status=DeliveryStatus.normalize(row.get("delivery_status")),
            delivered_at=row.get("delivered_at"),
            created_at=row.get("created_at"),
        )


@dataclass(slots=True)
class Order:
    """A pickup with one or more destinations."""

    id: str
    user_id: str
    order_number: str
    pickup_address: str
    customer_id: Optional[str] = None
    pickup_time: Optional[str] = None
    delivery_type: DeliveryType = DeliveryType.DIRECT
    status: OrderStatus = OrderStatus.PENDING
    total_price: Optional[float] = None
    total_distance: Optional[float] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    destinations: list[OrderDestination] = field(default_factory=list)

    @classmethod
    def from_row(cls, row: dict, destinations: Optional[list[OrderDestination]] = None) -> "Order":
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            order_number=row.get("order_number") or "",
            pickup_address=row.get("pickup_address") or "",
            customer_id=row.get("customer_id"),
            pickup_time=row.get("pickup_time"),
            delivery_type=DeliveryType.normalize(row.get("delivery_type")),
            status=OrderStatus.normalize(row.get("status")),
            total_price=_optional_float(row.get("total_price")),
            total_distance=_optional_float(row.get("total_distance")),
            notes=row.get("notes"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
            destinations=destinations or [],
        )


@dataclass(slots=True)
class PricingTier:
    """A distance band priced as base_price + price_per_km * distance.

    The band is half-open: [min_distance, max_distance). A missing max_distance
    means the band is unbounded.
    """

    id: str
    user_id: str
    min_distance: float
    base_price: float
    price_per_km: float
    max_distance: Optional[float] = None
    is_active: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def covers(self, distance_km: float) -> bool:
        if distance_km < self.min_distance:
            return False
        return self.max_distance is None or distance_km < self.max_distance

    @classmethod
    def from_row(cls, row: dict) -> "PricingTier":
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            min_distance=float(row["min_distance"]),
            base_price=float(row["base_price"]),
            price_per_km=float(row["price_per_km"]),
            max_distance=_optional_float(row.get("max_distance")),
            is_active=bool(row.get("is_active", True)),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )
