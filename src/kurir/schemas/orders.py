"""Order request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import DeliveryStatus, DeliveryType, OrderStatus


class DestinationInput(BaseModel):
    address: str
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    notes: Optional[str] = None


class OrderCreateRequest(BaseModel):
    pickup_address: str
    destinations: List[DestinationInput] = Field(default_factory=list)
    customer_id: Optional[str] = None
    pickup_time: Optional[str] = None
    delivery_type: DeliveryType = DeliveryType.DIRECT
    notes: Optional[str] = None
    total_distance: Optional[float] = Field(default=None, ge=0, description="Route distance in km, used for quoting.")


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class DestinationStatusUpdate(BaseModel):
    delivery_status: DeliveryStatus


class OrderDestinationModel(BaseModel):
    id: str
    sequence_number: int
    address: str
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    notes: Optional[str] = None
    delivery_status: DeliveryStatus
    delivered_at: Optional[str] = None


class OrderModel(BaseModel):
    id: str
    order_number: str
    customer_id: Optional[str] = None
    pickup_address: str
    pickup_time: Optional[str] = None
    delivery_type: DeliveryType
    status: OrderStatus
    total_price: Optional[float] = None
    total_distance: Optional[float] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    destinations: List[OrderDestinationModel] = Field(default_factory=list)
