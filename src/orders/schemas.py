# This file defines request and response schemas for the orders service.
# Quantity and status are stored as submitted; only JSON types are checked, without coercion.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class OrderCreateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", strict=True)

    user_id: int
    product_id: int
    quantity: int
    status: str
    total: float


class Order(BaseModel):
    id: int
    user_id: int
    product_id: int
    quantity: int
    status: str
    total: float
    order_date: datetime


class OrderCreated(BaseModel):
    id: int
    order_date: datetime
