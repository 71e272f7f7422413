# This file defines request and response schemas for the products service.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ProductCreateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", strict=True)

    name: str
    description: str = ""
    price: float


class Product(BaseModel):
    id: int
    name: str
    description: str
    price: float
    created_at: datetime


class ProductCreated(BaseModel):
    id: int
    created_at: datetime
