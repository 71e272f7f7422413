# This file defines shared schema pieces reused by every service.
# It exists so confirmation and error payloads keep one shape across orders, products, and users.

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: Any | None = None
    request_id: str
    timestamp: datetime


class DeleteConfirmation(BaseModel):
    id: int
    status: Literal["deleted"] = "deleted"
