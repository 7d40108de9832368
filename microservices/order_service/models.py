"""
Order Service Data Models

Pydantic models for order submission, pricing, persistence and refunds.
Field names are snake_case in Python and camelCase on the wire and in
stored records.
"""

import json
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any
from datetime import datetime
from decimal import Decimal
from enum import Enum


class OrderStatus(str, Enum):
    """Order status enumeration"""
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    REFUNDED = "REFUNDED"


class RefundErrorCode(str, Enum):
    """Why a refund did not go through"""
    INVALID_INPUT = "INVALID_INPUT"
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    INVALID_STATUS = "INVALID_STATUS"
    CONFLICT = "CONFLICT"
    STORE_ERROR = "STORE_ERROR"
    NOTIFY_ERROR = "NOTIFY_ERROR"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Request Models

class OrderLineItem(_CamelModel):
    """Single priced line of an order"""
    price: float
    quantity: float


class OrderRequest(_CamelModel):
    """Validated order submission, never persisted in this shape"""
    order_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    items: List[OrderLineItem] = Field(..., min_length=1)


class RefundRequest(BaseModel):
    """Refund request body for the HTTP front door"""
    user_id: str = Field(..., description="User requesting the refund")
    amount: float = Field(..., description="Refund amount")


# Core Order Models

class OrderRecord(_CamelModel):
    """Persisted order, written identically to the orders and history tables"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    order_id: str
    user_id: str
    total: float
    status: OrderStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    refund_amount: Optional[float] = None

    def to_item(self) -> Dict[str, Any]:
        """Serialize to the stored document shape"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "OrderRecord":
        """Build from a stored document"""
        return cls.model_validate(item)


class PricingResult(BaseModel):
    """Subtotal, discount and total for a set of line items"""
    subtotal: Decimal
    discount: Decimal
    total: Decimal

    @property
    def discount_applied(self) -> bool:
        return self.discount > 0


class ValidationResult(BaseModel):
    """Outcome of validating a raw submission"""
    request: Optional[OrderRequest] = None
    errors: List[str] = []

    @property
    def is_valid(self) -> bool:
        return self.request is not None and not self.errors


# Response Models

class HandlerResponse(BaseModel):
    """Structured result returned to the invoking front door"""
    status_code: int
    body: str

    @classmethod
    def build(cls, status_code: int, payload: Dict[str, Any]) -> "HandlerResponse":
        return cls(status_code=status_code, body=json.dumps(payload))

    @property
    def payload(self) -> Dict[str, Any]:
        return json.loads(self.body)

    def to_event(self) -> Dict[str, Any]:
        """Outbound event shape: {statusCode, body}"""
        return {"statusCode": self.status_code, "body": self.body}


class RefundResult(BaseModel):
    """Refund outcome"""
    success: bool
    reason: Optional[str] = None
    error_code: Optional[RefundErrorCode] = None
    order: Optional[OrderRecord] = None
