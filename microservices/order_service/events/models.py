"""
Order Service Event Models

Notification payloads emitted by the order service.
"""

from typing import Optional
from pydantic import BaseModel, Field


class NotificationMessage(BaseModel):
    """Message published to the notification topic"""
    topic: str = Field(..., description="Notification topic identifier")
    subject: Optional[str] = Field(None, description="Subject, set for new orders only")
    body: str = Field(..., description="Human-readable message text")
