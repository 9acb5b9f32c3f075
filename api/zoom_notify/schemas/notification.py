"""Pydantic schemas for inbound notification and validation requests."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class ChannelType(str, Enum):
    DM = "dm"
    CHANNEL = "channel"
    GROUP = "group"


class MessageFormat(str, Enum):
    MARKDOWN = "markdown"
    PLAIN = "plain"
    HTML = "html"


class Priority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class Destination(BaseModel):
    channel_type: ChannelType
    recipient_id: Optional[str] = Field(None, description="Zoom user ID or email (dm only)")
    channel_id: Optional[str] = Field(None, description="Zoom channel ID (channel/group only)")

    model_config = {"coerce_numbers_to_str": True, "extra": "ignore"}

    @property
    def target_id(self) -> str:
        if self.channel_type == ChannelType.DM:
            return self.recipient_id
        return self.channel_id


class ValidationRequest(Destination):
    pass


class NotificationRequest(Destination):
    message: str
    # Unknown formats fall back to markdown when the message is rendered.
    format: Optional[Any] = MessageFormat.MARKDOWN.value
    priority: Optional[Any] = Field(
        Priority.NORMAL.value, description="Advisory only, never forwarded to Zoom"
    )
    thread_id: Optional[str] = Field(None, description="Parent message ID (channel/group only)")
    metadata: Optional[Any] = Field(None, description="Opaque, never forwarded to Zoom")
