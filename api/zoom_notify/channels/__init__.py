"""Base types shared by the Zoom channel router and response translator."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


@dataclass
class ChannelPayload:
    """Represents an HTTP request to the Zoom API."""
    method: str
    url: str
    headers: dict[str, str]
    body: Optional[dict] = None  # sent as JSON when present


class FailureKind(str, Enum):
    CONFIGURATION = "configuration"
    TOKEN_EXCHANGE = "token_exchange"
    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONNECTION = "connection"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Delivered:
    message_id: Optional[str] = None


@dataclass(frozen=True)
class Failed:
    kind: FailureKind
    detail: str
    retry_after: Optional[int] = field(default=None)


UpstreamOutcome = Union[Delivered, Failed]
