"""Map Zoom API responses onto delivery outcomes."""

import logging
from typing import Optional

import httpx

from zoom_notify.channels import Delivered, Failed, FailureKind, UpstreamOutcome

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER = 60

_STATUS_FAILURES = {
    401: (FailureKind.UNAUTHORIZED, "Unauthorized: Invalid or expired access token"),
    403: (FailureKind.FORBIDDEN, "Forbidden: Insufficient permissions"),
    404: (FailureKind.NOT_FOUND, "Not found: Channel or user does not exist"),
}


def parse_retry_after(value: Optional[str]) -> int:
    """Retry-After in whole seconds, falling back to 60 when absent or unparsable."""
    if value is None:
        return DEFAULT_RETRY_AFTER
    try:
        return int(value.strip())
    except ValueError:
        return DEFAULT_RETRY_AFTER


def translate_response(response: httpx.Response) -> UpstreamOutcome:
    if response.is_success:
        return Delivered(message_id=_message_id(response))

    status = response.status_code
    if status == 429:
        return Failed(
            FailureKind.RATE_LIMITED,
            "Rate limit exceeded",
            retry_after=parse_retry_after(response.headers.get("Retry-After")),
        )
    if status in _STATUS_FAILURES:
        kind, detail = _STATUS_FAILURES[status]
        return Failed(kind, detail)

    return Failed(FailureKind.UNKNOWN, f"{status} {response.reason_phrase}")


def _message_id(response: httpx.Response) -> Optional[str]:
    try:
        data = response.json()
    except ValueError:
        logger.warning("Zoom returned a non-JSON success body (status %s)", response.status_code)
        return None
    if isinstance(data, dict) and data.get("id") is not None:
        return str(data["id"])
    return None
