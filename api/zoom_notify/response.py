"""Standard response envelopes for the notify and validate endpoints."""

from datetime import datetime, timezone
from typing import Optional

from fastapi.responses import JSONResponse

from zoom_notify.channels import Failed, FailureKind

INTERNAL_ERROR = "Internal server error"


def utc_timestamp() -> str:
    """Current UTC time as ``YYYY-MM-DDTHH:MM:SSZ``."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def notify_success(message_id: Optional[str]) -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content={"success": True, "message_id": message_id, "delivered_at": utc_timestamp()},
    )


def notify_error(status_code: int, error: str, retry_after: Optional[int] = None) -> JSONResponse:
    content = {"success": False, "error": error}
    if retry_after is not None:
        content["retry_after"] = retry_after
    return JSONResponse(status_code=status_code, content=content)


def notify_failure(outcome: Failed) -> JSONResponse:
    if outcome.kind == FailureKind.CONFIGURATION:
        return notify_error(400, outcome.detail)
    return notify_error(502, f"Zoom API error: {outcome.detail}", outcome.retry_after)


def validation_success() -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content={"valid": True, "message": "Channel configuration is valid"},
    )


def validation_error(status_code: int, error: str, retry_after: Optional[int] = None) -> JSONResponse:
    content = {"valid": False, "error": error}
    if retry_after is not None:
        content["retry_after"] = retry_after
    return JSONResponse(status_code=status_code, content=content)
