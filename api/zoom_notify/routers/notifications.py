"""Notification delivery and destination validation routes."""

import logging
from typing import Any

import httpx
from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from zoom_notify.auth import fetch_access_token
from zoom_notify.channels import Failed, FailureKind
from zoom_notify.channels.dispatcher import check_destination, send_notification
from zoom_notify.channels.validate import validate_destination, validate_notification_request
from zoom_notify.client import get_http_client
from zoom_notify.config import Settings, get_settings
from zoom_notify.response import (
    INTERNAL_ERROR,
    notify_error,
    notify_failure,
    notify_success,
    validation_error,
    validation_success,
)
from zoom_notify.schemas.notification import ChannelType, Destination, NotificationRequest, ValidationRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["notifications"])

INVALID_JSON = "Invalid JSON in request body"


class InvalidJSON(Exception):
    pass


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as e:
        raise InvalidJSON(str(e)) from e


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    field = ".".join(str(part) for part in err.get("loc", ()))
    return f"{field}: {err['msg']}" if field else err["msg"]


def _lookup_error(destination: Destination, outcome: Failed) -> str:
    if outcome.kind in (FailureKind.RATE_LIMITED, FailureKind.CONNECTION):
        return outcome.detail
    label = "User" if destination.channel_type == ChannelType.DM else "Channel"
    return f"{label} not found or inaccessible: {destination.target_id}"


# ---------------------------------------------------------------------------
# Send a notification
# ---------------------------------------------------------------------------


@router.post("/notify", summary="Send a Zoom chat notification")
async def notify(
    request: Request,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    try:
        body = await _read_json(request)

        error = validate_notification_request(body)
        if error:
            logger.error("Validation error: %s", error)
            return notify_error(400, error)

        try:
            notification = NotificationRequest.model_validate(body)
        except ValidationError as e:
            logger.error("Validation error: %s", e)
            return notify_error(400, _first_error(e))

        token = await fetch_access_token(client, settings)
        if isinstance(token, Failed):
            return notify_failure(token)

        outcome = await send_notification(client, settings.zoom_api_base_url, token, notification)
        if isinstance(outcome, Failed):
            logger.error("Zoom API error: %s", outcome.detail)
            return notify_failure(outcome)

        return notify_success(outcome.message_id)

    except InvalidJSON as e:
        logger.error("Invalid JSON: %s", e)
        return notify_error(400, INVALID_JSON)
    except Exception:
        logger.exception("Unexpected error while sending notification")
        return notify_error(500, INTERNAL_ERROR)


# ---------------------------------------------------------------------------
# Validate a destination
# ---------------------------------------------------------------------------


@router.post("/validate", summary="Check that a Zoom user or channel is reachable")
async def validate(
    request: Request,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    try:
        body = await _read_json(request)

        error = validate_destination(body)
        if error:
            return validation_error(400, error)

        try:
            destination = ValidationRequest.model_validate(body)
        except ValidationError as e:
            return validation_error(400, _first_error(e))

        token = await fetch_access_token(client, settings)
        if isinstance(token, Failed):
            if token.kind == FailureKind.CONFIGURATION:
                return validation_error(400, token.detail)
            return validation_error(200, token.detail)

        outcome = await check_destination(client, settings.zoom_api_base_url, token, destination)
        if isinstance(outcome, Failed):
            logger.info(
                "Destination %s %s is not reachable: %s",
                destination.channel_type.value, destination.target_id, outcome.detail,
            )
            return validation_error(200, _lookup_error(destination, outcome), outcome.retry_after)

        return validation_success()

    except InvalidJSON:
        return validation_error(400, INVALID_JSON)
    except Exception:
        logger.exception("Unexpected error while validating destination")
        return validation_error(500, INTERNAL_ERROR)
