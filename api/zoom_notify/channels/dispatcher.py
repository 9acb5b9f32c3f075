"""Send notifications and destination lookups to Zoom."""

import logging

import httpx

from zoom_notify.channels import ChannelPayload, Failed, FailureKind, UpstreamOutcome
from zoom_notify.channels.translate import translate_response
from zoom_notify.channels.zoom import format_zoom_lookup, format_zoom_message
from zoom_notify.schemas.notification import Destination, NotificationRequest

logger = logging.getLogger(__name__)


async def send_notification(
    client: httpx.AsyncClient,
    api_base_url: str,
    access_token: str,
    request: NotificationRequest,
) -> UpstreamOutcome:
    payload = format_zoom_message(api_base_url, access_token, request)
    outcome = await _send(client, payload)
    if isinstance(outcome, Failed):
        logger.warning(
            "Zoom %s message to %s failed: %s",
            request.channel_type.value, request.target_id, outcome.detail,
        )
    else:
        logger.info(
            "Zoom %s message delivered to %s (id=%s)",
            request.channel_type.value, request.target_id, outcome.message_id,
        )
    return outcome


async def check_destination(
    client: httpx.AsyncClient,
    api_base_url: str,
    access_token: str,
    destination: Destination,
) -> UpstreamOutcome:
    """Look up a user or channel. Never sends a message."""
    payload = format_zoom_lookup(api_base_url, access_token, destination)
    return await _send(client, payload)


async def _send(client: httpx.AsyncClient, payload: ChannelPayload) -> UpstreamOutcome:
    try:
        response = await client.request(
            method=payload.method,
            url=payload.url,
            headers=payload.headers,
            json=payload.body,
        )
    except httpx.HTTPError as e:
        logger.error("Request to %s failed: %s", payload.url, e)
        return Failed(FailureKind.CONNECTION, f"Connection error: {e}")

    if response.status_code >= 400:
        logger.debug("Zoom returned status %s: %s", response.status_code, response.text[:200])
    return translate_response(response)
