"""Zoom Server-to-Server OAuth token exchange."""

import logging
from typing import Union

import httpx

from zoom_notify.channels import Failed, FailureKind
from zoom_notify.config import Settings

logger = logging.getLogger(__name__)

GRANT_TYPE = "account_credentials"


async def fetch_access_token(client: httpx.AsyncClient, settings: Settings) -> Union[str, Failed]:
    """
    Exchange the configured account credentials for a bearer token.

    A new token is requested on every call. Returns the token string, or a
    ``Failed`` outcome when credentials are missing or Zoom rejects the exchange.
    """
    if not settings.has_oauth_credentials:
        logger.error("Zoom OAuth credentials are not configured")
        return Failed(FailureKind.CONFIGURATION, "Missing Zoom OAuth credentials")

    try:
        resp = await client.post(
            settings.zoom_oauth_url,
            params={"grant_type": GRANT_TYPE, "account_id": settings.zoom_account_id},
            auth=(settings.zoom_client_id, settings.zoom_client_secret),
        )
    except httpx.HTTPError as e:
        logger.error("Zoom OAuth request failed: %s", e)
        return Failed(FailureKind.CONNECTION, f"Connection error: {e}")

    if not resp.is_success:
        logger.warning("Zoom OAuth returned status %s", resp.status_code)
        return Failed(FailureKind.TOKEN_EXCHANGE, f"Failed to obtain access token: {resp.text}")

    try:
        token = resp.json().get("access_token")
    except (ValueError, AttributeError):
        token = None
    if not token:
        return Failed(FailureKind.TOKEN_EXCHANGE, "Failed to obtain access token: missing access_token")

    return token
