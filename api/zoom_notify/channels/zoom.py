"""Zoom Team Chat channel adapter."""

from urllib.parse import quote

from zoom_notify.channels import ChannelPayload
from zoom_notify.channels.format_message import format_message
from zoom_notify.schemas.notification import ChannelType, Destination, NotificationRequest

# Recipient field on the chat message endpoint, per destination type.
# group is an alias for channel.
RECIPIENT_FIELDS = {
    ChannelType.DM: "to_contact",
    ChannelType.CHANNEL: "to_channel",
    ChannelType.GROUP: "to_channel",
}


def _auth_headers(access_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


def format_zoom_message(
    api_base_url: str, access_token: str, request: NotificationRequest
) -> ChannelPayload:
    """
    Build the chat message call for a validated notification.

    priority and metadata are never forwarded. thread_id is only sent for
    channel and group messages, as reply_main_message_id.
    """
    body = {
        RECIPIENT_FIELDS[request.channel_type]: request.target_id,
        "message": format_message(request.message, request.format),
    }
    if request.channel_type != ChannelType.DM and request.thread_id:
        body["reply_main_message_id"] = request.thread_id

    return ChannelPayload(
        method="POST",
        url=f"{api_base_url}/chat/users/me/messages",
        headers={**_auth_headers(access_token), "Content-Type": "application/json"},
        body=body,
    )


def format_zoom_lookup(
    api_base_url: str, access_token: str, destination: Destination
) -> ChannelPayload:
    """Build the read-only lookup call used to check that a destination exists."""
    target = quote(destination.target_id, safe="@")
    if destination.channel_type == ChannelType.DM:
        url = f"{api_base_url}/users/{target}"
    else:
        url = f"{api_base_url}/chat/channels/{target}"

    return ChannelPayload(method="GET", url=url, headers=_auth_headers(access_token))
