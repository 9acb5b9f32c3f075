"""Field validation for notification and validation request bodies."""

from typing import Any, Optional

VALID_CHANNEL_TYPES = {"dm", "channel", "group"}


def validate_notification_request(body: Any) -> Optional[str]:
    """
    Validate a parsed /notify body.
    Returns None if valid, or an error message string for the first problem found.
    """
    if not isinstance(body, dict):
        return "Request body must be a JSON object"
    message = body.get("message")
    if message is None or message == "":
        return "message is required"
    if not isinstance(message, str):
        return "message must be a non-empty string"
    return validate_destination(body)


def validate_destination(body: Any) -> Optional[str]:
    """
    Validate the destination fields shared by /notify and /validate.
    Returns None if valid, or an error message string if invalid.
    """
    if not isinstance(body, dict):
        return "Request body must be a JSON object"

    channel_type = body.get("channel_type")
    if channel_type is None:
        return "channel_type is required"
    if not isinstance(channel_type, str) or channel_type not in VALID_CHANNEL_TYPES:
        return f"Unsupported channel_type: {channel_type}"

    if channel_type == "dm":
        return _require_id(body, "recipient_id", "recipient_id is required for DM")
    return _require_id(body, "channel_id", "channel_id is required for channel/group")


# --- Internal validators ---


def _require_id(body: dict, field: str, missing_message: str) -> Optional[str]:
    value = body.get(field)
    if value is None or value == "":
        return missing_message
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return f"{field} must be a string"
    if str(value) in (".", ".."):
        return f"{field} is not a valid identifier"
    return None
