"""Input validators for request payloads.

All validators are pure and raise ValidationError on bad input.
"""

from collections.abc import Sequence
from datetime import UTC, date, datetime
from typing import Any

from briq.core.constants import (
    API_KEY_PATTERN,
    MAX_PAGE_LIMIT,
    PHONE_NUMBER_PATTERN,
    UUID_PATTERN,
)
from briq.core.errors import ValidationError

# Maximum lengths
MAX_MESSAGE_LENGTH = 1600
MAX_WORKSPACE_NAME_LENGTH = 100
MAX_CAMPAIGN_NAME_LENGTH = 150
MAX_DESCRIPTION_LENGTH = 500
MAX_SEARCH_LENGTH = 100


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_api_key(api_key: Any) -> None:
    """Validate API key presence and format."""
    if not api_key or not isinstance(api_key, str):
        raise ValidationError("API key is required and must be a string")

    if not API_KEY_PATTERN.match(api_key):
        raise ValidationError("Invalid API key format")


def validate_phone_number(phone_number: Any) -> None:
    """Validate an E.164-style phone number (spaces and dashes allowed)."""
    if not phone_number or not isinstance(phone_number, str):
        raise ValidationError("Phone number is required and must be a string")

    cleaned = phone_number.replace(" ", "").replace("-", "")
    if not PHONE_NUMBER_PATTERN.match(cleaned):
        raise ValidationError(f"Invalid phone number format: {phone_number}")


def validate_phone_numbers(phone_numbers: Any) -> None:
    """Validate a non-empty list of phone numbers.

    Raises:
        ValidationError: Naming the index of the first invalid number.
    """
    if (
        isinstance(phone_numbers, str)
        or not isinstance(phone_numbers, Sequence)
        or len(phone_numbers) == 0
    ):
        raise ValidationError("Phone numbers must be a non-empty list")

    for index, phone_number in enumerate(phone_numbers):
        try:
            validate_phone_number(phone_number)
        except ValidationError as e:
            raise ValidationError(
                f"Invalid phone number at index {index}: {phone_number}"
            ) from e


def validate_message(message: Any, max_length: int = MAX_MESSAGE_LENGTH) -> None:
    """Validate SMS message content."""
    if not message or not isinstance(message, str):
        raise ValidationError("Message is required and must be a string")

    if not message.strip():
        raise ValidationError("Message cannot be empty")

    if len(message) > max_length:
        raise ValidationError(
            f"Message too long. Maximum {max_length} characters allowed"
        )


def _validate_name(name: Any, label: str, max_length: int) -> None:
    if not name or not isinstance(name, str):
        raise ValidationError(f"{label} is required and must be a string")

    if not name.strip():
        raise ValidationError(f"{label} cannot be empty")

    if len(name) > max_length:
        raise ValidationError(
            f"{label} too long. Maximum {max_length} characters allowed"
        )


def validate_workspace_name(name: Any) -> None:
    """Validate a workspace name (1-100 characters)."""
    _validate_name(name, "Workspace name", MAX_WORKSPACE_NAME_LENGTH)


def validate_campaign_name(name: Any) -> None:
    """Validate a campaign name (1-150 characters)."""
    _validate_name(name, "Campaign name", MAX_CAMPAIGN_NAME_LENGTH)


def validate_description(description: str | None) -> None:
    """Validate an optional description (at most 500 characters)."""
    if description and len(description) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description too long. Maximum {MAX_DESCRIPTION_LENGTH} characters allowed"
        )


def validate_search(search: str | None) -> None:
    """Validate an optional search term (at most 100 characters)."""
    if search and len(search) > MAX_SEARCH_LENGTH:
        raise ValidationError(
            f"Search term too long. Maximum {MAX_SEARCH_LENGTH} characters allowed"
        )


def validate_uuid(value: Any, field_name: str = "ID") -> None:
    """Validate a UUID string (versions 1-5)."""
    if not value or not isinstance(value, str):
        raise ValidationError(f"{field_name} is required and must be a string")

    if not UUID_PATTERN.match(value):
        raise ValidationError(f"Invalid {field_name} format")


def validate_pagination_params(
    page: Any = None,
    limit: Any = None,
    offset: Any = None,
) -> None:
    """Validate pagination bounds. None means "not supplied"."""
    if page is not None and (not _is_int(page) or page < 1):
        raise ValidationError("Page must be a positive integer")

    if limit is not None and (not _is_int(limit) or not 1 <= limit <= MAX_PAGE_LIMIT):
        raise ValidationError(
            f"Limit must be an integer between 1 and {MAX_PAGE_LIMIT}"
        )

    if offset is not None and (not _is_int(offset) or offset < 0):
        raise ValidationError("Offset must be a non-negative integer")


def parse_iso_datetime(value: str | date, field_name: str = "Date") -> datetime:
    """Parse an ISO 8601 string or date into an aware datetime (naive → UTC)."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as e:
            raise ValidationError(
                f"Invalid {field_name} format. Must be a valid ISO date string"
            ) from e
    else:
        raise ValidationError(f"{field_name} is required and must be a string")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def validate_iso_date(value: str | date, field_name: str = "Date") -> None:
    """Validate an ISO date that lies in the future."""
    parsed = parse_iso_datetime(value, field_name)
    if parsed <= datetime.now(UTC):
        raise ValidationError(f"{field_name} must be in the future")
