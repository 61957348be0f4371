"""Formatting helpers for phone numbers, SMS content and pagination."""

import math
import re
from dataclasses import dataclass

from briq.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT

_NON_PHONE_CHARS = re.compile(r"[^\d+]")

# Characters per SMS segment
GSM_SEGMENT_LENGTH = 160
UNICODE_SEGMENT_LENGTH = 70


def format_phone_number(phone_number: str) -> str:
    """Strip everything but digits and '+', then ensure a leading '+'."""
    cleaned = _NON_PHONE_CHARS.sub("", phone_number)
    if not cleaned.startswith("+"):
        cleaned = f"+{cleaned}"
    return cleaned


def format_phone_numbers(phone_numbers: list[str]) -> list[str]:
    return [format_phone_number(number) for number in phone_numbers]


def calculate_sms_segments(message: str) -> int:
    """Number of SMS segments needed for ``message``.

    Any non-ASCII character switches the whole message to the shorter
    unicode segment length.
    """
    has_unicode = any(ord(char) > 0x7F for char in message)
    segment_length = UNICODE_SEGMENT_LENGTH if has_unicode else GSM_SEGMENT_LENGTH
    return math.ceil(len(message) / segment_length)


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int
    offset: int


def normalize_pagination_params(
    page: int | None = None,
    limit: int | None = None,
    offset: int | None = None,
) -> Pagination:
    """Clamp pagination values into range and derive a missing offset."""
    page = max(1, page or DEFAULT_PAGE)
    limit = min(MAX_PAGE_LIMIT, max(1, limit or DEFAULT_PAGE_LIMIT))
    offset = offset or (page - 1) * limit
    return Pagination(page=page, limit=limit, offset=offset)
