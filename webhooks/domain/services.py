"""
Webhook payload helpers.

Providers disagree on where they put the event type, the event id and
the customer; these functions hide the differences.
"""
from datetime import date, datetime, time, timezone
from typing import Any, Dict, Optional, Tuple

from django.utils.dateparse import parse_date, parse_datetime

UNKNOWN_EVENT_TYPE = "unknown"

EVENT_TYPE_FIELDS = ("type", "event_type", "eventType")
EVENT_ID_FIELDS = ("id", "event_id")


def normalize_payload(raw: Any) -> Dict[str, Any]:
    """
    Turn any decoded body into a dict.

    Non-object bodies are kept under "raw" so nothing is rejected. NUL
    characters are dropped from every string, keys included.
    """
    cleaned = strip_nul(raw)
    if isinstance(cleaned, dict):
        return cleaned
    return {"raw": cleaned}


def strip_nul(value: Any) -> Any:
    """Copy of a decoded JSON value without "\\x00" in any string."""
    if isinstance(value, str):
        return value.replace("\x00", "")
    if isinstance(value, dict):
        return {strip_nul(key): strip_nul(item) for key, item in value.items()}
    if isinstance(value, list):
        return [strip_nul(item) for item in value]
    return value


def extract_event_type(payload: Dict[str, Any]) -> str:
    """First non-empty of type, event_type, eventType; else "unknown"."""
    for field in EVENT_TYPE_FIELDS:
        value = payload.get(field)
        if value:
            return str(value)[:100]
    return UNKNOWN_EVENT_TYPE


def extract_provider_event_id(payload: Dict[str, Any]) -> Optional[str]:
    """Best-effort provider event id: id, then event_id."""
    for field in EVENT_ID_FIELDS:
        value = payload.get(field)
        if value not in (None, ""):
            return str(value)[:255]
    return None


def event_content(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Object that holds the event's records.

    Chargebee nests them under "content"; flat payloads carry them at the top.
    """
    content = payload.get("content")
    if isinstance(content, dict):
        return content
    return payload


def dig(data: Dict[str, Any], *paths: str, default: Any = None) -> Any:
    """
    First non-empty value among dotted paths.

    >>> dig({"customer": {"id": "c1"}}, "customer.id", "customer_id")
    'c1'
    """
    for path in paths:
        value: Any = data
        for part in path.split("."):
            if not isinstance(value, dict):
                value = None
                break
            value = value.get(part)
        if value not in (None, ""):
            return value
    return default


def extract_customer_reference(payload: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    """
    Billing customer id and email named by an event.

    Returns:
        Tuple of (chargebee_customer_id, email), either may be None
    """
    content = event_content(payload)
    customer_id = dig(content, "customer.id", "customer_id")
    email = dig(content, "customer.email", "email")
    return (
        str(customer_id) if customer_id is not None else None,
        str(email) if email is not None else None,
    )


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a provider timestamp.

    Accepts unix seconds (int/float/digit string), ISO datetimes and ISO dates.
    Naive values are taken as UTC.
    """
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    elif isinstance(value, str) and value.strip().isdigit():
        return datetime.fromtimestamp(int(value.strip()), tz=timezone.utc)
    elif isinstance(value, str):
        parsed = parse_datetime(value.strip())
        if parsed is None:
            day = parse_date(value.strip())
            if day is None:
                return None
            parsed = datetime.combine(day, time.min)
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
