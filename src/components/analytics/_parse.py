"""
Parsing of raw records handed over by the storage collaborator.

Rows arrive as dicts with camelCase keys. Required fields that are missing
or unreadable reject the row; optional fields degrade to None.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from .models import AnalyticsValidationError, BlogPost, ContactRequest, VisitRecord

# Epoch values above this are milliseconds.
EPOCH_MS_THRESHOLD = 1e12


def parse_timestamp(
    value: Any,
    field_name: str = "timestamp",
) -> tuple[datetime | None, list[AnalyticsValidationError]]:
    """Parse a datetime, ISO-8601 string or Unix epoch (s or ms) into UTC."""
    errors: list[AnalyticsValidationError] = []
    parsed: datetime | None = None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            errors.append(
                AnalyticsValidationError(
                    code="invalid_timestamp",
                    message="Timestamp must be ISO 8601 format",
                    field_name=field_name,
                )
            )
            return None, errors
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            if value > EPOCH_MS_THRESHOLD:
                parsed = datetime.fromtimestamp(value / 1000, tz=UTC)
            else:
                parsed = datetime.fromtimestamp(value, tz=UTC)
        except (ValueError, OSError, OverflowError):
            errors.append(
                AnalyticsValidationError(
                    code="invalid_timestamp",
                    message="Invalid Unix timestamp",
                    field_name=field_name,
                )
            )
            return None, errors
    else:
        errors.append(
            AnalyticsValidationError(
                code="invalid_timestamp",
                message="Timestamp must be ISO string or Unix timestamp",
                field_name=field_name,
            )
        )
        return None, errors

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)

    return parsed.astimezone(UTC), errors


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _optional_float(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _required_str(
    data: dict[str, Any],
    key: str,
    errors: list[AnalyticsValidationError],
) -> str:
    value = _optional_str(data.get(key))
    if value is None:
        errors.append(
            AnalyticsValidationError(
                code="missing_field",
                message=f"Field '{key}' is required",
                field_name=key,
            )
        )
        return ""
    return value


def parse_visit(data: dict[str, Any]) -> tuple[VisitRecord | None, list[AnalyticsValidationError]]:
    """Parse one stored visit row."""
    errors: list[AnalyticsValidationError] = []

    timestamp, ts_errors = parse_timestamp(data.get("timestamp"))
    errors.extend(ts_errors)
    path = _required_str(data, "path", errors)

    if errors or timestamp is None:
        return None, errors

    latitude = _optional_float(data.get("latitude"))
    longitude = _optional_float(data.get("longitude"))
    if latitude is None or longitude is None:
        latitude = longitude = None

    return (
        VisitRecord(
            timestamp=timestamp,
            path=path,
            user_agent=str(data.get("userAgent") or ""),
            referrer=_optional_str(data.get("referrer")),
            screen_width=_optional_int(data.get("screenWidth")),
            ip=str(data.get("ip") or "").strip(),
            country=_optional_str(data.get("country")),
            country_code=_optional_str(data.get("countryCode")),
            city=_optional_str(data.get("city")),
            region=_optional_str(data.get("region")),
            latitude=latitude,
            longitude=longitude,
        ),
        [],
    )


def parse_contact_request(
    data: dict[str, Any],
) -> tuple[ContactRequest | None, list[AnalyticsValidationError]]:
    """Parse one stored contact request row."""
    errors: list[AnalyticsValidationError] = []

    request_id = _required_str(data, "id", errors)
    status = _required_str(data, "status", errors)
    timestamp, ts_errors = parse_timestamp(data.get("timestamp"))
    errors.extend(ts_errors)

    if errors or timestamp is None:
        return None, errors

    return (
        ContactRequest(
            id=request_id,
            status=status,
            timestamp=timestamp,
            name=_optional_str(data.get("name")),
            email=_optional_str(data.get("email")),
            service=_optional_str(data.get("service")),
        ),
        [],
    )


def parse_blog_post(data: dict[str, Any]) -> tuple[BlogPost | None, list[AnalyticsValidationError]]:
    """Parse one stored blog post row. A bad publishedAt is treated as unpublished."""
    errors: list[AnalyticsValidationError] = []

    post_id = _required_str(data, "id", errors)
    title = _required_str(data, "title", errors)
    slug = _required_str(data, "slug", errors)
    created_at, ts_errors = parse_timestamp(data.get("createdAt"), "createdAt")
    errors.extend(ts_errors)

    if errors or created_at is None:
        return None, errors

    published_at = None
    if data.get("publishedAt"):
        published_at, _ = parse_timestamp(data["publishedAt"], "publishedAt")

    return (
        BlogPost(
            id=post_id,
            title=title,
            slug=slug,
            created_at=created_at,
            published_at=published_at,
        ),
        [],
    )
