"""
Field-level helpers shared by the serializers

Lists of images and features arrive in several encodings and timestamps
as either datetimes or bare dates; these helpers bring both into one
shape before a serializer field or a query filter uses them.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date, datetime, time
from typing import Any, Iterable, List
from uuid import UUID

from django.utils import timezone  # type: ignore
from django.utils.dateparse import parse_date, parse_datetime  # type: ignore

from shared.domain.exceptions import FieldError, ValidationError

NULL_MARKERS = (None, 'null', '')


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def normalize_string_list(value: Any) -> List[str]:
    """
    Normalize an images/features value to a clean list of strings

    JSON-encoded strings are parsed, other strings are split on commas,
    sequences pass through. None, "null" and empty entries are dropped.
    Applying it twice gives the same result as applying it once.
    """
    if value is None:
        return []
    if isinstance(value, str):
        text = value.strip()
        if not text or text == 'null':
            return []
        try:
            value = json.loads(text)
        except ValueError:
            value = text.split(',')
        else:
            if isinstance(value, str):
                value = [value]
            elif not isinstance(value, list):
                return []
    if isinstance(value, Mapping) or not isinstance(value, Iterable):
        return []

    items: List[str] = []
    for item in value:
        if item is None:
            continue
        text = str(item).strip()
        if text in NULL_MARKERS:
            continue
        items.append(text)
    return items


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO datetime or date into an aware datetime, or return None."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        try:
            parsed = parse_datetime(text)
            if parsed is None:
                day = parse_date(text)
                parsed = datetime.combine(day, time.min) if day else None
        except ValueError:
            return None
        if parsed is None:
            return None
    else:
        return None

    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def parse_identifier(value: Any, field: str = 'id') -> UUID:
    """Parse an entity id or raise a ValidationError naming the field."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value).strip())
    except (TypeError, ValueError, AttributeError):
        raise ValidationError([
            FieldError(field=field, code=FieldError.INVALID, message=f"{field} is not a valid identifier", value=value)
        ])
