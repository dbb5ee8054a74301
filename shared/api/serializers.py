"""
Serializer building blocks

Write payloads are checked by DRF serializers built on ``StrictSerializer``.
``validate_with`` runs one and turns ``serializer.errors`` into the domain
ValidationError, so handlers and views deal with a single error type.
"""

from collections.abc import Mapping
from typing import Any, Iterator, List

from rest_framework import serializers  # type: ignore
from rest_framework.exceptions import ErrorDetail  # type: ignore

from shared.domain.exceptions import FieldError, ValidationError
from shared.domain.validation import normalize_string_list, parse_timestamp

ERROR_CODES = {
    'required': FieldError.REQUIRED,
    'null': FieldError.REQUIRED,
    'blank': FieldError.REQUIRED,
    'not_allowed': FieldError.NOT_ALLOWED,
    'parse': FieldError.PARSE,
    'invalid_transition': FieldError.INVALID_TRANSITION,
}


def error(message: str, code: str = 'invalid') -> List[ErrorDetail]:
    return [ErrorDetail(message, code=code)]


class StringListField(serializers.Field):
    """
    A list of strings

    Accepts native lists, JSON text and comma separated text; drops null,
    "null" and empty entries. Always written back as a native list.
    """

    def run_validation(self, data=serializers.empty):  # type: ignore
        if data is None:
            data = []
        return super().run_validation(data)

    def to_internal_value(self, data):  # type: ignore
        return normalize_string_list(data)

    def to_representation(self, value):  # type: ignore
        return normalize_string_list(value)


class TimestampField(serializers.DateTimeField):
    """ISO datetime or bare date; a bare date means midnight in the current time zone."""

    default_error_messages = {
        'parse': '{field} could not be parsed as a timestamp: {value!r}',
    }

    def run_validation(self, data=serializers.empty):  # type: ignore
        if isinstance(data, str) and not data.strip() and self.allow_null:
            data = None
        return super().run_validation(data)

    def to_internal_value(self, value):  # type: ignore
        parsed = parse_timestamp(value)
        if parsed is None:
            self.fail('parse', field=self.field_name, value=value)
        return self.enforce_timezone(parsed)


class StrictSerializer(serializers.Serializer):
    """A serializer that reports unknown keys instead of ignoring them."""

    def to_internal_value(self, data):  # type: ignore
        if not isinstance(data, Mapping):
            return super().to_internal_value(data)

        errors = {}
        value = None
        try:
            value = super().to_internal_value(data)
        except serializers.ValidationError as exc:
            errors.update(exc.detail)

        writable = {name for name, field in self.fields.items() if not field.read_only}
        for name in data:
            if name not in writable:
                errors[name] = error(f"{name} cannot be set", code='not_allowed')

        if errors:
            raise serializers.ValidationError(errors)
        return value


def _details(detail: Any) -> Iterator[ErrorDetail]:
    if isinstance(detail, Mapping):
        for item in detail.values():
            yield from _details(item)
    elif isinstance(detail, (list, tuple)):
        for item in detail:
            yield from _details(item)
    else:
        yield detail


def field_errors(serializer: serializers.Serializer) -> List[FieldError]:
    """Flatten ``serializer.errors`` into one FieldError per message."""
    initial = serializer.initial_data if isinstance(serializer.initial_data, Mapping) else {}
    result = []
    for field, detail in serializer.errors.items():
        for item in _details(detail):
            result.append(FieldError(
                field=field,
                code=ERROR_CODES.get(getattr(item, 'code', None), FieldError.INVALID),
                message=str(item),
                value=initial.get(field),
            ))
    return result


def validate_with(serializer_class, payload: Any, **kwargs) -> dict:
    """Run ``serializer_class`` over ``payload`` and return its validated data."""
    serializer = serializer_class(data=payload, **kwargs)
    if not serializer.is_valid():
        raise ValidationError(field_errors(serializer))
    return dict(serializer.validated_data)
