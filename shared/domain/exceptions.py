"""
Domain error taxonomy

- ValidationError: malformed or missing input, client-correctable
- NotFoundError: a referenced entity does not exist
- ConflictError: referential-integrity or duplicate-identity violation
- PersistenceError: the storage layer failed, not client-correctable
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List


@dataclass(frozen=True)
class FieldError:
    """A single failed field, so callers can render field-specific feedback."""

    REQUIRED = 'required'
    INVALID = 'invalid'
    PARSE = 'parse'
    NOT_ALLOWED = 'not_allowed'
    INVALID_TRANSITION = 'invalid_transition'

    field: str
    code: str
    message: str
    value: Any = None

    @classmethod
    def required(cls, field: str) -> 'FieldError':
        return cls(field=field, code=cls.REQUIRED, message=f"{field} is required")

    @classmethod
    def parse(cls, field: str, value: Any) -> 'FieldError':
        return cls(
            field=field,
            code=cls.PARSE,
            message=f"{field} could not be parsed as a timestamp: {value!r}",
            value=value,
        )


class DomainError(Exception):
    """Base class for errors raised by the rental core."""


class ValidationError(DomainError):
    """Input failed validation; carries one FieldError per failed field."""

    def __init__(self, errors: Iterable[FieldError]):
        self.errors: List[FieldError] = list(errors)
        super().__init__(
            "; ".join(error.message for error in self.errors) or "Validation failed"
        )

    @property
    def fields(self) -> List[str]:
        return [error.field for error in self.errors]

    @property
    def missing_fields(self) -> List[str]:
        return [error.field for error in self.errors if error.code == FieldError.REQUIRED]

    def as_dict(self) -> Dict[str, List[str]]:
        result: Dict[str, List[str]] = {}
        for error in self.errors:
            result.setdefault(error.field, []).append(error.message)
        return result


class NotFoundError(DomainError):
    """A referenced entity is absent."""

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class ConflictError(DomainError):
    """The operation would break referential integrity or identity uniqueness."""

    def __init__(self, message: str, blocking_ids: Iterable[Any] = ()):
        self.blocking_ids = [str(item) for item in blocking_ids]
        super().__init__(message)


class PersistenceError(DomainError):
    """
    The persistence collaborator failed

    The message shown to callers is generic; the original exception
    stays available as ``__cause__`` for logging.
    """

    public_message = "The operation could not be completed. Please try again later."

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Persistence failure during {operation}")
