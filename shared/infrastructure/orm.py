"""Helpers shared by the Django ORM repositories."""

from __future__ import annotations

import logging
from contextlib import contextmanager

from django.db import DatabaseError, IntegrityError, transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from shared.domain.exceptions import ConflictError, PersistenceError

logger = logging.getLogger(__name__)


def lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


@contextmanager
def translate_database_errors(operation: str):
    """Re-raise driver errors as domain errors, keeping the cause chained."""

    try:
        yield
    except IntegrityError as exc:
        logger.warning(f"Integrity violation during {operation}: {exc}")
        raise ConflictError(f"Integrity violation during {operation}") from exc
    except DatabaseError as exc:
        logger.error(f"Database failure during {operation}", exc_info=True)
        raise PersistenceError(operation) from exc
