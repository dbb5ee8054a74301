"""
DRF exception handler for domain errors

Maps the domain error taxonomy onto HTTP responses; everything else
goes to DRF's default handler.
"""

import logging

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.exceptions import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def domain_exception_handler(exc, context):
    view = context.get('view')
    view_name = view.__class__.__name__ if view is not None else 'unknown view'

    if isinstance(exc, ValidationError):
        logger.info(f"{view_name}: validation failed for {exc.fields}")
        return Response(
            {'detail': 'Validation failed', 'errors': exc.as_dict()},
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, NotFoundError):
        return Response({'detail': str(exc)}, status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, ConflictError):
        logger.warning(f"{view_name}: conflict, blocking ids {exc.blocking_ids}")
        return Response(
            {'detail': 'Cannot delete, in use', 'blocking_ids': exc.blocking_ids},
            status=status.HTTP_409_CONFLICT,
        )

    if isinstance(exc, PersistenceError):
        logger.error(f"{view_name}: {exc}", exc_info=exc.__cause__ or exc)
        return Response(
            {'detail': PersistenceError.public_message},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return exception_handler(exc, context)
