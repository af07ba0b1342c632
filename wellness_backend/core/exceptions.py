"""
Domain exceptions and the DRF exception handler.

Service functions raise ``ClinicError`` subclasses; views translate them to
responses via ``to_dict()``. ``api_exception_handler`` is the safety net
configured in ``REST_FRAMEWORK['EXCEPTION_HANDLER']`` and maps everything
else onto the error taxonomy:

- validation error   -> 400 with field-level messages
- missing identity   -> 401
- insufficient role  -> 403
- unknown record     -> 404
- duplicate key      -> 400
- oversize upload    -> 413
- anything else      -> 500 (detail only in DEBUG)
"""

from __future__ import annotations

import logging
from typing import Any

from django.conf import settings
from django.core.exceptions import RequestDataTooBig
from django.db import IntegrityError

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ClinicError(Exception):
    """Base exception for errors raised by service functions."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, *, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {'error': self.message}
        if self.field:
            result[self.field] = [self.message]
        return result


class UploadRejected(ClinicError):
    """Raised when an uploaded file has a disallowed type or size."""

    def __init__(self, message: str, *, field: str | None = None, too_large: bool = False):
        super().__init__(message, field=field)
        if too_large:
            self.status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE


def _first_message(detail) -> str:
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
        return 'Invalid input.'
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else 'Invalid input.'
    return str(detail)


def api_exception_handler(exc, context):
    """Translate exceptions into JSON error payloads with an ``error`` key."""

    if isinstance(exc, ClinicError):
        return Response(exc.to_dict(), status=exc.status_code)

    if isinstance(exc, RequestDataTooBig):
        return Response(
            {'error': 'File too large. Maximum size is 10MB.'},
            status=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        )

    if isinstance(exc, IntegrityError):
        logger.warning('Integrity error on %s: %s', _view_name(context), exc)
        return Response(
            {'error': 'A record with this information already exists.'},
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = exception_handler(exc, context)

    if response is None:
        logger.exception('Unhandled error in %s', _view_name(context), exc_info=exc)
        payload = {'error': 'Internal server error'}
        if settings.DEBUG:
            payload['detail'] = str(exc)
        return Response(payload, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, exceptions.ValidationError):
        data = response.data
        if isinstance(data, dict):
            data = dict(data)
            data.setdefault('error', _first_message(response.data))
        else:
            data = {'error': _first_message(data), 'non_field_errors': data}
        response.data = data
        return response

    if response.status_code == status.HTTP_404_NOT_FOUND:
        view = (context or {}).get('view')
        message = getattr(view, 'not_found_message', None)
        if message:
            response.data = {'error': message}
            return response

    if isinstance(response.data, dict) and 'detail' in response.data:
        response.data = {'error': str(response.data['detail'])}

    return response


def _view_name(context) -> str:
    view = (context or {}).get('view')
    return type(view).__name__ if view is not None else 'unknown view'
