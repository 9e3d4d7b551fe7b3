"""
API exceptions and the error envelope every failed request is rendered in:

    {"error": {"code": "...", "message": "...", "details": {"field": "..."}}}

`details` is only present for field-level validation errors.
"""
import logging

from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class StoreUnavailable(drf_exceptions.APIException):
    """The document store could not be reached or is not configured."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Profile storage is temporarily unavailable. Please try again later.'
    default_code = 'store_unavailable'


class EnrollmentNotFound(drf_exceptions.NotFound):
    default_detail = 'You are not enrolled in this course.'
    default_code = 'enrollment_not_found'


class CourseNotFound(drf_exceptions.NotFound):
    default_detail = 'Course not found.'
    default_code = 'course_not_found'


def _first_message(value):
    # Nested serializers report errors as lists of dicts with empty entries for valid items.
    if isinstance(value, (list, tuple)):
        return next((_first_message(item) for item in value if item), '')
    if isinstance(value, dict):
        return next((_first_message(item) for item in value.values() if item), '')
    return str(value)


def _message_and_details(data):
    if not isinstance(data, dict):
        return _first_message(data), {}

    details = {field: _first_message(errors) for field, errors in data.items() if field != 'detail'}
    if 'detail' in data:
        return _first_message(data['detail']), details
    if details:
        field, message = next(iter(details.items()))
        return f"{field.replace('_', ' ').capitalize()}: {message}", details
    return '', details


def custom_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is None:
        logger.error(f"Unhandled exception in {context.get('view').__class__.__name__}: {exc}", exc_info=exc)
        return Response(
            {'error': {
                'code': 'internal_server_error',
                'message': 'An unexpected error occurred. Please try again later.',
            }},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, StoreUnavailable):
        logger.warning(f"Store unavailable while handling {context.get('view').__class__.__name__}: {exc}")

    message, details = _message_and_details(response.data)
    if isinstance(exc, drf_exceptions.ValidationError):
        code = 'validation_error'
    else:
        code = getattr(exc, 'default_code', 'error')

    error = {'code': code, 'message': message or str(getattr(exc, 'default_detail', 'An error occurred'))}
    if details:
        error['details'] = details
    response.data = {'error': error}
    return response
