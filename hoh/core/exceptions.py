"""API exception handling shared by every app"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class DomainError(Exception):
    """Business rule violation reported to the client as ``{'error': message}``"""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message=None):
        self.message = message or getattr(self, 'default_message', 'Request could not be processed')
        super().__init__(self.message)


class ServiceTypeAccessDenied(DomainError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, service_type):
        self.service_type = service_type
        super().__init__(f'Access denied. You do not have access to {service_type} service type.')


def api_exception_handler(exc, context):
    """Return DRF responses as usual, domain errors as ``{'error': ...}``, and log the rest"""
    if isinstance(exc, DomainError):
        request = context.get('request')
        logger.warning(f"{type(exc).__name__} on {getattr(request, 'path', '?')}: {exc.message}")
        return Response({'error': exc.message}, status=exc.status_code)

    response = exception_handler(exc, context)
    if response is not None:
        return response

    request = context.get('request')
    logger.exception(f"Unhandled error on {getattr(request, 'path', '?')}: {exc}")
    return Response({'error': 'Internal server error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
