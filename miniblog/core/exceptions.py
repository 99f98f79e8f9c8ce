from typing import List, Optional

from fastapi import status

from miniblog.core.response.schemas import ErrorDetail


class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing or invalid."""


class ServiceException(Exception):
    """Base class for errors surfaced by the service layer."""

    error_code: str = "SERVICE_ERROR"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        detail: str,
        error_details: Optional[List[ErrorDetail]] = None,
    ):
        super().__init__(detail)
        self.detail = detail
        self.error_details = error_details or []


class ValidationException(ServiceException):
    error_code = "VALIDATION_ERROR"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(ServiceException):
    error_code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND


class InternalException(ServiceException):
    error_code = "INTERNAL_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class RouteNotFoundException(ServiceException):
    error_code = "ROUTE_NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, detail: str = "API endpoint not found", **kwargs):
        super().__init__(detail, **kwargs)
