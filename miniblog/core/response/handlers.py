from typing import Any, List, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from miniblog.core import exceptions
from miniblog.core.logging import get_logger
from miniblog.core.response.schemas import BaseResponse, ErrorDetail, ErrorResponse

logger = get_logger(__name__)

API_PREFIX = "/api"


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    body = BaseResponse[Any](success=True, message=message, data=data)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def error_response(
    error_code: str,
    message: str,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    details: Optional[List[ErrorDetail]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        message=message,
        error_code=error_code,
        error_details=details or [],
    )
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def exception_response(exc: exceptions.ServiceException) -> JSONResponse:
    return error_response(
        error_code=exc.error_code,
        message=str(exc.detail),
        status_code=exc.status_code,
        details=exc.error_details,
    )


def _is_api_path(request: Request) -> bool:
    path = request.url.path
    return path == API_PREFIX or path.startswith(API_PREFIX + "/")


def _expose_details(request: Request) -> bool:
    context = getattr(request.app.state, "context", None)
    return context is not None and not context.settings.is_production


async def service_exception_handler(
    request: Request, exc: exceptions.ServiceException
) -> JSONResponse:
    return exception_response(exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies as 400 validation errors instead of 422."""
    details = [
        ErrorDetail(
            field=".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            code="INVALID",
            message=error.get("msg", "Invalid value"),
        )
        for error in exc.errors()
    ]
    return error_response(
        error_code=exceptions.ValidationException.error_code,
        message="Title and content are required",
        status_code=status.HTTP_400_BAD_REQUEST,
        details=details,
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    # Anything the router could not match under /api is a route miss,
    # never an entity miss.
    if _is_api_path(request) and exc.status_code in (
        status.HTTP_404_NOT_FOUND,
        status.HTTP_405_METHOD_NOT_ALLOWED,
    ):
        return exception_response(exceptions.RouteNotFoundException())
    return error_response(
        error_code="HTTP_ERROR",
        message=str(exc.detail),
        status_code=exc.status_code,
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled_exception",
        method=request.method,
        path=request.url.path,
        error=str(exc),
    )
    details = []
    if _expose_details(request):
        details.append(ErrorDetail(code="EXCEPTION", message=str(exc)))
    return error_response(
        error_code=exceptions.InternalException.error_code,
        message="Internal server error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details=details,
    )
