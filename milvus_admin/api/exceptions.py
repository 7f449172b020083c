"""Exception handlers rendering domain errors as JSON envelopes."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_422_UNPROCESSABLE_ENTITY,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from .._utils import logger
from ..exceptions import (
    MilvusAdminError,
    DatabaseConnectionError,
    OperationError,
    ArtifactNotFoundError,
    CollectionMissingError,
    BackupNotFoundError,
    ArtifactParseError,
    InvalidArtifactNameError,
)

# Checked in order, first match wins
STATUS_CODES = [
    (DatabaseConnectionError, HTTP_503_SERVICE_UNAVAILABLE),
    (OperationError, HTTP_400_BAD_REQUEST),
    (ArtifactNotFoundError, HTTP_404_NOT_FOUND),
    (CollectionMissingError, HTTP_404_NOT_FOUND),
    (BackupNotFoundError, HTTP_404_NOT_FOUND),
    (ArtifactParseError, HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidArtifactNameError, HTTP_400_BAD_REQUEST),
]


def status_code_for(exc: MilvusAdminError) -> int:
    for error_cls, status_code in STATUS_CODES:
        if isinstance(exc, error_cls):
            return status_code
    return HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, reason: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": reason})


async def milvus_admin_error_handler(request: Request, exc: MilvusAdminError) -> JSONResponse:
    status_code = status_code_for(exc)
    logger.error(f"{request.method} {request.url.path} failed ({status_code}): {exc.reason}")
    return error_response(status_code, exc.reason)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    reasons = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    return error_response(HTTP_422_UNPROCESSABLE_ENTITY, f"Invalid request: {reasons}")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MilvusAdminError, milvus_admin_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
