import logging
from http import HTTPStatus

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import MAX_FILE_SIZE
from services.exceptions import (
    AutoDomainError,
    DatabaseQueryError,
    FinExistsError,
    ForbiddenError,
    NotFoundError,
    ValidationFailedError,
    VersionInvalidError,
    VersionOutdatedError,
)

logger = logging.getLogger("auto.exceptions")


class InvalidMimeTypeError(HTTPException):
    def __init__(self, mimetype: str):
        super().__init__(status_code=415, detail=f"Der MIME-Typ {mimetype} wird nicht unterstuetzt.")


class FileTooLargeError(HTTPException):
    def __init__(self, size: int):
        super().__init__(
            status_code=413,
            detail=f"Die Datei ist mit {size} Bytes groesser als {MAX_FILE_SIZE} Bytes.",
        )


STATUS_BY_ERROR = {
    NotFoundError: 404,
    ValidationFailedError: 400,
    FinExistsError: 422,
    VersionInvalidError: 412,
    VersionOutdatedError: 412,
    ForbiddenError: 403,
    DatabaseQueryError: 500,
}


def error_body(status_code: int, message) -> dict:
    return {
        "statusCode": status_code,
        "error": HTTPStatus(status_code).phrase,
        "message": message,
    }


def status_for(exc: AutoDomainError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_type]
    return 500


async def domain_exception_handler(request: Request, exc: AutoDomainError):
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.debug("%s %s rejected: %s", request.method, request.url.path, exc)

    message = exc.messages if isinstance(exc, ValidationFailedError) else str(exc)
    return JSONResponse(status_code=status_code, content=error_body(status_code, message))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    400 with one "<field path>: <message>" entry per violated constraint.
    An unparseable path parameter (e.g. /rest/abc) addresses no resource and
    yields 404.
    """
    errors = exc.errors()
    if any(err["loc"] and err["loc"][0] == "path" for err in errors):
        return JSONResponse(status_code=404, content=error_body(404, "Ungueltige ID"))

    messages = []
    for err in errors:
        path = ".".join(str(part) for part in err["loc"][1:])
        messages.append(f"{path}: {err['msg']}" if path else err["msg"])

    logger.debug("%s %s invalid: %s", request.method, request.url.path, messages)
    return JSONResponse(status_code=400, content=error_body(400, messages))
