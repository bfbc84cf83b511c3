"""
Exception handlers.

Every failure is rendered as ``{"message": ..., "details": ...}``.
Service errors keep their own status code and request validation failures
become 400. Driver errors and anything else unexpected become a generic 500.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from jobboard.core.errors import JobBoardError
from jobboard.utils.logger import get_logger

logger = get_logger(__name__)


async def handle_service_error(request: Request, exc: JobBoardError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.details})")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
    logger.warning(f"{request.method} {request.url.path} invalid request: {details}")
    return JSONResponse(status_code=400, content={"message": "Invalid request", "details": details})


async def handle_store_error(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} store error: {exc}")
    return JSONResponse(status_code=500, content={"message": "Server error", "details": str(exc)})


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} unexpected error: {exc!r}")
    return JSONResponse(
        status_code=500,
        content={"message": "Server error", "details": type(exc).__name__},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the service error handlers to an application."""
    app.add_exception_handler(JobBoardError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(PyMongoError, handle_store_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
