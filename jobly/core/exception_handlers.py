"""
Translate domain errors into JSON responses.

JoblyError subclasses already know their status code; anything else becomes a
500 with the same envelope so clients only ever parse one error shape.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from jobly.core.errors import JoblyError

logger = logging.getLogger(__name__)


async def jobly_error_handler(request: Request, exc: JoblyError) -> JSONResponse:
    logger.warning(
        f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}",
        extra={"error_type": type(exc).__name__, "status_code": exc.status_code},
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "message": "Internal server error",
                "status": status.HTTP_500_INTERNAL_SERVER_ERROR,
            }
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JoblyError and catch-all handlers on an application"""
    app.add_exception_handler(JoblyError, jobly_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
