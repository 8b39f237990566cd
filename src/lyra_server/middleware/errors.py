# SPDX-License-Identifier: MIT
"""Error handling middleware."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..errors import APIError, ErrorCode


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render unmatched routes in the API error format."""
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={
                "error": "Endpoint not found",
                "code": ErrorCode.ENDPOINT_NOT_FOUND,
                "path": request.url.path,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception("Unhandled error on {} {}", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": "An unexpected error occurred",
            "code": ErrorCode.INTERNAL_ERROR,
        },
    )


def add_error_handlers(app: FastAPI, catch_all: bool = True) -> None:
    """Register error handlers with the FastAPI application.

    Args:
        app: Application to register on
        catch_all: Also render unexpected exceptions as JSON 500s
    """
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    if catch_all:
        app.add_exception_handler(Exception, generic_error_handler)
