"""Application-wide error handlers."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from commenttree.interface.api.middleware import CORS_HEADERS


def register_error_handlers(app: FastAPI) -> None:
    """Register handlers for errors that escape the routes.

    Malformed request bodies map to 400, anything unhandled to 500.
    """

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logfire.error(
            "Malformed request",
            operation=f"{request.method} {request.url.path}",
            errors=str(exc.errors()),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "invalid request body", "errors": _summarize(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
        logfire.error(
            "Unhandled exception",
            operation=f"{request.method} {request.url.path}",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "internal server error"},
            # Runs outside the CORS middleware
            headers=CORS_HEADERS,
        )


def _summarize(exc: RequestValidationError) -> list[dict]:
    # pydantic error contexts may hold non-serializable values
    return [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
