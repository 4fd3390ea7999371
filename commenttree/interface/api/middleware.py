"""CORS middleware.

Every response carries permissive CORS headers and any OPTIONS request is
answered with 204 before reaching the routes.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS, DELETE",
    "Access-Control-Allow-Headers": "Content-Type",
}


class PermissiveCORSMiddleware(BaseHTTPMiddleware):
    """Adds CORS headers and short-circuits preflight requests."""

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method == "OPTIONS":
            response = Response(status_code=204)
        else:
            response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response
