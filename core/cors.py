"""
Allow-list CORS middleware.

Echoes the request Origin back only when it is in the allow-list, always
advertises the allowed methods and headers, and answers every OPTIONS
request with an empty 204 before routing.
"""
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

ALLOWED_METHODS = "GET, POST, OPTIONS"
ALLOWED_HEADERS = "Content-Type, Authorization"


class AllowListCORSMiddleware(BaseHTTPMiddleware):

    def __init__(self, app: ASGIApp, allowed_origins: Iterable[str]):
        super().__init__(app)
        self.allowed_origins = frozenset(allowed_origins)

    def is_allowed_origin(self, origin) -> bool:
        return origin is not None and origin in self.allowed_origins

    def apply_headers(self, request: Request, response: Response) -> Response:
        origin = request.headers.get("origin")
        if self.is_allowed_origin(origin):
            response.headers["Access-Control-Allow-Origin"] = origin
        response.headers.add_vary_header("Origin")
        response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
        response.headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS
        return response

    async def dispatch(self, request: Request, call_next):
        # Preflight never reaches a route handler
        if request.method == "OPTIONS":
            return self.apply_headers(request, Response(status_code=204))

        response = await call_next(request)
        return self.apply_headers(request, response)
