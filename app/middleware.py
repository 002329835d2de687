"""Request-processing steps applied ahead of every route handler."""

import logging
from typing import List, Type

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": (
        "Accept, Content-Type, Content-Length, Accept-Encoding, Authorization"
    ),
}


def _remote_addr(request: Request) -> str:
    if request.client is None:
        return "unknown"
    return f"{request.client.host}:{request.client.port}"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log the path and remote address of every request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        logger.info(f"{request.url.path} request from {_remote_addr(request)}")
        return await call_next(request)


class CorsHeadersMiddleware(BaseHTTPMiddleware):
    """Attach fixed CORS headers to every response, errors included.

    Unlike Starlette's CORSMiddleware the headers are set whether or not the
    request carries an Origin header.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(f"Unhandled error serving {request.url.path}")
            response = Response(status_code=500)
        response.headers.update(CORS_HEADERS)
        return response


def middleware_chain(cors_enabled: bool) -> List[Type[BaseHTTPMiddleware]]:
    """Return the middleware in the order requests pass through them."""
    chain: List[Type[BaseHTTPMiddleware]] = [RequestLoggingMiddleware]
    if cors_enabled:
        chain.append(CorsHeadersMiddleware)
    return chain
