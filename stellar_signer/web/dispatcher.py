"""Request dispatcher with exact-path routing, bearer auth and CORS.

Routes are collected in a RouteTable at startup and frozen into a
Dispatcher. The Dispatcher never changes afterwards, so it can be shared by
every concurrent request.
"""

from __future__ import annotations

import hashlib
import json
import logging
import secrets
from collections.abc import Awaitable, Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from ..errors import SigningError

logger = logging.getLogger(__name__)

Handler = Callable[[Request], Awaitable[Response]]

BEARER_PREFIX = "Bearer "

# Every method reaches the dispatcher; it alone decides what is routable.
DISPATCHED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Max-Age": "86400",
}

__all__ = [
    "CORS_HEADERS",
    "Dispatcher",
    "Handler",
    "RouteTable",
    "error_response",
    "json_response",
    "read_json_body",
]


def json_response(status_code: int, payload: Any) -> Response:
    """Serialize ``payload`` as JSON; forward slashes are left unescaped."""
    return JSONResponse(payload, status_code=status_code)


def error_response(status_code: int, message: str) -> Response:
    return json_response(status_code, {"error": message})


async def read_json_body(request: Request) -> dict[str, Any]:
    """Read the request body as a JSON object.

    Raises:
        SigningError: INVALID_INPUT if the body is empty, not JSON, or not
            a JSON object.
    """
    body = await request.body()
    if not body:
        raise SigningError.invalid_input("Request body is empty")

    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as e:
        raise SigningError.invalid_input(f"Invalid JSON body: {e}") from e

    if not isinstance(data, dict):
        raise SigningError.invalid_input("Request body must be a JSON object")
    return data


class RouteTable:
    """Mutable route registry used while the server is being wired up."""

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], Handler] = {}
        self._authenticated_paths: set[str] = set()

    def add_route(self, method: str, path: str, handler: Handler) -> RouteTable:
        self._routes[(method.upper(), path)] = handler
        return self

    def get(self, path: str, handler: Handler) -> RouteTable:
        return self.add_route("GET", path, handler)

    def post(self, path: str, handler: Handler) -> RouteTable:
        return self.add_route("POST", path, handler)

    def require_auth(self, path: str) -> RouteTable:
        """Mark ``path`` as requiring a bearer token for every method."""
        self._authenticated_paths.add(path)
        return self

    def build(self, bearer_token: str | None) -> Dispatcher:
        """Freeze the table into a Dispatcher."""
        return Dispatcher(self._routes, self._authenticated_paths, bearer_token)


class Dispatcher:
    """Maps (method, path) to a handler and enforces the bearer-token gate.

    OPTIONS requests are answered before routing. Every response, including
    errors, carries the CORS headers. Exceptions escaping a handler become a
    generic 500.
    """

    def __init__(
        self,
        routes: Mapping[tuple[str, str], Handler],
        authenticated_paths: Iterable[str],
        bearer_token: str | None,
    ):
        self._routes = MappingProxyType(
            {(method.upper(), path): handler for (method, path), handler in routes.items()}
        )
        self._authenticated_paths = frozenset(authenticated_paths)
        self._bearer_token = bearer_token or None

    @property
    def routes(self) -> Mapping[tuple[str, str], Handler]:
        return self._routes

    @property
    def authenticated_paths(self) -> frozenset[str]:
        return self._authenticated_paths

    def is_authenticated(self, authorization: str | None) -> bool:
        """Check an Authorization header value against the configured token.

        Both sides are hashed before comparison so the time taken does not
        depend on the length of either token. A dispatcher without a token
        rejects everything.
        """
        if self._bearer_token is None:
            return False
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            return False

        presented = authorization[len(BEARER_PREFIX):]
        return secrets.compare_digest(
            hashlib.sha256(presented.encode("utf-8")).digest(),
            hashlib.sha256(self._bearer_token.encode("utf-8")).digest(),
        )

    async def dispatch(self, request: Request) -> Response:
        response = await self._dispatch(request)
        response.headers.update(CORS_HEADERS)
        return response

    async def _dispatch(self, request: Request) -> Response:
        method = request.method.upper()
        if method == "OPTIONS":
            return Response(status_code=200, media_type="application/json")

        path = request.url.path
        handler = self._routes.get((method, path))
        if handler is None:
            return error_response(404, "Not Found")

        if path in self._authenticated_paths:
            if not self.is_authenticated(request.headers.get("authorization")):
                logger.warning("Rejected unauthenticated request: %s %s", method, path)
                error = SigningError.unauthenticated()
                return error_response(error.status_code, error.public_message)

        try:
            return await handler(request)
        except Exception:
            logger.exception("Router error while handling %s %s", method, path)
            return error_response(500, "Internal Server Error")

    def as_app(self) -> Starlette:
        """Expose the dispatcher as an ASGI application.

        A single catch-all route hands every request to ``dispatch``;
        Starlette only provides the request/response plumbing and lifespan.
        """
        return Starlette(
            routes=[Route("/{path:path}", self.dispatch, methods=DISPATCHED_METHODS)]
        )
