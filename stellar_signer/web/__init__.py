"""HTTP layer: dispatcher, route handlers and payload models."""

from .dispatcher import CORS_HEADERS, Dispatcher, RouteTable
from .register import (
    HEALTH_PATH,
    SEP10_PATH,
    SEP45_PATH,
    STELLAR_TOML_PATH,
    build_dispatcher,
    register_public_routes,
    register_signing_routes,
)

__all__ = [
    "CORS_HEADERS",
    "HEALTH_PATH",
    "SEP10_PATH",
    "SEP45_PATH",
    "STELLAR_TOML_PATH",
    "Dispatcher",
    "RouteTable",
    "build_dispatcher",
    "register_public_routes",
    "register_signing_routes",
]
