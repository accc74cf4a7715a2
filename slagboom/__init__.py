"""Slagboom.

Http basic authentication gate for Starlette and other ASGI applications.
"""

__author__ = "Rogier Steehouder"
__date__ = "2026-10-18"
__version__ = "0.2"

from collections.abc import Iterable

from starlette.applications import Starlette
from starlette import status
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route

from .auth import (
    AuthenticationRequired,
    BasicAuthBackend,
    BasicAuthMiddleware,
    Credentials,
    MalformedAuthorization,
    Verifier,
    parse_authorization,
)
from .config import ConfigurationError, GateConfig


def middleware(
    verify: Verifier,
    realm: str | None = None,
    *,
    exempt: str | Iterable[str] | None = None,
) -> Middleware:
    """Basic authentication for the middleware list of a Starlette app."""
    return Middleware(BasicAuthMiddleware, realm=realm, exempt=exempt, verify=verify)


async def ping(request: Request):
    """Ping: show that the service works and who is asking."""
    return JSONResponse(
        {
            "app": "Slagboom",
            "version": __version__,
            "user": request.user.display_name or None,
        },
        status_code=status.HTTP_200_OK,
    )


async def hello(request: Request):
    """Greet the remote user."""
    return PlainTextResponse(f"Hi {request.user.display_name}")


def make_app(
    verify: Verifier,
    realm: str | None = None,
    *,
    exempt: str | Iterable[str] | None = None,
    debug: bool = False,
) -> Starlette:
    """Create a Starlette app behind the gate."""
    return Starlette(
        debug=debug,
        routes=[
            Route("/_ping", ping, methods=["GET", "HEAD"]),
            Route("/{path:path}", hello, methods=["GET", "HEAD"]),
        ],
        middleware=[middleware(verify, realm, exempt=exempt)],
    )
