"""Slagboom: http basic authentication in front of any ASGI application.
"""

__author__ = "Rogier Steehouder"
__date__ = "2026-10-18"
__version__ = "0.2"

import base64
import binascii
from collections.abc import Callable, Iterable
from typing import NamedTuple

import pydantic
from loguru import logger
from starlette.authentication import (
    AuthCredentials,
    AuthenticationBackend,
    AuthenticationError,
    SimpleUser,
)
from starlette.middleware.authentication import AuthenticationMiddleware
from starlette.requests import HTTPConnection
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send

from .config import ConfigurationError, GateConfig

# verify(username, password) -> accepted
Verifier = Callable[[str, str], bool]


class AuthenticationRequired(AuthenticationError):
    """No or unaccepted credentials: 401 with a challenge."""


class MalformedAuthorization(AuthenticationError):
    """Unusable Authorization header: 400 without a challenge."""


class Credentials(NamedTuple):
    username: str
    password: str


def parse_authorization(auth: str) -> Credentials:
    """Credentials from the value of a Basic Authorization header.

    Raises MalformedAuthorization for anything other than
    ``Basic <base64 of username:password>``.
    """
    scheme, _, params = auth.partition(" ")
    if scheme.lower() != "basic" or not params:
        raise MalformedAuthorization("Basic Authorization required")
    try:
        decoded = base64.b64decode(params, validate=True).decode("utf-8")
    except (ValueError, UnicodeDecodeError, binascii.Error) as exc:
        raise MalformedAuthorization("Invalid Authorization") from exc

    # password may contain colons, username may not
    username, sep, password = decoded.partition(":")
    if not sep:
        raise MalformedAuthorization("Invalid Authorization")
    return Credentials(username, password)


# See: https://www.starlette.io/authentication/
class BasicAuthBackend(AuthenticationBackend):
    """Basic authentication for Starlette"""

    def __init__(self, verify: Verifier, exempt: Iterable[str] = ()):
        self.logger = logger.bind(logtype="slagboom.auth")
        self.verify = verify
        self.exempt = frozenset(exempt)

    async def authenticate(self, conn: HTTPConnection):
        """Password check for Starlette"""
        path = conn.url.path
        if path in self.exempt:
            self.logger.debug("Exempt path {}", path)
            return None

        auth = conn.headers.get("Authorization")
        if auth is None:
            raise AuthenticationRequired("Basic Authorization required")

        try:
            username, password = parse_authorization(auth)
        except MalformedAuthorization as exc:
            self.logger.warning("Problem getting Credentials for {}: {}", path, exc)
            raise

        if not self.verify(username, password):
            self.logger.warning("Invalid Authorization for {}", username)
            raise AuthenticationRequired("Invalid Authorization")

        return AuthCredentials(["authenticated"]), SimpleUser(username)


class BasicAuthMiddleware(AuthenticationMiddleware):
    """Gate an ASGI app behind http basic authentication.

    Parameters:

        ``app``
            The application is only called for exempt paths or accepted
            credentials. It finds the username in ``request.user.display_name``.

        ``realm``
            Shown to the user in the challenge. May also be set once through
            the ``realm`` property, but only before the first request.

        ``exempt``
            A path, or a list of paths, that bypass authentication. Exact
            match only.

        ``verify``
            Mandatory ``verify(username, password) -> bool``.
    """

    def __init__(
        self,
        app: ASGIApp,
        realm: str | None = None,
        *,
        exempt: str | Iterable[str] | None = None,
        verify: Verifier | None = None,
    ):
        if verify is None or not callable(verify):
            raise ConfigurationError("Basic authentication requires a verify function")

        cfg = {"exempt": exempt}
        if realm is not None:
            cfg["realm"] = realm
        try:
            self.config = GateConfig(**cfg)
        except pydantic.ValidationError as e:
            raise ConfigurationError("Invalid basic authentication settings") from e
        self.serving = False

        super().__init__(
            app,
            backend=BasicAuthBackend(verify, self.config.exempt),
            on_error=self.on_auth_error,
        )

    @property
    def realm(self) -> str:
        return self.config.realm

    @realm.setter
    def realm(self, value: str):
        if self.serving:
            raise ConfigurationError("Realm cannot change after the first request")
        self.config = self.config.model_copy(update={"realm": value})

    @property
    def exempt(self) -> frozenset[str]:
        return self.config.exempt

    def on_auth_error(self, conn: HTTPConnection, exc: Exception) -> Response:
        """Authentication error without body"""
        if isinstance(exc, MalformedAuthorization):
            return Response(status_code=400)
        return Response(
            status_code=401,
            headers={"WWW-Authenticate": f'Basic realm="{self.realm}"'},
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        self.serving = True
        await super().__call__(scope, receive, send)
