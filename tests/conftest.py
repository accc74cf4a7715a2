import base64

import pytest
from loguru import logger
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.websockets import WebSocket

from slagboom import BasicAuthMiddleware


async def greeting_app(scope, receive, send):
    """Greet whoever the gate let through, over http or websocket."""
    if scope["type"] == "websocket":
        websocket = WebSocket(scope, receive, send)
        await websocket.accept()
        await websocket.send_text(f"Hi {websocket.user.display_name}")
        await websocket.close()
        return
    request = Request(scope, receive)
    response = PlainTextResponse(f"Hi {request.user.display_name}")
    await response(scope, receive, send)


def encode_basic(username: str, password: str) -> dict:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def realm() -> str:
    return "WallysWorld"


@pytest.fixture
def unprotected_app():
    return greeting_app


@pytest.fixture
def boss_only():
    """Verifier that accepts Boss with any password."""
    return lambda username, password: username == "Boss"


@pytest.fixture
def basic():
    """Authorization header for the credentials."""
    return encode_basic


@pytest.fixture
def protected_app(unprotected_app, boss_only, realm) -> BasicAuthMiddleware:
    app = BasicAuthMiddleware(unprotected_app, verify=boss_only)
    app.realm = realm
    return app


@pytest.fixture
def app_with_excepted_path(unprotected_app, boss_only, realm) -> BasicAuthMiddleware:
    app = BasicAuthMiddleware(unprotected_app, exempt="/allowed_through", verify=boss_only)
    app.realm = realm
    return app


@pytest.fixture
def app_with_whitelist(unprotected_app, boss_only, realm) -> BasicAuthMiddleware:
    app = BasicAuthMiddleware(
        unprotected_app,
        exempt=["/allowed_through", "/also_allowed"],
        verify=boss_only,
    )
    app.realm = realm
    return app


@pytest.fixture
def log_records():
    """Loguru messages emitted during the test, DEBUG and up."""
    records = []
    handler_id = logger.add(records.append, level="DEBUG", format="{message}")
    yield records
    logger.remove(handler_id)
