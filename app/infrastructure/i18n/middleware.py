"""Locale middleware for ASGI applications.

Resolves the request locale once, using the I18n lookup strategy, and
makes it available to handlers:

- request.state.locale (scope["state"]["locale"])
- structlog context variable "locale" for every log line of the request
- Content-Language response header

Uses pure ASGI middleware to avoid BaseHTTPMiddleware's contextvars issues.
"""

from typing import Optional

import structlog
from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from infrastructure.i18n.service import I18n

LOCALE_STATE_KEY = "locale"


class LocaleMiddleware:
    """Pure ASGI middleware setting the request locale.

    Example:
        app = FastAPI()
        app.add_middleware(LocaleMiddleware, i18n=i18n)

        @app.get("/hello")
        def hello(request: Request):
            return {"message": i18n.t(request.state.locale, "SAY_HELLO", "Marco")}
    """

    def __init__(self, app: ASGIApp, i18n: I18n) -> None:
        self.app = app
        self.i18n = i18n

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI interface."""
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        locale = self.i18n.get_locale(HTTPConnection(scope))
        scope.setdefault("state", {})[LOCALE_STATE_KEY] = locale

        async def send_with_locale(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers.setdefault("Content-Language", locale)
            await send(message)

        with structlog.contextvars.bound_contextvars(locale=locale):
            await self.app(scope, receive, send_with_locale)


def get_request_locale(
    request: HTTPConnection,
    i18n: Optional[I18n] = None,
) -> Optional[str]:
    """Get the locale set by LocaleMiddleware.

    Args:
        request: Current request.
        i18n: Service used to resolve the locale when the middleware did
            not run.

    Returns:
        Locale identifier, or None if unknown and no i18n was given.
    """
    state = request.scope.get("state") or {}
    locale = state.get(LOCALE_STATE_KEY)
    if locale:
        return locale
    if i18n is not None:
        return i18n.get_locale(request)
    return None
