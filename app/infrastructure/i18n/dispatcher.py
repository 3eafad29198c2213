"""Localized ASGI dispatcher.

Routes each request to the ASGI app registered for the request locale,
e.g. one StaticFiles app per localized landing page.
"""

from typing import Dict, Mapping

from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Receive, Scope, Send

from infrastructure.i18n.exceptions import ConfigError
from infrastructure.i18n.middleware import get_request_locale
from infrastructure.i18n.service import I18n
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class LocalizedDispatcher:
    """ASGI app dispatching requests by resolved locale.

    Locales without a registered app are served by the default locale's app.

    Example:
        landing = LocalizedDispatcher(
            i18n,
            {
                "en": StaticFiles(directory="./landing_en", html=True),
                "it": StaticFiles(directory="./landing_it", html=True),
            },
        )
        app.mount("/", landing)
    """

    def __init__(self, i18n: I18n, apps: Mapping[str, ASGIApp]):
        """Initialize dispatcher.

        Args:
            i18n: Service used to resolve the request locale.
            apps: Locale identifier -> ASGI app.

        Raises:
            ConfigError: If no app is registered for the default locale.
        """
        if i18n.default_locale not in apps:
            raise ConfigError(
                f"An app must be registered for the default locale '{i18n.default_locale}'"
            )
        self.i18n = i18n
        self.apps: Dict[str, ASGIApp] = dict(apps)

        unsupported = sorted(set(self.apps) - set(i18n.locales))
        if unsupported:
            logger.warning("dispatcher_unsupported_locales", locales=unsupported)

    def app_for(self, locale: str) -> ASGIApp:
        """Get the app serving locale, falling back to the default locale."""
        return self.apps.get(locale) or self.apps[self.i18n.default_locale]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI interface."""
        if scope["type"] not in ("http", "websocket"):
            await self.apps[self.i18n.default_locale](scope, receive, send)
            return

        locale = get_request_locale(HTTPConnection(scope), self.i18n)
        await self.app_for(locale)(scope, receive, send)
