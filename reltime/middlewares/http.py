from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from reltime.core.config import get_settings
from reltime.services.formatter import RelativeTimeFormatter

settings = get_settings()


def accept_language(request: Request) -> Optional[str]:
    """First language tag of the Accept-Language header, if any"""
    header = request.headers.get("accept-language", "")
    first = header.split(",")[0].split(";")[0].strip()
    if not first or first == "*":
        return None
    return first


class RelativeTimeMiddleware(BaseHTTPMiddleware):
    """
    Middleware for attaching a relative time function to request.state

    The locale is read when the function is called:
    1. request.state.<locale_prop>, if an endpoint or earlier middleware set it
    2. First tag of the Accept-Language header
    3. The formatter's default locale
    """

    def __init__(
        self,
        app: ASGIApp,
        formatter: Optional[RelativeTimeFormatter] = None,
        request_prop: str = settings.REQUEST_PROP,
        locale_prop: str = settings.LOCALE_PROP,
    ):
        super().__init__(app)
        self.formatter = formatter or RelativeTimeFormatter()
        self.request_prop = request_prop
        self.locale_prop = locale_prop

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Process middleware"""

        def rtf(date):
            locale = getattr(request.state, self.locale_prop, None) or accept_language(request)
            return self.formatter.format(date, locale)

        setattr(request.state, self.request_prop, rtf)
        return await call_next(request)
