"""
Localized relative time formatting ("30 minutes ago", "yesterday")

Middlewares:
- make_middleware: framework-agnostic (request, response, next) handler
- RelativeTimeMiddleware: Starlette/FastAPI, sets request.state.rtf
- RelativeTimeBotMiddleware: aiogram, injects data["rtf"] bound to data["lang"]
"""

from reltime.core.errors import InvalidDateError, ReltimeError
from reltime.core.options import OPT, DEFAULT_OPTIONS, FormatterOptions, LocaleMatcher, Numeric, Style
from reltime.middlewares.bot import RelativeTimeBotMiddleware
from reltime.middlewares.generic import make_middleware
from reltime.middlewares.http import RelativeTimeMiddleware
from reltime.services.formatter import AUTO, FormatResult, RelativeTimeFormatter
from reltime.services.renderer import LocaleRenderer
from reltime.utils.time_format import UNITS, select_unit, to_datetime

__all__ = [
    "AUTO",
    "DEFAULT_OPTIONS",
    "FormatResult",
    "FormatterOptions",
    "InvalidDateError",
    "LocaleMatcher",
    "LocaleRenderer",
    "Numeric",
    "OPT",
    "RelativeTimeBotMiddleware",
    "RelativeTimeFormatter",
    "RelativeTimeMiddleware",
    "ReltimeError",
    "Style",
    "UNITS",
    "make_middleware",
    "select_unit",
    "to_datetime",
]
