"""Framework-agnostic (request, response, next) middleware"""
from collections.abc import MutableMapping
from typing import Any, Callable, Optional

from reltime.services.formatter import RelativeTimeFormatter


def _get_prop(bag: Any, name: str) -> Any:
    if isinstance(bag, MutableMapping):
        return bag.get(name)
    return getattr(bag, name, None)


def _set_prop(bag: Any, name: str, value: Any):
    if isinstance(bag, MutableMapping):
        bag[name] = value
    else:
        setattr(bag, name, value)


def make_middleware(
    formatter: Optional[RelativeTimeFormatter] = None,
    request_prop: str = "rtf",
    locale_prop: str = "language",
) -> Callable[[Any, Any, Callable[[], Any]], None]:
    """
    Build a middleware that adds a relative time function to each request

    The function stored under request_prop reads the locale from
    locale_prop each time it is called, so it follows whatever upstream
    middleware has set by then.

    Args:
        formatter: Formatter to use; defaults to a new one with default options
        request_prop: Request property to store the function under
        locale_prop: Request property holding the language tag

    Returns:
        Middleware taking (request, response, next)
    """
    formatter = formatter or RelativeTimeFormatter()

    def middleware(request, response, next):
        _set_prop(request, request_prop, lambda date: formatter.format(date, _get_prop(request, locale_prop)))
        next()

    return middleware
