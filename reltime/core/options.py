"""Formatter options and their enumerated values"""
from dataclasses import dataclass
from enum import Enum
from types import SimpleNamespace
from typing import Optional

from reltime.core.config import Settings, get_settings


class LocaleMatcher(str, Enum):
    BEST_FIT = "best fit"
    LOOKUP = "lookup"


class Numeric(str, Enum):
    ALWAYS = "always"
    AUTO = "auto"


class Style(str, Enum):
    LONG = "long"
    SHORT = "short"
    NARROW = "narrow"


# Grouped view of the enumerations, e.g. OPT.style.short
OPT = SimpleNamespace(
    locale_matcher=SimpleNamespace(best_fit=LocaleMatcher.BEST_FIT.value, lookup=LocaleMatcher.LOOKUP.value),
    numeric=SimpleNamespace(always=Numeric.ALWAYS.value, auto=Numeric.AUTO.value),
    style=SimpleNamespace(long=Style.LONG.value, short=Style.SHORT.value, narrow=Style.NARROW.value),
)


@dataclass(frozen=True)
class FormatterOptions:
    """
    Options shared by every renderer of one formatter

    Values are not validated here; the rendering engine rejects unknown
    values when a renderer is constructed.
    """

    locale_matcher: str = LocaleMatcher.BEST_FIT.value
    numeric: str = Numeric.AUTO.value
    style: str = Style.LONG.value

    def __post_init__(self):
        # Store plain strings even when enum members are passed in
        for name in ("locale_matcher", "numeric", "style"):
            value = getattr(self, name)
            if isinstance(value, Enum):
                object.__setattr__(self, name, value.value)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "FormatterOptions":
        """Build options from application settings"""
        settings = settings or get_settings()
        return cls(
            locale_matcher=settings.LOCALE_MATCHER,
            numeric=settings.NUMERIC,
            style=settings.STYLE,
        )


DEFAULT_OPTIONS = FormatterOptions()
