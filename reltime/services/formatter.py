"""Relative time formatter with a per-locale renderer cache"""
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple, Union

from babel import default_locale as runtime_locale

from reltime.core.config import get_settings
from reltime.core.options import DEFAULT_OPTIONS, FormatterOptions
from reltime.services.renderer import LocaleRenderer
from reltime.utils.time_format import DateInput, elapsed_ms, select_unit, to_datetime

logger = logging.getLogger(__name__)

AUTO = "auto"


@dataclass(frozen=True)
class FormatResult:
    """Formatted phrase plus how it was produced"""

    text: str
    locale: str  # cache key actually used, "auto" on fallback
    unit: str
    value: Union[int, float]  # -0.0 for a past delta that rounds to zero
    fallback_used: bool


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RelativeTimeFormatter:
    """
    Formats dates as localized relative time phrases ("30 minutes ago")

    Keeps one renderer per locale tag. The "auto" renderer is bound at
    construction to the default locale; others are created on first use
    and kept for the lifetime of the formatter.
    """

    def __init__(
        self,
        options: Optional[FormatterOptions] = None,
        *,
        default_locale: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            options: Renderer options; defaults to best fit / auto / long
            default_locale: Tag bound to "auto"; defaults to the configured
                locale, then the runtime locale
            clock: Returns the current aware datetime
        """
        self.options = options or DEFAULT_OPTIONS
        self.clock = clock or _utcnow
        self.default_locale = default_locale or _default_locale_tag(self.options)
        self._lock = threading.Lock()
        self._formatters: Dict[str, LocaleRenderer] = {
            AUTO: LocaleRenderer(self.default_locale, self.options),
        }

    @property
    def formatters(self) -> Mapping[str, LocaleRenderer]:
        """Read-only view of cached renderers"""
        return MappingProxyType(self._formatters)

    def ensure_locale(self, tag: str) -> bool:
        """
        Add a renderer for a locale tag

        Args:
            tag: BCP 47 language tag (e.g. "en", "fr-CA")

        Returns:
            True if the locale is supported (cached now or before), else False
        """
        if tag == AUTO:
            return True
        if not LocaleRenderer.is_supported(tag, self.options):
            return False
        with self._lock:
            if tag not in self._formatters:
                self._formatters[tag] = LocaleRenderer(tag, self.options)
                logger.debug(f"Registered locale {tag}")
        return True

    def resolve(self, tag: str) -> LocaleRenderer:
        """Get the renderer for a tag, falling back to "auto" if unsupported"""
        return self._resolve(tag)[1]

    def _resolve(self, tag) -> Tuple[str, LocaleRenderer]:
        if isinstance(tag, str):
            renderer = self._formatters.get(tag)
            if renderer is not None:
                return tag, renderer
            if self.ensure_locale(tag):
                return tag, self._formatters[tag]

        logger.debug(f"Locale {tag!r} not supported, using {self.default_locale}")
        return AUTO, self._formatters[AUTO]

    def format(self, date: DateInput, locale: str = AUTO) -> str:
        """
        Format a date as a relative time string

        Args:
            date: datetime, epoch milliseconds, or date string
            locale: Language tag (e.g. "en", "fr", "zh"); unsupported tags
                fall back to the default locale

        Returns:
            Localized phrase (e.g. "1 minute ago", "in 3 days")

        Raises:
            InvalidDateError: if date cannot be parsed
        """
        return self.format_detailed(date, locale).text

    def format_detailed(self, date: DateInput, locale: str = AUTO) -> FormatResult:
        """Same as format(), also reporting unit, value and locale fallback"""
        target = to_datetime(date)
        unit, value = select_unit(elapsed_ms(target, self.clock()))
        key, renderer = self._resolve(locale)

        return FormatResult(
            text=renderer.render(value, unit),
            locale=key,
            unit=unit,
            value=value,
            fallback_used=key != locale,
        )

    def __repr__(self):
        return f"<RelativeTimeFormatter default={self.default_locale} locales={sorted(self._formatters)}>"


def _default_locale_tag(options: FormatterOptions) -> str:
    """Configured default locale, else the runtime one, else the fallback"""
    settings = get_settings()
    if settings.DEFAULT_LOCALE:
        return settings.DEFAULT_LOCALE

    detected = runtime_locale("LC_TIME")
    if detected:
        tag = detected.replace("_", "-")
        if LocaleRenderer.is_supported(tag, options):
            return tag
        logger.warning(f"Runtime locale {detected} not supported, using {settings.FALLBACK_LOCALE}")

    return settings.FALLBACK_LOCALE
