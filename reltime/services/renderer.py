"""Locale-bound relative time renderers backed by ICU, with Babel locale data checks"""
import logging
from typing import Optional, Union

import icu
from babel import Locale, UnknownLocaleError
from babel.core import get_locale_identifier, parse_locale

from reltime.core.options import DEFAULT_OPTIONS, FormatterOptions, LocaleMatcher, Numeric, Style

logger = logging.getLogger(__name__)

_UNITS = {
    "year": icu.URelativeDateTimeUnit.YEAR,
    "month": icu.URelativeDateTimeUnit.MONTH,
    "week": icu.URelativeDateTimeUnit.WEEK,
    "day": icu.URelativeDateTimeUnit.DAY,
    "hour": icu.URelativeDateTimeUnit.HOUR,
    "minute": icu.URelativeDateTimeUnit.MINUTE,
    "second": icu.URelativeDateTimeUnit.SECOND,
}

_STYLES = {
    Style.LONG.value: icu.UDateRelativeDateTimeFormatterStyle.LONG,
    Style.SHORT.value: icu.UDateRelativeDateTimeFormatterStyle.SHORT,
    Style.NARROW.value: icu.UDateRelativeDateTimeFormatterStyle.NARROW,
}

_LOCALE_MATCHERS = {m.value for m in LocaleMatcher}
_NUMERIC = {n.value for n in Numeric}


def _resolves_likely_subtags(options: FormatterOptions) -> bool:
    return options.locale_matcher == LocaleMatcher.BEST_FIT.value


class LocaleRenderer:
    """
    Renders (value, unit) pairs for one locale and one set of options

    numeric "auto" uses the named CLDR forms where a locale has them
    ("yesterday", "now", "last week"); "always" keeps the number
    ("1 day ago", "0 seconds ago").
    """

    def __init__(self, tag: str, options: FormatterOptions):
        _validate_options(options)
        self.tag = tag
        self.options = options
        # Same lookup is_supported() runs for these options
        self.locale = Locale.parse(tag, sep="-", resolve_likely_subtags=_resolves_likely_subtags(options))

        icu_locale = icu.Locale.forLanguageTag(tag)
        self._formatter = icu.RelativeDateTimeFormatter(
            icu_locale,
            icu.NumberFormat.createInstance(icu_locale),
            _STYLES[options.style],
            icu.UDisplayContext.CAPITALIZATION_NONE,
        )
        logger.debug(f"Created renderer for {tag} ({self.locale})")

    @staticmethod
    def is_supported(tag, options: Optional[FormatterOptions] = None) -> bool:
        """
        Check whether locale data exists for a BCP 47 tag under the given options

        With the "lookup" matcher the tag must name a locale directly;
        "best fit" also accepts tags reached through likely subtags
        ("zh-TW" -> "zh-Hant-TW"). The tag must be in canonical case
        ("de-DE", not "de-de").
        """
        if not isinstance(tag, str) or not tag:
            return False
        options = options or DEFAULT_OPTIONS
        try:
            parts = parse_locale(tag, sep="-")
            Locale.parse(tag, sep="-", resolve_likely_subtags=_resolves_likely_subtags(options))
        except (ValueError, TypeError, UnknownLocaleError):
            return False
        return get_locale_identifier(parts, sep="-") == tag

    def render(self, value: Union[int, float], unit: str) -> str:
        """
        Format a signed value of a unit, e.g. (-30, "minute") -> "30 minutes ago"

        A negative zero renders in the past ("0 seconds ago").

        Raises:
            ValueError: for an unknown unit
        """
        if unit not in _UNITS:
            raise ValueError(f"Unknown unit: {unit!r}")
        if self.options.numeric == Numeric.ALWAYS.value:
            return str(self._formatter.formatNumeric(float(value), _UNITS[unit]))
        return str(self._formatter.format(float(value), _UNITS[unit]))

    def __repr__(self):
        return f"<LocaleRenderer {self.tag} {self.options}>"


def _validate_options(options: FormatterOptions):
    """Reject option values the engine does not understand"""
    if options.locale_matcher not in _LOCALE_MATCHERS:
        raise ValueError(f"Invalid localeMatcher: {options.locale_matcher!r}")
    if options.numeric not in _NUMERIC:
        raise ValueError(f"Invalid numeric: {options.numeric!r}")
    if options.style not in _STYLES:
        raise ValueError(f"Invalid style: {options.style!r}")
