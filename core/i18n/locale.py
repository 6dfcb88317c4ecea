"""
locale.py

Language dictionaries for long-form dates ("17 Januari 2025").

Usage
-----
from core.i18n.locale import date_locale
date_locale.format_long(date(2025, 1, 17))            # default language
date_locale.format_long(date(2025, 1, 17), lang="en")
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

logger = logging.getLogger(__name__)

FALLBACK_LANG = "en"
REQUIRED_PLACEHOLDERS = ("{day}", "{month}", "{year}")


def validate_pattern(pattern: str) -> str:
    """Raise ValueError unless *pattern* names day, month and year."""
    missing = [p for p in REQUIRED_PLACEHOLDERS if p not in pattern]
    if missing:
        raise ValueError(
            f"Date pattern {pattern!r} is missing placeholder(s): {', '.join(missing)}"
        )
    return pattern


class DateLocale:
    """Stores month names and long-date patterns per language."""

    # ------------------------------------------------------------------ #
    # Construction                                                       #
    # ------------------------------------------------------------------ #
    def __init__(self, default_lang: str = "id") -> None:
        self.supported = {
            "id": self._id_dict(),
            "en": self._en_dict(),
            "de": self._de_dict(),
            "nl": self._nl_dict(),
            # add further languages here
        }
        self.lang = default_lang if default_lang in self.supported else FALLBACK_LANG
        self._unknown_logged: set[str] = set()

    # ------------------------------------------------------------------ #
    # Public API                                                         #
    # ------------------------------------------------------------------ #
    def set_language(self, lang: str) -> None:
        if lang in self.supported:
            self.lang = lang

    def resolve(self, lang: Optional[str]) -> str:
        """
        Return a supported language code. Unknown codes fall back to
        English and are logged once per code.
        """
        lang = (lang or self.lang).strip().lower()
        if lang in self.supported:
            return lang
        base = lang.split("-", 1)[0].split("_", 1)[0]
        if base in self.supported:
            return base
        if lang not in self._unknown_logged:
            logger.warning("Unknown date language %r, using %r", lang, FALLBACK_LANG)
            self._unknown_logged.add(lang)
        return FALLBACK_LANG

    def month_name(self, month: int, lang: Optional[str] = None) -> str:
        if not 1 <= month <= 12:
            raise ValueError(f"Month out of range: {month}")
        return self.supported[self.resolve(lang)]["months"][month - 1]

    def long_pattern(self, lang: Optional[str] = None) -> str:
        return self.supported[self.resolve(lang)]["pattern"]

    def format_long(self, value: date, lang: Optional[str] = None,
                    pattern: Optional[str] = None) -> str:
        """Day, full month name and year; *pattern* overrides the language's layout."""
        code = self.resolve(lang)
        layout = validate_pattern(pattern) if pattern else self.long_pattern(code)
        return layout.format(
            day=value.day,
            month=self.month_name(value.month, code),
            year=value.year,
        )

    # ------------------------------------------------------------------ #
    # Internal dictionaries                                              #
    # ------------------------------------------------------------------ #
    def _id_dict(self) -> dict:
        return {
            "pattern": "{day} {month} {year}",
            "months": [
                "Januari", "Februari", "Maret", "April", "Mei", "Juni",
                "Juli", "Agustus", "September", "Oktober", "November", "Desember",
            ],
        }

    def _en_dict(self) -> dict:
        return {
            "pattern": "{month} {day}, {year}",
            "months": [
                "January", "February", "March", "April", "May", "June",
                "July", "August", "September", "October", "November", "December",
            ],
        }

    def _de_dict(self) -> dict:
        return {
            "pattern": "{day}. {month} {year}",
            "months": [
                "Januar", "Februar", "März", "April", "Mai", "Juni",
                "Juli", "August", "September", "Oktober", "November", "Dezember",
            ],
        }

    def _nl_dict(self) -> dict:
        return {
            "pattern": "{day} {month} {year}",
            "months": [
                "januari", "februari", "maart", "april", "mei", "juni",
                "juli", "augustus", "september", "oktober", "november", "december",
            ],
        }


# Singleton instance
date_locale = DateLocale()
