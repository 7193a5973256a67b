"""Translation catalog and writing-direction helpers."""

from __future__ import annotations

import gettext
import logging
from pathlib import Path
import unicodedata

logger = logging.getLogger(__name__)

DOMAIN = "fanchart"

RTL_LANGUAGES = {"ar", "dv", "fa", "he", "ku", "ps", "sd", "ug", "ur", "yi"}

# Leading word of the Unicode character name -> ISO 15924 script code
SCRIPT_CODES = {
    "ARABIC": "Arab",
    "ARMENIAN": "Armn",
    "BENGALI": "Beng",
    "CJK": "Hani",
    "CYRILLIC": "Cyrl",
    "DEVANAGARI": "Deva",
    "GEORGIAN": "Geor",
    "GREEK": "Grek",
    "HANGUL": "Hang",
    "HEBREW": "Hebr",
    "HIRAGANA": "Jpan",
    "KATAKANA": "Jpan",
    "LATIN": "Latn",
    "NKO": "Nkoo",
    "SYRIAC": "Syrc",
    "THAANA": "Thaa",
    "THAI": "Thai",
}

RTL_SCRIPTS = {"Arab", "Hebr", "Nkoo", "Syrc", "Thaa"}


def text_script(text: str) -> str:
    """Return the script code of the first letter in ``text`` (Latin if none is recognised)."""
    for char in text:
        if not char.isalpha():
            continue
        try:
            leading = unicodedata.name(char).split(" ", 1)[0]
        except ValueError:
            continue
        if leading in SCRIPT_CODES:
            return SCRIPT_CODES[leading]
    return "Latn"


def script_direction(script: str) -> str:
    return "rtl" if script in RTL_SCRIPTS else "ltr"


def is_rtl(text: str | None) -> bool:
    """Whether ``text`` is written right-to-left. Empty text never is."""
    return bool(text) and script_direction(text_script(text)) == "rtl"


class Translator:
    """Thin wrapper over a gettext catalog using ``%s`` style placeholders."""

    def __init__(
        self, translations: gettext.NullTranslations | None = None, language: str = "en"
    ):
        self._translations = translations or gettext.NullTranslations()
        self.language = language

    @classmethod
    def load(cls, locale_dir: Path | None, language: str = "en") -> Translator:
        """Load the catalog for ``language``; missing catalogs fall back to the source strings."""
        if locale_dir is None:
            return cls(language=language)
        translations = gettext.translation(
            DOMAIN, localedir=str(locale_dir), languages=[language], fallback=True
        )
        if type(translations) is gettext.NullTranslations:
            logger.info("No %s catalog for %r in %s", DOMAIN, language, locale_dir)
        return cls(translations, language)

    def translate(self, message: str, *args) -> str:
        text = self._translations.gettext(message)
        return text % args if args else text

    def direction(self) -> str:
        base = self.language.replace("_", "-").split("-", 1)[0].lower()
        return "rtl" if base in RTL_LANGUAGES else "ltr"
