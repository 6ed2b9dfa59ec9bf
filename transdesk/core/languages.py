"""Language catalog for TransDesk.

This module defines the known languages and the ordered catalog of
languages an editor may pick as translation source or target.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Literal


@dataclass(frozen=True)
class Language:
    """Language configuration."""

    code: str
    name: str
    direction: Literal["ltr", "rtl"] = "ltr"


# Known language display names
KNOWN_LANGUAGES: dict[str, str] = {
    "zh": "中文 (Chinese)",
    "en": "English",
    "ja": "日本語 (Japanese)",
    "ko": "한국어 (Korean)",
    "es": "Español (Spanish)",
    "fr": "Français (French)",
    "de": "Deutsch (German)",
    "ru": "Русский (Russian)",
    "ar": "العربية (Arabic)",
    "pt": "Português (Portuguese)",
    "it": "Italiano (Italian)",
    "nl": "Nederlands (Dutch)",
    "sv": "Svenska (Swedish)",
    "pl": "Polski (Polish)",
    "tr": "Türkçe (Turkish)",
    "he": "עברית (Hebrew)",
    "fa": "فارسی (Persian)",
    "ur": "اردو (Urdu)",
    "hi": "हिन्दी (Hindi)",
    "uk": "Українська (Ukrainian)",
    "vi": "Tiếng Việt (Vietnamese)",
    "th": "ไทย (Thai)",
    "id": "Bahasa Indonesia (Indonesian)",
}

# Default language code
DEFAULT_LANGUAGE = "zh"

# RTL languages
RTL_LANGUAGES = {"fa", "ar", "he", "ur"}


def get_direction(code: str) -> str:
    """Get text direction for a language.

    Args:
        code: Language code.

    Returns:
        'rtl' or 'ltr'.
    """
    return "rtl" if code in RTL_LANGUAGES else "ltr"


def make_language(code: str, name: str | None = None) -> Language:
    """Build a Language, looking up the display name when not given."""
    return Language(
        code=code,
        name=name or KNOWN_LANGUAGES.get(code, code),
        direction=get_direction(code),
    )


class LanguageCatalog:
    """Ordered list of selectable languages.

    The default language is always a member. It is the language whose
    content lives directly on the entity; every other member is a
    translation language.
    """

    def __init__(self, languages: Iterable[Language], default: str = DEFAULT_LANGUAGE):
        """Initialize the catalog.

        Args:
            languages: Languages in display order. Duplicate codes are ignored.
            default: Default language code.
        """
        self._languages: dict[str, Language] = {}
        for lang in languages:
            self._languages.setdefault(lang.code, lang)
        if default not in self._languages:
            # The default language always comes first when it was missing
            self._languages = {default: make_language(default), **self._languages}
        self.default = default

    @classmethod
    def from_codes(cls, codes: Iterable[str], default: str = DEFAULT_LANGUAGE) -> "LanguageCatalog":
        """Create a catalog from language codes.

        Args:
            codes: Language codes in display order.
            default: Default language code.

        Returns:
            LanguageCatalog instance.
        """
        return cls((make_language(code) for code in codes), default=default)

    def __iter__(self) -> Iterator[Language]:
        return iter(self._languages.values())

    def __len__(self) -> int:
        return len(self._languages)

    def __contains__(self, code: object) -> bool:
        return code in self._languages

    @property
    def codes(self) -> list[str]:
        """All language codes, in order."""
        return list(self._languages)

    @property
    def translation_codes(self) -> list[str]:
        """Language codes that are stored as translation records."""
        return [code for code in self._languages if code != self.default]

    def display_name(self, code: str) -> str:
        """Get display name for a language code, falling back to the code."""
        lang = self._languages.get(code)
        return lang.name if lang else code
