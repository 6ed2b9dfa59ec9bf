"""Translation progress calculation."""

import math
from typing import Iterable

from .models import is_blank
from .store import TranslationStore


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's round() uses banker's rounding; progress bars in the admin
    console round 16.5 up to 17.
    """
    return math.floor(value + 0.5)


class ProgressCalculator:
    """Derive completion percentages from a translation store.

    Nothing is cached: every call reads the store's current values, so
    the result depends only on the store state.
    """

    def __init__(self, store: TranslationStore):
        self.store = store

    def progress(self, language: str) -> int:
        """Get completion percentage for one language.

        Args:
            language: Language code.

        Returns:
            Percentage of tracked fields with non-blank values (0-100).
        """
        fields = self.store.profile.fields
        if not fields:
            return 0
        view = self.store.resolve(language)
        completed = sum(1 for name in fields if not is_blank(view.get(name)))
        return round_half_up(completed / len(fields) * 100)

    def progress_map(self, languages: Iterable[str]) -> dict[str, int]:
        """Get completion percentage for each language, in the given order."""
        return {code: self.progress(code) for code in languages}

    def overall(self, languages: Iterable[str]) -> int:
        """Get the mean completion percentage across languages.

        Returns:
            Rounded mean, or 0 when no languages are given.
        """
        values = list(self.progress_map(languages).values())
        if not values:
            return 0
        return round_half_up(sum(values) / len(values))

    def is_complete(self, language: str) -> bool:
        """Check if every tracked field is filled for a language."""
        return self.progress(language) == 100
