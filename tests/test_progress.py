"""Tests for translation progress calculation."""

from transdesk.core.models import ContentEntity, EntityKind
from transdesk.core.orchestrator import TranslationOrchestrator
from transdesk.core.persistence import serialize
from transdesk.core.progress import ProgressCalculator, round_half_up
from transdesk.core.store import TranslationStore


def make_store(kind: EntityKind = EntityKind.ARTICLE) -> TranslationStore:
    return TranslationStore(ContentEntity(kind=kind, default_language="zh"))


class TestRounding:
    """Tests for half-up rounding."""

    def test_rounds_half_up(self):
        """Test halves round up unlike Python's round()."""
        assert round_half_up(16.5) == 17
        assert round_half_up(0.5) == 1
        assert round_half_up(33.333) == 33
        assert round_half_up(66.666) == 67


class TestLanguageProgress:
    """Tests for per-language progress."""

    def test_empty_language_is_zero(self):
        """Test a language without a record has no progress."""
        calc = ProgressCalculator(make_store())

        assert calc.progress("en") == 0
        assert calc.progress("zh") == 0

    def test_whitespace_does_not_count(self):
        """Test whitespace-only values are not completed."""
        store = make_store()
        store.write("en", "title", "   ")
        store.write("en", "content", "\n\t")

        assert ProgressCalculator(store).progress("en") == 0

    def test_partial_progress(self):
        """Test one and two of three fields."""
        store = make_store()
        calc = ProgressCalculator(store)
        store.write("en", "title", "Hi")
        assert calc.progress("en") == 33

        store.write("en", "summary", "S")
        assert calc.progress("en") == 67

    def test_filling_fields_never_decreases(self):
        """Test progress is monotonic while filling empty fields, ending at 100."""
        store = make_store()
        calc = ProgressCalculator(store)
        previous = calc.progress("en")
        for name in store.profile.fields:
            store.write("en", name, "filled")
            current = calc.progress("en")
            assert current >= previous
            previous = current

        assert previous == 100
        assert calc.is_complete("en")

    def test_settings_profile_halves(self):
        """Test a two-field profile moves in steps of 50."""
        store = make_store(EntityKind.SITE_SETTINGS)
        store.write("en", "site_title", "Blog")

        assert ProgressCalculator(store).progress("en") == 50

    def test_order_independent(self):
        """Test progress depends only on final values, not write order."""
        a = make_store()
        a.write("en", "title", "x")
        a.write("en", "content", "y")
        b = make_store()
        b.write("en", "content", "temp")
        b.write("en", "title", "x")
        b.write("en", "content", "y")

        assert ProgressCalculator(a).progress_map(["zh", "en"]) == ProgressCalculator(b).progress_map(["zh", "en"])


class TestOverallProgress:
    """Tests for aggregate progress."""

    def test_no_languages_is_zero(self):
        """Test aggregate over no languages is 0."""
        assert ProgressCalculator(make_store()).overall([]) == 0

    def test_mean_rounded_half_up(self):
        """Test aggregate is the rounded mean of per-language values."""
        store = make_store()
        store.write("en", "title", "Hi")  # 33

        assert ProgressCalculator(store).overall(["en", "ja"]) == 17

    def test_progress_map_keeps_order(self):
        """Test map keys follow the given language order."""
        calc = ProgressCalculator(make_store())

        assert list(calc.progress_map(["ja", "zh", "en"])) == ["ja", "zh", "en"]


class TestEditingScenario:
    """End-to-end scenario with a Chinese default language."""

    def test_zh_en_scenario(self):
        """Test write, copy, fill and serialize across zh and en."""
        store = make_store()
        calc = ProgressCalculator(store)
        orchestrator = TranslationOrchestrator(store)

        store.write("zh", "title", "你好")
        assert store.resolve("zh")["title"] == "你好"
        assert calc.progress("zh") == 33

        orchestrator.copy_field("zh", "en", "title")
        assert store.resolve("en")["title"] == "你好"
        assert calc.progress("en") == 33

        store.write("en", "content", "hi")
        store.write("en", "summary", "s")
        assert calc.progress("en") == 100

        payload = serialize(store.entity, store.translations)
        languages = [entry["language"] for entry in payload["translations"]]
        assert languages == ["en"]
        assert payload["title"] == "你好"
        assert payload["default_lang"] == "zh"
