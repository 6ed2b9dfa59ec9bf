"""Tests for the translation record store and field binding."""

import pytest

from transdesk.core.exceptions import InvalidLanguageError, TransDeskError, UnknownFieldError
from transdesk.core.models import ContentEntity, EntityKind, LanguageSelection, TranslationRecord
from transdesk.core.persistence import serialize
from transdesk.core.store import FieldBinding, TranslationStore


def make_store(**texts) -> TranslationStore:
    entity = ContentEntity(kind=EntityKind.ARTICLE, default_language="zh", texts=texts)
    return TranslationStore(entity)


class TestResolve:
    """Tests for resolving a language's record."""

    def test_resolve_default_language(self):
        """Test default language resolves to the entity fields."""
        store = make_store(title="你好")
        view = store.resolve("zh")

        assert view.is_default is True
        assert view["title"] == "你好"
        assert view["content"] == ""

    def test_resolve_missing_language_is_empty(self):
        """Test unknown language resolves to an empty view without creating a record."""
        store = make_store()
        view = store.resolve("en")

        assert view.exists is False
        assert view.texts == {"title": "", "content": "", "summary": ""}
        assert store.has_record("en") is False

    def test_resolve_returns_snapshot(self):
        """Test mutating a view does not change the store."""
        store = make_store(title="a")
        view = store.resolve("zh")
        view.texts["title"] = "changed"

        assert store.resolve("zh")["title"] == "a"

    def test_initial_records_get_missing_fields(self):
        """Test records passed in are padded with empty tracked fields."""
        entity = ContentEntity(default_language="zh")
        store = TranslationStore(entity, [TranslationRecord(language="en", texts={"title": "Hi"})])

        assert store.resolve("en").texts == {"title": "Hi", "content": "", "summary": ""}

    def test_rejects_default_language_record(self):
        """Test the default language can never be a translation record."""
        entity = ContentEntity(default_language="zh")

        with pytest.raises(TransDeskError):
            TranslationStore(entity, [TranslationRecord(language="zh")])

    def test_rejects_duplicate_records(self):
        """Test language codes must be unique in the collection."""
        entity = ContentEntity(default_language="zh")

        with pytest.raises(TransDeskError):
            TranslationStore(
                entity,
                [TranslationRecord(language="en"), TranslationRecord(language="en")],
            )


class TestWrite:
    """Tests for writing field values."""

    def test_write_default_language_updates_entity(self):
        """Test default-language writes go to the entity."""
        store = make_store()
        store.write("zh", "title", "标题")

        assert store.entity.texts["title"] == "标题"
        assert store.translations == []

    def test_write_creates_record_lazily(self):
        """Test first write creates a record with only that field set."""
        store = make_store()
        store.write("en", "content", "body")

        assert store.has_record("en")
        assert store.resolve("en").texts == {"title": "", "content": "body", "summary": ""}

    def test_write_leaves_siblings_untouched(self):
        """Test updating one field keeps other fields of the record."""
        store = make_store()
        store.write("en", "title", "Hello")
        store.write("en", "summary", "Short")

        assert store.resolve("en")["title"] == "Hello"
        assert store.resolve("en")["summary"] == "Short"

    def test_write_does_not_bleed_across_languages(self):
        """Test writes to one language never show up in another."""
        store = make_store(title="zh title")
        store.write("en", "title", "en title")
        store.write("ja", "title", "ja title")

        assert store.resolve("zh")["title"] == "zh title"
        assert store.resolve("en")["title"] == "en title"
        assert store.resolve("ja")["title"] == "ja title"

    def test_last_write_wins(self):
        """Test resolve reflects the last value written per language and field."""
        store = make_store()
        for value in ["a", "b", "c"]:
            store.write("en", "title", value)

        assert store.resolve("en")["title"] == "c"

    def test_idempotent_write(self):
        """Test writing the same value twice equals writing it once."""
        once = make_store()
        once.write("en", "title", "Hi")
        twice = make_store()
        twice.write("en", "title", "Hi")
        twice.write("en", "title", "Hi")

        assert once.resolve("en") == twice.resolve("en")
        assert len(twice.translations) == 1

    def test_empty_write_keeps_record(self):
        """Test writing an empty string never deletes the record."""
        store = make_store()
        store.write("en", "title", "Hi")
        store.write("en", "title", "")

        assert store.has_record("en")
        assert store.resolve("en")["title"] == ""

    def test_records_keep_insertion_order(self):
        """Test translations are listed in creation order."""
        store = make_store()
        store.write("ja", "title", "1")
        store.write("en", "title", "2")
        store.write("ja", "summary", "3")

        assert [r.language for r in store.translations] == ["ja", "en"]

    def test_unknown_field_rejected(self):
        """Test fields outside the profile are rejected."""
        store = make_store()

        with pytest.raises(UnknownFieldError):
            store.write("en", "subtitle", "x")
        with pytest.raises(KeyError):
            store.read("zh", "subtitle")

    def test_category_profile_fields(self):
        """Test category entities track name and description."""
        entity = ContentEntity(kind=EntityKind.CATEGORY, default_language="zh")
        store = TranslationStore(entity)
        store.write("en", "name", "News")

        assert store.resolve("en").texts == {"name": "News", "description": ""}
        with pytest.raises(UnknownFieldError):
            store.write("en", "title", "x")


class TestLanguageCodes:
    """Tests for normalizing language codes."""

    def test_padded_code_reuses_record(self):
        """Test codes with surrounding whitespace address the same record."""
        store = make_store(title="标题")
        store.write("en", "title", "A")
        store.write("en ", "title", "B")

        assert [r.language for r in store.translations] == ["en"]
        assert store.resolve(" en").texts["title"] == "B"
        assert store.has_record(" en ") is True
        assert [t["language"] for t in serialize(store.entity, store.translations)["translations"]] == ["en"]

    def test_padded_default_code_writes_entity(self):
        """Test a padded default language code edits the entity itself."""
        store = make_store(title="标题")
        store.write("zh ", "title", "新标题")

        assert store.translations == []
        assert store.entity.texts["title"] == "新标题"
        assert serialize(store.entity, store.translations)["title"] == "新标题"

    @pytest.mark.parametrize("code", ["", "   ", "x" * 11])
    def test_invalid_code_rejected(self, code):
        """Test empty and overlong codes raise a TransDesk error."""
        store = make_store()

        with pytest.raises(InvalidLanguageError):
            store.write(code, "title", "x")
        with pytest.raises(TransDeskError):
            store.resolve(code)
        assert store.translations == []

    def test_longest_code_accepted(self):
        """Test a ten character code is still a valid language."""
        store = make_store()
        store.write("zh-Hant-TW", "title", "標題")

        assert store.resolve("zh-Hant-TW")["title"] == "標題"


class TestFieldBinding:
    """Tests for binding the editor to a language and field."""

    def make_binding(self) -> FieldBinding:
        store = make_store(title="源标题")
        selection = LanguageSelection(source_language="zh", target_language="en", active_field="title")
        return FieldBinding(store, selection)

    def test_source_and_target_values(self):
        """Test binding reads the active field in both languages."""
        binding = self.make_binding()

        assert binding.source_value == "源标题"
        assert binding.target_value == ""

    def test_edit_target(self):
        """Test editing the target writes into the target record."""
        binding = self.make_binding()
        binding.edit_target("Source title")

        assert binding.store.resolve("en")["title"] == "Source title"

    def test_select_field(self):
        """Test changing the active field."""
        binding = self.make_binding()
        binding.select_field("summary")
        binding.edit_source("摘要")

        assert binding.store.entity.texts["summary"] == "摘要"
        with pytest.raises(UnknownFieldError):
            binding.select_field("bogus")

    def test_swap_languages(self):
        """Test swapping source and target."""
        binding = self.make_binding()
        binding.swap_languages()

        assert binding.selection.source_language == "en"
        assert binding.selection.target_language == "zh"
        assert binding.target_value == "源标题"
