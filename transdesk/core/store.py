"""Translation record store and field editor binding."""

from .exceptions import TransDeskError
from .logging import store_logger
from .models import (
    ContentEntity,
    EntityProfile,
    LanguageSelection,
    RecordView,
    TranslationRecord,
    normalize_language,
)


class TranslationStore:
    """Single source of truth for field values in every language.

    The default language lives on the entity itself; every other
    language lives in an insertion-ordered collection of translation
    records keyed by language code.
    """

    def __init__(
        self,
        entity: ContentEntity,
        translations: list[TranslationRecord] | None = None,
    ):
        """Initialize the store.

        Args:
            entity: Entity holding the default-language fields.
            translations: Existing translation records.

        Raises:
            TransDeskError: If a record duplicates a language or uses the
                default language.
        """
        self.entity = entity
        self._records: dict[str, TranslationRecord] = {}
        for record in translations or []:
            if record.language == entity.default_language:
                raise TransDeskError(
                    f"Default language '{record.language}' cannot be a translation"
                )
            if record.language in self._records:
                raise TransDeskError(f"Duplicate translation for '{record.language}'")
            for name in record.texts:
                self.profile.check_field(name)
            record.texts = {**self.profile.empty_texts(), **record.texts}
            self._records[record.language] = record

    @property
    def profile(self) -> EntityProfile:
        """Profile of the stored entity."""
        return self.entity.profile

    @property
    def default_language(self) -> str:
        """Default language code."""
        return self.entity.default_language

    @property
    def translations(self) -> list[TranslationRecord]:
        """Translation records in insertion order."""
        return list(self._records.values())

    def has_record(self, language: str) -> bool:
        """Check if a translation record exists for a language."""
        return normalize_language(language) in self._records

    def resolve(self, language: str) -> RecordView:
        """Get the current field values for a language.

        Args:
            language: Language code.

        Returns:
            View of the default record, the existing translation record,
            or an empty view when no record exists yet.

        Raises:
            InvalidLanguageError: If the code is empty or too long.
        """
        language = normalize_language(language)
        if language == self.default_language:
            return RecordView(
                language=language,
                texts=dict(self.entity.texts),
                is_default=True,
            )

        record = self._records.get(language)
        if record is None:
            return RecordView(
                language=language,
                texts=self.profile.empty_texts(),
                exists=False,
            )
        return RecordView(language=language, texts=dict(record.texts))

    def read(self, language: str, field: str) -> str:
        """Get one field value for a language.

        Raises:
            UnknownFieldError: If the field is not tracked.
        """
        self.profile.check_field(field)
        return self.resolve(language)[field]

    def write(self, language: str, field: str, value: str) -> None:
        """Write one field value for a language.

        Default-language writes go to the entity. Other languages upsert
        the translation record, leaving sibling fields untouched. Empty
        strings are stored as-is and never delete a record.

        Args:
            language: Language code, stripped of surrounding whitespace.
            field: Tracked field name.
            value: New value.

        Raises:
            UnknownFieldError: If the field is not tracked.
            InvalidLanguageError: If the code is empty or too long.
        """
        self.profile.check_field(field)
        language = normalize_language(language)

        if language == self.default_language:
            self.entity.texts[field] = value
        else:
            record = self._records.get(language)
            if record is None:
                texts = self.profile.empty_texts()
                texts[field] = value
                self._records[language] = TranslationRecord(language=language, texts=texts)
                store_logger.debug(f"Created translation record for '{language}'")
            else:
                record.texts[field] = value

        store_logger.debug(f"Wrote {language}.{field} ({len(value)} chars)")


class FieldBinding:
    """Resolve the record and field an editor is currently working on."""

    def __init__(self, store: TranslationStore, selection: LanguageSelection):
        store.profile.check_field(selection.active_field)
        self.store = store
        self.selection = selection

    def select_field(self, field: str) -> None:
        """Change the active field."""
        self.selection.active_field = self.store.profile.check_field(field)

    def select_languages(self, source: str | None = None, target: str | None = None) -> None:
        """Change source and/or target language."""
        if source is not None:
            self.selection.source_language = source
        if target is not None:
            self.selection.target_language = target

    def swap_languages(self) -> None:
        """Swap source and target language."""
        sel = self.selection
        sel.source_language, sel.target_language = sel.target_language, sel.source_language

    @property
    def source_value(self) -> str:
        """Active field value in the source language."""
        return self.store.read(self.selection.source_language, self.selection.active_field)

    @property
    def target_value(self) -> str:
        """Active field value in the target language."""
        return self.store.read(self.selection.target_language, self.selection.active_field)

    def edit_source(self, value: str) -> None:
        """Write the active field in the source language."""
        self.store.write(self.selection.source_language, self.selection.active_field, value)

    def edit_target(self, value: str) -> None:
        """Write the active field in the target language."""
        self.store.write(self.selection.target_language, self.selection.active_field, value)
