"""Copy and auto-translate field values between languages."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from .exceptions import EditorBusyError, ProviderNotConfiguredError, TranslationFailedError
from .logging import translation_logger
from .models import is_blank, normalize_language
from .protection import protect, restore
from .providers import Translator
from .store import TranslationStore

# Characters of content kept in a generated summary
SUMMARY_LENGTH = 200


class FieldStatus(str, Enum):
    """Outcome of translating one field."""

    TRANSLATED = "translated"
    SKIPPED = "skipped"  # Empty source or source == target
    FAILED = "failed"


@dataclass
class FieldResult:
    """Result of translating one field."""

    field: str
    status: FieldStatus
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status != FieldStatus.FAILED

    def raise_for_status(self) -> None:
        """Raise TranslationFailedError if the field failed."""
        if self.status == FieldStatus.FAILED:
            raise TranslationFailedError(self.field, self.error or "Translation failed")


@dataclass
class TranslationReport:
    """Per-field outcome of a multi-field translation."""

    source: str
    target: str
    results: list[FieldResult] = field(default_factory=list)

    @property
    def translated(self) -> list[str]:
        return [r.field for r in self.results if r.status == FieldStatus.TRANSLATED]

    @property
    def skipped(self) -> list[str]:
        return [r.field for r in self.results if r.status == FieldStatus.SKIPPED]

    @property
    def failed(self) -> list[str]:
        return [r.field for r in self.results if r.status == FieldStatus.FAILED]

    @property
    def errors(self) -> dict[str, str]:
        """Error message per failed field."""
        return {r.field: r.error or "" for r in self.results if r.status == FieldStatus.FAILED}

    @property
    def ok(self) -> bool:
        return not self.failed


class TranslationOrchestrator:
    """Populate target-language fields from a source language.

    Copying is synchronous. Translating awaits the injected provider,
    which is the only suspension point; only one translate operation may
    be in flight at a time. Edits made while a translation is pending are
    not blocked, and the translated value overwrites them when it lands.
    """

    def __init__(self, store: TranslationStore, protect_content: bool = False):
        """Initialize orchestrator.

        Args:
            store: Store to read sources from and write results to.
            protect_content: Shield code, URLs and markup from the provider.
        """
        self.store = store
        self.protect_content = protect_content
        self._busy = False

    @property
    def busy(self) -> bool:
        """Whether a translate operation is in flight."""
        return self._busy

    def copy_field(self, source: str, target: str, field: str) -> bool:
        """Copy one field value verbatim from source to target.

        Returns:
            True if a value was written, False for a self-copy.
        """
        self.store.profile.check_field(field)
        source, target = normalize_language(source), normalize_language(target)
        if source == target:
            return False
        self.store.write(target, field, self.store.read(source, field))
        return True

    def copy_all(self, source: str, target: str) -> list[str]:
        """Copy every tracked field from source to target.

        Returns:
            Fields that were written.
        """
        return [name for name in self.store.profile.fields if self.copy_field(source, target, name)]

    def generate_summary(self, language: str) -> str:
        """Fill a language's summary from the start of its content.

        Content longer than ``SUMMARY_LENGTH`` characters is cut and
        marked with an ellipsis.

        Returns:
            The summary written.

        Raises:
            UnknownFieldError: If the entity has no summary or content field.
        """
        self.store.profile.check_field("summary")
        content = self.store.read(language, "content")
        summary = content[:SUMMARY_LENGTH] + ("..." if len(content) > SUMMARY_LENGTH else "")
        self.store.write(language, "summary", summary)
        return summary

    async def translate_field(
        self,
        source: str,
        target: str,
        field: str,
        translator: Translator | None,
    ) -> FieldResult:
        """Translate one field from source to target.

        Raises:
            ProviderNotConfiguredError: If no usable translator is given.
            EditorBusyError: If another translation is in flight.
            UnknownFieldError: If the field is not tracked.
        """
        self.store.profile.check_field(field)
        self._require(translator)
        with self._in_flight():
            return await self._translate_one(source, target, field, translator)

    async def translate_all(
        self,
        source: str,
        target: str,
        translator: Translator | None,
    ) -> TranslationReport:
        """Translate every tracked field from source to target.

        Fields are translated one after another. A failure is recorded in
        the report and never stops the remaining fields or undoes fields
        already written.

        Raises:
            ProviderNotConfiguredError: If no usable translator is given.
            EditorBusyError: If another translation is in flight.
        """
        self._require(translator)
        report = TranslationReport(source=source, target=target)
        with self._in_flight():
            for name in self.store.profile.fields:
                report.results.append(await self._translate_one(source, target, name, translator))

        if report.failed:
            translation_logger.warning(
                f"Translated {source}->{target} with failures in: {', '.join(report.failed)}"
            )
        else:
            translation_logger.info(
                f"Translated {source}->{target}: {len(report.translated)} fields, "
                f"{len(report.skipped)} skipped"
            )
        return report

    async def _translate_one(
        self,
        source: str,
        target: str,
        field: str,
        translator: Translator,
    ) -> FieldResult:
        source, target = normalize_language(source), normalize_language(target)
        text = self.store.read(source, field)
        if source == target or is_blank(text):
            return FieldResult(field=field, status=FieldStatus.SKIPPED)

        shielded = protect(text) if self.protect_content else None
        if shielded is not None and shielded.only_fragments:
            translation_logger.debug(f"'{field}' holds only protected content, copied as-is")
            self.store.write(target, field, text)
            return FieldResult(field=field, status=FieldStatus.TRANSLATED)

        try:
            translated = await translator.translate(
                shielded.text if shielded is not None else text, source, target
            )
        except Exception as e:
            # Any provider failure is local to this field
            translation_logger.warning(f"Translation of '{field}' {source}->{target} failed: {e}")
            return FieldResult(field=field, status=FieldStatus.FAILED, error=str(e) or type(e).__name__)

        if shielded is not None:
            translated = restore(translated, shielded)
        self.store.write(target, field, translated)
        return FieldResult(field=field, status=FieldStatus.TRANSLATED)

    def _require(self, translator: Translator | None) -> None:
        if translator is None or not translator.is_configured():
            raise ProviderNotConfiguredError(
                "Please configure a translation provider in settings first"
            )

    @contextmanager
    def _in_flight(self) -> Iterator[None]:
        if self._busy:
            raise EditorBusyError("A translation is already in progress")
        self._busy = True
        try:
            yield
        finally:
            self._busy = False
