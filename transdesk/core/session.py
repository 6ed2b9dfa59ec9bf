"""Editing session tying the translation core together."""

from __future__ import annotations

from typing import Any, Iterable

from .exceptions import EditorBusyError, TransDeskError
from .languages import LanguageCatalog
from .logging import persistence_logger
from .models import ContentEntity, EntityKind, LanguageSelection
from .orchestrator import FieldResult, TranslationOrchestrator, TranslationReport
from .persistence import DeserializeReport, deserialize, serialize
from .progress import ProgressCalculator
from .providers import Translator
from .store import FieldBinding, TranslationStore
from .transport import PersistenceTransport


class EditorSession:
    """One editor working on one entity.

    The session owns its store exclusively. Loading replaces the store;
    saving never touches it, so a failed save can simply be retried.
    """

    def __init__(
        self,
        store: TranslationStore,
        catalog: LanguageCatalog,
        transport: PersistenceTransport | None = None,
        translator: Translator | None = None,
        entity_id: int | str | None = None,
        protect_content: bool = False,
    ):
        if store.default_language != catalog.default:
            raise TransDeskError(
                f"Store default language '{store.default_language}' "
                f"does not match catalog default '{catalog.default}'"
            )
        self.catalog = catalog
        self.transport = transport
        self.translator = translator
        self.entity_id = entity_id
        self.protect_content = protect_content
        self._attach(store)

    @classmethod
    def new(
        cls,
        kind: EntityKind | str,
        catalog: LanguageCatalog,
        **kwargs: Any,
    ) -> "EditorSession":
        """Start a session for a new, empty entity."""
        entity = ContentEntity(kind=EntityKind(kind), default_language=catalog.default)
        return cls(TranslationStore(entity), catalog, **kwargs)

    @classmethod
    async def open(
        cls,
        kind: EntityKind | str,
        catalog: LanguageCatalog,
        transport: PersistenceTransport,
        entity_id: int | str | None = None,
        **kwargs: Any,
    ) -> "EditorSession":
        """Start a session for an existing entity loaded through the transport."""
        session = cls.new(kind, catalog, transport=transport, entity_id=entity_id, **kwargs)
        await session.load(entity_id)
        return session

    def _attach(self, store: TranslationStore) -> None:
        self.store = store
        fields = store.profile.fields
        targets = self.catalog.translation_codes
        self.selection = LanguageSelection(
            source_language=self.catalog.default,
            target_language=targets[0] if targets else self.catalog.default,
            active_field="content" if "content" in fields else fields[0],
        )
        self.binding = FieldBinding(store, self.selection)
        self.progress = ProgressCalculator(store)
        self.orchestrator = TranslationOrchestrator(store, protect_content=self.protect_content)

    @property
    def kind(self) -> EntityKind:
        return self.store.entity.kind

    # Progress

    def progress_map(self, languages: Iterable[str] | None = None) -> dict[str, int]:
        """Per-language progress, every catalog language by default."""
        return self.progress.progress_map(self.catalog.codes if languages is None else languages)

    def overall_progress(self, languages: Iterable[str] | None = None) -> int:
        """Mean progress, over the translation languages by default."""
        return self.progress.overall(
            self.catalog.translation_codes if languages is None else languages
        )

    # Copy / translate on the current selection

    def copy_active_field(self) -> bool:
        """Copy the active field from source to target language."""
        sel = self.selection
        return self.orchestrator.copy_field(sel.source_language, sel.target_language, sel.active_field)

    def generate_summary(self, language: str | None = None) -> str:
        """Fill a summary from its content, the target language's by default."""
        return self.orchestrator.generate_summary(language or self.selection.target_language)

    async def translate_active_field(self) -> FieldResult:
        """Auto-translate the active field from source to target language."""
        sel = self.selection
        return await self.orchestrator.translate_field(
            sel.source_language, sel.target_language, sel.active_field, self.translator
        )

    async def translate_all(self) -> TranslationReport:
        """Auto-translate every tracked field from source to target language."""
        sel = self.selection
        return await self.orchestrator.translate_all(
            sel.source_language, sel.target_language, self.translator
        )

    # Persistence

    def payload(self) -> dict[str, Any]:
        """Wire payload for the current store state."""
        return serialize(self.store.entity, self.store.translations)

    async def load(self, entity_id: int | str | None = None) -> DeserializeReport:
        """Replace the store with the entity fetched from the API.

        Raises:
            TransDeskError: If the session has no transport, or the entity
                uses a different default language than the catalog.
            EditorBusyError: If a translation is in flight.
            MalformedWirePayloadError: If the payload is unusable.
        """
        transport = self._require_transport()
        self._ensure_idle()
        if entity_id is None:
            entity_id = self.entity_id
        payload = await transport.load(entity_id)
        loaded = deserialize(payload, self.kind, default_language=self.catalog.default)
        if loaded.entity.default_language != self.catalog.default:
            raise TransDeskError(
                f"Entity default language '{loaded.entity.default_language}' "
                f"does not match catalog default '{self.catalog.default}'"
            )
        # A translation may have started while the payload was in transit
        self._ensure_idle()
        self._attach(TranslationStore(loaded.entity, loaded.translations))
        self.entity_id = entity_id
        return loaded.report

    async def save(self) -> dict[str, Any]:
        """Send the current state to the API.

        Returns:
            Payload returned by the API.

        Raises:
            TransDeskError: If the session has no transport.
            Exception: Transport errors, unchanged.
        """
        transport = self._require_transport()
        response = await transport.save(self.payload(), self.entity_id)
        if self.entity_id is None and isinstance(response, dict) and response.get("id") is not None:
            self.entity_id = response["id"]
        persistence_logger.info(f"Saved {self.kind.value} {self.entity_id}")
        return response

    def _ensure_idle(self) -> None:
        if self.orchestrator.busy:
            raise EditorBusyError("Cannot reload while a translation is in progress")

    def _require_transport(self) -> PersistenceTransport:
        if self.transport is None:
            raise TransDeskError("This session has no persistence transport")
        return self.transport
