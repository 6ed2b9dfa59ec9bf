"""Conversion between the translation store and the blog API wire shape.

Wire shape (article shown; category and settings differ only in the
tracked field names and the default-language key)::

    {
        "id": 7, "category_id": 2, "seo_slug": "hello",
        "title": "...", "content": "...", "summary": "...",
        "default_lang": "zh",
        "translations": [
            {"language": "en", "title": "...", "content": "...", "summary": "..."}
        ]
    }
"""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import MalformedWirePayloadError
from .languages import DEFAULT_LANGUAGE
from .logging import persistence_logger
from .models import (
    MAX_LANGUAGE_LENGTH,
    ContentEntity,
    EntityKind,
    EntityProfile,
    TranslationRecord,
    get_profile,
)

TRANSLATIONS_KEY = "translations"


class WireTranslation(BaseModel):
    """One entry of the payload's translations array."""

    model_config = ConfigDict(extra="allow")

    language: str = Field(..., min_length=1, max_length=MAX_LANGUAGE_LENGTH)


@dataclass
class DroppedEntry:
    """Translation entry discarded while reading a payload."""

    index: int
    reason: str
    language: str | None = None


@dataclass
class DeserializeReport:
    """Summary of entries discarded by :func:`deserialize`."""

    dropped: list[DroppedEntry] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.dropped

    @property
    def malformed(self) -> list[DroppedEntry]:
        return [d for d in self.dropped if d.reason == "malformed"]


@dataclass
class DeserializedEntity:
    """Entity, translation records and report read from a payload."""

    entity: ContentEntity
    translations: list[TranslationRecord]
    report: DeserializeReport


def _text(value: Any, name: str) -> str:
    """Read a text field; missing and null mean empty."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"Field '{name}' must be a string, got {type(value).__name__}")
    return value


def serialize(entity: ContentEntity, translations: list[TranslationRecord]) -> dict[str, Any]:
    """Build the API payload for an entity and its translations.

    Records whose tracked fields are all blank are left out, as is any
    record for the default language.

    Args:
        entity: Default-language entity.
        translations: Translation records in insertion order.

    Returns:
        JSON-serializable payload.
    """
    profile = entity.profile
    payload: dict[str, Any] = dict(entity.metadata)
    payload.update(entity.texts)
    payload[profile.default_lang_key] = entity.default_language

    entries = []
    for record in translations:
        if record.language == entity.default_language or record.is_blank(profile.fields):
            continue
        entry = dict(record.extras)
        entry["language"] = record.language
        entry.update({name: record.texts.get(name, "") for name in profile.fields})
        entries.append(entry)
    payload[TRANSLATIONS_KEY] = entries

    return payload


def _read_entry(raw: Any, profile: EntityProfile) -> TranslationRecord:
    """Validate one wire translation entry.

    Raises:
        ValueError: If the entry is malformed (pydantic's ValidationError
            is a ValueError).
    """
    if not isinstance(raw, dict):
        raise ValueError("Translation entry must be an object")
    wire = WireTranslation.model_validate(raw)
    extra = dict(wire.model_extra or {})
    texts = {name: _text(extra.pop(name, None), name) for name in profile.fields}
    return TranslationRecord(language=wire.language, texts=texts, extras=extra)


def deserialize(
    payload: Any,
    kind: EntityKind | str = EntityKind.ARTICLE,
    default_language: str | None = None,
) -> DeserializedEntity:
    """Read an API payload into an entity and translation records.

    Entries for the default language, entries without a usable language
    code and repeated languages are dropped and listed in the report;
    the rest of the payload still loads.

    Args:
        payload: Decoded JSON payload.
        kind: Entity kind of the payload.
        default_language: Default language when the payload names none.

    Returns:
        DeserializedEntity.

    Raises:
        MalformedWirePayloadError: If the payload itself is unusable.
    """
    profile = get_profile(kind)
    if not isinstance(payload, dict):
        raise MalformedWirePayloadError("Payload must be a JSON object")

    default = payload.get(profile.default_lang_key) or default_language or DEFAULT_LANGUAGE
    raw_entries = payload.get(TRANSLATIONS_KEY)
    if raw_entries is None:
        raw_entries = []
    if not isinstance(raw_entries, list):
        raise MalformedWirePayloadError("'translations' must be a list")

    reserved = {*profile.fields, profile.default_lang_key, TRANSLATIONS_KEY}
    try:
        entity = ContentEntity(
            kind=profile.kind,
            default_language=default,
            texts={name: _text(payload.get(name), name) for name in profile.fields},
            metadata={k: v for k, v in payload.items() if k not in reserved},
        )
    except ValueError as e:
        raise MalformedWirePayloadError(f"Invalid {profile.kind.value} payload: {e}") from e

    report = DeserializeReport()
    records: dict[str, TranslationRecord] = {}
    for index, raw in enumerate(raw_entries):
        try:
            record = _read_entry(raw, profile)
        except (ValidationError, ValueError) as e:
            persistence_logger.warning(f"Dropping malformed translation entry #{index}: {e}")
            report.dropped.append(DroppedEntry(index=index, reason="malformed"))
            continue

        if record.language == default:
            report.dropped.append(
                DroppedEntry(index=index, reason="default_language", language=record.language)
            )
            continue
        if record.language in records:
            report.dropped.append(
                DroppedEntry(index=index, reason="duplicate", language=record.language)
            )
            continue
        records[record.language] = record

    if not report.ok:
        persistence_logger.warning(
            f"Dropped {len(report.dropped)} translation entries from {profile.kind.value} payload"
        )

    return DeserializedEntity(entity=entity, translations=list(records.values()), report=report)
