"""Pydantic models for TransDesk."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from .exceptions import InvalidLanguageError, UnknownFieldError

MAX_LANGUAGE_LENGTH = 10


class EntityKind(str, Enum):
    """Entity types with localized text fields."""

    ARTICLE = "article"
    CATEGORY = "category"
    SITE_SETTINGS = "site_settings"


@dataclass(frozen=True)
class EntityProfile:
    """Localized fields tracked for one entity kind."""

    kind: EntityKind
    fields: tuple[str, ...]
    default_lang_key: str = "default_lang"  # Wire key naming the default language

    def check_field(self, field: str) -> str:
        """Ensure a field is tracked by this profile.

        Raises:
            UnknownFieldError: If the field is not tracked.
        """
        if field not in self.fields:
            raise UnknownFieldError(field, self.kind.value)
        return field

    def empty_texts(self) -> dict[str, str]:
        """Get a mapping of every tracked field to an empty string."""
        return {name: "" for name in self.fields}


PROFILES: dict[EntityKind, EntityProfile] = {
    EntityKind.ARTICLE: EntityProfile(
        kind=EntityKind.ARTICLE,
        fields=("title", "content", "summary"),
    ),
    EntityKind.CATEGORY: EntityProfile(
        kind=EntityKind.CATEGORY,
        fields=("name", "description"),
    ),
    EntityKind.SITE_SETTINGS: EntityProfile(
        kind=EntityKind.SITE_SETTINGS,
        fields=("site_title", "site_subtitle"),
        default_lang_key="default_language",
    ),
}


def get_profile(kind: EntityKind | str) -> EntityProfile:
    """Get the profile for an entity kind.

    Args:
        kind: Entity kind or its string value.

    Returns:
        Entity profile.

    Raises:
        ValueError: If the kind is unknown.
    """
    return PROFILES[EntityKind(kind)]


def is_blank(value: str | None) -> bool:
    """Check if a text value is empty after trimming whitespace."""
    return not (value or "").strip()


def normalize_language(code: str) -> str:
    """Strip a language code and check its length.

    Raises:
        InvalidLanguageError: If the code is empty or too long.
    """
    normalized = code.strip()
    if not normalized:
        raise InvalidLanguageError("Language code cannot be empty")
    if len(normalized) > MAX_LANGUAGE_LENGTH:
        raise InvalidLanguageError(
            f"Language code '{normalized}' is longer than {MAX_LANGUAGE_LENGTH} characters"
        )
    return normalized


class ContentEntity(BaseModel):
    """Canonical record of an entity in its default language."""

    kind: EntityKind = EntityKind.ARTICLE
    default_language: str = Field(..., min_length=1, max_length=MAX_LANGUAGE_LENGTH)
    texts: dict[str, str] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)  # Non-localized wire fields

    @field_validator("default_language")
    @classmethod
    def validate_default_language(cls, v: str) -> str:
        """Normalize the default language code."""
        return normalize_language(v)

    @model_validator(mode="after")
    def fill_tracked_fields(self) -> "ContentEntity":
        """Make sure every tracked field is present."""
        profile = get_profile(self.kind)
        for name in self.texts:
            profile.check_field(name)
        self.texts = {**profile.empty_texts(), **self.texts}
        return self

    @property
    def profile(self) -> EntityProfile:
        """Entity profile for this entity's kind."""
        return get_profile(self.kind)


class TranslationRecord(BaseModel):
    """Localized text fields of an entity for one non-default language."""

    language: str = Field(..., min_length=1, max_length=MAX_LANGUAGE_LENGTH)
    texts: dict[str, str] = Field(default_factory=dict)
    extras: dict[str, Any] = Field(default_factory=dict)  # id, timestamps, owner id

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Normalize language code."""
        return normalize_language(v)

    def is_blank(self, fields: tuple[str, ...]) -> bool:
        """Check if every tracked field is empty after trimming."""
        return all(is_blank(self.texts.get(name)) for name in fields)


@dataclass(frozen=True)
class RecordView:
    """Read-only view of a language's tracked field values."""

    language: str
    texts: dict[str, str]
    is_default: bool = False
    exists: bool = True  # False for a synthesized empty view

    def __getitem__(self, field: str) -> str:
        return self.texts[field]

    def get(self, field: str, default: str = "") -> str:
        return self.texts.get(field, default)


class LanguageSelection(BaseModel):
    """Editor state deciding which record and field operations target."""

    source_language: str
    target_language: str
    active_field: str

    @property
    def is_self_target(self) -> bool:
        """Whether source and target point at the same language."""
        return self.source_language == self.target_language
