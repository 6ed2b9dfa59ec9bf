"""Core modules for TransDesk."""

from .config import AppConfig
from .languages import LanguageCatalog
from .models import ContentEntity, EntityKind, TranslationRecord
from .orchestrator import TranslationOrchestrator
from .persistence import deserialize, serialize
from .progress import ProgressCalculator
from .session import EditorSession
from .store import FieldBinding, TranslationStore

__all__ = [
    "AppConfig",
    "LanguageCatalog",
    "ContentEntity",
    "EntityKind",
    "TranslationRecord",
    "TranslationOrchestrator",
    "serialize",
    "deserialize",
    "ProgressCalculator",
    "EditorSession",
    "FieldBinding",
    "TranslationStore",
]
