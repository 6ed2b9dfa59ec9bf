"""Application configuration management."""

import os
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .languages import DEFAULT_LANGUAGE, LanguageCatalog
from .models import EntityKind
from .providers import PROVIDER_CLASSES, ProviderRegistry
from .transport import REQUEST_TIMEOUT, ApiTransport


class AppConfig(BaseModel):
    """Application-wide configuration.

    These settings come from environment variables or defaults.
    """

    # Blog API
    api_url: str = "http://localhost:8080/api"
    api_token: str | None = None
    timeout: float = REQUEST_TIMEOUT

    # Languages
    default_language: str = DEFAULT_LANGUAGE
    languages: list[str] = Field(default_factory=lambda: [DEFAULT_LANGUAGE, "en"])

    # Translation provider ("" disables auto-translate)
    provider: str = ""
    provider_api_key: str | None = None
    provider_url: str | None = None  # Self-hosted LibreTranslate
    provider_email: str | None = None  # MyMemory contact address
    protect_content: bool = True

    log_level: str = "INFO"
    log_file: str | None = None

    @field_validator("languages")
    @classmethod
    def validate_languages(cls, v: list[str]) -> list[str]:
        """Normalize language codes, dropping blanks and duplicates."""
        seen: list[str] = []
        for code in v:
            code = code.strip().lower()
            if code and code not in seen:
                seen.append(code)
        return seen

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        """Ensure provider is known."""
        v = v.strip().lower()
        if v and v not in PROVIDER_CLASSES:
            raise ValueError(
                f"Unknown translation provider '{v}', expected one of: {', '.join(PROVIDER_CLASSES)}"
            )
        return v

    @property
    def catalog(self) -> LanguageCatalog:
        """Language catalog built from the configured codes."""
        return LanguageCatalog.from_codes(self.languages, default=self.default_language)

    def build_providers(self) -> ProviderRegistry:
        """Create a provider registry with the configured provider active."""
        registry = ProviderRegistry()
        if not self.provider:
            return registry

        options: dict[str, Any] = {"api_key": self.provider_api_key, "timeout": self.timeout}
        if self.provider == "libretranslate":
            options["api_url"] = self.provider_url
        elif self.provider == "mymemory":
            options["email"] = self.provider_email

        registry.register(self.provider, PROVIDER_CLASSES[self.provider](**options))
        registry.set_active(self.provider)
        return registry

    def build_transport(self, kind: EntityKind | str) -> ApiTransport:
        """Create an API transport for an entity kind."""
        return ApiTransport(self.api_url, kind=kind, token=self.api_token, timeout=self.timeout)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create configuration from environment variables.

        Returns:
            AppConfig instance.

        Raises:
            ValueError: If environment variable values are invalid.
        """

        def get_float_env(name: str, default: float, min_val: float, max_val: float) -> float:
            """Parse and validate numeric environment variable."""
            value_str = os.getenv(name, str(default))
            try:
                value = float(value_str)
            except ValueError:
                raise ValueError(f"{name} must be a number, got: {value_str}")
            if value < min_val or value > max_val:
                raise ValueError(f"{name} must be between {min_val} and {max_val}, got: {value}")
            return value

        default_language = os.getenv("TRANSDESK_DEFAULT_LANGUAGE", DEFAULT_LANGUAGE).strip().lower()
        languages = os.getenv("TRANSDESK_LANGUAGES", f"{default_language},en").split(",")

        return cls(
            api_url=os.getenv("TRANSDESK_API_URL", "http://localhost:8080/api"),
            api_token=os.getenv("TRANSDESK_API_TOKEN") or None,
            timeout=get_float_env("TRANSDESK_TIMEOUT", REQUEST_TIMEOUT, 1, 600),
            default_language=default_language,
            languages=languages,
            provider=os.getenv("TRANSDESK_PROVIDER", ""),
            provider_api_key=os.getenv("TRANSDESK_PROVIDER_API_KEY") or None,
            provider_url=os.getenv("TRANSDESK_PROVIDER_URL") or None,
            provider_email=os.getenv("TRANSDESK_PROVIDER_EMAIL") or None,
            protect_content=os.getenv("TRANSDESK_PROTECT_CONTENT", "true").lower() == "true",
            log_level=os.getenv("TRANSDESK_LOG_LEVEL", "INFO"),
            log_file=os.getenv("TRANSDESK_LOG_FILE") or None,
        )
