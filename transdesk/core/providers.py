"""Translation providers.

A provider is anything with an async ``translate(text, source, target)``
coroutine and an ``is_configured()`` predicate. The concrete providers
here talk to public machine-translation HTTP APIs with httpx.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import httpx

from .exceptions import ProviderError
from .logging import translation_logger
from .transport import REQUEST_TIMEOUT

# Language codes accepted by the providers, and their wire spelling
PROVIDER_LANGUAGE_CODES: dict[str, str] = {
    "zh": "zh",
    "en": "en",
    "ja": "ja",
    "ko": "ko",
    "es": "es",
    "fr": "fr",
    "de": "de",
    "ru": "ru",
    "ar": "ar",
    "pt": "pt",
    "it": "it",
    "nl": "nl",
    "pl": "pl",
    "tr": "tr",
    "uk": "uk",
    "vi": "vi",
    "hi": "hi",
    "id": "id",
}


@runtime_checkable
class Translator(Protocol):
    """Translation capability injected into the orchestrator."""

    async def translate(self, text: str, source: str, target: str) -> str:
        ...

    def is_configured(self) -> bool:
        ...


class BaseProvider:
    """Shared plumbing for HTTP translation providers."""

    name = "base"
    requires_api_key = True

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float = REQUEST_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize provider.

        Args:
            api_key: Provider API key.
            timeout: Request timeout in seconds.
            client: Shared HTTP client. A short-lived client is opened per
                request when omitted.
        """
        self.api_key = api_key
        self.timeout = timeout
        self._client = client

    def is_configured(self) -> bool:
        """Check if the provider can be used."""
        return bool(self.api_key) or not self.requires_api_key

    def get_supported_languages(self) -> list[str]:
        return list(PROVIDER_LANGUAGE_CODES)

    def convert_language_code(self, code: str) -> str:
        return PROVIDER_LANGUAGE_CODES.get(code, code)

    def validate_languages(self, source: str, target: str) -> None:
        """Reject language pairs the provider does not handle.

        Raises:
            ProviderError: With code UNSUPPORTED_LANGUAGE.
        """
        supported = self.get_supported_languages()
        if source not in supported or target not in supported:
            raise self.error(
                f"Unsupported language pair: {source} -> {target}",
                "UNSUPPORTED_LANGUAGE",
            )

    def error(self, message: str, code: str) -> ProviderError:
        return ProviderError(message, code=code, provider=self.name)

    async def translate(self, text: str, source: str, target: str) -> str:
        """Translate text between two languages.

        Raises:
            ProviderError: If the request fails or the provider rejects it.
        """
        self.validate_languages(source, target)
        try:
            if self._client is not None:
                return await self._request(self._client, text, source, target)
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await self._request(client, text, source, target)
        except ProviderError:
            raise
        except httpx.TimeoutException as e:
            raise self.error(f"{self.name} request timed out", "NETWORK_ERROR") from e
        except httpx.HTTPStatusError as e:
            raise self.error(self._status_message(e.response), "TRANSLATION_ERROR") from e
        except httpx.HTTPError as e:
            raise self.error(f"{self.name} network error: {e}", "NETWORK_ERROR") from e
        except (KeyError, TypeError, ValueError) as e:
            raise self.error(f"{self.name} returned an unexpected response", "PROVIDER_ERROR") from e

    async def _request(self, client: httpx.AsyncClient, text: str, source: str, target: str) -> str:
        raise NotImplementedError

    def _status_message(self, response: httpx.Response) -> str:
        """Build an error message from an HTTP error response."""
        detail = response.text[:500]
        try:
            data = response.json()
            if isinstance(data, dict) and data.get("error"):
                detail = str(data["error"])
        except ValueError:
            pass
        if response.status_code == 429:
            return f"{self.name} rate limit exceeded. Please try again later."
        return f"{self.name} API error ({response.status_code}): {detail}"


class LibreTranslateProvider(BaseProvider):
    """LibreTranslate, public or self-hosted instance."""

    name = "libretranslate"
    requires_api_key = False  # Self-hosted instances usually run without one

    DEFAULT_URL = "https://libretranslate.com/translate"

    def __init__(self, api_key: str | None = None, api_url: str | None = None, **kwargs: Any):
        super().__init__(api_key=api_key, **kwargs)
        self.api_url = api_url or self.DEFAULT_URL

    async def _request(self, client: httpx.AsyncClient, text: str, source: str, target: str) -> str:
        params: dict[str, Any] = {
            "q": text,
            "source": self.convert_language_code(source),
            "target": self.convert_language_code(target),
            "format": "text",
        }
        if self.api_key:
            params["api_key"] = self.api_key

        translation_logger.debug(f"LibreTranslate {source}->{target}, {len(text)} chars")
        response = await client.post(self.api_url, json=params)
        response.raise_for_status()
        return response.json()["translatedText"]


class MyMemoryProvider(BaseProvider):
    """MyMemory free translation API."""

    name = "mymemory"
    requires_api_key = False  # Key only raises the daily quota

    API_URL = "https://api.mymemory.translated.net/get"

    def __init__(self, api_key: str | None = None, email: str | None = None, **kwargs: Any):
        super().__init__(api_key=api_key, **kwargs)
        self.email = email or "user@example.com"

    async def _request(self, client: httpx.AsyncClient, text: str, source: str, target: str) -> str:
        params = {
            "q": text,
            "langpair": f"{self.convert_language_code(source)}|{self.convert_language_code(target)}",
            "de": self.email,
        }
        if self.api_key:
            params["key"] = self.api_key

        translation_logger.debug(f"MyMemory {source}->{target}, {len(text)} chars")
        response = await client.get(self.API_URL, params=params, headers={"Accept": "application/json"})
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise self.error(f"{self.name} returned an unexpected response", "PROVIDER_ERROR")

        if data.get("responseStatus") != 200:
            raise self.error(str(data.get("responseDetails") or "Translation failed"), "TRANSLATION_ERROR")

        translated = data["responseData"]["translatedText"]
        if "MYMEMORY WARNING" in translated:
            raise self.error(
                "Rate limit exceeded. Please try again later or provide an API key.",
                "RATE_LIMIT",
            )
        return translated


PROVIDER_CLASSES: dict[str, type[BaseProvider]] = {
    LibreTranslateProvider.name: LibreTranslateProvider,
    MyMemoryProvider.name: MyMemoryProvider,
}


class ProviderRegistry:
    """Named translation providers with one active provider."""

    def __init__(self):
        self._providers: dict[str, Translator] = {}
        self._active: str | None = None

    def register(self, name: str, provider: Translator) -> None:
        """Register a provider under a name."""
        self._providers[name] = provider

    def set_active(self, name: str) -> None:
        """Make a registered provider the active one.

        Raises:
            KeyError: If no provider has that name.
        """
        if name not in self._providers:
            raise KeyError(f"Translation provider '{name}' not found")
        self._active = name

    @property
    def active(self) -> Translator | None:
        """Active provider or None."""
        return self._providers.get(self._active) if self._active else None

    @property
    def names(self) -> list[str]:
        return list(self._providers)

    def is_configured(self) -> bool:
        """Check if an active, usable provider exists."""
        return self.active is not None and self.active.is_configured()
