"""Exceptions raised by the translation core."""


class TransDeskError(Exception):
    """Base exception for translation core errors."""

    pass


class UnknownFieldError(TransDeskError, KeyError):
    """A field name is not tracked by the entity profile."""

    def __init__(self, field: str, kind: str):
        super().__init__(f"Field '{field}' is not tracked for {kind}")
        self.field = field
        self.kind = kind

    def __str__(self) -> str:
        # KeyError quotes its message otherwise
        return self.args[0]


class InvalidLanguageError(TransDeskError, ValueError):
    """A language code is empty or too long."""

    pass


class ProviderNotConfiguredError(TransDeskError):
    """No usable translation provider is available."""

    pass


class EditorBusyError(TransDeskError):
    """A translate operation is already in flight for this editor."""

    pass


class TranslationFailedError(TransDeskError):
    """The translation provider failed for a single field."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class ProviderError(TransDeskError):
    """Translation provider error with a machine-readable code."""

    def __init__(self, message: str, code: str = "PROVIDER_ERROR", provider: str | None = None):
        super().__init__(message)
        self.code = code
        self.provider = provider


class MalformedWirePayloadError(TransDeskError):
    """The API payload cannot be read at all."""

    pass
