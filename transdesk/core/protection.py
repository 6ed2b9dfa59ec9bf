"""Shield non-translatable fragments from translation providers.

Code blocks, inline code, tags, URLs, file paths, e-mail addresses and
template placeholders are swapped for opaque tokens before the text is
sent out, and put back into the translated result. Providers sometimes
mangle the tokens (lowercase them, turn underscores into spaces), so
restoring matches them loosely.
"""

import re
from dataclasses import dataclass, field

PLACEHOLDER = "___TRANSLATION_PROTECT_{group}_{index}___"

# Order matters: earlier patterns claim text first
PROTECTED_PATTERNS: list[re.Pattern] = [
    re.compile(r"<[a-z][a-z0-9]*embed\s[^>]*/?>", re.IGNORECASE),  # embed components
    re.compile(r"```[\s\S]*?```"),  # fenced code
    re.compile(r"`[^`\n]+`"),  # inline code
    re.compile(r"<[a-zA-Z][^>]*>"),  # tags with attributes
    re.compile(r"https?://[^\s<>\"'\]]+"),
    re.compile(r"/[^\s<>\"'\]]+\.[a-zA-Z0-9]+"),  # file paths
    re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"),
    re.compile(r"\{[^}]+\}"),  # template variables
    re.compile(r"\[[^\]]+\]"),
]

_TOKEN = re.compile(r"___TRANSLATION_PROTECT_\d+_\d+___")

# Leftovers of tokens the provider damaged beyond recognition
_LEFTOVER = re.compile(r"_*TRANSLATION[\s_]PROTECT[\s_]\d+[\s_]\d+_*", re.IGNORECASE)

MAX_MATCHES_PER_PATTERN = 1000


@dataclass
class ProtectedText:
    """Text with protected fragments replaced by tokens."""

    text: str
    fragments: dict[str, str] = field(default_factory=dict)  # token -> original

    @property
    def has_fragments(self) -> bool:
        return bool(self.fragments)

    @property
    def only_fragments(self) -> bool:
        """Whether nothing translatable is left besides the tokens."""
        return self.has_fragments and not _TOKEN.sub("", self.text).strip()


def protect(text: str) -> ProtectedText:
    """Replace protected fragments with placeholder tokens.

    Args:
        text: Source text.

    Returns:
        ProtectedText holding the tokenized text and the originals.
    """
    fragments: dict[str, str] = {}

    for group, pattern in enumerate(PROTECTED_PATTERNS):
        counter = 0

        def _swap(match: re.Match) -> str:
            nonlocal counter
            if counter >= MAX_MATCHES_PER_PATTERN:
                return match.group(0)
            token = PLACEHOLDER.format(group=group, index=counter)
            fragments[token] = match.group(0)
            counter += 1
            return token

        text = pattern.sub(_swap, text)

    return ProtectedText(text=text, fragments=fragments)


def _loose_token_pattern(token: str) -> re.Pattern:
    """Build a pattern matching a token after typical provider damage."""
    group, index = re.findall(r"\d+", token)
    return re.compile(
        rf"_*TRANSLATION[\s_]PROTECT[\s_]{group}[\s_]{index}(?!\d)_*",
        re.IGNORECASE,
    )


def restore(translated: str, protected: ProtectedText) -> str:
    """Put protected fragments back into translated text.

    Args:
        translated: Text returned by the provider.
        protected: Result of :func:`protect` for the source text.

    Returns:
        Translated text with the original fragments restored.
    """
    # Later tokens first so nested fragments unwind in reverse order
    for token in reversed(list(protected.fragments)):
        original = protected.fragments[token]
        if token in translated:
            translated = translated.replace(token, original)
        else:
            translated = _loose_token_pattern(token).sub(lambda _m: original, translated)

    return _LEFTOVER.sub("", translated)


def cleanup(text: str) -> str:
    """Remove leftover placeholder tokens from previously saved text."""
    return _LEFTOVER.sub("", text)
