"""Exception types raised by the keyword extraction engine.

Each exception also derives from the built-in family callers would
naturally catch (``KeyError`` for unknown names, ``OSError`` for content
problems, and so on), so existing ``except`` clauses keep working.

An inapplicable keyword is never an exception: extractors return an
empty token for that case.
"""


class MtreeKeywordError(Exception):
    """Base class for all errors raised by this package."""


class KeywordNotFoundError(MtreeKeywordError, KeyError):
    """Raised when a keyword name is not present in the registry."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(name)

    def __str__(self) -> str:
        return (
            f"Unknown keyword: '{self.name}'. "
            f"Available keywords: {', '.join(self.available) or 'none'}"
        )


class UnsupportedAlgorithmError(MtreeKeywordError, ValueError):
    """Raised when a hash algorithm name cannot be resolved."""


class ContentUnavailableError(MtreeKeywordError, OSError):
    """Raised when a regular file entry has no content stream to read."""


class IdentityLookupError(MtreeKeywordError, LookupError):
    """Raised when a numeric owner cannot be mapped to a user name."""


class ConfigError(MtreeKeywordError, ValueError):
    """Raised when a keyword configuration document is invalid."""
