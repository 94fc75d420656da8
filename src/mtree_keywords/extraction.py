"""Keyword extraction for single entries.

This module is the caller-side glue around ``KeywordRegistry``. It owns the
content stream contract: every extractor call gets its own stream, opened
fresh at offset 0 and closed afterwards, so several content keywords for
one entry never share a cursor.
"""

import logging
from collections.abc import Iterable

from .core.types import Entry
from .registry import KeywordRegistry

logger = logging.getLogger(__name__)


def extract(keyword: str, entry: Entry) -> str:
    """Produce the token for one keyword on one entry.

    Args:
        keyword: Keyword name (synonyms accepted)
        entry: Entry to describe

    Returns:
        ``name=value`` token, or an empty string if the keyword does not
        apply to this entry type

    Raises:
        KeywordNotFoundError: If the keyword is not registered
        OSError: If content, a link target or similar cannot be read

    Example:
        >>> entry = entry_from_path("/etc/hostname")
        >>> extract("sha1", entry)
        'sha1digest=...'
    """
    extractor = KeywordRegistry.resolve(keyword)

    if entry.opener is None:
        return extractor(entry.path, entry.info, None)

    with entry.opener() as stream:
        return extractor(entry.path, entry.info, stream)


def collect_tokens(keywords: Iterable[str], entry: Entry) -> list[str]:
    """Produce the tokens for several keywords on one entry.

    All keyword names are validated before any extractor runs. Empty
    tokens are dropped, the rest keep the requested order.

    Args:
        keywords: Keyword names to extract
        entry: Entry to describe

    Returns:
        List of non-empty tokens

    Raises:
        KeywordNotFoundError: If any keyword is not registered
        OSError: If any extractor fails; no partial result is returned
    """
    names = KeywordRegistry.validate(keywords)

    tokens = []
    for name in names:
        token = extract(name, entry)
        if token:
            tokens.append(token)
        else:
            logger.debug("Keyword %s does not apply to %s", name, entry.path)
    return tokens
