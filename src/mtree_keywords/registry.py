"""Keyword registry.

This module provides the single table that maps every recognised mtree
keyword name, synonyms included, to the extractor that produces it. The
table is built once at import and is read-only afterwards, so lookups are
safe from any number of threads.
"""

import logging
from collections.abc import Iterable
from types import MappingProxyType
from typing import Mapping

from .core.digests import DigestExtractor, cksum_keyword, xattr_keyword
from .core.metadata import (
    gid_keyword,
    link_keyword,
    mode_keyword,
    nlink_keyword,
    size_keyword,
    tar_time_keyword,
    time_keyword,
    type_keyword,
    uid_keyword,
    uname_keyword,
)
from .core.types import KeywordFunc
from .errors import KeywordNotFoundError

logger = logging.getLogger(__name__)


def _build_table() -> dict[str, KeywordFunc]:
    # One extractor instance per digest; synonyms share it
    md5 = DigestExtractor("md5", "md5digest")
    ripemd160 = DigestExtractor("ripemd160", "ripemd160digest")
    sha1 = DigestExtractor("sha1", "sha1digest")
    sha256 = DigestExtractor("sha256", "sha256digest")
    sha384 = DigestExtractor("sha384", "sha384digest")
    sha512 = DigestExtractor("sha512", "sha512digest")

    return {
        "size": size_keyword,  # size in bytes
        "type": type_keyword,  # file type
        "time": time_keyword,  # modification time
        "link": link_keyword,  # symlink target when type=link
        "uid": uid_keyword,  # numeric owner
        "gid": gid_keyword,  # numeric group
        "nlink": nlink_keyword,  # hard link count
        "uname": uname_keyword,  # symbolic owner
        "mode": mode_keyword,  # octal permissions
        "cksum": cksum_keyword,  # cksum(1) checksum
        "md5": md5,
        "md5digest": md5,
        "rmd160": ripemd160,
        "rmd160digest": ripemd160,
        "ripemd160digest": ripemd160,
        "sha1": sha1,
        "sha1digest": sha1,
        "sha256": sha256,
        "sha256digest": sha256,
        "sha384": sha384,
        "sha384digest": sha384,
        "sha512": sha512,
        "sha512digest": sha512,
        # Not an upstream mtree keyword. Archives lack nanosecond precision,
        # so this lets comparisons stay at second level accuracy.
        "tar_time": tar_time_keyword,
        # Not an upstream mtree keyword. Emits xattr.<namespace>.<key>=<sha1>.
        "xattr": xattr_keyword,
        "xattrs": xattr_keyword,
    }


class KeywordRegistry:
    """Read-only registry of keyword extractors.

    Example:
        >>> extractor = KeywordRegistry.resolve("sha256")
        >>> extractor(path, info, stream)
        'sha256digest=...'
    """

    _keywords: Mapping[str, KeywordFunc] = MappingProxyType(_build_table())

    @classmethod
    def resolve(cls, name: str) -> KeywordFunc:
        """Return the extractor registered under ``name``.

        Lookup is by exact string match.

        Raises:
            KeywordNotFoundError: If ``name`` is not a registered keyword
        """
        try:
            return cls._keywords[name]
        except KeyError:
            logger.debug("Keyword lookup failed for %r", name)
            raise KeywordNotFoundError(name, cls.list_keywords()) from None

    @classmethod
    def contains(cls, name: str) -> bool:
        """Return whether ``name`` is a registered keyword."""
        return name in cls._keywords

    @classmethod
    def validate(cls, names: Iterable[str]) -> list[str]:
        """Check that every name is registered.

        Args:
            names: Keyword names, e.g. from a configuration document

        Returns:
            The names as a list, in the given order

        Raises:
            KeywordNotFoundError: On the first unknown name
        """
        checked = []
        for name in names:
            cls.resolve(name)
            checked.append(name)
        return checked

    @classmethod
    def list_keywords(cls) -> list[str]:
        """List all registered keyword names, synonyms included."""
        return list(cls._keywords.keys())

    @classmethod
    def synonyms_of(cls, name: str) -> list[str]:
        """List every name that maps to the same extractor as ``name``."""
        extractor = cls.resolve(name)
        return [key for key, func in cls._keywords.items() if func is extractor]
