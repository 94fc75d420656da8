"""Core extraction building blocks.

This package contains the entry type definitions, the hash algorithm
registry, the ``cksum`` implementation and the individual keyword
extractors that the top-level registry maps names onto.
"""

from .checksums import cksum, cksum_bytes
from .digests import DigestExtractor, cksum_keyword, xattr_keyword
from .hashing import HashRegistry
from .types import ArchiveRecord, Entry, EntryInfo, KeywordFunc, XattrValue

__all__ = [
    "ArchiveRecord",
    "DigestExtractor",
    "Entry",
    "EntryInfo",
    "HashRegistry",
    "KeywordFunc",
    "XattrValue",
    "cksum",
    "cksum_bytes",
    "cksum_keyword",
    "xattr_keyword",
]
