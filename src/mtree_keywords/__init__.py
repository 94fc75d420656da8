"""mtree keyword extraction.

This package turns a filesystem entry (a file, directory, symlink, device
or archive member) into the canonical ``name=value`` keyword tokens used by
mtree-style directory hierarchy manifests: size, type, permissions,
ownership, timestamps, link target, cksum and content digests.
"""

import logging

# Core library interface
from .extraction import collect_tokens, extract
from .registry import KeywordRegistry

# Core utilities
from .core import ArchiveRecord, DigestExtractor, Entry, EntryInfo, HashRegistry, XattrValue
from .core import cksum, cksum_bytes

# Configuration
from .config import (
    DEFAULT_KEYWORDS,
    DEFAULT_TAR_KEYWORDS,
    KeywordConfig,
    load_keyword_config,
    parse_keyword_config,
    validate_keyword_config_with_error_details,
)
from .errors import (
    ConfigError,
    ContentUnavailableError,
    IdentityLookupError,
    KeywordNotFoundError,
    MtreeKeywordError,
    UnsupportedAlgorithmError,
)

# Metadata sources
from .sources import entry_from_path, entry_from_tarinfo, iter_tar_entries

__version__ = "0.1.0"

# Library logging: callers configure handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Primary library interface
    "KeywordRegistry",
    "extract",
    "collect_tokens",
    # Core utilities
    "ArchiveRecord",
    "DigestExtractor",
    "Entry",
    "EntryInfo",
    "HashRegistry",
    "XattrValue",
    "cksum",
    "cksum_bytes",
    # Configuration
    "DEFAULT_KEYWORDS",
    "DEFAULT_TAR_KEYWORDS",
    "KeywordConfig",
    "load_keyword_config",
    "parse_keyword_config",
    "validate_keyword_config_with_error_details",
    # Errors
    "ConfigError",
    "ContentUnavailableError",
    "IdentityLookupError",
    "KeywordNotFoundError",
    "MtreeKeywordError",
    "UnsupportedAlgorithmError",
    # Metadata sources
    "entry_from_path",
    "entry_from_tarinfo",
    "iter_tar_entries",
]
