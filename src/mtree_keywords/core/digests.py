"""Content-consuming keyword extractors.

Digests and ``cksum`` only apply to regular files. For every other entry
type they return an empty token, never an error.
"""

import logging
import stat
from typing import BinaryIO

from ..errors import ContentUnavailableError
from .checksums import CHUNK_SIZE, cksum
from .hashing import HashRegistry
from .types import EntryInfo

logger = logging.getLogger(__name__)


def _require_stream(path: str, stream: BinaryIO | None) -> BinaryIO:
    if stream is None:
        raise ContentUnavailableError(f"No content stream supplied for regular file {path}")
    return stream


class DigestExtractor:
    """Keyword extractor that hashes entry content with one algorithm.

    Instances are stateless; a fresh hash object is created per call, so a
    single instance can be shared by every synonym of a keyword.

    Example:
        >>> sha256 = DigestExtractor("sha256", "sha256digest")
        >>> sha256(path, info, stream)
        'sha256digest=...'
    """

    def __init__(self, algorithm: str, output_name: str):
        self.algorithm = HashRegistry.canonical(algorithm)
        self.output_name = output_name

    def __repr__(self) -> str:
        return f"DigestExtractor({self.algorithm!r}, {self.output_name!r})"

    def __call__(self, path: str, info: EntryInfo, stream: BinaryIO | None) -> str:
        if not stat.S_ISREG(info.mode):
            return ""

        reader = _require_stream(path, stream)
        hasher = HashRegistry.new(self.algorithm)
        for chunk in iter(lambda: reader.read(CHUNK_SIZE), b""):
            hasher.update(chunk)

        logger.debug("Computed %s for %s", self.algorithm, path)
        return f"{self.output_name}={hasher.hexdigest()}"


def cksum_keyword(path: str, info: EntryInfo, stream: BinaryIO | None) -> str:
    """Return ``cksum=<decimal>`` for regular files."""
    if not stat.S_ISREG(info.mode):
        return ""
    value, _ = cksum(_require_stream(path, stream))
    return f"cksum={value}"


# Digest used for extended attribute values
XATTR_ALGORITHM = "sha1"


def xattr_keyword(path: str, info: EntryInfo, stream: BinaryIO | None) -> str:
    """Return one ``xattr.<namespace>.<key>=<sha1>`` token per attribute.

    Attribute values are reduced to a SHA1 digest so the manifest neither
    reveals their contents nor depends on the order they were listed in.
    Multiple tokens are space separated in attribute-name order. Entries
    without extended attributes produce an empty token.
    """
    tokens = []
    for xattr in sorted(info.xattrs, key=lambda x: x.name):
        hasher = HashRegistry.new(XATTR_ALGORITHM)
        hasher.update(xattr.value)
        tokens.append(f"xattr.{xattr.name}={hasher.hexdigest()}")
    return " ".join(tokens)
