"""Hash algorithm registry.

Maps the canonical algorithm identifiers used by mtree digest keywords to
constructors that return fresh, independent hash objects.
"""

import hashlib
import logging
from types import MappingProxyType
from typing import Callable, Mapping, Protocol

from Cryptodome.Hash import RIPEMD160

from ..errors import UnsupportedAlgorithmError

logger = logging.getLogger(__name__)


class HashObject(Protocol):
    """Incremental hash accumulator (the subset of ``hashlib`` we rely on)."""

    def update(self, data: bytes, /) -> object: ...

    def hexdigest(self) -> str: ...


HashConstructor = Callable[[], HashObject]


def _hashlib_has_ripemd160() -> bool:
    try:
        hashlib.new("ripemd160")
    except ValueError:
        return False
    return True


def _new_ripemd160() -> HashObject:
    if _RIPEMD160_FROM_HASHLIB:
        return hashlib.new("ripemd160")
    return RIPEMD160.new()


# OpenSSL 3 moves RIPEMD-160 into the legacy provider, so hashlib may not
# offer it. pycryptodomex always does.
_RIPEMD160_FROM_HASHLIB = _hashlib_has_ripemd160()
if not _RIPEMD160_FROM_HASHLIB:
    logger.debug("hashlib lacks ripemd160, using pycryptodomex implementation")


class HashRegistry:
    """Read-only registry of supported hash algorithms.

    Lookups accept canonical names and their synonyms, case-insensitively.

    Example:
        >>> h = HashRegistry.new("sha256")
        >>> h.update(b"abc")
        >>> HashRegistry.canonical("rmd160")
        'ripemd160'
    """

    _constructors: Mapping[str, HashConstructor] = MappingProxyType(
        {
            "md5": hashlib.md5,
            "ripemd160": _new_ripemd160,
            "sha1": hashlib.sha1,
            "sha256": hashlib.sha256,
            "sha384": hashlib.sha384,
            "sha512": hashlib.sha512,
        }
    )

    _synonyms: Mapping[str, str] = MappingProxyType(
        {
            "rmd160": "ripemd160",
        }
    )

    @classmethod
    def canonical(cls, name: str) -> str:
        """Return the canonical identifier for ``name``.

        Raises:
            UnsupportedAlgorithmError: If ``name`` is not a known algorithm
        """
        normalised = name.strip().lower()
        normalised = cls._synonyms.get(normalised, normalised)
        if normalised not in cls._constructors:
            raise UnsupportedAlgorithmError(
                f"Unsupported hash algorithm: '{name}'. "
                f"Available algorithms: {', '.join(cls.algorithms())}"
            )
        return normalised

    @classmethod
    def constructor(cls, name: str) -> HashConstructor:
        """Return the constructor registered for ``name``."""
        return cls._constructors[cls.canonical(name)]

    @classmethod
    def new(cls, name: str) -> HashObject:
        """Return a fresh hash object for ``name``."""
        return cls.constructor(name)()

    @classmethod
    def algorithms(cls) -> list[str]:
        """List canonical algorithm identifiers."""
        return list(cls._constructors.keys())

    @classmethod
    def synonyms(cls) -> dict[str, str]:
        """Return a copy of the synonym table (synonym -> canonical)."""
        return dict(cls._synonyms)
