"""Type definitions for keyword extraction.

An entry is described by its path, an ``EntryInfo`` metadata record and,
for regular files, a way to open its content. Entries read from an archive
carry an ``ArchiveRecord``; entries read from a live filesystem do not.
"""

from dataclasses import dataclass, field
from typing import BinaryIO, Callable, Protocol


@dataclass(frozen=True)
class XattrValue:
    """An extended attribute that has already been read by the caller."""

    namespace: str  # e.g. "user", "security", "trusted"
    key: str
    value: bytes

    @property
    def name(self) -> str:
        return f"{self.namespace}.{self.key}"


@dataclass(frozen=True)
class ArchiveRecord:
    """Provenance details for an entry that came from an archive member.

    Archives store the link target directly, and the size field of a
    symlink member is not meaningful, so extractors consult this record
    instead of the filesystem.
    """

    linkname: str = ""
    typeflag: bytes = b""
    uname: str = ""


@dataclass(frozen=True)
class EntryInfo:
    """Metadata for one entry.

    ``mode`` is the full ``st_mode`` word: file type bits, permission bits
    and the setuid, setgid and sticky flags.
    """

    mode: int
    size: int = 0
    mtime_ns: int = 0
    uid: int = 0
    gid: int = 0
    nlink: int = 1
    archive: ArchiveRecord | None = None
    xattrs: tuple[XattrValue, ...] = ()


@dataclass(frozen=True)
class Entry:
    """Subject of extraction.

    ``opener`` returns a new binary stream positioned at offset 0 each time
    it is called. It is only set for regular files.
    """

    path: str
    info: EntryInfo
    opener: Callable[[], BinaryIO] | None = field(default=None, compare=False)


class KeywordFunc(Protocol):
    """Callable producing the ``name=value`` token for one keyword.

    Returns an empty string when the keyword does not apply to the entry.
    Raises when the value cannot be determined (I/O failure and similar).
    The stream, when given, must be positioned at the start; extractors
    never rewind it.
    """

    def __call__(self, path: str, info: EntryInfo, stream: BinaryIO | None) -> str: ...
