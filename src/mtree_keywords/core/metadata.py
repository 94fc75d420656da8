"""Metadata keyword extractors.

Each extractor is a plain function with the ``KeywordFunc`` signature. They
read only ``EntryInfo`` (and, for live symlinks, the path), keep no state
between calls and ignore the content stream.
"""

import os
import pwd
import stat
import tarfile
from typing import BinaryIO, Callable

from ..errors import IdentityLookupError
from .types import ArchiveRecord, EntryInfo, KeywordFunc

NANOSECONDS_PER_SECOND = 1_000_000_000


def _is_archive_symlink(record: ArchiveRecord, mode: int) -> bool:
    # The recorded type flag overrides the mode bits for archive members
    if record.typeflag:
        return record.typeflag == tarfile.SYMTYPE
    return stat.S_ISLNK(mode)


def size_keyword(path: str, info: EntryInfo, stream: BinaryIO | None) -> str:
    """Size in bytes.

    Archive symlink members report the byte length of their link target,
    since archives do not record a meaningful size for them.
    """
    if info.archive is not None and _is_archive_symlink(info.archive, info.mode):
        target = info.archive.linkname.encode("utf-8", "surrogateescape")
        return f"size={len(target)}"
    return f"size={info.size}"


def type_keyword(path: str, info: EntryInfo, stream: BinaryIO | None) -> str:
    """Entry type: dir, file, socket, link, fifo, char or device."""
    mode = info.mode
    if stat.S_ISDIR(mode):
        return "type=dir"
    if stat.S_ISREG(mode):
        return "type=file"
    if stat.S_ISSOCK(mode):
        return "type=socket"
    if stat.S_ISLNK(mode):
        return "type=link"
    if stat.S_ISFIFO(mode):
        return "type=fifo"
    if stat.S_ISCHR(mode):
        return "type=char"
    if stat.S_ISBLK(mode):
        return "type=device"
    return ""


def mode_keyword(path: str, info: EntryInfo, stream: BinaryIO | None) -> str:
    """Permission bits in octal with setuid, setgid and sticky folded in."""
    permissions = info.mode & 0o777
    if info.mode & stat.S_ISUID:
        permissions |= 1 << 11
    if info.mode & stat.S_ISGID:
        permissions |= 1 << 10
    if info.mode & stat.S_ISVTX:
        permissions |= 1 << 9
    if not permissions:
        return "mode=0"
    return f"mode=0{permissions:o}"


def time_keyword(path: str, info: EntryInfo, stream: BinaryIO | None) -> str:
    """Modification time as ``<seconds>.<nanoseconds>``."""
    if info.mtime_ns == 0:
        return "time=0.000000000"
    seconds, nanos = divmod(info.mtime_ns, NANOSECONDS_PER_SECOND)
    return f"time={seconds}.{nanos:09d}"


def tar_time_keyword(path: str, info: EntryInfo, stream: BinaryIO | None) -> str:
    """Modification time truncated to whole seconds.

    Tar archives do not keep sub-second precision, so comparing archive
    derived trees against live ones is only meaningful at this resolution.
    """
    seconds = info.mtime_ns // NANOSECONDS_PER_SECOND
    return f"tar_time={seconds}.000000000"


def link_keyword(path: str, info: EntryInfo, stream: BinaryIO | None) -> str:
    """Symlink target.

    Raises:
        OSError: If the entry is a live symlink whose target cannot be read
    """
    if info.archive is not None:
        if info.archive.linkname:
            return f"link={info.archive.linkname}"
        return ""

    if stat.S_ISLNK(info.mode):
        return f"link={os.readlink(path)}"
    return ""


def uid_keyword(path: str, info: EntryInfo, stream: BinaryIO | None) -> str:
    return f"uid={info.uid}"


def gid_keyword(path: str, info: EntryInfo, stream: BinaryIO | None) -> str:
    return f"gid={info.gid}"


def nlink_keyword(path: str, info: EntryInfo, stream: BinaryIO | None) -> str:
    return f"nlink={info.nlink}"


def lookup_username(uid: int) -> str:
    """Resolve a numeric owner to a user name via the password database.

    Raises:
        IdentityLookupError: If no user has this uid
    """
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError as e:
        raise IdentityLookupError(f"No user name for uid {uid}") from e


def make_uname_keyword(lookup: Callable[[int], str]) -> KeywordFunc:
    """Build a ``uname`` extractor using ``lookup`` for live entries.

    Archive members that record an owner name use it directly.
    """

    def uname_keyword(path: str, info: EntryInfo, stream: BinaryIO | None) -> str:
        if info.archive is not None and info.archive.uname:
            return f"uname={info.archive.uname}"
        return f"uname={lookup(info.uid)}"

    return uname_keyword


uname_keyword = make_uname_keyword(lookup_username)
