"""Tar archive metadata source.

Builds ``Entry`` objects from ``tarfile`` members. These entries carry an
``ArchiveRecord`` so that link targets, symlink sizes and owner names come
from the archive header rather than the local filesystem.
"""

import functools
import stat
import tarfile
from collections.abc import Iterator
from decimal import ROUND_FLOOR, Decimal
from typing import BinaryIO

from ..core.metadata import NANOSECONDS_PER_SECOND
from ..core.types import ArchiveRecord, Entry, EntryInfo, XattrValue

# PAX header prefix used by GNU tar and bsdtar for extended attributes
PAX_XATTR_PREFIX = "SCHILY.xattr."


def _type_bits(member: tarfile.TarInfo) -> int:
    # Hard links describe a regular file whose data lives in another member
    if member.isreg() or member.islnk():
        return stat.S_IFREG
    if member.isdir():
        return stat.S_IFDIR
    if member.issym():
        return stat.S_IFLNK
    if member.ischr():
        return stat.S_IFCHR
    if member.isblk():
        return stat.S_IFBLK
    if member.isfifo():
        return stat.S_IFIFO
    return 0


def xattrs_from_pax(pax_headers: dict[str, str]) -> tuple[XattrValue, ...]:
    """Extract extended attributes recorded in PAX headers.

    Example:
        {"SCHILY.xattr.user.comment": "hi"} -> (XattrValue("user", "comment", b"hi"),)
    """
    xattrs = []
    for header, value in pax_headers.items():
        if not header.startswith(PAX_XATTR_PREFIX):
            continue
        name = header[len(PAX_XATTR_PREFIX):]
        namespace, _, key = name.partition(".")
        xattrs.append(
            XattrValue(
                namespace=namespace,
                key=key,
                value=value.encode("utf-8", "surrogateescape"),
            )
        )
    return tuple(xattrs)


def _mtime_ns(member: tarfile.TarInfo) -> int:
    # PAX records keep the exact decimal text; TarInfo.mtime is a lossy float
    text = member.pax_headers.get("mtime")
    if text is not None:
        nanos = Decimal(text) * NANOSECONDS_PER_SECOND
        return int(nanos.to_integral_value(rounding=ROUND_FLOOR))
    return int(member.mtime) * NANOSECONDS_PER_SECOND


def info_from_tarinfo(member: tarfile.TarInfo) -> EntryInfo:
    """Convert a tar member header into ``EntryInfo``.

    Tar headers have no hard link count, so ``nlink`` is always 1.
    """
    return EntryInfo(
        mode=_type_bits(member) | (member.mode & 0o7777),
        size=member.size,
        mtime_ns=_mtime_ns(member),
        uid=member.uid,
        gid=member.gid,
        nlink=1,
        archive=ArchiveRecord(
            linkname=member.linkname,
            typeflag=member.type,
            uname=member.uname,
        ),
        xattrs=xattrs_from_pax(member.pax_headers),
    )


def _open_member(tar: tarfile.TarFile, member: tarfile.TarInfo) -> BinaryIO:
    try:
        stream = tar.extractfile(member)
    except (KeyError, tarfile.TarError) as e:
        # Hard links whose target member is missing from the archive
        raise OSError(f"Cannot read content of archive member {member.name}: {e}") from e
    if stream is None:
        raise OSError(f"Cannot read content of archive member {member.name}")
    return stream


def entry_from_tarinfo(tar: tarfile.TarFile, member: tarfile.TarInfo) -> Entry:
    """Describe one archive member.

    Args:
        tar: Open archive the member belongs to
        member: Member header

    Returns:
        Entry whose opener, for regular files, reads the member data
    """
    info = info_from_tarinfo(member)

    opener = None
    if stat.S_ISREG(info.mode):
        opener = functools.partial(_open_member, tar, member)

    return Entry(path=member.name, info=info, opener=opener)


def iter_tar_entries(tar: tarfile.TarFile) -> Iterator[Entry]:
    """Yield an entry for every member, in archive order."""
    for member in tar.getmembers():
        yield entry_from_tarinfo(tar, member)
