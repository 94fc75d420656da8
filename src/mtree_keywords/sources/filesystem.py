"""Live filesystem metadata source.

Builds ``Entry`` objects from ``os.lstat`` results. Symlinks are never
followed, so a link is described as a link rather than as its target.
"""

import functools
import os
import stat
from collections.abc import Iterable
from pathlib import Path

from ..core.types import Entry, EntryInfo, XattrValue


def info_from_stat(st: os.stat_result, xattrs: Iterable[XattrValue] = ()) -> EntryInfo:
    """Convert a stat result into ``EntryInfo``.

    Args:
        st: Result of ``os.lstat`` or ``os.stat``
        xattrs: Extended attributes already read by the caller

    Returns:
        Metadata record with no archive provenance
    """
    return EntryInfo(
        mode=st.st_mode,
        size=st.st_size,
        mtime_ns=st.st_mtime_ns,
        uid=st.st_uid,
        gid=st.st_gid,
        nlink=st.st_nlink,
        xattrs=tuple(xattrs),
    )


def entry_from_path(path: str | Path, xattrs: Iterable[XattrValue] = ()) -> Entry:
    """Describe a path on the live filesystem.

    Regular files get an opener that returns a new read handle on every
    call, so each content keyword reads from offset 0.

    Args:
        path: Path to describe (not followed if it is a symlink)
        xattrs: Extended attributes already read by the caller

    Returns:
        Entry for the path

    Raises:
        OSError: If the path cannot be stat'ed
    """
    path_str = os.fspath(path)
    st = os.lstat(path_str)

    opener = None
    if stat.S_ISREG(st.st_mode):
        opener = functools.partial(open, path_str, "rb")

    return Entry(path=path_str, info=info_from_stat(st, xattrs), opener=opener)
