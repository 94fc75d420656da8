"""Metadata sources.

Adapters that turn a live filesystem path or a tar archive member into
an ``Entry`` for keyword extraction.
"""

from .archive import entry_from_tarinfo, info_from_tarinfo, iter_tar_entries
from .filesystem import entry_from_path, info_from_stat

__all__ = [
    "entry_from_path",
    "entry_from_tarinfo",
    "info_from_stat",
    "info_from_tarinfo",
    "iter_tar_entries",
]
