"""Tests for metadata keyword extractors."""

import os
import stat
import tarfile
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from mtree_keywords.core.metadata import (
    gid_keyword,
    link_keyword,
    lookup_username,
    make_uname_keyword,
    mode_keyword,
    nlink_keyword,
    size_keyword,
    tar_time_keyword,
    time_keyword,
    type_keyword,
    uid_keyword,
)
from mtree_keywords.core.types import ArchiveRecord, EntryInfo
from mtree_keywords.errors import IdentityLookupError


class TestSizeKeyword:
    """Test size reporting."""

    def test_regular_file(self, regular_info) -> None:
        assert size_keyword("f", regular_info, None) == "size=12"

    def test_archive_symlink_uses_target_length(self) -> None:
        """Test that the archive size field is ignored for symlinks."""
        info = EntryInfo(
            mode=stat.S_IFLNK | 0o777,
            size=512,
            archive=ArchiveRecord(linkname="abc", typeflag=b"2"),
        )
        assert size_keyword("l", info, None) == "size=3"

    def test_archive_symlink_counts_bytes(self) -> None:
        """Test that non-ASCII targets are measured in bytes."""
        info = EntryInfo(mode=stat.S_IFLNK | 0o777, archive=ArchiveRecord(linkname="café"))
        assert size_keyword("l", info, None) == "size=5"

    def test_archive_typeflag_marks_symlink(self) -> None:
        """Test that a symlink type flag wins over mode bits without S_IFLNK."""
        info = EntryInfo(
            mode=0o777,
            size=512,
            archive=ArchiveRecord(linkname="abc", typeflag=tarfile.SYMTYPE),
        )
        assert size_keyword("l", info, None) == "size=3"

    def test_archive_regular_typeflag_keeps_size(self) -> None:
        """Test that a non-symlink type flag reports the recorded size."""
        info = EntryInfo(
            mode=stat.S_IFLNK | 0o777,
            size=512,
            archive=ArchiveRecord(linkname="abc", typeflag=tarfile.REGTYPE),
        )
        assert size_keyword("l", info, None) == "size=512"

    def test_live_symlink_uses_stat_size(self) -> None:
        info = EntryInfo(mode=stat.S_IFLNK | 0o777, size=10)
        assert size_keyword("l", info, None) == "size=10"


class TestTypeKeyword:
    """Test entry type classification."""

    @pytest.mark.parametrize(
        "mode, expected",
        [
            (stat.S_IFDIR | 0o755, "type=dir"),
            (stat.S_IFREG | 0o644, "type=file"),
            (stat.S_IFSOCK | 0o755, "type=socket"),
            (stat.S_IFLNK | 0o777, "type=link"),
            (stat.S_IFIFO | 0o644, "type=fifo"),
            (stat.S_IFCHR | 0o620, "type=char"),
            (stat.S_IFBLK | 0o660, "type=device"),
        ],
    )
    def test_classifies_every_type(self, mode: int, expected: str) -> None:
        assert type_keyword("x", EntryInfo(mode=mode), None) == expected

    def test_unknown_type_returns_empty(self) -> None:
        """Test that a mode with no type bits is not classified."""
        assert type_keyword("x", EntryInfo(mode=0o644), None) == ""


class TestModeKeyword:
    """Test octal mode formatting."""

    @pytest.mark.parametrize(
        "mode, expected",
        [
            (stat.S_IFREG | 0o644, "mode=0644"),
            (stat.S_IFREG | stat.S_ISGID | 0o644, "mode=02644"),
            (stat.S_IFREG | stat.S_ISUID | 0o755, "mode=04755"),
            (stat.S_IFDIR | stat.S_ISVTX | 0o777, "mode=01777"),
            (stat.S_IFREG | stat.S_ISUID | stat.S_ISGID | stat.S_ISVTX | 0o700, "mode=07700"),
            (stat.S_IFREG | 0o007, "mode=07"),
            (stat.S_IFREG, "mode=0"),
        ],
    )
    def test_formats_octal_with_special_bits(self, mode: int, expected: str) -> None:
        assert mode_keyword("x", EntryInfo(mode=mode), None) == expected

    def test_type_bits_are_excluded(self) -> None:
        """Test that file type bits never leak into the mode value."""
        assert mode_keyword("x", EntryInfo(mode=stat.S_IFSOCK | 0o755), None) == "mode=0755"


class TestTimeKeywords:
    """Test time and tar_time formatting."""

    def test_zero_time(self) -> None:
        assert time_keyword("x", EntryInfo(mode=stat.S_IFREG, mtime_ns=0), None) == "time=0.000000000"

    def test_nanosecond_precision(self) -> None:
        info = EntryInfo(mode=stat.S_IFREG, mtime_ns=1_500_000_000_123_456_789)
        assert time_keyword("x", info, None) == "time=1500000000.123456789"

    def test_pads_fraction_to_nine_digits(self) -> None:
        info = EntryInfo(mode=stat.S_IFREG, mtime_ns=1_000_000_042)
        assert time_keyword("x", info, None) == "time=1.000000042"

    def test_whole_seconds(self, regular_info) -> None:
        assert time_keyword("x", regular_info, None) == "time=1500000000.000000000"

    def test_sub_second_only(self) -> None:
        """Test a timestamp smaller than one second."""
        info = EntryInfo(mode=stat.S_IFREG, mtime_ns=5)
        assert time_keyword("x", info, None) == "time=0.000000005"

    def test_tar_time_drops_fraction(self) -> None:
        info = EntryInfo(mode=stat.S_IFREG, mtime_ns=1_500_000_000_999_999_999)
        assert tar_time_keyword("x", info, None) == "tar_time=1500000000.000000000"

    def test_tar_time_zero(self) -> None:
        assert tar_time_keyword("x", EntryInfo(mode=stat.S_IFREG), None) == "tar_time=0.000000000"


class TestLinkKeyword:
    """Test symlink target reporting."""

    def test_archive_target_without_filesystem(self) -> None:
        """Test that archive targets are used without calling readlink."""
        info = EntryInfo(mode=stat.S_IFLNK | 0o777, archive=ArchiveRecord(linkname="target.txt"))
        with patch("mtree_keywords.core.metadata.os.readlink") as readlink:
            assert link_keyword("/nonexistent/link", info, None) == "link=target.txt"
        readlink.assert_not_called()

    def test_archive_without_target_returns_empty(self) -> None:
        info = EntryInfo(mode=stat.S_IFREG | 0o644, archive=ArchiveRecord())
        assert link_keyword("f", info, None) == ""

    def test_live_symlink(self, tmp_path: Path) -> None:
        """Test that live symlinks are resolved via readlink."""
        link = tmp_path / "link"
        link.symlink_to("target.txt")
        info = EntryInfo(mode=os.lstat(link).st_mode)

        assert link_keyword(str(link), info, None) == "link=target.txt"

    def test_unreadable_symlink_raises(self, tmp_path: Path) -> None:
        """Test that an entry claiming to be a symlink must be readable."""
        info = EntryInfo(mode=stat.S_IFLNK | 0o777)
        with pytest.raises(OSError):
            link_keyword(str(tmp_path / "missing"), info, None)

    def test_regular_file_returns_empty(self, regular_info) -> None:
        assert link_keyword("f", regular_info, None) == ""


class TestOwnershipKeywords:
    """Test uid, gid, nlink and uname passthroughs."""

    def test_numeric_fields(self) -> None:
        info = EntryInfo(mode=stat.S_IFDIR | 0o755, uid=1000, gid=100, nlink=3)
        assert uid_keyword("d", info, None) == "uid=1000"
        assert gid_keyword("d", info, None) == "gid=100"
        assert nlink_keyword("d", info, None) == "nlink=3"

    def test_uname_uses_lookup(self) -> None:
        lookup = Mock(return_value="alice")
        uname_keyword = make_uname_keyword(lookup)

        assert uname_keyword("f", EntryInfo(mode=stat.S_IFREG, uid=1000), None) == "uname=alice"
        lookup.assert_called_once_with(1000)

    def test_uname_prefers_archive_owner(self) -> None:
        lookup = Mock(return_value="alice")
        info = EntryInfo(mode=stat.S_IFREG, uid=1000, archive=ArchiveRecord(uname="bob"))

        assert make_uname_keyword(lookup)("f", info, None) == "uname=bob"
        lookup.assert_not_called()

    def test_lookup_root(self) -> None:
        """Test the password database lookup for uid 0."""
        assert lookup_username(0) == "root"

    def test_lookup_failure(self) -> None:
        """Test that unknown uids raise IdentityLookupError."""
        with patch("mtree_keywords.core.metadata.pwd.getpwuid", side_effect=KeyError("uid")):
            with pytest.raises(IdentityLookupError, match="No user name for uid 4242"):
                lookup_username(4242)
