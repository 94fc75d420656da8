"""Shared fixtures for keyword extraction tests."""

import io
import stat

import pytest

from mtree_keywords.core.types import EntryInfo


class FailingStream(io.RawIOBase):
    """Stream whose reads always fail, simulating an I/O error."""

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        raise OSError("simulated read failure")


@pytest.fixture
def hello() -> bytes:
    return b"hello world\n"


@pytest.fixture
def failing_stream() -> FailingStream:
    return FailingStream()


@pytest.fixture
def regular_info(hello: bytes) -> EntryInfo:
    """Metadata for a 12-byte regular file with mode 0644."""
    return EntryInfo(mode=stat.S_IFREG | 0o644, size=len(hello), mtime_ns=1_500_000_000_000_000_000)


@pytest.fixture
def dir_info() -> EntryInfo:
    """Metadata for a directory with mode 0755."""
    return EntryInfo(mode=stat.S_IFDIR | 0o755, size=4096, nlink=2)


@pytest.fixture
def hello_stream(hello: bytes) -> io.BytesIO:
    return io.BytesIO(hello)
