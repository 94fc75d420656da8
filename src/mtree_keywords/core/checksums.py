"""POSIX ``cksum(1)`` checksum.

CRC-32 with generator polynomial 0x04C11DB7 processed most significant bit
first from a zero register. After the data, the length of the input is fed
in as the minimum number of octets, least significant octet first, and the
final register is complemented.
"""

from typing import BinaryIO

CKSUM_POLY = 0x04C11DB7

# Read size for streaming file content
CHUNK_SIZE = 1 << 16


def _build_table(poly: int) -> tuple[int, ...]:
    table = []
    for i in range(256):
        crc = i << 24
        for _ in range(8):
            crc = ((crc << 1) ^ poly) if (crc & 0x80000000) else (crc << 1)
        table.append(crc & 0xFFFFFFFF)
    return tuple(table)


_TABLE = _build_table(CKSUM_POLY)


def _update(crc: int, data: bytes) -> int:
    table = _TABLE
    for b in data:
        crc = ((crc << 8) & 0xFFFFFFFF) ^ table[(crc >> 24) ^ b]
    return crc


def _finish(crc: int, length: int) -> int:
    n = length
    while n:
        crc = _update(crc, bytes((n & 0xFF,)))
        n >>= 8
    return ~crc & 0xFFFFFFFF


def cksum_bytes(data: bytes) -> int:
    """Return the ``cksum(1)`` value of an in-memory buffer."""
    return _finish(_update(0, data), len(data))


def cksum(stream: BinaryIO) -> tuple[int, int]:
    """Compute the ``cksum(1)`` value of a stream read to exhaustion.

    Args:
        stream: Binary stream positioned where checksumming should start

    Returns:
        Tuple of (checksum, number of bytes read)

    Raises:
        OSError: If reading the stream fails
    """
    crc = 0
    length = 0
    for chunk in iter(lambda: stream.read(CHUNK_SIZE), b""):
        crc = _update(crc, chunk)
        length += len(chunk)
    return _finish(crc, length), length
