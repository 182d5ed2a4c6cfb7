"""Exact-size reads and seeks over a caller-owned binary stream."""

import io
from typing import BinaryIO

from ..errors import ElfIOError


def read_exact(source: BinaryIO, size: int, what: str) -> bytes:
    """Read exactly ``size`` bytes or raise ElfIOError.

    Args:
        source: Readable binary stream
        size: Number of bytes required
        what: Field description used in the error message

    Raises:
        ElfIOError: On an OSError from the stream or a short read
    """
    try:
        data = source.read(size)
    except OSError as e:
        raise ElfIOError(f"Failed to read {what}: {e}") from e
    if data is None or len(data) != size:
        got = 0 if data is None else len(data)
        raise ElfIOError(f"Short read for {what}: expected {size} bytes, got {got}")
    return data


def seek_to(source: BinaryIO, offset: int, what: str) -> None:
    """Seek to an absolute offset, wrapping failures in ElfIOError."""
    try:
        source.seek(offset)
    except (OSError, ValueError, OverflowError) as e:
        raise ElfIOError(f"Failed to seek to {what} at 0x{offset:x}: {e}") from e


def stream_length(source: BinaryIO) -> int:
    """Return the total length of a seekable stream.

    The current position is restored before returning.
    """
    try:
        position = source.tell()
        length = source.seek(0, io.SEEK_END)
        source.seek(position)
    except (OSError, ValueError) as e:
        raise ElfIOError(f"Failed to determine stream length: {e}") from e
    return length
