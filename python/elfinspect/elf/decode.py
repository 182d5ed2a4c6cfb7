"""
Little-endian field decoding helpers.

Pure functions with no I/O. The fixed-width converters expect the caller
to pass a slice of exactly the right length.
"""

import struct

from ..errors import InvalidStringError


def bytes_to_u16(data: bytes | bytearray) -> int:
    """Decode a 2-byte little-endian unsigned integer."""
    return struct.unpack("<H", data)[0]


def bytes_to_u32(data: bytes | bytearray) -> int:
    """Decode a 4-byte little-endian unsigned integer."""
    return struct.unpack("<I", data)[0]


def bytes_to_u64(data: bytes | bytearray) -> int:
    """Decode an 8-byte little-endian unsigned integer."""
    return struct.unpack("<Q", data)[0]


def read_null_term_str(data: bytes | bytearray, start: int) -> str:
    """Decode the null-terminated string starting at ``start``.

    Bytes are mapped one-to-one onto characters (latin-1), so arbitrary
    non-printable names still decode.

    Args:
        data: Buffer holding the string (typically a string table payload)
        start: Offset of the first character

    Returns:
        The text up to, but not including, the first zero byte

    Raises:
        InvalidStringError: If start is outside the buffer or no terminator
            follows it. The partial decode is attached to the error.
    """
    if start < 0 or start >= len(data):
        raise InvalidStringError(
            f"String offset {start} outside buffer of {len(data)} bytes",
            offset=start,
        )

    end = data.find(b"\x00", start)
    if end == -1:
        partial = bytes(data[start:]).decode("latin-1")
        raise InvalidStringError(
            f"Unterminated string at offset {start}: {partial!r}",
            offset=start,
            partial=partial,
        )
    return bytes(data[start:end]).decode("latin-1")
