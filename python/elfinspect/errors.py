"""
Error types raised by the ELF decoder.

Every decoder failure is fatal for the current call. Callers catch
ElfError to handle all of them uniformly, or a specific subclass when
they care about the reason.
"""


class ElfError(Exception):
    """Base class for all ELF decoding errors."""

    pass


class NotElfError(ElfError):
    """Raised when the identification bytes do not start with the ELF magic."""

    pass


class ElfIOError(ElfError):
    """Raised when reading or seeking the byte source fails.

    Short reads are reported here too. When the failure came from the
    underlying stream, the original OSError is chained as __cause__.
    """

    pass


class UnsupportedElfError(ElfError):
    """Raised for ELF files outside the supported 64-bit little-endian layout."""

    pass


class InvalidStringTableError(ElfError):
    """Raised when the section named by e_shstrndx is not SHT_STRTAB."""

    pass


class SectionIndexError(ElfError, IndexError):
    """Raised when a section index points outside the section table."""

    pass


class TruncatedSectionError(ElfError):
    """Raised when a section's payload is shorter than its declared size."""

    def __init__(self, index: int, expected: int, actual: int):
        self.index = index
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Section {index} truncated: expected {expected} bytes, read {actual}"
        )


class InvalidStringError(ElfError):
    """Raised when a null-terminated string cannot be decoded.

    Attributes:
        offset: Start offset that was requested
        partial: Whatever was decoded before the buffer ran out (may be empty)
    """

    def __init__(self, message: str, offset: int, partial: str = ""):
        self.offset = offset
        self.partial = partial
        super().__init__(message)
