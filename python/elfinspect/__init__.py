"""
elfinspect: Read-only decoder for 64-bit little-endian ELF object files.

Exposes the ELF file header and section table (with resolved names and raw
payloads) as typed, immutable records:

    from elfinspect import parse_header, parse_sections

    with open(path, "rb") as f:
        header = parse_header(f)
        sections = parse_sections(f, header)

Or, for a file on disk:

    from elfinspect import inspect_file

    inspection = inspect_file(path)
    text = inspection.find_section(".text")
"""

from .errors import (
    ElfError,
    NotElfError,
    ElfIOError,
    UnsupportedElfError,
    InvalidStringTableError,
    SectionIndexError,
    TruncatedSectionError,
    InvalidStringError,
)
from .elf import (
    parse_header,
    parse_sections,
    FileHeader,
    FileType,
    Section,
    SectionHeader,
    SectionType,
)
from .format_detect import read_ident, detect_elf_class, is_elf_binary
from .inspection import ElfInspection, inspect_file

__all__ = [
    # Parsers
    "parse_header",
    "parse_sections",
    "inspect_file",
    "ElfInspection",
    # Structs
    "FileHeader",
    "FileType",
    "Section",
    "SectionHeader",
    "SectionType",
    # Format detection
    "read_ident",
    "detect_elf_class",
    "is_elf_binary",
    # Errors
    "ElfError",
    "NotElfError",
    "ElfIOError",
    "UnsupportedElfError",
    "InvalidStringTableError",
    "SectionIndexError",
    "TruncatedSectionError",
    "InvalidStringError",
]
