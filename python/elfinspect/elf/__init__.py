"""
ELF decoding package for elfinspect.

- decode: little-endian integer and null-terminated string helpers
- types: ELF constants, enums and record dataclasses
- header: parse_header() for the fixed-size file header
- sections: parse_sections() for the section table, payloads and names
"""

from .decode import (
    bytes_to_u16,
    bytes_to_u32,
    bytes_to_u64,
    read_null_term_str,
)
from .header import parse_header
from .sections import parse_sections
from .types import (
    ElfIdent,
    FileHeader,
    FileType,
    Section,
    SectionHeader,
    SectionType,
    # Constants
    ELF_MAGIC,
    ELFCLASS32,
    ELFCLASS64,
    ELFDATA2LSB,
    ELFDATA2MSB,
    ELF64_EHDR_SIZE,
    ELF64_SHDR_SIZE,
    # ELF types
    ET_NONE,
    ET_REL,
    ET_EXEC,
    ET_DYN,
    ET_CORE,
    # Section header types
    SHT_NULL,
    SHT_PROGBITS,
    SHT_SYMTAB,
    SHT_STRTAB,
    SHT_RELA,
    SHT_HASH,
    SHT_DYNAMIC,
    SHT_NOTE,
    SHT_NOBITS,
    SHT_REL,
    # Section flags
    SHF_WRITE,
    SHF_ALLOC,
    SHF_EXECINSTR,
)

__all__ = [
    # Parsers
    "parse_header",
    "parse_sections",
    # Decoding helpers
    "bytes_to_u16",
    "bytes_to_u32",
    "bytes_to_u64",
    "read_null_term_str",
    # Structs
    "ElfIdent",
    "FileHeader",
    "FileType",
    "Section",
    "SectionHeader",
    "SectionType",
    # Constants
    "ELF_MAGIC",
    "ELFCLASS32",
    "ELFCLASS64",
    "ELFDATA2LSB",
    "ELFDATA2MSB",
    "ELF64_EHDR_SIZE",
    "ELF64_SHDR_SIZE",
    # ELF types
    "ET_NONE",
    "ET_REL",
    "ET_EXEC",
    "ET_DYN",
    "ET_CORE",
    # Section header types
    "SHT_NULL",
    "SHT_PROGBITS",
    "SHT_SYMTAB",
    "SHT_STRTAB",
    "SHT_RELA",
    "SHT_HASH",
    "SHT_DYNAMIC",
    "SHT_NOTE",
    "SHT_NOBITS",
    "SHT_REL",
    # Section flags
    "SHF_WRITE",
    "SHF_ALLOC",
    "SHF_EXECINSTR",
]
