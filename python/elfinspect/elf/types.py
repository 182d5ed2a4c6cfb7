"""
ELF type definitions for 64-bit little-endian ELF.

Raw integer fields keep the names used by the ELF specification (e_*,
sh_*) so they can be cross-referenced against readelf output. Enumerated
views of those fields are derived properties; unrecognised codes map to
an UNKNOWN member while the raw value stays on the record.

All records are frozen. Parsers build new instances (dataclasses.replace)
rather than mutating existing ones.
"""

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

# =============================================================================
# Constants
# =============================================================================

ELF_MAGIC = b"\x7fELF"

# e_ident layout
EI_NIDENT = 16
EI_CLASS = 4
EI_DATA = 5
EI_VERSION = 6
EI_OSABI = 7
EI_ABIVERSION = 8

# Address class (e_ident[EI_CLASS])
ELFCLASSNONE = 0
ELFCLASS32 = 1
ELFCLASS64 = 2

# Data encoding (e_ident[EI_DATA])
ELFDATANONE = 0
ELFDATA2LSB = 1
ELFDATA2MSB = 2

# ELF header offsets (for direct byte access)
E_IDENT_OFFSET = 0
E_TYPE_OFFSET = 16
E_MACHINE_OFFSET = 18
E_VERSION_OFFSET = 20
E_ENTRY_OFFSET = 24
E_PHOFF_OFFSET = 32
E_SHOFF_OFFSET = 40
E_FLAGS_OFFSET = 48
E_EHSIZE_OFFSET = 52
E_PHENTSIZE_OFFSET = 54
E_PHNUM_OFFSET = 56
E_SHENTSIZE_OFFSET = 58
E_SHNUM_OFFSET = 60
E_SHSTRNDX_OFFSET = 62

ELF64_EHDR_SIZE = 64
ELF64_SHDR_SIZE = 64

SHN_UNDEF = 0

# ELF type (e_type)
ET_NONE = 0
ET_REL = 1
ET_EXEC = 2
ET_DYN = 3  # Shared object (or PIE executable)
ET_CORE = 4

# Section header types (sh_type)
SHT_NULL = 0
SHT_PROGBITS = 1
SHT_SYMTAB = 2
SHT_STRTAB = 3
SHT_RELA = 4
SHT_HASH = 5
SHT_DYNAMIC = 6
SHT_NOTE = 7
SHT_NOBITS = 8
SHT_REL = 9

# Section flags (sh_flags)
SHF_WRITE = 0x1
SHF_ALLOC = 0x2
SHF_EXECINSTR = 0x4


# =============================================================================
# Enumerations
# =============================================================================


class FileType(IntEnum):
    """Object file type (e_type)."""

    NONE = ET_NONE
    RELOCATABLE = ET_REL
    EXECUTABLE = ET_EXEC
    SHARED_OBJECT = ET_DYN
    CORE = ET_CORE
    UNKNOWN = -1

    @classmethod
    def from_raw(cls, raw: int) -> "FileType":
        """Map a raw e_type, falling back to UNKNOWN."""
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN


class SectionType(IntEnum):
    """Section type (sh_type)."""

    UNUSED = SHT_NULL
    PROGRAM_DATA = SHT_PROGBITS
    SYMBOL_TABLE = SHT_SYMTAB
    STRING_TABLE = SHT_STRTAB
    RELA = SHT_RELA
    HASH = SHT_HASH
    DYNAMIC = SHT_DYNAMIC
    NOTES = SHT_NOTE
    NOBITS = SHT_NOBITS
    REL = SHT_REL
    UNKNOWN = -1

    @classmethod
    def from_raw(cls, raw: int) -> "SectionType":
        """Map a raw sh_type, falling back to UNKNOWN."""
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN


# =============================================================================
# ELF Structures
# =============================================================================


@dataclass(frozen=True)
class ElfIdent:
    """The 16 identification bytes at the start of every ELF file."""

    raw: bytes

    @property
    def magic(self) -> bytes:
        return self.raw[:4]

    @property
    def has_valid_magic(self) -> bool:
        return self.magic == ELF_MAGIC

    @property
    def elf_class(self) -> int:
        """Address class (ELFCLASS*)."""
        return self.raw[EI_CLASS]

    @property
    def data_encoding(self) -> int:
        """Byte order (ELFDATA*)."""
        return self.raw[EI_DATA]

    @property
    def ident_version(self) -> int:
        return self.raw[EI_VERSION]

    @property
    def os_abi(self) -> int:
        return self.raw[EI_OSABI]

    @property
    def abi_version(self) -> int:
        return self.raw[EI_ABIVERSION]


@dataclass(frozen=True)
class FileHeader:
    """ELF64 file header (Elf64_Ehdr)."""

    e_ident: bytes  # 16 bytes: magic, class, endianness, version, OS/ABI, padding
    e_type: int  # Object file type (ET_*)
    e_machine: int  # Architecture (EM_*)
    e_version: int  # ELF version
    e_entry: int  # Entry point virtual address
    e_phoff: int  # Program header table file offset
    e_shoff: int  # Section header table file offset
    e_flags: int  # Processor-specific flags
    e_ehsize: int  # ELF header size
    e_phentsize: int  # Program header entry size
    e_phnum: int  # Number of program headers
    e_shentsize: int  # Section header entry size
    e_shnum: int  # Number of section headers
    e_shstrndx: int  # Section name string table index

    # Struct format for writing (little-endian)
    STRUCT_FMT: ClassVar[str] = "<16sHHIQQQIHHHHHH"

    def to_bytes(self) -> bytes:
        """Serialize ELF header to binary data."""
        return struct.pack(
            self.STRUCT_FMT,
            self.e_ident,
            self.e_type,
            self.e_machine,
            self.e_version,
            self.e_entry,
            self.e_phoff,
            self.e_shoff,
            self.e_flags,
            self.e_ehsize,
            self.e_phentsize,
            self.e_phnum,
            self.e_shentsize,
            self.e_shnum,
            self.e_shstrndx,
        )

    @property
    def ident(self) -> ElfIdent:
        return ElfIdent(self.e_ident)

    @property
    def magic(self) -> bytes:
        return self.e_ident[:4]

    @property
    def file_type(self) -> FileType:
        return FileType.from_raw(self.e_type)

    @property
    def raw_file_type(self) -> int:
        return self.e_type


@dataclass(frozen=True)
class SectionHeader:
    """ELF64 section header (Elf64_Shdr).

    ``source_position`` is where this entry was read from and ``name`` is
    the resolved section name; neither is part of the on-disk record.
    """

    sh_name: int  # Offset into section name string table
    sh_type: int  # Section type (SHT_*)
    sh_flags: int  # Section flags (SHF_*)
    sh_addr: int  # Virtual address (if SHF_ALLOC set)
    sh_offset: int  # File offset
    sh_size: int  # Section size
    sh_link: int = 0  # Link to another section (section-type dependent)
    sh_info: int = 0  # Additional info (section-type dependent)
    sh_addralign: int = 0  # Alignment (power of 2, 0 or 1 means none)
    sh_entsize: int = 0  # Entry size if section holds table
    source_position: int = 0
    name: str = ""

    # Struct format for writing (little-endian)
    STRUCT_FMT: ClassVar[str] = "<IIQQQQIIQQ"

    def to_bytes(self) -> bytes:
        """Serialize section header to binary data."""
        return struct.pack(
            self.STRUCT_FMT,
            self.sh_name,
            self.sh_type,
            self.sh_flags,
            self.sh_addr,
            self.sh_offset,
            self.sh_size,
            self.sh_link,
            self.sh_info,
            self.sh_addralign,
            self.sh_entsize,
        )

    @property
    def section_type(self) -> SectionType:
        return SectionType.from_raw(self.sh_type)

    @property
    def raw_section_type(self) -> int:
        return self.sh_type

    @property
    def end_offset(self) -> int:
        """File offset of end of section content."""
        return self.sh_offset + self.sh_size

    @property
    def end_addr(self) -> int:
        """Virtual address of end of section."""
        return self.sh_addr + self.sh_size

    @property
    def is_write(self) -> bool:
        return bool(self.sh_flags & SHF_WRITE)

    @property
    def is_alloc(self) -> bool:
        """Check if this section occupies memory at runtime."""
        return bool(self.sh_flags & SHF_ALLOC)

    @property
    def is_exec(self) -> bool:
        return bool(self.sh_flags & SHF_EXECINSTR)

    @property
    def is_nobits(self) -> bool:
        """Check if this section has no file content (like BSS)."""
        return self.sh_type == SHT_NOBITS


@dataclass(frozen=True)
class Section:
    """A section header together with its file payload."""

    index: int
    header: SectionHeader
    data: bytes

    @property
    def name(self) -> str:
        return self.header.name

    @property
    def size(self) -> int:
        """Declared size (memory footprint for NOBITS sections)."""
        return self.header.sh_size
