"""
Section table parsing.

Decoding happens in three passes, each depending on the previous one:

1. Seek to every slot of the section header table and decode the entry.
2. Read each section's payload from its own file offset. NOBITS sections
   occupy no file space and get an empty payload without touching the
   stream.
3. Validate that e_shstrndx designates an SHT_STRTAB section, then resolve
   every section name (including the string table's own) from it.

Any failure aborts the whole call; callers never see a partial table.
"""

import dataclasses
import logging
from typing import BinaryIO

from ..errors import (
    ElfIOError,
    InvalidStringTableError,
    SectionIndexError,
    TruncatedSectionError,
    UnsupportedElfError,
)
from .decode import bytes_to_u32, bytes_to_u64, read_null_term_str
from .stream import read_exact, seek_to, stream_length
from .types import (
    ELF64_SHDR_SIZE,
    FileHeader,
    Section,
    SectionHeader,
    SectionType,
)

logger = logging.getLogger(__name__)


def decode_section_header(record: bytes, source_position: int = 0) -> SectionHeader:
    """Decode one 64-byte Elf64_Shdr record."""
    return SectionHeader(
        sh_name=bytes_to_u32(record[0:4]),
        sh_type=bytes_to_u32(record[4:8]),
        sh_flags=bytes_to_u64(record[8:16]),
        sh_addr=bytes_to_u64(record[16:24]),
        sh_offset=bytes_to_u64(record[24:32]),
        sh_size=bytes_to_u64(record[32:40]),
        sh_link=bytes_to_u32(record[40:44]),
        sh_info=bytes_to_u32(record[44:48]),
        sh_addralign=bytes_to_u64(record[48:56]),
        sh_entsize=bytes_to_u64(record[56:64]),
        source_position=source_position,
    )


def read_section_headers(source: BinaryIO, header: FileHeader) -> list[SectionHeader]:
    """Read all section header entries in table order."""
    if header.e_shnum and header.e_shentsize < ELF64_SHDR_SIZE:
        raise UnsupportedElfError(
            f"Section header entry size {header.e_shentsize} is smaller than "
            f"Elf64_Shdr ({ELF64_SHDR_SIZE} bytes)"
        )
    entries = []
    for i in range(header.e_shnum):
        position = header.e_shoff + i * header.e_shentsize
        seek_to(source, position, f"section header {i}")
        record = read_exact(source, ELF64_SHDR_SIZE, f"section header {i}")
        entries.append(decode_section_header(record, position))
    return entries


def read_section_data(
    source: BinaryIO, index: int, shdr: SectionHeader, length: int | None = None
) -> bytes:
    """Read a section's file payload.

    The declared extent is checked against the stream length first, so an
    sh_size larger than the file is never passed to read().

    Args:
        source: Seekable binary stream
        index: Section table index (for error messages)
        shdr: Header of the section to read
        length: Stream length, if already known

    Raises:
        TruncatedSectionError: If fewer than sh_size bytes are available
        ElfIOError: If the stream itself fails
    """
    if shdr.is_nobits:
        return b""

    if length is None:
        length = stream_length(source)
    if shdr.end_offset > length:
        raise TruncatedSectionError(
            index, expected=shdr.sh_size, actual=max(0, length - shdr.sh_offset)
        )

    seek_to(source, shdr.sh_offset, f"section {index} data")
    try:
        data = source.read(shdr.sh_size)
    except OSError as e:
        raise ElfIOError(f"Failed to read section {index} data: {e}") from e
    if data is None or len(data) != shdr.sh_size:
        raise TruncatedSectionError(
            index, expected=shdr.sh_size, actual=0 if data is None else len(data)
        )
    return data


def get_string_table(sections: list[Section], index: int) -> bytes:
    """Return the payload of the section-name string table.

    Raises:
        SectionIndexError: If index is outside the section table
        InvalidStringTableError: If the section is not SHT_STRTAB
    """
    if not 0 <= index < len(sections):
        raise SectionIndexError(
            f"String table index {index} out of range for {len(sections)} sections"
        )
    strtab = sections[index]
    if strtab.header.section_type != SectionType.STRING_TABLE:
        raise InvalidStringTableError(
            f"Section {index} is not a string table "
            f"(sh_type={strtab.header.sh_type})"
        )
    # Names are resolved from a snapshot taken before any section is renamed,
    # including the string table itself.
    return bytes(strtab.data)


def parse_sections(source: BinaryIO, header: FileHeader) -> list[Section]:
    """Parse the section table, payloads and names.

    Args:
        source: Seekable binary stream of the whole file
        header: File header previously returned by parse_header()

    Returns:
        Sections in table order, exactly header.e_shnum of them

    Raises:
        ElfIOError: On read/seek failures or truncated header entries
        UnsupportedElfError: If e_shentsize is smaller than Elf64_Shdr
        TruncatedSectionError: If a section payload is short
        SectionIndexError: If e_shstrndx is out of range
        InvalidStringTableError: If e_shstrndx is not a string table
        InvalidStringError: If a name offset is outside the string table
    """
    if header.e_shnum == 0:
        logger.debug("No section header table")
        return []

    length = stream_length(source)
    sections = []
    for index, shdr in enumerate(read_section_headers(source, header)):
        data = read_section_data(source, index, shdr, length)
        sections.append(Section(index=index, header=shdr, data=data))

    strtab = get_string_table(sections, header.e_shstrndx)

    resolved = []
    for section in sections:
        name = read_null_term_str(strtab, section.header.sh_name)
        resolved.append(
            dataclasses.replace(
                section, header=dataclasses.replace(section.header, name=name)
            )
        )
        logger.debug(
            "Section %d: %r type=%s offset=0x%x size=0x%x",
            section.index,
            name,
            section.header.section_type.name,
            section.header.sh_offset,
            section.header.sh_size,
        )
    return resolved
