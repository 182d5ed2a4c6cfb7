"""
ELF file header parsing.

The header is decoded sequentially from the current stream position
(expected to be offset 0). No seeking happens here.
"""

import logging
from typing import BinaryIO, Callable

from ..errors import NotElfError, UnsupportedElfError
from .decode import bytes_to_u16, bytes_to_u32, bytes_to_u64
from .stream import read_exact
from .types import (
    EI_NIDENT,
    ELF_MAGIC,
    ELFCLASS32,
    ELFCLASS64,
    ELFDATA2LSB,
    ElfIdent,
    FileHeader,
)

logger = logging.getLogger(__name__)

# Width strategy for address-sized fields, keyed by e_ident[EI_CLASS].
# Only the 64-bit layout is implemented.
ADDRESS_DECODERS: dict[int, tuple[int, Callable[[bytes], int]]] = {
    ELFCLASS64: (8, bytes_to_u64),
}


def _read_u16(source: BinaryIO, what: str) -> int:
    return bytes_to_u16(read_exact(source, 2, what))


def _read_u32(source: BinaryIO, what: str) -> int:
    return bytes_to_u32(read_exact(source, 4, what))


def parse_header(source: BinaryIO) -> FileHeader:
    """Parse the ELF file header from a binary stream.

    Args:
        source: Readable binary stream positioned at the start of the file

    Returns:
        Parsed FileHeader

    Raises:
        NotElfError: If the magic bytes do not match
        UnsupportedElfError: If the file is not 64-bit little-endian
        ElfIOError: On read failures or if the header is truncated
    """
    e_ident = read_exact(source, EI_NIDENT, "e_ident")
    ident = ElfIdent(e_ident)
    if not ident.has_valid_magic:
        raise NotElfError(
            f"Not an ELF file (bad magic {ident.magic.hex()}, "
            f"expected {ELF_MAGIC.hex()})"
        )

    address = ADDRESS_DECODERS.get(ident.elf_class)
    if address is None:
        if ident.elf_class == ELFCLASS32:
            raise UnsupportedElfError("Only 64-bit ELF supported (got ELFCLASS32)")
        raise UnsupportedElfError(f"Invalid ELF class {ident.elf_class}")
    if ident.data_encoding != ELFDATA2LSB:
        raise UnsupportedElfError(
            f"Only little-endian ELF supported (got data encoding "
            f"{ident.data_encoding})"
        )
    addr_size, decode_addr = address

    def read_addr(what: str) -> int:
        return decode_addr(read_exact(source, addr_size, what))

    e_type = _read_u16(source, "e_type")
    e_machine = _read_u16(source, "e_machine")
    e_version = _read_u32(source, "e_version")
    # Field order is fixed by the on-disk layout
    e_entry = read_addr("e_entry")
    e_phoff = read_addr("e_phoff")
    e_shoff = read_addr("e_shoff")
    e_flags = _read_u32(source, "e_flags")

    header = FileHeader(
        e_ident=e_ident,
        e_type=e_type,
        e_machine=e_machine,
        e_version=e_version,
        e_entry=e_entry,
        e_phoff=e_phoff,
        e_shoff=e_shoff,
        e_flags=e_flags,
        e_ehsize=_read_u16(source, "e_ehsize"),
        e_phentsize=_read_u16(source, "e_phentsize"),
        e_phnum=_read_u16(source, "e_phnum"),
        e_shentsize=_read_u16(source, "e_shentsize"),
        e_shnum=_read_u16(source, "e_shnum"),
        e_shstrndx=_read_u16(source, "e_shstrndx"),
    )
    logger.debug(
        "ELF header: type=%s machine=%d shoff=0x%x shentsize=%d shnum=%d shstrndx=%d",
        header.file_type.name,
        header.e_machine,
        header.e_shoff,
        header.e_shentsize,
        header.e_shnum,
        header.e_shstrndx,
    )
    return header
