"""
ELF identification sniffing.

Cheap checks on the first 16 bytes of a file, without decoding the full
header. Useful to filter candidate files before a full inspection.
"""

from pathlib import Path

from .elf.types import EI_NIDENT, ELF_MAGIC, ElfIdent
from .errors import NotElfError


def read_ident(path: Path) -> ElfIdent:
    """Read and validate the ELF identification bytes of a file.

    Args:
        path: Path to binary file

    Returns:
        ElfIdent for the file

    Raises:
        NotElfError: If the file is too small or lacks the ELF magic
        FileNotFoundError: If the file doesn't exist
    """
    with open(path, "rb") as f:
        raw = f.read(EI_NIDENT)

    if len(raw) < EI_NIDENT:
        raise NotElfError(f"File too small to be an ELF binary: {path}")

    ident = ElfIdent(raw)
    if ident.magic != ELF_MAGIC:
        raise NotElfError(f"Not an ELF file: {path}")
    return ident


def detect_elf_class(path: Path) -> int:
    """Return the address class (ELFCLASS32/ELFCLASS64) of an ELF file."""
    return read_ident(path).elf_class


def is_elf_binary(path: Path) -> bool:
    """Check if a file is ELF format.

    Args:
        path: Path to binary file

    Returns:
        True if ELF, False otherwise
    """
    try:
        read_ident(path)
        return True
    except (NotElfError, OSError):
        return False
