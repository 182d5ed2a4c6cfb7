"""
One-shot inspection of an ELF file on disk.

Opens the file, decodes the header and the section table, and closes the
file again. Either both structures are returned or an ElfError is raised.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from .elf.header import parse_header
from .elf.sections import parse_sections
from .elf.types import FileHeader, Section
from .errors import ElfIOError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ElfInspection:
    """Result of inspecting an ELF file."""

    path: Path
    header: FileHeader
    sections: list[Section]

    def find_section(self, name: str) -> Section | None:
        """Find the first section with the given name."""
        for section in self.sections:
            if section.name == name:
                return section
        return None


def inspect_file(path: Path) -> ElfInspection:
    """Parse the header and section table of an ELF file.

    Args:
        path: Path to ELF binary

    Returns:
        ElfInspection with the header and all sections

    Raises:
        ElfError: If the file is not a supported ELF or cannot be decoded
    """
    path = Path(path)
    logger.debug("Inspecting %s", path)
    try:
        f = open(path, "rb")
    except OSError as e:
        raise ElfIOError(f"Cannot open {path}: {e}") from e
    with f:
        header = parse_header(f)
        sections = parse_sections(f, header)
    return ElfInspection(path=path, header=header, sections=sections)
