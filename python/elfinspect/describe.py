"""
Human-readable rendering of parsed ELF structures.

Used by the readelf-style CLI. Nothing here touches the file; it only
formats records produced by the parsers.
"""

from .elf.types import FileHeader, FileType, Section, SectionHeader, SectionType

_FILE_TYPE_NAMES: dict[FileType, str] = {
    FileType.NONE: "No file type",
    FileType.RELOCATABLE: "Relocatable File",
    FileType.EXECUTABLE: "Executable File",
    FileType.SHARED_OBJECT: "Shared Object File",
    FileType.CORE: "Core file",
}

_SECTION_TYPE_NAMES: dict[SectionType, str] = {
    SectionType.UNUSED: "Unused",
    SectionType.PROGRAM_DATA: "Program Data",
    SectionType.SYMBOL_TABLE: "Linker Symbol Table",
    SectionType.STRING_TABLE: "String Table",
    SectionType.RELA: "Relocation (RELA)",
    SectionType.HASH: "Symbol Hash Table",
    SectionType.DYNAMIC: "Dynamic Linking Table",
    SectionType.NOTES: "Notes",
    SectionType.NOBITS: "No Space",
    SectionType.REL: "Relocation (REL)",
}


def describe_file_type(header: FileHeader) -> str:
    """Describe e_type, including the raw value when it is not recognised."""
    name = _FILE_TYPE_NAMES.get(header.file_type)
    if name is None:
        return f"Unknown/Unsupported Type (0x{header.raw_file_type:x})"
    return name


def describe_section_type(shdr: SectionHeader) -> str:
    """Describe sh_type, including the raw value when it is not recognised."""
    name = _SECTION_TYPE_NAMES.get(shdr.section_type)
    if name is None:
        return f"Unknown Type (0x{shdr.raw_section_type:x})"
    return name


def describe_flags(shdr: SectionHeader) -> str:
    """Render the X/A/W flag bits as e.g. ``[-AW]``."""
    return "[{}{}{}]".format(
        "X" if shdr.is_exec else "-",
        "A" if shdr.is_alloc else "-",
        "W" if shdr.is_write else "-",
    )


def format_file_header(header: FileHeader) -> str:
    """Format the file header as an aligned two-column listing."""
    rows = [
        ("Magic Bits", " ".join(f"{b:02x}" for b in header.e_ident)),
        ("File Type", describe_file_type(header)),
        ("Machine", str(header.e_machine)),
        ("Version", str(header.e_version)),
        ("Entry Address", f"0x{header.e_entry:x}"),
        ("Start of Program Headers", str(header.e_phoff)),
        ("Start of Section Headers", str(header.e_shoff)),
        ("CPU Flags", f"0x{header.e_flags:x}"),
        ("ELF Header Size", str(header.e_ehsize)),
        ("Prog Header Size", str(header.e_phentsize)),
        ("Num Prog Headers", str(header.e_phnum)),
        ("Sect Header Size", str(header.e_shentsize)),
        ("Num Sect Headers", str(header.e_shnum)),
        ("String Table Index", str(header.e_shstrndx)),
    ]
    width = max(len(label) for label, _ in rows) + 2
    return "\n".join(f"{label + ':':<{width}} {value}" for label, value in rows)


def format_section(section: Section) -> str:
    """Format one section as a two-line summary."""
    shdr = section.header
    return (
        f"[{section.index:2}] name: {shdr.name:25} "
        f"type: {describe_section_type(shdr):22} flags: {describe_flags(shdr)}\n"
        f"     address: {shdr.sh_addr:<18x} offset: {shdr.sh_offset:<18x} "
        f"size: {shdr.sh_size:x}"
    )
