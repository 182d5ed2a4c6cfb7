#!/usr/bin/env python3
"""
ELF inspection CLI tool.

Prints the file header and section table of a 64-bit little-endian ELF.

Usage:
    python -m elfinspect.tools.read_elf <binary> [--headers] [--sections] [--verbose]
"""

import argparse
import logging
import sys
from pathlib import Path

from elfinspect.describe import format_file_header, format_section
from elfinspect.errors import ElfError
from elfinspect.inspection import ElfInspection, inspect_file


def print_inspection(
    inspection: ElfInspection, *, headers: bool = True, sections: bool = True
) -> None:
    """Print the requested parts of an inspection to stdout."""
    if headers:
        print("ELF Header:")
        print(format_file_header(inspection.header))
    if sections:
        if headers:
            print()
        print(f"Sections ({len(inspection.sections)}):")
        for section in inspection.sections:
            print(format_section(section))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Display the file header and sections of an ELF binary"
    )
    parser.add_argument("binary", type=Path, help="Path to ELF binary to inspect")
    parser.add_argument(
        "--headers", "-H", action="store_true", help="Only show the file header"
    )
    parser.add_argument(
        "--sections", "-S", action="store_true", help="Only show the section table"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging from the decoder",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.binary.exists():
        print(f"Error: {args.binary} does not exist", file=sys.stderr)
        return 1

    try:
        inspection = inspect_file(args.binary)
    except ElfError as e:
        print(f"Error: {args.binary}: {e}", file=sys.stderr)
        return 1

    # Neither flag means show everything
    show_all = not (args.headers or args.sections)
    print_inspection(
        inspection,
        headers=show_all or args.headers,
        sections=show_all or args.sections,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
