"""Tests for section table parsing.

All inputs are synthetic images from elf_test_utils so each test controls
the exact table layout.
"""

import io
import struct

import pytest

from elf_test_utils import (
    FailingStream,
    RecordingStream,
    ShortReadStream,
    SyntheticSection,
    build_elf,
    minimal_elf,
)
from elfinspect import inspect_file
from elfinspect.elf.header import parse_header
from elfinspect.elf.sections import decode_section_header, parse_sections
from elfinspect.elf.types import (
    E_SHENTSIZE_OFFSET,
    SHF_ALLOC,
    SHF_EXECINSTR,
    SHF_WRITE,
    SHT_NOBITS,
    SHT_PROGBITS,
    SHT_STRTAB,
    SectionHeader,
    SectionType,
)
from elfinspect.errors import (
    ElfIOError,
    InvalidStringError,
    InvalidStringTableError,
    SectionIndexError,
    TruncatedSectionError,
    UnsupportedElfError,
)

# "\0.bss\0.text\0.shstrtab\0"
#   0  1    5 6    11 12       21
STRTAB = b"\x00.bss\x00.text\x00.shstrtab\x00"
BSS_NAME = 1
TEXT_NAME = 6
SHSTRTAB_NAME = 12


def _parse(image: bytes, stream: io.BytesIO | None = None):
    stream = io.BytesIO(image) if stream is None else stream
    header = parse_header(stream)
    return header, parse_sections(stream, header)


def _three_section_image(**overrides) -> bytes:
    """NULL, .text, .bss (NOBITS) and .shstrtab at index 3."""
    sections = [
        SyntheticSection(sh_name=0, sh_type=0),
        SyntheticSection(
            sh_name=TEXT_NAME,
            sh_type=SHT_PROGBITS,
            data=b"\x90" * 16,
            sh_flags=SHF_ALLOC | SHF_EXECINSTR,
            sh_addr=0x401000,
            sh_addralign=16,
        ),
        SyntheticSection(
            sh_name=BSS_NAME,
            sh_type=SHT_NOBITS,
            sh_flags=SHF_ALLOC | SHF_WRITE,
            sh_addr=0x402000,
            sh_size=0x10000,
            sh_offset=0x7FFFFFFF,
        ),
        SyntheticSection(sh_name=SHSTRTAB_NAME, sh_type=SHT_STRTAB, data=STRTAB),
    ]
    options = {"shstrndx": 3}
    options.update(overrides)
    return build_elf(sections, **options)


class TestParseSections:
    """Tests for parse_sections() on well-formed input."""

    def test_minimal_elf_names(self):
        """String table at index 0 names itself "" and PROGBITS "main"."""
        _, sections = _parse(minimal_elf())

        assert len(sections) == 2
        assert [s.name for s in sections] == ["", "main"]
        assert [s.index for s in sections] == [0, 1]
        assert sections[0].header.section_type is SectionType.STRING_TABLE
        assert sections[1].header.section_type is SectionType.PROGRAM_DATA
        assert sections[0].data == b"\x00main\x00"
        assert sections[1].data == b"\x55\x48\x89\xe5\xc3"

    def test_count_matches_header(self):
        header, sections = _parse(_three_section_image())
        assert len(sections) == header.e_shnum == 4

    def test_table_order_and_names(self):
        _, sections = _parse(_three_section_image())
        assert [s.name for s in sections] == ["", ".text", ".bss", ".shstrtab"]

    def test_string_table_names_itself(self):
        _, sections = _parse(_three_section_image())
        assert sections[3].name == ".shstrtab"
        assert sections[3].data == STRTAB

    def test_data_length_matches_size(self):
        _, sections = _parse(_three_section_image())
        for section in sections:
            if section.header.section_type is not SectionType.NOBITS:
                assert len(section.data) == section.header.sh_size

    def test_nobits_has_empty_data(self):
        """NOBITS keeps its declared size but never reads the file."""
        image = _three_section_image()
        stream = RecordingStream(image)
        _, sections = _parse(image, stream)

        bss = sections[2]
        assert bss.data == b""
        assert bss.size == 0x10000
        assert bss.header.is_nobits
        assert all(offset != 0x7FFFFFFF for offset, _ in stream.reads)

    def test_header_fields(self):
        _, sections = _parse(_three_section_image())
        text = sections[1].header
        assert text.sh_addr == 0x401000
        assert text.sh_flags == SHF_ALLOC | SHF_EXECINSTR
        assert text.sh_addralign == 16
        assert text.sh_offset == 64

    def test_auxiliary_fields_decoded(self):
        image = build_elf(
            [
                SyntheticSection(sh_name=0, sh_type=SHT_STRTAB, data=b"\x00"),
                SyntheticSection(
                    sh_name=0,
                    sh_type=SHT_PROGBITS,
                    sh_link=3,
                    sh_info=7,
                    sh_addralign=8,
                    sh_entsize=24,
                ),
            ]
        )
        _, sections = _parse(image)
        shdr = sections[1].header
        assert (shdr.sh_link, shdr.sh_info, shdr.sh_addralign, shdr.sh_entsize) == (
            3,
            7,
            8,
            24,
        )

    def test_source_position_recorded(self):
        header, sections = _parse(_three_section_image())
        for i, section in enumerate(sections):
            assert section.header.source_position == header.e_shoff + i * 64

    def test_padded_entries_use_shentsize(self):
        """Entries are located by e_shentsize, not the struct size."""
        header, sections = _parse(_three_section_image(shentsize=80))
        assert header.e_shentsize == 80
        assert [s.name for s in sections] == ["", ".text", ".bss", ".shstrtab"]
        assert sections[2].header.source_position == header.e_shoff + 160

    def test_unknown_section_type_keeps_raw(self):
        image = build_elf(
            [
                SyntheticSection(sh_name=0, sh_type=SHT_STRTAB, data=b"\x00"),
                SyntheticSection(sh_name=0, sh_type=11, data=b"\x00" * 24),
            ]
        )
        _, sections = _parse(image)
        assert sections[1].header.section_type is SectionType.UNKNOWN
        assert sections[1].header.raw_section_type == 11
        assert len(sections[1].data) == 24

    def test_no_section_table(self):
        header, sections = _parse(build_elf([]))
        assert header.e_shnum == 0
        assert sections == []

    def test_decode_section_header_roundtrip(self):
        shdr = SectionHeader(
            sh_name=5,
            sh_type=SHT_PROGBITS,
            sh_flags=0x6,
            sh_addr=0x1000,
            sh_offset=0x200,
            sh_size=0x30,
            sh_link=1,
            sh_info=2,
            sh_addralign=16,
            sh_entsize=0,
        )
        assert decode_section_header(shdr.to_bytes()) == shdr


class TestParseSectionsErrors:
    """Tests for parse_sections() failure modes."""

    def test_wrong_string_table_type(self):
        image = build_elf(
            [
                SyntheticSection(sh_name=0, sh_type=SHT_STRTAB, data=b"\x00main\x00"),
                SyntheticSection(sh_name=1, sh_type=SHT_PROGBITS, data=b"\x00" * 4),
            ],
            shstrndx=1,
        )
        with pytest.raises(InvalidStringTableError, match="not a string table"):
            _parse(image)

    def test_nobits_string_table_rejected(self):
        image = build_elf(
            [SyntheticSection(sh_name=0, sh_type=SHT_NOBITS, sh_size=16)],
            shstrndx=0,
        )
        with pytest.raises(InvalidStringTableError):
            _parse(image)

    def test_string_table_index_out_of_range(self):
        with pytest.raises(SectionIndexError, match="out of range") as exc_info:
            _parse(_three_section_image(shstrndx=9))
        assert isinstance(exc_info.value, IndexError)

    def test_name_offset_past_string_table(self):
        image = build_elf(
            [
                SyntheticSection(sh_name=0, sh_type=SHT_STRTAB, data=b"\x00main\x00"),
                SyntheticSection(sh_name=50, sh_type=SHT_PROGBITS),
            ]
        )
        with pytest.raises(InvalidStringError) as exc_info:
            _parse(image)
        assert exc_info.value.offset == 50

    def test_unterminated_name(self):
        image = build_elf(
            [
                SyntheticSection(sh_name=0, sh_type=SHT_STRTAB, data=b"\x00abc"),
                SyntheticSection(sh_name=1, sh_type=SHT_PROGBITS),
            ]
        )
        with pytest.raises(InvalidStringError) as exc_info:
            _parse(image)
        assert exc_info.value.partial == "abc"

    def test_payload_past_end_of_file(self):
        image = minimal_elf()
        truncated = build_elf(
            [
                SyntheticSection(sh_name=0, sh_type=SHT_STRTAB, data=b"\x00main\x00"),
                SyntheticSection(
                    sh_name=1,
                    sh_type=SHT_PROGBITS,
                    sh_offset=len(image) - 8,
                    sh_size=100,
                ),
            ]
        )
        with pytest.raises(TruncatedSectionError) as exc_info:
            _parse(truncated)
        assert exc_info.value.index == 1
        assert exc_info.value.expected == 100
        assert exc_info.value.actual < 100

    def test_short_read_injection(self):
        """A short read on section 1's payload names section 1."""
        # minimal_elf(): strtab payload at 64 (6 bytes), PROGBITS payload at 70
        stream = ShortReadStream(minimal_elf(), short_at=70, limit=2)
        with pytest.raises(TruncatedSectionError, match="Section 1") as exc_info:
            _parse(minimal_elf(), stream)
        assert exc_info.value.index == 1
        assert exc_info.value.actual == 2

    def test_truncated_section_header_table(self):
        with pytest.raises(ElfIOError, match="section header 3"):
            _parse(_three_section_image()[:-10])

    def test_read_failure_chains_os_error(self):
        # Fail on the section header table, after the 64-byte file header
        image = minimal_elf()
        with pytest.raises(ElfIOError) as exc_info:
            _parse(image, FailingStream(image, fail_at=80))
        assert isinstance(exc_info.value.__cause__, OSError)

    @pytest.mark.parametrize("sh_size", [1 << 40, 1 << 63, 2**64 - 1])
    def test_oversized_section_in_memory(self, sh_size):
        """A size far beyond the stream is reported before anything is read."""
        stream = RecordingStream(_oversized_image(sh_size))
        with pytest.raises(TruncatedSectionError) as exc_info:
            _parse(stream.getvalue(), stream)
        assert exc_info.value.index == 1
        assert exc_info.value.expected == sh_size
        assert all(size < 1 << 32 for _, size in stream.reads)

    @pytest.mark.parametrize("sh_size", [1 << 40, 1 << 63, 2**64 - 1])
    def test_oversized_section_on_disk(self, tmp_path, sh_size):
        path = tmp_path / "oversized.o"
        path.write_bytes(_oversized_image(sh_size))
        with pytest.raises(TruncatedSectionError) as exc_info:
            inspect_file(path)
        assert exc_info.value.index == 1

    def test_section_past_end_reports_available_bytes(self):
        image = _oversized_image(0x100)
        stream = io.BytesIO(image)
        with pytest.raises(TruncatedSectionError) as exc_info:
            _parse(image, stream)
        # PROGBITS payload starts at 70; the rest of the file is available
        assert exc_info.value.actual == len(image) - 70

    @pytest.mark.parametrize("shentsize", [0, 32, 63])
    def test_undersized_section_entries_rejected(self, shentsize):
        image = minimal_elf()
        data = bytearray(image)
        struct.pack_into("<H", data, E_SHENTSIZE_OFFSET, shentsize)
        with pytest.raises(UnsupportedElfError, match="entry size"):
            _parse(bytes(data))


def _oversized_image(sh_size: int) -> bytes:
    """minimal_elf() with section 1 declaring ``sh_size`` bytes at offset 70."""
    return build_elf(
        [
            SyntheticSection(sh_name=0, sh_type=SHT_STRTAB, data=b"\x00main\x00"),
            SyntheticSection(
                sh_name=1, sh_type=SHT_PROGBITS, data=b"\xc3", sh_size=sh_size
            ),
        ]
    )
