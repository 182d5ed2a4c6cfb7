import shutil
import subprocess
import sys
import pathlib

import pytest

from elf_test_utils import minimal_elf
from elfinspect.elf.types import ELFCLASS64, ELFDATA2LSB
from elfinspect.format_detect import is_elf_binary, read_ident


@pytest.fixture
def minimal_elf_path(tmp_path: pathlib.Path) -> pathlib.Path:
    """Writes the minimal two-section synthetic ELF to a temporary file."""
    path = tmp_path / "minimal.o"
    path.write_bytes(minimal_elf())
    return path


@pytest.fixture(scope="session")
def system_elf_binary() -> pathlib.Path:
    """
    Provides a real 64-bit little-endian ELF from the host system.

    Uses the running Python interpreter, falling back to /bin/ls. Skips the
    test on hosts where neither is a supported ELF (macOS, Windows, 32-bit
    or big-endian Linux).
    """
    candidates = [pathlib.Path(sys.executable).resolve(), pathlib.Path("/bin/ls")]
    for path in candidates:
        if not is_elf_binary(path):
            continue
        ident = read_ident(path)
        if ident.elf_class == ELFCLASS64 and ident.data_encoding == ELFDATA2LSB:
            return path
    pytest.skip("No 64-bit little-endian ELF binary available on this host")


@pytest.fixture(scope="session")
def readelf() -> pathlib.Path:
    """Provides the path to readelf, skipping when it is not installed."""
    found = shutil.which("readelf")
    if found is None:
        pytest.skip("readelf not found on PATH")
    proc = subprocess.run([found, "--version"], capture_output=True, text=True)
    if proc.returncode != 0:
        pytest.skip("readelf is not usable")
    return pathlib.Path(found)
