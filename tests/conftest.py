import sys
from pathlib import Path
from typing import Callable, List

import pytest

# Ensure src/ is on sys.path for local test runs without installation
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from dnastore.core import ByteBuffer  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast unit tests")
    config.addinivalue_line(
        "markers", "integration: tests that touch the filesystem"
    )


@pytest.fixture
def empty_buffer() -> ByteBuffer:
    """16-byte buffer with seed 0, as used by the demo scenario."""
    return ByteBuffer(0, 16)


@pytest.fixture
def sample_buffers() -> List[ByteBuffer]:
    """A few buffers of different sizes and seeds."""
    first = ByteBuffer.from_bytes(0, bytes(range(16)))
    second = ByteBuffer(0xDEADBEEFCAFEBABE, 4)
    second.append_bytes(b"\n\x00\xff\x0a\x0a")
    third = ByteBuffer(7, 0)
    return [first, second, third]


@pytest.fixture
def write_raw(tmp_path: Path) -> Callable[[bytes], Path]:
    """Write raw bytes to a temp file and return its path."""

    def _write(data: bytes, name: str = "raw.dna") -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write
