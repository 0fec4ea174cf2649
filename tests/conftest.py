import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from uploader.models import UploadedFile  # noqa: E402

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
MB = 1024 * 1024


def make_file(name: str = "resume.pdf", size: int = 1024, mime_type: str | None = None) -> UploadedFile:
    """In-memory file of exactly `size` bytes."""
    body = (bytes(range(251)) * (size // 251 + 1))[:size]
    return UploadedFile.from_bytes(name, body, mime_type)


@pytest.fixture
def png_file():
    """A 2 MB PNG."""
    return UploadedFile.from_bytes("resume.png", PNG_SIGNATURE + b"\x00" * (2 * MB - len(PNG_SIGNATURE)))


@pytest.fixture
def pdf_file():
    return make_file("resume.pdf", 4096)


@pytest.fixture
def oversized_file():
    return make_file("scan.png", 12 * MB)
