"""Tests for base64 encoding of selected files."""

import asyncio
import base64

import pytest

from conftest import make_file
from uploader import encoder
from uploader.errors import EncodingError
from uploader.models import UploadedFile


class SlowFile(UploadedFile):
    """Finishes reading after a delay derived from its size."""

    async def read(self) -> bytes:
        await asyncio.sleep(0.05 / self.size_bytes)
        return await super().read()


def test_encode_round_trips_bytes(png_file):
    payload = asyncio.run(encoder.encode(png_file))

    assert base64.b64decode(payload) == png_file.content


def test_encode_is_idempotent(pdf_file):
    first = asyncio.run(encoder.encode(pdf_file))
    second = asyncio.run(encoder.encode(pdf_file))

    assert first == second


def test_encode_strips_data_url_prefix(pdf_file):
    payload = asyncio.run(encoder.encode(pdf_file))
    data_url = asyncio.run(encoder.to_data_url(pdf_file))

    assert not payload.startswith("data:")
    assert data_url == f"data:application/pdf;base64,{payload}"


def test_encode_empty_file():
    assert asyncio.run(encoder.encode(UploadedFile.from_bytes("empty.txt", b""))) == ""


def test_encode_reads_from_disk(tmp_path):
    path = tmp_path / "resume.txt"
    path.write_bytes(b"Jane Doe\nEngineer\n")

    payload = asyncio.run(encoder.encode(UploadedFile.from_path(path)))

    assert base64.b64decode(payload) == b"Jane Doe\nEngineer\n"


def test_unreadable_file_raises_encoding_error(tmp_path):
    missing = UploadedFile.from_path(tmp_path / "gone.pdf")

    with pytest.raises(EncodingError, match="gone.pdf"):
        asyncio.run(encoder.encode(missing))


def test_encode_all_preserves_input_order():
    # Larger files finish first, so completion order is the reverse of input order
    files = [
        SlowFile.from_bytes(f"page{i}.txt", bytes([65 + i]) * (i + 1))
        for i in range(5)
    ]

    payloads = asyncio.run(encoder.encode_all(files))

    assert [base64.b64decode(p) for p in payloads] == [f.content for f in files]


def test_encode_all_raises_first_failure_after_siblings_finish(tmp_path):
    reads = []

    class TrackedFile(UploadedFile):
        async def read(self) -> bytes:
            data = await super().read()
            reads.append(self.name)
            return data

    ok_before = TrackedFile.from_bytes("a.txt", b"a")
    ok_after = TrackedFile.from_bytes("c.txt", b"c")
    missing = UploadedFile.from_path(tmp_path / "b.pdf")

    with pytest.raises(EncodingError, match="b.pdf"):
        asyncio.run(encoder.encode_all([ok_before, missing, ok_after]))

    assert sorted(reads) == ["a.txt", "c.txt"]


def test_encode_all_of_nothing():
    assert asyncio.run(encoder.encode_all([])) == []
