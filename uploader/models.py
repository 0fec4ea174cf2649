import asyncio
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from core import constants

# Not registered by every platform's mimetypes database
mimetypes.add_type("image/heic", ".heic")
mimetypes.add_type("image/heif", ".heif")
mimetypes.add_type("image/webp", ".webp")
mimetypes.add_type("application/vnd.openxmlformats-officedocument.wordprocessingml.document", ".docx")


@dataclass(frozen=True)
class UploadConfig:
    """Limits applied by the Validator and Encoder.

    Passed in explicitly so the pipeline never reads ambient settings.
    """

    accepted_types: frozenset[str] = frozenset(constants.ACCEPTED_FILE_TYPES)
    max_size: int = constants.MAX_FILE_SIZE
    multiple: bool = True

    @classmethod
    def from_settings(cls, settings, multiple: bool = True) -> "UploadConfig":
        return cls(
            accepted_types=frozenset(settings.ACCEPTED_FILE_TYPES),
            max_size=settings.MAX_FILE_SIZE,
            multiple=multiple,
        )


@dataclass(frozen=True)
class UploadedFile:
    """A file selected for conversion.

    Content is either held in memory or read lazily from `path`.
    Identity is positional in the session's file list.
    """

    name: str
    mime_type: str
    size_bytes: int
    content: Optional[bytes] = field(default=None, repr=False)
    path: Optional[Path] = None

    @classmethod
    def from_bytes(cls, name: str, content: bytes, mime_type: str | None = None) -> "UploadedFile":
        return cls(
            name=name,
            mime_type=mime_type or guess_mime_type(name),
            size_bytes=len(content),
            content=content,
        )

    @classmethod
    def from_path(cls, path: str | Path) -> "UploadedFile":
        """Describe a file on disk without reading it.

        A missing file yields size 0; the failure surfaces when it is read.
        """
        path = Path(path)
        try:
            size = path.stat().st_size
        except OSError:
            size = 0
        return cls(name=path.name, mime_type=guess_mime_type(path.name), size_bytes=size, path=path)

    async def read(self) -> bytes:
        if self.content is not None:
            return self.content
        if self.path is None:
            raise OSError(f"{self.name} has no content to read")
        return await asyncio.to_thread(self.path.read_bytes)


def guess_mime_type(name: str) -> str:
    mime_type, _ = mimetypes.guess_type(name)
    return mime_type or "application/octet-stream"


@dataclass(frozen=True)
class EncodedFile:
    file: UploadedFile
    base64: str


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of one submit attempt. Superseded, never merged."""

    success: bool
    artifact_text: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, artifact_text: str) -> "ConversionResult":
        return cls(success=True, artifact_text=artifact_text)

    @classmethod
    def failed(cls, error: str) -> "ConversionResult":
        return cls(success=False, error=error)
