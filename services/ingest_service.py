import logging
import random
import string
import time
from datetime import datetime, timezone
from typing import Iterable

from starlette.datastructures import UploadFile

from schemas.upload_schema import FileMetadata

logger = logging.getLogger(__name__)

MEGABYTE = 1024 * 1024
_ID_ALPHABET = string.digits + string.ascii_lowercase


class IngestRejected(Exception):
    """An uploaded batch failed server-side validation."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def only_files(items: Iterable) -> list[UploadFile]:
    """Drops plain form values that were posted under the file field."""
    return [item for item in items if isinstance(item, UploadFile)]


async def inspect_uploads(
    uploads: Iterable[UploadFile],
    accepted_types: Iterable[str],
    max_size: int,
) -> list[FileMetadata]:
    """
    Re-validates every uploaded file and returns its metadata.

    :param uploads: The files posted under the `files` field.
    :param accepted_types: Allowed MIME types.
    :param max_size: Per-file size cap in bytes.
    :return: One FileMetadata per file, in upload order.
    :raises IngestRejected: On the first file that is not acceptable.
    """
    accepted = set(accepted_types)
    processed = []

    for upload in uploads:
        name = upload.filename or "unnamed"

        if upload.content_type not in accepted:
            raise IngestRejected(f"Unsupported file type for {name}")

        # Reading the full body also confirms the upload is intact
        content = await upload.read()
        if len(content) > max_size:
            raise IngestRejected(
                f"File size exceeds the maximum limit of {max_size / MEGABYTE:g}MB for {name}"
            )

        processed.append(
            FileMetadata(
                name=name,
                type=upload.content_type,
                size=len(content),
                uploaded_at=datetime.now(timezone.utc).isoformat(),
            )
        )

    if not processed:
        raise IngestRejected("No valid files provided")

    return processed


def generate_document_id() -> str:
    """Time-based batch id, unique enough to correlate log lines within a session."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=7))
    return f"doc_{int(time.time() * 1000)}_{suffix}"
