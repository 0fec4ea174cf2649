import asyncio
import base64
import binascii
import logging
from typing import Sequence

from uploader.errors import EncodingError
from uploader.models import UploadedFile

logger = logging.getLogger(__name__)


async def to_data_url(file: UploadedFile) -> str:
    """Reads the whole file and returns it as a `data:<mime>;base64,...` URL."""
    try:
        content = await file.read()
    except OSError as e:
        raise EncodingError(f"Failed to read {file.name}: {e}") from e
    payload = base64.b64encode(content).decode("ascii")
    return f"data:{file.mime_type};base64,{payload}"


async def encode(file: UploadedFile) -> str:
    """
    Returns the raw base64 payload of a file, without the data URL prefix.

    :raises EncodingError: if the file cannot be read or the payload is not valid base64.
    """
    data_url = await to_data_url(file)
    _, sep, payload = data_url.partition(",")
    if not sep:
        raise EncodingError("Failed to convert file to base64")

    try:
        base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError("Failed to convert file to base64") from e

    return payload


async def encode_all(files: Sequence[UploadedFile]) -> list[str]:
    """
    Encodes every file concurrently and returns the payloads in input order.

    Reads already in flight are left to finish when one of them fails;
    the first failure (in input order) is raised once all have settled.
    """
    results = await asyncio.gather(*(encode(file) for file in files), return_exceptions=True)

    for file, result in zip(files, results):
        if isinstance(result, BaseException):
            logger.warning("Encoding failed for %s: %s", file.name, result)
            if isinstance(result, EncodingError):
                raise result
            raise EncodingError(f"Failed to process {file.name}") from result

    return list(results)
