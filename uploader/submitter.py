import logging
from typing import Any, Optional, Sequence

import httpx
from pydantic import ValidationError

from core.constants import UPLOAD_FIELD_NAME
from schemas.upload_schema import ConvertResponse
from uploader.errors import ServerValidationError, TransportError, UploaderError
from uploader.models import ConversionResult, UploadedFile
from uploader.state import UploadStateStore

logger = logging.getLogger(__name__)

INGEST_PATH = "/api/ingest"
CONVERT_PATH = "/api/convert-to-latex"

UPLOAD_FAILED = "Failed to upload files"
CONVERT_FAILED = "Failed to convert resume to LaTeX"
UNKNOWN_ERROR = "An unknown error occurred"


class BatchSubmitter:
    """
    Sends a batch of files through ingest and then conversion.

    Every outcome, including transport failures, is returned as a
    ConversionResult; nothing is raised to the caller. There is no retry:
    a failed attempt must be re-submitted in full.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout if timeout is not None else httpx.Timeout(5.0, read=None)
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout, transport=self._transport)

    async def _build_payload(self, files: Sequence[UploadedFile]) -> list[tuple[str, tuple[str, bytes, str]]]:
        payload = []
        for file in files:
            try:
                content = await file.read()
            except OSError as e:
                raise TransportError(f"Failed to read {file.name}: {e}") from e
            payload.append((UPLOAD_FIELD_NAME, (file.name, content, file.mime_type)))
        return payload

    async def _post(self, client: httpx.AsyncClient, path: str, payload, fallback: str) -> dict[str, Any]:
        try:
            response = await client.post(path, files=payload)
        except httpx.HTTPError as e:
            logger.error("POST %s failed: %s", path, e)
            raise TransportError(str(e) or fallback) from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.is_success:
            message = body.get("error") if isinstance(body, dict) else None
            error_cls = ServerValidationError if response.status_code == 400 and path == INGEST_PATH else TransportError
            raise error_cls(message or fallback, status_code=response.status_code)

        if not isinstance(body, dict):
            raise TransportError(fallback, status_code=response.status_code)
        return body

    async def submit(self, files: Sequence[UploadedFile]) -> ConversionResult:
        """
        Runs ingest and then convert over the same files.

        Convert only starts once ingest has succeeded. The ingest body is
        only read for logging; its metadata does not feed the convert call.
        """
        try:
            payload = await self._build_payload(files)
            async with self._client() as client:
                ingest = await self._post(client, INGEST_PATH, payload, UPLOAD_FAILED)
                if ingest.get("success") is False:
                    raise TransportError(ingest.get("error") or UPLOAD_FAILED)
                logger.info(
                    "Ingested %d file(s) as %s",
                    len(ingest.get("fileMetadata") or []),
                    ingest.get("documentId"),
                )

                convert_body = await self._post(client, CONVERT_PATH, payload, CONVERT_FAILED)
                try:
                    converted = ConvertResponse.model_validate(convert_body)
                except ValidationError as e:
                    raise TransportError(CONVERT_FAILED) from e
        except UploaderError as e:
            logger.warning("Submit failed: %s", e)
            return ConversionResult.failed(str(e))
        except Exception as e:
            logger.exception("Submit failed unexpectedly")
            return ConversionResult.failed(str(e) or UNKNOWN_ERROR)

        return ConversionResult.ok(converted.latex_code)

    async def process(self, store: UploadStateStore) -> ConversionResult:
        """Convert action: submits the store's files and records the outcome."""
        if not store.files:
            store.set_error("No files selected")
            return ConversionResult.failed("No files selected")

        store.begin_submit()
        result = await self.submit(store.snapshot())
        store.complete_submit(result)
        return result
