from fastapi import APIRouter, HTTPException, Request, status
import logging

from schemas.upload_schema import IngestResponse, ErrorResponse
from services import ingest_service
from core.config import settings
from core.constants import UPLOAD_FIELD_NAME

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["ingest", "upload"],
)

@router.post(
    "/ingest",
    response_model=IngestResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def ingest(request: Request):
    """
    Re-validates an uploaded batch and returns per-file metadata
    together with a document id for correlating later steps.
    Supports both single and multiple file uploads.
    """
    content_type = request.headers.get("content-type", "")
    if "multipart/form-data" not in content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Request must be multipart/form-data",
        )

    try:
        form = await request.form()
        items = form.getlist(UPLOAD_FIELD_NAME)
        if not items:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No files provided")

        file_metadata = await ingest_service.inspect_uploads(
            ingest_service.only_files(items),
            accepted_types=settings.ACCEPTED_FILE_TYPES,
            max_size=settings.MAX_FILE_SIZE,
        )
    except HTTPException:
        raise
    except ingest_service.IngestRejected as e:
        logger.info(f"Ingest rejected: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Error ingesting document: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process the document",
        )

    document_id = ingest_service.generate_document_id()
    logger.info(f"Ingested {len(file_metadata)} file(s) as {document_id}")

    return IngestResponse(
        success=True,
        message="Files uploaded successfully" if len(file_metadata) > 1 else "File uploaded successfully",
        document_id=document_id,
        file_metadata=file_metadata,
    )
