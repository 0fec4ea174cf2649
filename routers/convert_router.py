from fastapi import APIRouter, Depends, HTTPException, Request, status
from typing import Annotated, Awaitable, Callable, Sequence
import logging

from schemas.upload_schema import ConvertResponse, ErrorResponse
from services import ingest_service
from services.gemini_service import ResumeDocument, convert_resume_to_latex
from core.constants import UPLOAD_FIELD_NAME

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["convert"],
)

LatexConverter = Callable[[Sequence[ResumeDocument]], Awaitable[str]]


def get_converter() -> LatexConverter:
    """Dependency returning the LaTeX converter; overridden in tests."""
    return convert_resume_to_latex


converter_dependency = Annotated[LatexConverter, Depends(get_converter)]


@router.post(
    "/convert-to-latex",
    response_model=ConvertResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def convert_to_latex(request: Request, convert: converter_dependency):
    """
    Converts every uploaded file into a single LaTeX document.
    """
    try:
        form = await request.form()
    except Exception as e:
        logger.error(f"Could not parse form data: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No files uploaded.")

    items = form.getlist(UPLOAD_FIELD_NAME)
    if not items:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No files uploaded.")

    documents = []
    for upload in ingest_service.only_files(items):
        try:
            content = await upload.read()
        except Exception as e:
            logger.error(f"Error processing file {upload.filename}: {e}")
            continue
        documents.append(
            ResumeDocument(
                name=upload.filename or "unnamed",
                mime_type=upload.content_type or "application/octet-stream",
                content=content,
            )
        )

    if not documents:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No valid files found.")

    try:
        latex_code = await convert(documents)
    except Exception as e:
        logger.error(f"Conversion failed for {len(documents)} file(s): {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e) or "Internal server error.")

    return ConvertResponse(latex_code=latex_code)
