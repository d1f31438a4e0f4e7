"""
API endpoint for uploading study material.
"""
import logging
import os

from fastapi import APIRouter, File, UploadFile

from app.core.exceptions import ExtractionError, ValidationError
from app.schemas.generation import UploadResponse
from app.utils.document_parser import extract_text_from_pdf
from app.utils.file_upload import save_upload_file

logger = logging.getLogger(__name__)

router = APIRouter()

PREVIEW_CHARS = 500


@router.post("", response_model=UploadResponse)
async def upload_material(file: UploadFile = File(...)):
    """
    Upload a PDF and check that it carries readable text.

    The stored file is removed again when no text can be extracted.
    """
    file_path, filename, file_size = await save_upload_file(file)

    try:
        document = extract_text_from_pdf(file_path)
    except ExtractionError as e:
        os.remove(file_path)
        logger.warning(f"Rejected upload {file.filename}: {e.message}")
        raise ValidationError(e.message) from e

    logger.info(
        f"Uploaded {file.filename}: {document.num_pages} pages, {len(document.text)} chars"
    )
    preview = document.text[:PREVIEW_CHARS]
    if len(document.text) > PREVIEW_CHARS:
        preview += "..."

    return UploadResponse(
        file_name=file.filename or filename,
        file_path=file_path,
        num_pages=document.num_pages,
        text_length=len(document.text),
        preview=preview,
    )
