"""
File upload utilities.
"""
import logging
import os
import time
import uuid
from typing import Optional, Tuple

from fastapi import UploadFile

from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def get_file_extension(filename: Optional[str]) -> str:
    """
    Get file extension.

    Args:
        filename: Name of file

    Returns:
        Lowercased file extension with its dot, or "" when there is none
    """
    if not filename or "." not in filename:
        return ""
    return "." + filename.rsplit(".", 1)[1].lower()


def is_allowed_file(filename: Optional[str]) -> bool:
    return get_file_extension(filename) in settings.ALLOWED_FILE_EXTENSIONS


def generate_unique_filename(original_filename: str) -> str:
    """
    Generate a unique, timestamp-prefixed filename that keeps the extension.

    Args:
        original_filename: Original filename

    Returns:
        Unique filename
    """
    ext = get_file_extension(original_filename)
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{ext}"


async def save_upload_file(upload_file: UploadFile) -> Tuple[str, str, int]:
    """
    Save uploaded file to disk.

    Args:
        upload_file: Uploaded file

    Returns:
        Tuple of (file_path, filename, file_size)

    Raises:
        ValidationError: If the file type or size is not allowed
    """
    if not is_allowed_file(upload_file.filename):
        raise ValidationError(
            f"File type not allowed. Allowed types: {', '.join(settings.ALLOWED_FILE_EXTENSIONS)}"
        )

    content = await upload_file.read()
    file_size = len(content)
    if file_size == 0:
        raise ValidationError("Uploaded file is empty")
    if file_size > settings.MAX_UPLOAD_SIZE:
        raise ValidationError(
            f"File size exceeds maximum allowed size of {settings.MAX_UPLOAD_SIZE} bytes"
        )

    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    unique_filename = generate_unique_filename(upload_file.filename)
    file_path = os.path.join(settings.UPLOAD_DIR, unique_filename)

    with open(file_path, "wb") as f:
        f.write(content)

    logger.info(f"Saved upload {upload_file.filename} as {file_path} ({file_size} bytes)")
    return file_path, unique_filename, file_size


def resolve_upload_path(file_path: str) -> str:
    """
    Resolve a previously uploaded file path.

    Raises:
        ValidationError: If the path points outside the upload directory
        NotFoundError: If the file does not exist
    """
    upload_root = os.path.realpath(settings.UPLOAD_DIR)
    resolved = os.path.realpath(file_path)
    if os.path.commonpath([upload_root, resolved]) != upload_root:
        raise ValidationError("File path must point inside the upload directory")
    if not os.path.isfile(resolved):
        raise NotFoundError("File not found")
    return resolved
