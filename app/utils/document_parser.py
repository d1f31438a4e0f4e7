"""
PDF text extraction utilities.
"""
import re
from dataclasses import dataclass

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from app.core.config import settings
from app.core.exceptions import ExtractionError


@dataclass
class ExtractedDocument:
    """Text pulled out of a document together with its page count."""

    text: str
    num_pages: int


def clean_text(text: str) -> str:
    """
    Normalize extracted text.

    Collapses runs of spaces and tabs, limits blank lines to one and drops
    characters outside printable ASCII, tab and newline.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = re.sub(r"[^\x20-\x7E\n\t]", "", text)
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n\s*\n+", "\n\n", text)
    return text.strip()


def extract_text_from_pdf(file_path: str) -> ExtractedDocument:
    """
    Extract text from PDF file.

    Args:
        file_path: Path to PDF file

    Returns:
        Extracted text and page count

    Raises:
        ExtractionError: If the file cannot be read or holds too little text
    """
    try:
        reader = PdfReader(file_path)
        pages = [page.extract_text() or "" for page in reader.pages]
    except (OSError, ValueError, PdfReadError) as e:
        raise ExtractionError(f"Error extracting text from PDF: {str(e)}")

    text = clean_text("\n".join(pages))
    if len(text) < settings.MIN_EXTRACTED_TEXT_LENGTH:
        raise ExtractionError(
            "PDF appears to be empty or contains only images. "
            "Please upload a PDF with text content."
        )
    return ExtractedDocument(text=text, num_pages=len(reader.pages))
