"""
PDF text extraction with PyPDF2.

Resumes are short, so every page is read; a page that fails to extract is
skipped, but a file PyPDF2 cannot open at all is an ExtractionError.
"""

import io
import logging
import re

import PyPDF2

from core.exceptions import ExtractionError

logger = logging.getLogger(__name__)

MAX_PAGES = 100


def _clean_page_text(page_text: str) -> str:
    # Collapse runs of blank lines and horizontal whitespace, keep paragraph structure
    cleaned = re.sub(r'\n\s*\n\s*\n+', '\n\n', page_text)
    cleaned = re.sub(r'[ \t]+', ' ', cleaned)
    return cleaned.strip()


def extract_pdf_text(data: bytes) -> str:
    """
    Extract plain text from PDF bytes.

    Args:
        data: Raw file content

    Returns:
        Text of all pages joined by blank lines (may be empty for image-only PDFs)

    Raises:
        ExtractionError: If the bytes are not a readable PDF
    """
    if not data:
        raise ExtractionError("Uploaded file is empty")

    try:
        reader = PyPDF2.PdfReader(io.BytesIO(data))
        num_pages = len(reader.pages)
    except Exception as e:
        logger.error(f"❌ PyPDF2 could not open document: {e}")
        raise ExtractionError(f"Not a readable PDF: {e}") from e

    page_texts = []
    for page_num in range(min(num_pages, MAX_PAGES)):
        try:
            page_text = reader.pages[page_num].extract_text()
        except Exception as page_error:
            logger.warning(f"⚠️  Page {page_num + 1} extraction failed: {page_error}")
            continue

        if page_text:
            cleaned = _clean_page_text(page_text)
            if cleaned:
                page_texts.append(cleaned)

    logger.info(f"📄 Extracted text from {len(page_texts)}/{num_pages} pages")
    return "\n\n".join(page_texts)
