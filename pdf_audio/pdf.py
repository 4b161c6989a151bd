"""PDF text extraction using PyMuPDF."""

from dataclasses import dataclass

import fitz  # PyMuPDF

from pdf_audio.errors import ExtractionError


@dataclass
class ExtractedText:
    text: str
    page_count: int


def extract_text(data: bytes) -> ExtractedText:
    """Extract plain text from raw PDF bytes, page by page.

    Encrypted PDFs and PDFs without a text layer (scans) are rejected
    with ExtractionError.
    """
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        raise ExtractionError(f"Could not open PDF: {e}") from e

    try:
        if doc.needs_pass:
            raise ExtractionError("PDF is encrypted")
        pages = [page.get_text("text") for page in doc]
        page_count = doc.page_count
    finally:
        doc.close()

    text = "\n".join(pages)
    if not text.strip():
        raise ExtractionError("PDF has no extractable text (scanned or image-only?)")
    return ExtractedText(text=text, page_count=page_count)


def extract_file(path: str) -> ExtractedText:
    with open(path, "rb") as f:
        return extract_text(f.read())
