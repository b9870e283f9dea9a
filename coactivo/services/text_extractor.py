"""
Text extraction service for case files.
Supports PDF and DOCX formats.
"""
import logging
from io import BytesIO
from typing import Iterator, List

import docx
from docx.table import Table
from pdfminer.high_level import extract_pages
from pdfminer.layout import LTTextBox, LTTextLine

from coactivo.errors import ExtractionFailed, UnsupportedFormat

logger = logging.getLogger(__name__)

PDF = 'pdf'
DOCX = 'docx'


def detect_file_kind(file_path: str) -> str:
    """
    Determine the file kind from the path suffix (case-insensitive).

    Raises:
        UnsupportedFormat: If the suffix is neither .pdf nor .docx.
    """
    name = (file_path or '').lower()
    if name.endswith('.pdf'):
        return PDF
    if name.endswith('.docx'):
        return DOCX
    logger.error(f"Unsupported file format: {file_path}")
    raise UnsupportedFormat(f"Unsupported file format: {file_path}. Only PDF and DOCX files are supported.")


def _iter_text_lines(container) -> Iterator[str]:
    for element in container:
        if isinstance(element, LTTextLine):
            text = element.get_text().strip()
            if text:
                yield text
        elif isinstance(element, LTTextBox):
            yield from _iter_text_lines(element)


def _extract_pdf_text(data: bytes) -> str:
    """
    Extract text from a PDF's text layer.

    Fragments on a page are joined with single spaces, pages with newlines.

    Raises:
        ExtractionFailed: On any parser error.
    """
    try:
        pages = []
        for page_layout in extract_pages(BytesIO(data)):
            pages.append(' '.join(_iter_text_lines(page_layout)))
    except Exception as e:
        logger.error(f"Failed to extract text from PDF: {type(e).__name__} - {e}")
        raise ExtractionFailed(f"Failed to extract text from PDF: {e}") from e

    text = '\n'.join(pages)
    logger.info(f"Extracted {len(text)} characters from {len(pages)} PDF pages")
    return text


def _docx_fragments(document) -> List[str]:
    fragments = []
    for item in document.iter_inner_content():
        if isinstance(item, Table):
            for row in item.rows:
                for cell in row.cells:
                    fragments.append(cell.text)
        else:
            fragments.append(item.text)
    return fragments


def _extract_docx_text(data: bytes) -> str:
    """
    Extract the raw text of a DOCX document, formatting discarded.

    Paragraphs (and table cells, in document order) are separated by a blank line.

    Raises:
        ExtractionFailed: If the document cannot be opened.
    """
    try:
        document = docx.Document(BytesIO(data))
        text = '\n\n'.join(_docx_fragments(document))
    except Exception as e:
        logger.error(f"Failed to extract text from DOCX: {type(e).__name__} - {e}")
        raise ExtractionFailed(f"Failed to extract text from DOCX: {e}") from e

    logger.info(f"Extracted {len(text)} characters from DOCX file")
    return text


def extract_text(data: bytes, file_path: str) -> str:
    """
    Extract text from a case file (PDF or DOCX).

    Args:
        data: Raw file bytes.
        file_path: Storage path or file name; only its suffix is used.

    Returns:
        Plain text content.

    Raises:
        UnsupportedFormat: If the file kind is not supported.
        ExtractionFailed: If the underlying parser fails.
    """
    kind = detect_file_kind(file_path)
    if kind == PDF:
        return _extract_pdf_text(data)
    return _extract_docx_text(data)
