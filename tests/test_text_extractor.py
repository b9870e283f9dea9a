"""
Unit tests for case file text extraction.
"""
from io import BytesIO
from unittest.mock import Mock, patch

import pytest
from docx import Document
from pdfminer.layout import LTFigure, LTTextBoxHorizontal, LTTextLineHorizontal

from coactivo.errors import ExtractionFailed, UnsupportedFormat
from coactivo.services import text_extractor
from coactivo.services.text_extractor import detect_file_kind, extract_text


def _docx_bytes(*paragraphs, table=None) -> bytes:
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    if table:
        t = doc.add_table(rows=len(table), cols=len(table[0]))
        for r, row in enumerate(table):
            for c, value in enumerate(row):
                t.cell(r, c).text = value
    buffer = BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def _line(text):
    line = Mock(spec=LTTextLineHorizontal)
    line.get_text.return_value = text
    return line


def _box(*lines):
    box = Mock(spec=LTTextBoxHorizontal)
    box.__iter__ = Mock(return_value=iter(lines))
    return box


class TestDetectFileKind:

    @pytest.mark.parametrize("path,kind", [
        ("expedientes/u1/caso.pdf", "pdf"),
        ("expedientes/u1/CASO.PDF", "pdf"),
        ("resolucion.docx", "docx"),
        ("Resolucion.DocX", "docx"),
    ])
    def test_supported_suffixes(self, path, kind):
        assert detect_file_kind(path) == kind

    @pytest.mark.parametrize("path", ["caso.doc", "caso.txt", "caso", "", "pdf", "caso.pdf.zip"])
    def test_unsupported_suffixes(self, path):
        with pytest.raises(UnsupportedFormat):
            detect_file_kind(path)


class TestExtractDocx:

    def test_paragraphs_are_separated_by_blank_lines(self):
        data = _docx_bytes("RESOLUCIÓN 123", "El deudor adeuda $ 1.000.")
        assert extract_text(data, "caso.docx") == "RESOLUCIÓN 123\n\nEl deudor adeuda $ 1.000."

    def test_tables_follow_document_order(self):
        data = _docx_bytes("Antes", table=[["Deudor", "ACME"]])
        assert extract_text(data, "caso.docx") == "Antes\n\nDeudor\n\nACME"

    def test_formatting_is_discarded(self):
        doc = Document()
        para = doc.add_paragraph()
        para.add_run("Valor ")
        para.add_run("total").bold = True
        buffer = BytesIO()
        doc.save(buffer)
        assert extract_text(buffer.getvalue(), "caso.docx") == "Valor total"

    def test_corrupt_docx_raises_extraction_failed(self):
        with pytest.raises(ExtractionFailed) as exc_info:
            extract_text(b"this is not a zip file", "caso.docx")
        assert exc_info.value.__cause__ is not None


class TestExtractPdf:

    def test_fragments_joined_by_spaces_and_pages_by_newlines(self):
        pages = [
            [_box(_line("RESOLUCIÓN No. 45\n"), _line("  de 2023 \n")), _line("Página 1\n")],
            [_line("Valor: $ 2.000.000\n"), _line("   \n")],
        ]
        with patch.object(text_extractor, "extract_pages", return_value=iter(pages)):
            text = extract_text(b"%PDF-1.4", "caso.pdf")

        assert text == "RESOLUCIÓN No. 45 de 2023 Página 1\nValor: $ 2.000.000"

    def test_non_text_elements_are_ignored(self):
        figure = Mock(spec=LTFigure)
        pages = [[figure, _line("Texto\n")]]
        with patch.object(text_extractor, "extract_pages", return_value=iter(pages)):
            assert extract_text(b"%PDF-1.4", "caso.pdf") == "Texto"

    def test_page_without_text_yields_empty_line(self):
        pages = [[_line("Uno\n")], [], [_line("Tres\n")]]
        with patch.object(text_extractor, "extract_pages", return_value=iter(pages)):
            assert extract_text(b"%PDF-1.4", "caso.pdf") == "Uno\n\nTres"

    def test_parser_error_raises_extraction_failed(self):
        cause = ValueError("broken xref")
        with patch.object(text_extractor, "extract_pages", side_effect=cause):
            with pytest.raises(ExtractionFailed) as exc_info:
                extract_text(b"%PDF-1.4", "caso.pdf")
        assert exc_info.value.__cause__ is cause

    def test_garbage_bytes_raise_extraction_failed(self):
        with pytest.raises(ExtractionFailed):
            extract_text(b"definitely not a pdf", "caso.pdf")


def test_unsupported_format_is_checked_before_parsing():
    with patch.object(text_extractor, "extract_pages") as mock_pages:
        with pytest.raises(UnsupportedFormat):
            extract_text(b"data", "caso.odt")
    mock_pages.assert_not_called()
