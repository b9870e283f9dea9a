"""
Document builder service: renders translated markup blocks into a DOCX file.
Presentation (font, sizes, alignment, spacing) comes from DocumentStyle.
"""
import logging
from io import BytesIO
from typing import Dict, List, Optional

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt

from coactivo.services.markup import Block, Heading, Paragraph
from coactivo.utils.env import env_float, env_str

logger = logging.getLogger(__name__)

DOCX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'

ALIGNMENTS = {
    'left': WD_ALIGN_PARAGRAPH.LEFT,
    'center': WD_ALIGN_PARAGRAPH.CENTER,
    'right': WD_ALIGN_PARAGRAPH.RIGHT,
    'justified': WD_ALIGN_PARAGRAPH.JUSTIFY,
    'justify': WD_ALIGN_PARAGRAPH.JUSTIFY,
}

BODY = 'body'


def _check_alignment(name: str) -> str:
    key = name.strip().lower()
    if key not in ALIGNMENTS:
        raise ValueError(f"Unknown alignment {name!r}; expected one of {sorted(ALIGNMENTS)}")
    return key


class DocumentStyle:
    """
    Presentation policy for rendered documents.

    Sizes and spacing are in points. Keys of the per-kind dicts are the
    heading levels 1-3 and 'body'.
    """

    def __init__(
        self,
        font: str = 'Times New Roman',
        sizes: Optional[Dict] = None,
        alignments: Optional[Dict] = None,
        space_after: Optional[Dict] = None,
    ):
        self.font = font
        self.sizes = {1: 16.0, 2: 14.0, 3: 13.0, BODY: 14.0}
        self.alignments = {1: 'center', 2: 'left', 3: 'left', BODY: 'justified'}
        self.space_after = {1: 20.0, 2: 15.0, 3: 12.0, BODY: 7.5}

        self.sizes.update(sizes or {})
        self.space_after.update(space_after or {})
        for kind, name in (alignments or {}).items():
            self.alignments[kind] = _check_alignment(name)

    @classmethod
    def from_env(cls) -> 'DocumentStyle':
        """Read DOC_* overrides from the environment."""
        default = cls()
        sizes = {}
        alignments = {}
        space_after = {}
        for kind, suffix in ((1, 'H1'), (2, 'H2'), (3, 'H3'), (BODY, 'BODY')):
            sizes[kind] = env_float(f'DOC_{suffix}_SIZE', default.sizes[kind])
            alignments[kind] = env_str(f'DOC_{suffix}_ALIGN', default.alignments[kind])
            space_after[kind] = env_float(f'DOC_{suffix}_SPACE_AFTER', default.space_after[kind])
        return cls(
            font=env_str('DOC_FONT', default.font),
            sizes=sizes,
            alignments=alignments,
            space_after=space_after,
        )

    def alignment_for(self, kind):
        return ALIGNMENTS[self.alignments[kind]]


def _format_paragraph(para, style: DocumentStyle, kind) -> None:
    para.alignment = style.alignment_for(kind)
    para.paragraph_format.space_after = Pt(style.space_after[kind])


def _add_run(para, text: str, bold: bool, style: DocumentStyle, kind) -> None:
    run = para.add_run(text)
    run.bold = bold
    run.font.name = style.font
    run.font.size = Pt(style.sizes[kind])


def render_blocks(doc, blocks: List[Block], style: DocumentStyle) -> None:
    """
    Append blocks to a python-docx Document.

    Headings are a single bold run; paragraphs keep their run segmentation.
    An empty paragraph is added unformatted to act as a blank line.
    """
    for block in blocks:
        if isinstance(block, Heading):
            para = doc.add_paragraph()
            _format_paragraph(para, style, block.level)
            _add_run(para, block.text, True, style, block.level)
        elif isinstance(block, Paragraph):
            para = doc.add_paragraph()
            if not block.runs:
                continue
            _format_paragraph(para, style, BODY)
            for run in block.runs:
                _add_run(para, run.text, run.bold, style, BODY)
        else:
            raise TypeError(f"Unsupported block type: {type(block).__name__}")


def build_docx(
    blocks: List[Block],
    style: Optional[DocumentStyle] = None,
    title: str = '',
    author: str = '',
) -> bytes:
    """
    Render blocks into a new DOCX document.

    Args:
        blocks: Output of markup.translate.
        style: Presentation policy; defaults to DocumentStyle().
        title: Core property title.
        author: Core property author.

    Returns:
        The document as bytes.
    """
    style = style or DocumentStyle()
    doc = Document()
    doc.core_properties.title = title
    doc.core_properties.author = author

    render_blocks(doc, blocks, style)

    buffer = BytesIO()
    doc.save(buffer)
    data = buffer.getvalue()
    logger.info(f"Rendered DOCX: {len(blocks)} blocks, {len(data)} bytes")
    return data
