"""
Translator from the constrained markup the drafting model writes
(#, ##, ### headings and **bold** spans) into paragraph blocks.
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional, Union

_BOLD_RE = re.compile(r'\*\*(.*?)\*\*')

# Longest prefix first
HEADING_PREFIXES = (
    ('### ', 3),
    ('## ', 2),
    ('# ', 1),
)


@dataclass(frozen=True)
class Run:
    """A contiguous span of text, bold or plain."""
    text: str
    bold: bool = False


@dataclass
class Heading:
    level: int
    text: str


@dataclass
class Paragraph:
    """A body paragraph. No runs means a blank line in the output document."""
    runs: List[Run] = field(default_factory=list)

    @property
    def text(self) -> str:
        return ''.join(run.text for run in self.runs)


Block = Union[Heading, Paragraph]


def _split_runs(line: str) -> List[Run]:
    """
    Split a line on paired ** delimiters.

    Odd segments of the split were enclosed by a pair and are bold. An
    unmatched trailing ** is not a delimiter and stays in the last plain run.
    Zero-length segments carry no text and are left out.
    """
    runs = []
    for i, segment in enumerate(_BOLD_RE.split(line)):
        if segment == '':
            continue
        runs.append(Run(segment, bold=(i % 2 == 1)))
    return runs


def translate_line(line: str) -> Block:
    """Translate one line of markup into a block."""
    stripped = line.strip()
    if not stripped:
        return Paragraph([])

    for prefix, level in HEADING_PREFIXES:
        if stripped.startswith(prefix):
            return Heading(level, stripped[len(prefix):])

    return Paragraph(_split_runs(stripped))


def translate(text: Optional[str]) -> List[Block]:
    """
    Translate markup text into an ordered list of blocks, one per input line.

    Never fails: any text is valid markup. Blank lines become empty paragraphs
    so vertical spacing survives into the document. Zero-length segments of
    the bold split are dropped: "**Bold** and plain" gives exactly two runs.
    """
    if text is None:
        return []
    return [translate_line(line) for line in text.split('\n')]


def plain_text(blocks: List[Block]) -> str:
    """Join the text of each block with newlines, dropping all markup."""
    return '\n'.join(block.text for block in blocks)
