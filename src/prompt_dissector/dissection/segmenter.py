"""
Prompt segmentation.

Splits raw prompt text into ordered segments with a tiered fallback:
1. Marker split: a new segment starts at every heading/label line
2. Paragraph split: blank-line paragraphs, or long single lines when the
   text is one paragraph
3. Length split: an oversized lone segment is re-split by paragraphs, then
   packed by sentence boundaries if it is still one piece

Each segment is classified into a DissectedBlock by dissect_prompt().
"""

import re
from dataclasses import dataclass
from typing import List, Optional

import structlog

from ..config import settings
from ..models.blocks import DissectedBlock, create_dissected_block
from .classifier import BlockClassifier, detect_block_type
from .patterns import is_marker_line


logger = structlog.get_logger(__name__)


PARAGRAPH_BREAK_PATTERN = re.compile(r"\n\s*\n")
SENTENCE_END_PATTERN = re.compile(r"(?<=[.!?])\s+")


@dataclass(frozen=True)
class TextSegment:
    """A segment of the original text with best-effort offsets."""
    content: str
    start: Optional[int]
    end: Optional[int]


def split_by_markers(text: str) -> List[str]:
    """
    Split text at heading/label lines.

    The marker line opens the new segment. Segments are trimmed and empty
    ones dropped.

    Args:
        text: Raw prompt text

    Returns:
        List of segments in input order
    """
    segments: List[str] = []
    current: List[str] = []

    for line in text.split("\n"):
        if is_marker_line(line.strip()) and current:
            segments.append("\n".join(current).strip())
            current = [line]
        else:
            current.append(line)

    if current:
        segments.append("\n".join(current).strip())

    return [s for s in segments if s]


def split_by_paragraphs(text: str, min_line_length: Optional[int] = None) -> List[str]:
    """
    Split text into blank-line separated paragraphs.

    A text that is a single paragraph is split line by line instead, keeping
    only lines longer than `min_line_length` (shorter lines are noise).

    Args:
        text: Text to split
        min_line_length: Minimum kept line length (default: from settings)

    Returns:
        List of trimmed paragraphs or lines
    """
    if min_line_length is None:
        min_line_length = settings.min_line_length

    paragraphs = [p.strip() for p in PARAGRAPH_BREAK_PATTERN.split(text)]
    paragraphs = [p for p in paragraphs if p]

    if len(paragraphs) == 1:
        lines = (line.strip() for line in text.split("\n"))
        return [line for line in lines if len(line) > min_line_length]

    return paragraphs


def split_by_sentences(text: str, max_length: Optional[int] = None) -> List[str]:
    """
    Pack sentences into consecutive chunks of at most `max_length` characters.

    Chunks are slices of `text`, so they can be located in the original
    input. A sentence longer than `max_length` becomes its own chunk.

    Args:
        text: A single paragraph
        max_length: Chunk size limit (default: from settings)

    Returns:
        List of trimmed chunks (a single chunk when there is no sentence break)
    """
    if max_length is None:
        max_length = settings.max_segment_length

    text = text.strip()
    boundaries = [m.end() for m in SENTENCE_END_PATTERN.finditer(text)]
    starts = [0] + boundaries
    ends = [m.start() for m in SENTENCE_END_PATTERN.finditer(text)] + [len(text)]

    chunks: List[str] = []
    chunk_start = None
    chunk_end = 0
    for start, end in zip(starts, ends):
        if chunk_start is None:
            chunk_start = start
        elif end - chunk_start > max_length:
            chunks.append(text[chunk_start:chunk_end])
            chunk_start = start
        chunk_end = end

    if chunk_start is not None and chunk_end > chunk_start:
        chunks.append(text[chunk_start:chunk_end])

    return [c for c in chunks if c]


def segment_text(text: str) -> List[TextSegment]:
    """
    Segment raw prompt text with the tiered fallback.

    Args:
        text: Raw prompt text

    Returns:
        Ordered segments; empty for empty or whitespace-only input
    """
    if not text or not text.strip():
        return []

    max_length = settings.max_segment_length

    # Tier 1: explicit markers
    segments = split_by_markers(text)
    tier = "markers"

    # Tier 2: paragraphs, when markers found nothing to split on
    if not segments or (len(segments) == 1 and segments[0] == text.strip()):
        segments = split_by_paragraphs(text)
        tier = "paragraphs"

    # Tier 3: a lone oversized segment
    if len(segments) == 1 and len(segments[0]) > max_length:
        segments = split_by_paragraphs(segments[0])
        tier = "length"
        if len(segments) == 1 and len(segments[0]) > max_length:
            segments = split_by_sentences(segments[0], max_length=max_length)
            tier = "sentences"

    logger.debug(
        "text_segmented",
        tier=tier,
        segments_count=len(segments),
        text_length=len(text),
    )

    result = []
    for content in segments:
        start = text.find(content)
        if start == -1:
            result.append(TextSegment(content=content, start=None, end=None))
        else:
            result.append(TextSegment(content=content, start=start, end=start + len(content)))
    return result


def dissect_prompt(text: str, classifier: Optional[BlockClassifier] = None) -> List[DissectedBlock]:
    """
    Dissect a raw prompt into classified blocks.

    Args:
        text: Raw prompt text
        classifier: Optional custom classifier (default: from config)

    Returns:
        List of DissectedBlock, unlabelled and not manual
    """
    blocks = []
    for segment in segment_text(text):
        block_type, confidence = detect_block_type(segment.content, classifier=classifier)
        blocks.append(
            create_dissected_block(
                segment.content,
                block_type,
                confidence,
                start_position=segment.start,
                end_position=segment.end,
            )
        )

    logger.info(
        "prompt_dissected",
        blocks_count=len(blocks),
        block_types=[b.suggested_type for b in blocks],
    )
    return blocks
