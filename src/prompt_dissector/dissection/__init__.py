"""
Prompt dissection: segmentation of raw prompt text and block classification.

Main components:
- patterns: marker / phrase / keyword tables per block category
- classifier: rule-based (type, confidence) detection
- segmenter: tiered splitting and dissect_prompt()
"""

from prompt_dissector.dissection.classifier import (
    BlockClassifier,
    ClassifierScores,
    analyze_keywords,
    calculate_confidence,
    detect_block_type,
)
from prompt_dissector.dissection.segmenter import (
    TextSegment,
    dissect_prompt,
    segment_text,
    split_by_markers,
    split_by_paragraphs,
    split_by_sentences,
)

__all__ = [
    "BlockClassifier",
    "ClassifierScores",
    "analyze_keywords",
    "calculate_confidence",
    "detect_block_type",
    "TextSegment",
    "dissect_prompt",
    "segment_text",
    "split_by_markers",
    "split_by_paragraphs",
    "split_by_sentences",
]
