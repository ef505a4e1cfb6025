"""
Rule-based block type classification.

Maps a text segment to (block type, confidence 0-100) using priority tiers
per category:
- Explicit marker on the first line (90)
- Instructive opening phrase (70), only if no marker matched
- Keyword density 50 + 10 per keyword, capped at 65, only if neither matched

Categories then compete by score; ties go to the category declared first
(Role, Task, Context, Output, Style, Constraints). If nothing reaches the
minimum score the segment defaults to Task with confidence 20.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import structlog

from ..config import settings
from ..models.blocks import BlockType
from .patterns import BLOCK_PATTERNS, CategoryPatterns


logger = structlog.get_logger(__name__)


@dataclass
class ClassifierScores:
    """
    Scores awarded by each classification tier.
    """
    marker: int = 90
    phrase: int = 70
    keyword_base: int = 50
    keyword_step: int = 10
    keyword_cap: int = 65
    min_score: int = 30
    fallback_type: str = BlockType.TASK.value
    fallback_confidence: int = 20

    @classmethod
    def from_config(cls) -> "ClassifierScores":
        """Load scores from settings."""
        return cls(
            marker=settings.classifier_marker_score,
            phrase=settings.classifier_phrase_score,
            keyword_base=settings.classifier_keyword_base_score,
            keyword_step=settings.classifier_keyword_step_score,
            keyword_cap=settings.classifier_keyword_score_cap,
            min_score=settings.classifier_min_score,
            fallback_type=settings.classifier_fallback_type,
            fallback_confidence=settings.classifier_fallback_confidence,
        )


class BlockClassifier:
    """
    Stateless classifier over the category pattern tables.
    """

    def __init__(
        self,
        scores: Optional[ClassifierScores] = None,
        patterns: Optional[Dict[BlockType, CategoryPatterns]] = None,
    ):
        self.scores = scores or ClassifierScores.from_config()
        self.patterns = patterns or BLOCK_PATTERNS

        self.logger = logger.bind(component="block_classifier")

    def score_categories(self, segment: str) -> Dict[str, int]:
        """
        Score every category against a segment.

        Args:
            segment: Candidate block text

        Returns:
            Dict of category name → score, in declaration order
        """
        trimmed = segment.strip()
        lowered = trimmed.lower()
        first_line = trimmed.split("\n", 1)[0].strip()

        return {
            block_type.value: self._score_category(category, trimmed, lowered, first_line)
            for block_type, category in self.patterns.items()
        }

    def _score_category(
        self,
        category: CategoryPatterns,
        trimmed: str,
        lowered: str,
        first_line: str,
    ) -> int:
        if any(marker.match(first_line) for marker in category.markers):
            return self.scores.marker

        if any(phrase.match(trimmed) for phrase in category.phrases):
            return self.scores.phrase

        keyword_matches = sum(1 for keyword in category.keywords if keyword in lowered)
        if keyword_matches > 0:
            return min(
                self.scores.keyword_base + keyword_matches * self.scores.keyword_step,
                self.scores.keyword_cap,
            )

        return 0

    def classify(self, segment: str) -> Tuple[str, int]:
        """
        Classify a segment.

        Args:
            segment: Candidate block text

        Returns:
            (block type, confidence) tuple
        """
        category_scores = self.score_categories(segment)

        best_type, best_score = self.scores.fallback_type, 0
        for block_type, score in category_scores.items():
            # Strict comparison keeps the earliest category on ties
            if score > best_score:
                best_type, best_score = block_type, score

        if best_score < self.scores.min_score:
            self.logger.debug(
                "block_type_fallback",
                best_score=best_score,
                fallback_type=self.scores.fallback_type,
            )
            return self.scores.fallback_type, self.scores.fallback_confidence

        self.logger.debug(
            "block_type_detected",
            block_type=best_type,
            confidence=best_score,
            segment_length=len(segment),
        )
        return best_type, best_score


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

_default_classifier: Optional[BlockClassifier] = None


def get_default_classifier() -> BlockClassifier:
    """Lazily build the classifier configured from settings."""
    global _default_classifier
    if _default_classifier is None:
        _default_classifier = BlockClassifier()
    return _default_classifier


def detect_block_type(segment: str, classifier: Optional[BlockClassifier] = None) -> Tuple[str, int]:
    """
    Detect the block type of a segment.

    Args:
        segment: Candidate block text
        classifier: Optional custom classifier (default: from config)

    Returns:
        (block type, confidence) tuple

    Examples:
        >>> detect_block_type("# Role\\nYou are a helpful assistant.")
        ('Role', 90)
        >>> detect_block_type("lorem ipsum")
        ('Task', 20)
    """
    if classifier is None:
        classifier = get_default_classifier()
    return classifier.classify(segment)


def calculate_confidence(segment: str) -> int:
    """Confidence of the detected type for a segment."""
    _, confidence = detect_block_type(segment)
    return confidence


def analyze_keywords(text: str) -> str:
    """
    Rank categories by keyword hits alone.

    Args:
        text: Any text

    Returns:
        Category with the most keyword hits (first declared on ties,
        so Role when nothing matches)
    """
    lowered = text.lower()
    best_type, best_count = None, -1
    for block_type, category in BLOCK_PATTERNS.items():
        count = sum(1 for keyword in category.keywords if keyword in lowered)
        if count > best_count:
            best_type, best_count = block_type.value, count
    return best_type
