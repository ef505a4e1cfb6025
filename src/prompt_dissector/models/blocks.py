"""
Block models for prompt dissection.

A DissectedBlock is a candidate prompt block under review: a piece of the
pasted prompt tagged with a category and a classifier confidence. Blocks are
immutable; edits produce new instances so history snapshots can share them.
"""

import uuid
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field


# Confidence bucketing thresholds (inclusive lower bounds)
HIGH_CONFIDENCE_THRESHOLD = 80
MEDIUM_CONFIDENCE_THRESHOLD = 50


class BlockType(str, Enum):
    """
    Built-in prompt block categories.

    Declaration order is the classifier tie-break order.
    """
    ROLE = "Role"
    TASK = "Task"
    CONTEXT = "Context"
    OUTPUT = "Output"
    STYLE = "Style"
    CONSTRAINTS = "Constraints"


class ConfidenceLevel(str, Enum):
    """Display bucket for a block's confidence."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    MANUAL = "manual"


def get_confidence_level(score: int) -> ConfidenceLevel:
    """
    Bucket a 0-100 confidence score.

    Args:
        score: Classifier confidence

    Returns:
        HIGH (>=80), MEDIUM (>=50) or LOW
    """
    if score >= HIGH_CONFIDENCE_THRESHOLD:
        return ConfidenceLevel.HIGH
    if score >= MEDIUM_CONFIDENCE_THRESHOLD:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def new_block_id() -> str:
    return str(uuid.uuid4())


class DissectedBlock(BaseModel):
    """
    Staging record for one block during an import session.

    `suggested_type` is usually a BlockType value but user-defined type
    names are accepted as well.
    """

    id: str = Field(default_factory=new_block_id, description="Opaque block identity")
    content: str = Field(..., min_length=1, description="Block text, never empty")
    suggested_type: str = Field(..., min_length=1, description="Category tag")
    confidence: int = Field(..., ge=0, le=100, description="Classifier confidence 0-100")
    is_manual: bool = Field(
        default=False, description="True once a human chose the type or reshaped the block"
    )
    label: Optional[str] = Field(default=None, description="Optional short name")
    start_position: Optional[int] = Field(
        default=None, ge=0, description="Offset in the original text (best effort)"
    )
    end_position: Optional[int] = Field(
        default=None, ge=0, description="End offset in the original text (best effort)"
    )

    model_config = {"frozen": True}

    @computed_field
    @property
    def confidence_level(self) -> ConfidenceLevel:
        """MANUAL for human-set blocks, otherwise the confidence bucket."""
        if self.is_manual:
            return ConfidenceLevel.MANUAL
        return get_confidence_level(self.confidence)


def create_dissected_block(
    content: str,
    suggested_type: str,
    confidence: int,
    label: Optional[str] = None,
    start_position: Optional[int] = None,
    end_position: Optional[int] = None,
    is_manual: bool = False,
) -> DissectedBlock:
    """
    Create a block with a fresh identity.

    Raises:
        pydantic.ValidationError: If content is empty or confidence is out of range
    """
    return DissectedBlock(
        content=content,
        suggested_type=suggested_type,
        confidence=confidence,
        is_manual=is_manual,
        label=label,
        start_position=start_position,
        end_position=end_position,
    )
