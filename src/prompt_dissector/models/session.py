"""
Import session models.

An ImportSession is the working set for one import-and-review workflow:
the raw input, the current block list and the workflow stage.
"""

import re
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .blocks import DissectedBlock


class ImportSourceType(str, Enum):
    """Where the raw prompt came from."""
    TEXT = "text"
    FILE = "file"


class ImportStage(str, Enum):
    """Workflow stage, advanced by the caller (input → dissection → review → complete)."""
    INPUT = "input"
    DISSECTION = "dissection"
    REVIEW = "review"
    COMPLETE = "complete"


_TITLE_EXTENSION_PATTERN = re.compile(r"\.(txt|md|pdf)$", re.IGNORECASE)


class ImportSource(BaseModel):
    """Raw input of an import: pasted text or a file's decoded contents."""

    type: ImportSourceType = Field(default=ImportSourceType.TEXT)
    content: str = Field(..., min_length=1, description="Raw prompt text")
    filename: Optional[str] = Field(default=None)
    file_size: Optional[int] = Field(default=None, ge=0, description="Size in bytes")

    def default_title(self) -> Optional[str]:
        """Filename without its text/markdown/pdf extension, if any."""
        if not self.filename:
            return None
        return _TITLE_EXTENSION_PATTERN.sub("", self.filename)


class SessionMetadata(BaseModel):
    """Prompt-level metadata collected during an import."""

    prompt_title: Optional[str] = None
    prompt_description: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ImportSession(BaseModel):
    """
    One live import session.

    `original_text` is kept verbatim for side-by-side display and is never
    mutated; `blocks` order defines the eventual prompt composition order.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), frozen=True)
    source: ImportSource = Field(..., frozen=True)
    original_text: str = Field(..., frozen=True)
    blocks: List[DissectedBlock] = Field(default_factory=list)
    metadata: SessionMetadata = Field(default_factory=SessionMetadata)
    stage: ImportStage = Field(default=ImportStage.INPUT)
    created_at: datetime = Field(default_factory=_utcnow, frozen=True)


class CommitEntry(BaseModel):
    """
    One block as handed to the library committer.

    Entries without a label are stored inline by the committer rather than
    as library-visible items.
    """

    type: str
    label: Optional[str] = None
    content: str = Field(..., min_length=1)

    @field_validator("label")
    @classmethod
    def blank_label_is_unnamed(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    @classmethod
    def from_block(cls, block: DissectedBlock) -> "CommitEntry":
        return cls(type=block.suggested_type, label=block.label, content=block.content)


class SessionSummary(BaseModel):
    """Counts shown when an import is about to be committed."""

    blocks_created: int = Field(..., ge=0)
    manual_adjustments: int = Field(..., ge=0)
    block_types: Dict[str, int] = Field(default_factory=dict)
    source_name: str
