# Data models for prompt dissection and import sessions

from .blocks import (
    BlockType,
    ConfidenceLevel,
    DissectedBlock,
    create_dissected_block,
    get_confidence_level,
)
from .session import (
    CommitEntry,
    ImportSession,
    ImportSource,
    ImportSourceType,
    ImportStage,
    SessionMetadata,
    SessionSummary,
)

__all__ = [
    "BlockType",
    "ConfidenceLevel",
    "DissectedBlock",
    "create_dissected_block",
    "get_confidence_level",
    "CommitEntry",
    "ImportSession",
    "ImportSource",
    "ImportSourceType",
    "ImportStage",
    "SessionMetadata",
    "SessionSummary",
]
