"""
Interactive editing of one import session.

The ImportSessionEditor owns an ImportSession and its snapshot history.
Every structural edit (update, retype, split, merge, delete, add) either
applies fully and records exactly one snapshot, or is ignored without any
change. Invalid input never raises: ignored calls return False/None and
log an `operation_ignored` event at debug level.
"""

from collections import Counter
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

import structlog

from ..config import settings
from ..dissection.classifier import BlockClassifier
from ..dissection.segmenter import dissect_prompt
from ..models.blocks import DissectedBlock, create_dissected_block
from ..models.session import (
    CommitEntry,
    ImportSession,
    ImportSource,
    ImportStage,
    SessionMetadata,
    SessionSummary,
)
from .history import BlockHistory


logger = structlog.get_logger(__name__)

MANUAL_CONFIDENCE = 100
MERGE_SEPARATOR = "\n\n"


class LibraryCommitter(Protocol):
    """Receives the final blocks of a session and persists them."""

    def commit(self, entries: List[CommitEntry]) -> List[str]:
        """
        Persist entries.

        Returns:
            Identifiers of the entries stored as library items (labelled ones)
        """
        ...


class ImportSessionEditor:
    """
    Editing facade for a single import session.

    The caller owns re-rendering; the editor only mutates `session.blocks`
    and the history.
    """

    def __init__(
        self,
        session: ImportSession,
        history_max_depth: Optional[int] = None,
        classifier: Optional[BlockClassifier] = None,
    ):
        if history_max_depth is None:
            history_max_depth = settings.history_max_depth

        self.session = session
        self.history = BlockHistory(max_depth=history_max_depth)
        self.classifier = classifier

        self.logger = logger.bind(component="session_editor", session_id=session.id)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def blocks(self) -> List[DissectedBlock]:
        return list(self.session.blocks)

    @property
    def history_index(self) -> int:
        return self.history.index

    @property
    def stage(self) -> ImportStage:
        return self.session.stage

    def get_block(self, block_id: str) -> Optional[DissectedBlock]:
        index = self._index_of(block_id)
        return None if index is None else self.session.blocks[index]

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    # ------------------------------------------------------------------
    # Dissection and stage
    # ------------------------------------------------------------------

    def dissect(self) -> List[DissectedBlock]:
        """
        Run dissection over the original text and start a fresh history.

        Returns:
            The initial block list
        """
        blocks = dissect_prompt(self.session.original_text, classifier=self.classifier)
        self.session.blocks = blocks
        self.session.stage = ImportStage.DISSECTION
        self.history.reset(blocks)

        self.logger.info("session_dissected", blocks_count=len(blocks))
        return list(blocks)

    def set_blocks(self, blocks: Sequence[DissectedBlock]) -> None:
        """Replace the block list without recording history."""
        self.session.blocks = list(blocks)

    def set_stage(self, stage: ImportStage) -> None:
        """Set the workflow stage. Ordering is the caller's responsibility."""
        self.session.stage = ImportStage(stage)
        self.logger.debug("stage_changed", stage=self.session.stage.value)

    def update_metadata(
        self,
        prompt_title: Optional[str] = None,
        prompt_description: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> None:
        """Merge the provided metadata fields. Not part of the undo history."""
        changes: Dict[str, Any] = {}
        if prompt_title is not None:
            changes["prompt_title"] = prompt_title
        if prompt_description is not None:
            changes["prompt_description"] = prompt_description
        if tags is not None:
            changes["tags"] = list(tags)
        self.session.metadata = self.session.metadata.model_copy(update=changes)

    # ------------------------------------------------------------------
    # Structural edits
    # ------------------------------------------------------------------

    def update(
        self,
        block_id: str,
        content: Optional[str] = None,
        label: Optional[str] = None,
        suggested_type: Optional[str] = None,
    ) -> bool:
        """
        Merge the provided fields into a block.

        Changing the type marks the block manual; content and label edits
        leave the manual flag alone. A blank label clears it.

        Returns:
            True if applied, False if ignored
        """
        changes: Dict[str, Any] = {}
        if content is not None:
            changes["content"] = content
        if label is not None:
            changes["label"] = label if label.strip() else None
        if suggested_type is not None:
            changes["suggested_type"] = suggested_type
            changes["is_manual"] = True
        return self._apply_changes("update", block_id, changes)

    def retype(self, block_id: str, new_type: str) -> bool:
        """
        Set a block's type by hand: confidence 100, manual.

        Returns:
            True if applied, False if ignored
        """
        changes = {
            "suggested_type": new_type,
            "confidence": MANUAL_CONFIDENCE,
            "is_manual": True,
        }
        return self._apply_changes("retype", block_id, changes)

    def split(self, block_id: str, position: int) -> Optional[Tuple[str, str]]:
        """
        Split a block in two at a character position.

        Both halves get new identities and are manual; the first keeps the
        label, both keep the type and confidence.

        Args:
            block_id: Block to split
            position: Offset into the block content, 0 < position < len(content)

        Returns:
            (first_id, second_id), or None if ignored
        """
        index = self._index_of(block_id)
        if index is None:
            self._ignore("split", "block_not_found", block_id=block_id)
            return None

        original = self.session.blocks[index]
        content = original.content
        if position <= 0 or position >= len(content):
            self._ignore("split", "position_out_of_range", block_id=block_id, position=position)
            return None

        head = content[:position].strip()
        tail = content[position:].strip()
        if not head or not tail:
            self._ignore("split", "empty_half", block_id=block_id, position=position)
            return None

        first = create_dissected_block(
            head,
            original.suggested_type,
            original.confidence,
            label=original.label,
            is_manual=True,
        )
        second = create_dissected_block(
            tail,
            original.suggested_type,
            original.confidence,
            is_manual=True,
        )

        blocks = self.blocks
        blocks[index:index + 1] = [first, second]
        self._record(blocks, "block_split", block_id=block_id, position=position)
        return first.id, second.id

    def merge(self, block_ids: Sequence[str]) -> Optional[str]:
        """
        Merge blocks into one at the position of the earliest.

        Content is joined with a blank line in current list order, whatever
        the order of `block_ids`. Type, confidence and label come from the
        earliest block.

        Returns:
            Id of the merged block, or None if ignored
        """
        if len(block_ids) < 2:
            self._ignore("merge", "too_few_blocks", block_ids=list(block_ids))
            return None

        wanted = set(block_ids)
        if len(wanted) != len(block_ids):
            self._ignore("merge", "duplicate_ids", block_ids=list(block_ids))
            return None

        sources = [b for b in self.session.blocks if b.id in wanted]
        if len(sources) != len(wanted):
            self._ignore("merge", "block_not_found", block_ids=list(block_ids))
            return None

        earliest = sources[0]
        merged = create_dissected_block(
            MERGE_SEPARATOR.join(b.content for b in sources),
            earliest.suggested_type,
            earliest.confidence,
            label=earliest.label,
            is_manual=True,
        )

        insert_at = self._index_of(earliest.id)
        blocks = [b for b in self.session.blocks if b.id not in wanted]
        blocks.insert(insert_at, merged)
        self._record(blocks, "blocks_merged", merged_count=len(sources), block_id=merged.id)
        return merged.id

    def delete(self, block_id: str) -> bool:
        """
        Remove a block.

        Returns:
            True if applied, False if ignored
        """
        index = self._index_of(block_id)
        if index is None:
            self._ignore("delete", "block_not_found", block_id=block_id)
            return False

        blocks = self.blocks
        del blocks[index]
        self._record(blocks, "block_deleted", block_id=block_id)
        return True

    def add(self, content: str, suggested_type: str) -> Optional[str]:
        """
        Append a hand-written block (confidence 100, manual).

        Returns:
            Id of the new block, or None if content or type is blank
        """
        if not content or not content.strip():
            self._ignore("add", "empty_content")
            return None
        if not suggested_type or not suggested_type.strip():
            self._ignore("add", "empty_type")
            return None

        block = create_dissected_block(content, suggested_type, MANUAL_CONFIDENCE, is_manual=True)
        self._record(self.blocks + [block], "block_added", block_id=block.id)
        return block.id

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        """Restore the previous snapshot. False at the oldest snapshot."""
        blocks = self.history.undo()
        if blocks is None:
            return False
        self.session.blocks = blocks
        self.logger.debug("undo", history_index=self.history.index)
        return True

    def redo(self) -> bool:
        """Restore the next snapshot. False at the newest snapshot."""
        blocks = self.history.redo()
        if blocks is None:
            return False
        self.session.blocks = blocks
        self.logger.debug("redo", history_index=self.history.index)
        return True

    # ------------------------------------------------------------------
    # Commit hand-off
    # ------------------------------------------------------------------

    def commit_entries(self) -> List[CommitEntry]:
        """Final blocks as committer entries, in composition order."""
        return [CommitEntry.from_block(block) for block in self.session.blocks]

    def commit(self, committer: LibraryCommitter) -> List[str]:
        """
        Hand the final blocks to the library committer and complete the session.

        Errors raised by the committer propagate; the stage is only advanced
        after a successful commit.

        Returns:
            Identifiers returned by the committer
        """
        entries = self.commit_entries()
        ids = committer.commit(entries)
        self.session.stage = ImportStage.COMPLETE

        self.logger.info(
            "session_committed",
            entries_count=len(entries),
            labelled_count=sum(1 for e in entries if e.label),
            stored_ids_count=len(ids),
        )
        return ids

    def summary(self) -> SessionSummary:
        blocks = self.session.blocks
        return SessionSummary(
            blocks_created=len(blocks),
            manual_adjustments=sum(1 for b in blocks if b.is_manual),
            block_types=dict(Counter(b.suggested_type for b in blocks)),
            source_name=self.session.source.filename or "pasted text",
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _index_of(self, block_id: str) -> Optional[int]:
        for index, block in enumerate(self.session.blocks):
            if block.id == block_id:
                return index
        return None

    def _apply_changes(self, operation: str, block_id: str, changes: Dict[str, Any]) -> bool:
        index = self._index_of(block_id)
        if index is None:
            self._ignore(operation, "block_not_found", block_id=block_id)
            return False
        if not changes:
            self._ignore(operation, "no_changes", block_id=block_id)
            return False
        if "content" in changes and not changes["content"].strip():
            self._ignore(operation, "empty_content", block_id=block_id)
            return False
        if "suggested_type" in changes and not changes["suggested_type"].strip():
            self._ignore(operation, "empty_type", block_id=block_id)
            return False

        blocks = self.blocks
        blocks[index] = blocks[index].model_copy(update=changes)
        self._record(blocks, f"block_{operation}d", block_id=block_id, fields=sorted(changes))
        return True

    def _record(self, blocks: List[DissectedBlock], event: str, **fields) -> None:
        self.session.blocks = blocks
        self.history.record(blocks)
        self.logger.debug(event, history_index=self.history.index, blocks_count=len(blocks), **fields)

    def _ignore(self, operation: str, reason: str, **fields) -> None:
        self.logger.debug("operation_ignored", operation=operation, reason=reason, **fields)


# ============================================================================
# SESSION LIFECYCLE
# ============================================================================

def start_import(
    source: ImportSource,
    title: Optional[str] = None,
    description: Optional[str] = None,
    tags: Optional[List[str]] = None,
    history_max_depth: Optional[int] = None,
) -> ImportSessionEditor:
    """
    Open a new import session at stage `input`.

    Discarding the returned editor cancels the import.

    Args:
        source: Raw pasted text or decoded file
        title: Prompt title (default: filename without extension)
        description: Optional prompt description
        tags: Optional prompt tags
        history_max_depth: Snapshot cap (default: from settings)

    Returns:
        ImportSessionEditor for the new session
    """
    session = ImportSession(
        source=source,
        original_text=source.content,
        metadata=SessionMetadata(
            prompt_title=title or source.default_title(),
            prompt_description=description,
            tags=list(tags or []),
        ),
    )

    logger.info(
        "import_started",
        session_id=session.id,
        source_type=source.type.value,
        filename=source.filename,
        text_length=len(source.content),
    )
    return ImportSessionEditor(session, history_max_depth=history_max_depth)
