"""
Linear undo/redo history over block-list snapshots.

Snapshots are full copies of the block list. Blocks themselves are frozen
models, so a snapshot only copies the list, not the blocks.
"""

from typing import List, Optional, Sequence

import structlog

from ..models.blocks import DissectedBlock


logger = structlog.get_logger(__name__)


class BlockHistory:
    """
    Snapshot stack with a cursor.

    The snapshot at `index` is the currently displayed state. Recording a new
    snapshot drops every snapshot after the cursor (no redo branches).
    """

    def __init__(self, max_depth: int = 0):
        """
        Args:
            max_depth: Maximum snapshots kept, 0 for unlimited
        """
        self.max_depth = max_depth
        self._snapshots: List[List[DissectedBlock]] = []
        self._index = -1

    @property
    def index(self) -> int:
        return self._index

    @property
    def snapshots(self) -> List[List[DissectedBlock]]:
        return [list(snapshot) for snapshot in self._snapshots]

    def __len__(self) -> int:
        return len(self._snapshots)

    def reset(self, blocks: Sequence[DissectedBlock]) -> None:
        """Start over with `blocks` as the only snapshot."""
        self._snapshots = [list(blocks)]
        self._index = 0

    def record(self, blocks: Sequence[DissectedBlock]) -> None:
        """
        Append a snapshot after the cursor and move the cursor onto it.

        Args:
            blocks: New current block list
        """
        del self._snapshots[self._index + 1:]
        self._snapshots.append(list(blocks))
        self._index = len(self._snapshots) - 1

        if self.max_depth and len(self._snapshots) > self.max_depth:
            dropped = len(self._snapshots) - self.max_depth
            del self._snapshots[:dropped]
            self._index -= dropped
            logger.debug("history_trimmed", dropped=dropped, max_depth=self.max_depth)

    def can_undo(self) -> bool:
        return self._index > 0

    def can_redo(self) -> bool:
        return self._index < len(self._snapshots) - 1

    def undo(self) -> Optional[List[DissectedBlock]]:
        """
        Step the cursor back.

        Returns:
            Copy of the snapshot now current, or None at the oldest snapshot
        """
        if not self.can_undo():
            return None
        self._index -= 1
        return list(self._snapshots[self._index])

    def redo(self) -> Optional[List[DissectedBlock]]:
        """
        Step the cursor forward.

        Returns:
            Copy of the snapshot now current, or None at the newest snapshot
        """
        if not self.can_redo():
            return None
        self._index += 1
        return list(self._snapshots[self._index])
