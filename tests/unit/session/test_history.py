"""
Unit tests for the snapshot history (history.py).
"""

import pytest

from prompt_dissector.models.blocks import create_dissected_block
from prompt_dissector.session.history import BlockHistory


def _block(content: str):
    return create_dissected_block(content, "Task", 50)


@pytest.fixture
def history() -> BlockHistory:
    history = BlockHistory()
    history.reset([_block("initial")])
    return history


class TestBlockHistory:
    """Snapshot stack and cursor movement."""

    def test_new_history_is_empty(self):
        """Before reset there is nothing to undo or redo."""
        history = BlockHistory()

        assert len(history) == 0
        assert history.index == -1
        assert not history.can_undo()
        assert not history.can_redo()
        assert history.undo() is None

    def test_reset_holds_single_snapshot(self, history):
        assert len(history) == 1
        assert history.index == 0
        assert not history.can_undo()

    def test_record_advances_cursor(self, history):
        """Each record appends one snapshot and moves onto it."""
        history.record([_block("a")])
        history.record([_block("b")])

        assert len(history) == 3
        assert history.index == 2
        assert history.can_undo()
        assert not history.can_redo()

    def test_undo_and_redo(self, history):
        """Undo/redo walk the snapshots and stop at both ends."""
        second = [_block("second")]
        history.record(second)

        restored = history.undo()
        assert [b.content for b in restored] == ["initial"]
        assert history.undo() is None

        assert history.redo() == second
        assert history.redo() is None

    def test_record_after_undo_drops_future(self, history):
        """Linear history: recording discards redo snapshots."""
        history.record([_block("a")])
        history.record([_block("b")])
        history.undo()
        history.undo()

        history.record([_block("c")])

        assert len(history) == 2
        assert not history.can_redo()
        assert [b.content for b in history.snapshots[-1]] == ["c"]

    def test_snapshots_are_copies(self, history):
        """Mutating a recorded or returned list does not touch history."""
        blocks = [_block("a")]
        history.record(blocks)
        blocks.append(_block("intruder"))

        restored = history.undo()
        restored.append(_block("intruder"))

        assert [b.content for b in history.snapshots[1]] == ["a"]
        assert [b.content for b in history.snapshots[0]] == ["initial"]

    def test_max_depth_drops_oldest(self):
        """With a cap, the oldest snapshots are discarded."""
        history = BlockHistory(max_depth=3)
        history.reset([_block("0")])
        for content in ("1", "2", "3", "4"):
            history.record([_block(content)])

        assert len(history) == 3
        assert history.index == 2
        assert [s[0].content for s in history.snapshots] == ["2", "3", "4"]

        assert history.undo()[0].content == "3"
        assert history.undo()[0].content == "2"
        assert history.undo() is None
