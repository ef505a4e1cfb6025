"""
Import session editing: undoable structural edits over dissected blocks.
"""

from prompt_dissector.session.editor import (
    ImportSessionEditor,
    LibraryCommitter,
    start_import,
)
from prompt_dissector.session.history import BlockHistory

__all__ = [
    "BlockHistory",
    "ImportSessionEditor",
    "LibraryCommitter",
    "start_import",
]
