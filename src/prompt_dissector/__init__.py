"""
Prompt dissector: split pasted LLM prompts into typed, reviewable blocks.

Main components:
- dissection: heuristic classifier and segmenter
- session: undoable editing of dissected blocks for one import
- parsing: validation and decoding of imported prompt files
- cli: command-line front end
"""

from prompt_dissector.version import PACKAGE_VERSION as __version__

__all__ = ["__version__"]
