"""
CLI module for prompt dissection.
"""

from prompt_dissector.cli.dissect import main as dissect_main

__all__ = ["dissect_main"]
