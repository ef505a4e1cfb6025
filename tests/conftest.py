"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- Quiet structlog configuration
- Mock settings/configuration
- Sample prompts and dissected sessions
- Temporary prompt files
"""

import logging
import os
from typing import List

import pytest
import structlog

from prompt_dissector.config import Settings
from prompt_dissector.models.session import CommitEntry, ImportSource, ImportSourceType
from prompt_dissector.session.editor import ImportSessionEditor, start_import
from tests.fixtures.prompts import MARKED_PROMPT, PARAGRAPH_PROMPT, SAMPLE_PROMPTS


@pytest.fixture(autouse=True)
def quiet_structlog():
    """
    Route structlog to a logger that returns instead of printing.

    Keeps stdout clean for CLI output assertions.
    """
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.KeyValueRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def reset_env_vars():
    """
    Reset environment variables before each test.

    This prevents test pollution from env var changes.
    """
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def mock_settings() -> Settings:
    """
    Create settings for testing with safe defaults.

    Returns:
        Settings instance with test configuration
    """
    return Settings(
        log_level="DEBUG",
        log_json=False,
        history_max_depth=0,
    )


@pytest.fixture
def sample_prompts() -> dict:
    return dict(SAMPLE_PROMPTS)


@pytest.fixture
def marked_editor() -> ImportSessionEditor:
    """
    Editor over MARKED_PROMPT, already dissected into Role + Task blocks.
    """
    editor = start_import(ImportSource(type=ImportSourceType.TEXT, content=MARKED_PROMPT))
    editor.dissect()
    return editor


@pytest.fixture
def paragraph_editor() -> ImportSessionEditor:
    """
    Editor over PARAGRAPH_PROMPT, dissected into Role, Task, Constraints blocks.
    """
    editor = start_import(ImportSource(type=ImportSourceType.TEXT, content=PARAGRAPH_PROMPT))
    editor.dissect()
    return editor


@pytest.fixture
def tmp_prompt_file(tmp_path):
    """
    Markdown prompt file with the marked sample prompt.

    Returns:
        Path to the file
    """
    path = tmp_path / "assistant_prompt.md"
    path.write_text(MARKED_PROMPT, encoding="utf-8")
    return path


class RecordingCommitter:
    """Library committer double: stores entries, returns ids for labelled ones."""

    def __init__(self):
        self.received: List[CommitEntry] = []

    def commit(self, entries: List[CommitEntry]) -> List[str]:
        self.received.extend(entries)
        return [f"lib-{i}" for i, entry in enumerate(entries) if entry.label]


@pytest.fixture
def recording_committer() -> RecordingCommitter:
    return RecordingCommitter()


def pytest_configure(config):
    """
    Configure pytest with custom markers and settings.
    """
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (CLI, end-to-end)"
    )
