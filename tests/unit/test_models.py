"""
Unit tests for block and session models.
"""

import pytest
from pydantic import ValidationError

from prompt_dissector.config import Settings
from prompt_dissector.models.blocks import (
    BlockType,
    ConfidenceLevel,
    DissectedBlock,
    create_dissected_block,
    get_confidence_level,
)
from prompt_dissector.models.session import (
    CommitEntry,
    ImportSession,
    ImportSource,
    ImportSourceType,
    ImportStage,
)


class TestConfidenceLevel:
    """Bucketing of confidence scores."""

    @pytest.mark.parametrize("score,expected", [
        (100, ConfidenceLevel.HIGH),
        (80, ConfidenceLevel.HIGH),
        (79, ConfidenceLevel.MEDIUM),
        (50, ConfidenceLevel.MEDIUM),
        (49, ConfidenceLevel.LOW),
        (0, ConfidenceLevel.LOW),
    ])
    def test_buckets(self, score, expected):
        assert get_confidence_level(score) == expected

    def test_manual_overrides_bucket(self):
        """Manual blocks report MANUAL whatever the score."""
        block = create_dissected_block("text", "Task", 20, is_manual=True)

        assert block.confidence_level == ConfidenceLevel.MANUAL


class TestDissectedBlock:
    """DissectedBlock validation and immutability."""

    def test_create_assigns_unique_ids(self):
        a = create_dissected_block("one", "Role", 90)
        b = create_dissected_block("one", "Role", 90)

        assert a.id != b.id

    def test_empty_content_rejected(self):
        with pytest.raises(ValidationError):
            create_dissected_block("", "Task", 20)

    @pytest.mark.parametrize("confidence", [-1, 101])
    def test_confidence_range(self, confidence):
        with pytest.raises(ValidationError):
            create_dissected_block("text", "Task", confidence)

    def test_blocks_are_frozen(self):
        block = create_dissected_block("text", "Task", 20)

        with pytest.raises(ValidationError):
            block.content = "changed"

    def test_model_copy_keeps_identity(self):
        block = create_dissected_block("text", "Task", 20)

        copy = block.model_copy(update={"suggested_type": "Role", "is_manual": True})

        assert copy.id == block.id
        assert copy.confidence_level == ConfidenceLevel.MANUAL
        assert block.suggested_type == "Task"

    def test_dump_includes_confidence_level(self):
        data = create_dissected_block("text", BlockType.STYLE.value, 65).model_dump(mode="json")

        assert data["confidence_level"] == "medium"
        assert data["suggested_type"] == "Style"

    def test_block_type_compares_to_string(self):
        assert BlockType.CONSTRAINTS == "Constraints"
        assert [t.value for t in BlockType] == [
            "Role", "Task", "Context", "Output", "Style", "Constraints"
        ]


class TestImportSession:
    """ImportSession and related models."""

    def test_defaults(self):
        source = ImportSource(content="hello")
        session = ImportSession(source=source, original_text=source.content)

        assert session.stage == ImportStage.INPUT
        assert session.blocks == []
        assert session.metadata.tags == []
        assert source.type == ImportSourceType.TEXT
        assert session.created_at.tzinfo is not None

    def test_original_text_is_frozen(self):
        session = ImportSession(source=ImportSource(content="hello"), original_text="hello")

        with pytest.raises(ValidationError):
            session.original_text = "other"

    def test_blocks_and_stage_are_mutable(self):
        session = ImportSession(source=ImportSource(content="hello"), original_text="hello")

        session.stage = ImportStage.REVIEW
        session.blocks = [create_dissected_block("hello", "Task", 20)]

        assert session.stage == ImportStage.REVIEW
        assert len(session.blocks) == 1

    def test_empty_source_rejected(self):
        with pytest.raises(ValidationError):
            ImportSource(content="")

    @pytest.mark.parametrize("filename,expected", [
        ("prompt.txt", "prompt"),
        ("Prompt.PDF", "Prompt"),
        ("notes.md", "notes"),
        ("archive.tar.gz", "archive.tar.gz"),
        (None, None),
    ])
    def test_default_title(self, filename, expected):
        source = ImportSource(type=ImportSourceType.FILE, content="x", filename=filename)

        assert source.default_title() == expected


class TestCommitEntry:

    def test_blank_label_is_unnamed(self):
        assert CommitEntry(type="Task", label="   ", content="x").label is None

    def test_from_block(self):
        block = create_dissected_block("text", "Output", 70, label="Format")

        entry = CommitEntry.from_block(block)

        assert (entry.type, entry.label, entry.content) == ("Output", "Format", "text")


class TestSettings:
    """Settings defaults and environment overrides."""

    def test_defaults(self, mock_settings):
        assert mock_settings.max_segment_length == 500
        assert mock_settings.min_line_length == 20
        assert mock_settings.max_file_size_mb == 5
        assert mock_settings.classifier_marker_score == 90

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MAX_SEGMENT_LENGTH", "300")
        monkeypatch.setenv("LOG_JSON", "true")

        settings = Settings()

        assert settings.max_segment_length == 300
        assert settings.log_json is True
