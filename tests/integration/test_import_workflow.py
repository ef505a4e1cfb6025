"""
End-to-end import workflow: read file → dissect → correct → commit.
"""

import pytest

from prompt_dissector.models.session import ImportStage
from prompt_dissector.parsing.file_reader import read_prompt_file
from prompt_dissector.session.editor import start_import


@pytest.mark.integration
def test_full_import_workflow(tmp_path, recording_committer):
    path = tmp_path / "support-bot.txt"
    path.write_text(
        "# Role\n"
        "You are a patient support agent for a smart kettle brand.\n"
        "\n"
        "# Task\n"
        "Answer the customer question below.\n"
        "Keep it short.\n"
        "\n"
        "Constraints:\n"
        "Never promise refunds.\n",
        encoding="utf-8",
    )

    editor = start_import(read_prompt_file(path))
    blocks = editor.dissect()

    assert editor.session.metadata.prompt_title == "support-bot"
    assert [b.suggested_type for b in blocks] == ["Role", "Task", "Constraints"]

    # Pull "Keep it short." out of the task and call it a style block
    task = blocks[1]
    first_id, second_id = editor.split(task.id, task.content.index("Keep"))
    editor.retype(second_id, "Style")
    editor.update(blocks[0].id, label="Kettle support agent")

    # Change of mind: fold the style line back, then undo that
    editor.merge([first_id, second_id])
    editor.undo()

    assert [b.suggested_type for b in editor.blocks] == ["Role", "Task", "Style", "Constraints"]
    assert editor.can_redo()

    editor.set_stage(ImportStage.REVIEW)
    summary = editor.summary()
    assert summary.blocks_created == 4
    assert summary.manual_adjustments == 2
    assert summary.source_name == "support-bot.txt"

    ids = editor.commit(recording_committer)

    assert ids == ["lib-0"]
    assert [e.label for e in recording_committer.received] == ["Kettle support agent", None, None, None]
    assert recording_committer.received[2].content == "Keep it short."
    assert editor.stage == ImportStage.COMPLETE
    assert editor.session.original_text == path.read_text(encoding="utf-8")
