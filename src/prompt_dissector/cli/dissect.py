"""
Command-line interface for prompt dissection.

Dissects a prompt file (or stdin) into typed blocks and prints the result.

Usage:
    # Single file
    prompt-dissect prompt.md

    # Pasted text from stdin
    pbpaste | prompt-dissect -

    # Save as pretty JSON
    prompt-dissect prompt.txt --output blocks.json
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

import structlog

from prompt_dissector.logging_config import setup_logging
from prompt_dissector.models.session import ImportSource, ImportSourceType
from prompt_dissector.parsing.file_reader import read_prompt_file
from prompt_dissector.session.editor import start_import
from prompt_dissector.version import get_dissector_version


logger = structlog.get_logger(__name__)


# ============================================================================
# CLI FUNCTIONS
# ============================================================================

def load_source(input_arg: str) -> ImportSource:
    """
    Build the import source for a CLI input argument.

    Args:
        input_arg: File path, or "-" for stdin

    Returns:
        ImportSource

    Raises:
        ValueError: If stdin is empty or the file is rejected
        FileNotFoundError: If the file does not exist
    """
    if input_arg == "-":
        text = sys.stdin.read()
        if not text.strip():
            raise ValueError("No prompt text on stdin")
        return ImportSource(type=ImportSourceType.TEXT, content=text)

    return read_prompt_file(Path(input_arg))


def process_source(source: ImportSource, verbose: bool = False) -> dict:
    """
    Dissect a source and build the JSON-serialisable result.

    Args:
        source: Import source
        verbose: Log progress

    Returns:
        Result dict with session id, blocks and summary
    """
    editor = start_import(source)
    blocks = editor.dissect()

    if verbose:
        logger.info(
            "dissection_completed",
            blocks_count=len(blocks),
            block_types=[b.suggested_type for b in blocks],
        )

    return {
        "session_id": editor.session.id,
        "source": source.filename or "pasted text",
        "prompt_title": editor.session.metadata.prompt_title,
        "dissector_version": get_dissector_version(),
        "blocks": [block.model_dump(mode="json") for block in blocks],
        "summary": editor.summary().model_dump(mode="json"),
    }


def write_output(result: dict, output_path: Optional[Path], format: str = "jsonl"):
    """
    Write the result to a file or stdout.

    Args:
        result: Dissection result
        output_path: Output file path (None for stdout)
        format: "json" (indented) or "jsonl" (one line)
    """
    if format == "jsonl":
        rendered = json.dumps(result, ensure_ascii=False)
    else:
        rendered = json.dumps(result, ensure_ascii=False, indent=2)

    if not output_path:
        print(rendered)
        return

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(rendered + "\n")

    logger.info("output_written", path=str(output_path))


# ============================================================================
# MAIN CLI
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prompt-dissect",
        description="Prompt Dissector CLI - Split a prompt into typed, scored blocks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Dissect a markdown prompt
  %(prog)s prompt.md

  # Read pasted text from stdin
  cat prompt.txt | %(prog)s -

  # Save indented JSON
  %(prog)s prompt.md --output blocks.json

Supported files: .txt, .md (max 5MB by default, see MAX_FILE_SIZE_MB)
        """
    )

    parser.add_argument(
        "input",
        type=str,
        help="Path to a .txt/.md prompt file, or - to read stdin"
    )

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output file path (default: stdout). Format auto-detected from extension (.json or .jsonl)"
    )

    parser.add_argument(
        "--format",
        "-f",
        type=str,
        choices=["json", "jsonl"],
        default="jsonl",
        help="Output format (default: jsonl)"
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output"
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    setup_logging()

    args = build_parser().parse_args(argv)

    try:
        source = load_source(args.input)
        result = process_source(source, verbose=args.verbose)

        output_path = Path(args.output) if args.output else None

        # Auto-detect format from file extension
        if output_path and args.format == "jsonl" and output_path.suffix == ".json":
            format = "json"
        else:
            format = args.format

        write_output(result, output_path, format)

        if args.verbose:
            print(f"\n✓ Dissected {len(result['blocks'])} blocks", file=sys.stderr)

    except (OSError, ValueError) as e:
        logger.error("cli_failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
