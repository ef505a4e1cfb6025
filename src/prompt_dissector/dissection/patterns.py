"""
Detection tables for prompt block categories.

Each category carries three rule sets, checked in priority order by the
classifier:
- markers: heading/label lines naming the category ("# Role", "Tone:", "T:")
- phrases: instructive openings ("you are", "your task is", ...)
- keywords: substrings counted anywhere in the segment

Category order below is the classifier tie-break order.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Pattern

from ..models.blocks import BlockType


def _marker(word: str) -> Pattern[str]:
    """
    Marker for a heading word: "# Word", "**Word**", "Word:", a bare "Word" line,
    or a short label line led by the word ("Output format:").
    """
    return re.compile(
        rf"^(?:#+\s*{word}\b|\*\*\s*{word}\s*:?\s*\*\*|{word}\s*:|{word}\s*$|{word}\b[^:\n]{{0,30}}:\s*$)",
        re.IGNORECASE,
    )


def _abbreviation(letter: str) -> Pattern[str]:
    """Single-letter marker of the compact four-part notation ("T: ...")."""
    return re.compile(rf"^{letter}:(?:\s|$)", re.IGNORECASE)


def _phrase(pattern: str) -> Pattern[str]:
    return re.compile(rf"^{pattern}", re.IGNORECASE)


@dataclass(frozen=True)
class CategoryPatterns:
    """Marker, phrase and keyword rules for one block category."""
    markers: List[Pattern[str]]
    phrases: List[Pattern[str]]
    keywords: List[str]


BLOCK_PATTERNS: Dict[BlockType, CategoryPatterns] = {
    BlockType.ROLE: CategoryPatterns(
        markers=[
            _marker("role"),
            _marker("persona"),
            _marker("character"),
            _marker("actor"),
            _abbreviation("R"),
            _abbreviation("A"),
        ],
        phrases=[
            _phrase(r"(you are|act as|imagine you are|as an?)\s+"),
            _phrase(r"(your role is|you will be)\s+"),
        ],
        keywords=["expert", "assistant", "persona", "character", "specialist", "professional", "actor"],
    ),
    BlockType.TASK: CategoryPatterns(
        markers=[
            _marker("task"),
            _marker("objective"),
            _marker("goal"),
            _abbreviation("T"),
        ],
        phrases=[
            _phrase(r"(your task is|please|you need to|you must|you should)\s+"),
            _phrase(r"(i want you to|i need you to)\s+"),
        ],
        keywords=["create", "generate", "write", "analyze", "develop", "design", "build", "implement"],
    ),
    BlockType.CONTEXT: CategoryPatterns(
        markers=[
            _marker("context"),
            _marker("background"),
            _marker("information"),
            _abbreviation("C"),
        ],
        phrases=[
            _phrase(r"(here is|the following|given that|based on)\s+"),
            _phrase(r"(for context|as context)\s*:?"),
        ],
        keywords=["given", "considering", "based on", "background", "information", "details"],
    ),
    BlockType.OUTPUT: CategoryPatterns(
        markers=[
            _marker("output"),
            _marker("format"),
            _marker("response"),
            _abbreviation("O"),
        ],
        phrases=[
            _phrase(r"(output should|return|provide|format as|structure as)\s+"),
            _phrase(r"(your response should|the result should)\s+"),
        ],
        keywords=["format", "structure", "return", "provide", "output", "response", "result"],
    ),
    BlockType.STYLE: CategoryPatterns(
        markers=[
            _marker("style"),
            _marker("tone"),
            _marker("voice"),
        ],
        phrases=[
            _phrase(r"(write in|use|adopt|maintain)\s+an?\s+(\w+\s+)?(tone|style|voice)\b"),
            _phrase(r"(be|sound)\s+(formal|casual|professional|friendly)\b"),
        ],
        keywords=["tone", "voice", "style", "manner", "approach", "formal", "casual", "professional"],
    ),
    BlockType.CONSTRAINTS: CategoryPatterns(
        markers=[
            _marker("constraints"),
            _marker("rules"),
            _marker("limitations"),
        ],
        phrases=[
            _phrase(r"(do not|don't|avoid|never|must not)\s+"),
            _phrase(r"(ensure|make sure|remember to)\s+"),
        ],
        keywords=["don't", "avoid", "must", "should not", "cannot", "never", "always", "ensure"],
    ),
}

# Any short capitalised heading line: "Examples:", "## Notes", "**Audience**"
GENERIC_HEADING_PATTERN = re.compile(r"^(#+\s*|\*\*)?([A-Z][a-z]+)\s*:?\s*(\*\*)?$")


def is_marker_line(line: str) -> bool:
    """
    Check whether a (stripped) line starts a new segment.

    Args:
        line: One line of input, already stripped

    Returns:
        True for generic headings and for any category marker
    """
    if GENERIC_HEADING_PATTERN.match(line):
        return True
    return any(
        marker.match(line)
        for patterns in BLOCK_PATTERNS.values()
        for marker in patterns.markers
    )
