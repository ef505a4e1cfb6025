"""
Version constants for the prompt dissection pipeline.

Stamped on CLI output so a dissection result can be traced back to the
heuristics that produced it.
"""

from typing import Dict

PACKAGE_VERSION = "1.0.0"

# Component versions (update these when heuristics change)
CLASSIFIER_VERSION = "block-classifier-1.0.0"
SEGMENTER_VERSION = "segmenter-1.1.0"  # 1.1: sentence packing for oversized paragraphs
PATTERNS_VERSION = "block-patterns-1.0.0"


def get_dissector_version() -> Dict[str, str]:
    """
    Get current dissector component versions.

    Returns:
        Dict of component name → version string
    """
    return {
        "package": PACKAGE_VERSION,
        "classifier": CLASSIFIER_VERSION,
        "segmenter": SEGMENTER_VERSION,
        "patterns": PATTERNS_VERSION,
    }
