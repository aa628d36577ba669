"""
Grammar Heuristic Module
Cheap structural quality check for free-text answers
"""
import re
from typing import Optional

from ..utils import clamp

LOWERCASE_START_PENALTY = 0.1
MISSING_TERMINATOR_PENALTY = 0.1
DOUBLE_SPACE_PENALTY = 0.05
# Answers up to this length are not expected to end with punctuation
TERMINATOR_MIN_LENGTH = 10

_TERMINATOR = re.compile(r"[.!?]$")
_DOUBLE_SPACE = re.compile(r"\s{2,}")


def grammar_score(answer: Optional[str]) -> float:
    """
    Score capitalization, terminal punctuation and whitespace hygiene.

    Args:
        answer: Raw student answer

    Returns:
        Quality score in [0, 1]; 0.0 for an empty answer
    """
    if not answer or not answer.strip():
        return 0.0

    trimmed = answer.strip()
    score = 1.0

    first = trimmed[0]
    if first != first.upper():
        score -= LOWERCASE_START_PENALTY

    if len(trimmed) > TERMINATOR_MIN_LENGTH and not _TERMINATOR.search(trimmed):
        score -= MISSING_TERMINATOR_PENALTY

    if _DOUBLE_SPACE.search(trimmed):
        score -= DOUBLE_SPACE_PENALTY

    return clamp(score)
