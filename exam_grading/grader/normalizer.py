"""
Text Normalizer Module
Canonicalizes recognized answers before comparison
"""
import re
from typing import Any

from ..core.constants import CIRCLED_DIGITS, CHOICE_LETTERS

_FIRST_DIGIT = re.compile(r"[0-9]")
_PUNCTUATION = re.compile(r"[.,!?;:'\"]")


def normalize_multiple_choice(answer: Any) -> str:
    """
    Map a multiple-choice mark to its choice number.

    Circled digits (① to ⑤) and letters a to e map to "1".."5";
    otherwise the first digit in the text is used, and failing that
    the trimmed text is returned unchanged.

    Args:
        answer: Recognized or instructor-supplied mark

    Returns:
        Normalized token, empty string for empty input
    """
    if answer is None:
        return ""
    text = str(answer).strip()
    if not text:
        return ""

    if text in CIRCLED_DIGITS:
        return CIRCLED_DIGITS[text]

    letter = CHOICE_LETTERS.get(text.lower())
    if letter:
        return letter

    match = _FIRST_DIGIT.search(text)
    if match:
        return match.group(0)

    return text


def normalize_text(answer: Any) -> str:
    """Lower-case, trim and strip punctuation from a free-text answer"""
    if answer is None:
        return ""
    return _PUNCTUATION.sub("", str(answer).lower().strip())
