"""
Keyword Matcher Module
Keyword coverage checks for free-text answers
"""
import re
from typing import List, Optional, Sequence

from ..core.constants import STOP_WORDS
from ..schemas import KeywordMatch

# Latin lower-case letters, Hangul syllables and whitespace survive extraction
_NON_KEYWORD_CHARS = re.compile(r"[^a-z가-힣\s]")
MAX_EXTRACTED_KEYWORDS = 5


def match_keywords(answer: Optional[str], keywords: Optional[Sequence[str]]) -> KeywordMatch:
    """
    Check which keywords appear in the answer (case-insensitive substring test).

    An empty keyword list is vacuously satisfied.
    """
    if not keywords:
        return KeywordMatch(matched=[], missed=[], match_rate=1.0)

    lower_answer = (answer or "").lower()
    matched = []
    missed = []
    for keyword in keywords:
        if keyword.lower() in lower_answer:
            matched.append(keyword)
        else:
            missed.append(keyword)

    return KeywordMatch(
        matched=matched,
        missed=missed,
        match_rate=len(matched) / len(keywords)
    )


def extract_keywords(text: Optional[str], limit: int = MAX_EXTRACTED_KEYWORDS) -> List[str]:
    """
    Derive keywords from a model answer.

    Args:
        text: Model answer
        limit: Maximum number of keywords, taken in order of appearance

    Returns:
        Lower-cased tokens longer than two characters that are not stop words
    """
    if not text:
        return []
    cleaned = _NON_KEYWORD_CHARS.sub("", text.lower())
    tokens = [
        word for word in cleaned.split()
        if len(word) > 2 and word not in STOP_WORDS
    ]
    return tokens[:limit]
