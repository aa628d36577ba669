"""
Similarity Scorer Module
Edit-distance based string similarity
"""
import numpy as np


def levenshtein_distance(a: str, b: str) -> int:
    """
    Classic edit distance with unit insert, delete and substitute costs.

    Rows are computed as numpy vectors; the insertion pass of each row
    is a running minimum over (row - column offset).

    Args:
        a: First string
        b: Second string

    Returns:
        Minimum number of single-character edits turning a into b
    """
    if len(a) > len(b):
        a, b = b, a
    if not a:
        return len(b)

    b_codes = np.fromiter((ord(ch) for ch in b), dtype=np.int64, count=len(b))
    offsets = np.arange(len(b) + 1, dtype=np.int64)
    previous = offsets.copy()

    for i, ch in enumerate(a, start=1):
        cost = (b_codes != ord(ch)).astype(np.int64)
        current = np.empty_like(previous)
        current[0] = i
        current[1:] = np.minimum(previous[1:] + 1, previous[:-1] + cost)
        previous = np.minimum.accumulate(current - offsets) + offsets

    return int(previous[-1])


def similarity(a: str, b: str) -> float:
    """
    Normalized similarity in [0, 1] computed on lower-cased inputs.

    Two empty strings are identical (1.0); exactly one empty string
    scores 0.0.
    """
    a = (a or "").lower()
    b = (b or "").lower()
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    distance = levenshtein_distance(a, b)
    return 1.0 - distance / max(len(a), len(b))
