"""Token-set similarity between free-text labels (skills, titles, locations)."""
from __future__ import annotations


def _tokens(text: str) -> set[str]:
    return set((text or "").lower().split())


def similarity(a: str, b: str) -> float:
    """Jaccard similarity of the lower-cased word sets of *a* and *b*.

    Returns a ratio in [0, 1]; two empty labels have nothing in common and
    score 0.0 rather than dividing by zero.
    """
    left, right = _tokens(a), _tokens(b)
    union = left | right
    if not union:
        return 0.0
    return len(left & right) / len(union)
