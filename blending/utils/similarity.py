"""
Similarity utilities — vector and scalar closeness measures shared by the engine.

All functions are total: empty, mismatched, or zero-magnitude inputs yield 0.0.
"""

from typing import Sequence

import numpy as np


def cosine_similarity(v1: Sequence[float], v2: Sequence[float]) -> float:
    """Cosine similarity of two equal-length vectors; 0.0 if either is empty or all-zero."""
    if len(v1) == 0 or len(v2) == 0 or len(v1) != len(v2):
        return 0.0
    a = np.asarray(v1, dtype=float)
    b = np.asarray(v2, dtype=float)
    norm_product = np.linalg.norm(a) * np.linalg.norm(b)
    if norm_product == 0.0:
        return 0.0
    return float(np.dot(a, b) / norm_product)


def match_ratio(flags1: Sequence[bool], flags2: Sequence[bool]) -> float:
    """Fraction of positions where both flag vectors agree (simple matching coefficient)."""
    n = min(len(flags1), len(flags2))
    if n == 0:
        return 0.0
    matches = sum(1 for a, b in zip(flags1, flags2) if bool(a) == bool(b))
    return matches / n


def closeness(a: float, b: float, span: float) -> float:
    """1 - |a - b| / span, clamped to [0, 1]."""
    if span <= 0:
        return 1.0 if a == b else 0.0
    return max(0.0, min(1.0, 1.0 - abs(a - b) / span))
