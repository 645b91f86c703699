"""Shared numeric helpers for similarity scoring."""

from .similarity import closeness, cosine_similarity, match_ratio

__all__ = [
    "closeness",
    "cosine_similarity",
    "match_ratio",
]
