"""
Similarity engine — pairwise compatibility of two feature vectors.

similarity = weighted sum of independently normalized sub-scores:
- genre: cosine of genre_weights (0 when either vector is all-zero)
- mechanics: simple matching coefficient over the mechanic taxonomy
- era: 1 - |Δgeneration| / (max_generation - 1)
- complexity: 1 - |Δcomplexity|
- style: mean of 1 - |Δbalance| / 2 over both balance scalars
- semantic: cosine of embeddings, only when both items carry one of equal length

Pure, symmetric, O(taxonomy size). Result is in [0, 1].
"""

from typing import Dict, Optional

from blending.models.config import BlendingConfig, DEFAULT_CONFIG
from blending.models.features import FeatureVector
from blending.models.game import GameMetadata
from blending.utils.similarity import closeness, cosine_similarity, match_ratio


def _semantic_score(a: FeatureVector, b: FeatureVector) -> Optional[float]:
    """Semantic sub-score, or None when the pair cannot be compared semantically."""
    if a.semantic_embedding is None or b.semantic_embedding is None:
        return None
    if len(a.semantic_embedding) != len(b.semantic_embedding):
        return None
    # Negative cosine carries no extra meaning for compatibility
    return max(0.0, cosine_similarity(a.semantic_embedding, b.semantic_embedding))


def sub_scores(
    a: FeatureVector,
    b: FeatureVector,
    config: BlendingConfig = DEFAULT_CONFIG,
) -> Dict[str, float]:
    """Normalized sub-scores for a pair; 'semantic' is present only when both are enriched."""
    scores = {
        "genre": max(0.0, cosine_similarity(a.genre_weights, b.genre_weights)),
        "mechanics": match_ratio(a.mechanic_flags, b.mechanic_flags),
        "era": closeness(
            a.platform_generation, b.platform_generation, config.max_generation - 1
        ),
        "complexity": closeness(a.complexity, b.complexity, 1.0),
        "style": (
            closeness(a.action_strategy_balance, b.action_strategy_balance, 2.0)
            + closeness(a.single_multi_balance, b.single_multi_balance, 2.0)
        )
        / 2.0,
    }
    semantic = _semantic_score(a, b)
    if semantic is not None:
        scores["semantic"] = semantic
    return scores


def similarity(
    a: FeatureVector,
    b: FeatureVector,
    config: BlendingConfig = DEFAULT_CONFIG,
) -> float:
    """Compatibility score in [0, 1]; symmetric, and 1.0 for identical non-degenerate vectors."""
    scores = sub_scores(a, b, config)
    weights = config.effective_weights(has_semantic="semantic" in scores)
    total = sum(weights[name] * scores[name] for name in weights)
    return max(0.0, min(1.0, total))


def game_similarity(
    game_a: GameMetadata,
    game_b: GameMetadata,
    config: BlendingConfig = DEFAULT_CONFIG,
) -> float:
    """Similarity of two catalog entries (by their feature vectors)."""
    return similarity(game_a.feature_vector, game_b.feature_vector, config)
